import json
from typing import Any, Dict

import aiohttp
from pydantic import ValidationError

from ingestion.arbitrum.models.token import RawTokenList
from utils.exceptions import SourceFetchError
from utils.file_utils import read_json
from utils.logger_utils import get_logger

logger = get_logger("Token List Client")


class TokenListClient(object):
    """Loads a token list from an http(s) URL or a local path."""

    def __init__(self, session: aiohttp.ClientSession):
        self.session = session

    async def get_token_list(self, path_or_url: str) -> RawTokenList:
        location = path_or_url.strip()
        if location.startswith(("http://", "https://")):
            data = await self._fetch_url(location)
        else:
            data = self._read_file(location)

        try:
            token_list = RawTokenList.model_validate(data)
        except ValidationError as e:
            raise SourceFetchError(f"{location} is not a token list: {e}") from e

        logger.info(f"Loaded '{token_list.name}' with {len(token_list.tokens)} tokens from {location}")
        return token_list

    async def _fetch_url(self, url: str) -> Dict[str, Any]:
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise SourceFetchError(f"Failed to fetch {url}. Status: {response.status}, Reason: {response.reason}")
                return await response.json(content_type=None)
        except (aiohttp.ClientError, json.JSONDecodeError) as e:
            raise SourceFetchError(f"Failed to fetch {url}: {e}") from e

    @staticmethod
    def _read_file(path: str) -> Dict[str, Any]:
        try:
            return read_json(path)
        except (OSError, json.JSONDecodeError) as e:
            raise SourceFetchError(f"Failed to read {path}: {e}") from e
