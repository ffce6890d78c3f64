from typing import Optional

import aiohttp
from eth_utils import to_checksum_address

from constants.constants import TRUSTWALLET_ASSET_URL
from utils.logger_utils import get_logger

logger = get_logger("Logo Client")


class LogoClient(object):
    """
    Looks up token logos in the trustwallet assets repository.
    A missing logo is an expected outcome, not an error.
    """

    def __init__(self, session: aiohttp.ClientSession, asset_url: str = TRUSTWALLET_ASSET_URL):
        self.session = session
        self.asset_url = asset_url

    async def get_logo_uri(self, l1_token_address: str) -> Optional[str]:
        uri = self.asset_url.format(address=to_checksum_address(l1_token_address))
        async with self.session.head(uri, allow_redirects=True) as response:
            if response.status == 200:
                return uri
            logger.debug(f"No logo at {uri} (status {response.status})")
            return None
