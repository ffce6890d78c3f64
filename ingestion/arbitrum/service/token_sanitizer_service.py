from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from constants.constants import MAX_TOKEN_SYMBOL_LENGTH
from ingestion.arbitrum.models.resolution import TokenData
from ingestion.arbitrum.models.token import RawTokenList, SourceToken, SourceTokenList
from ingestion.arbitrum.service.schema_validation_service import SchemaTokenInfo
from utils.exceptions import DataIntegrityError
from utils.formatter_utils import is_bytes32_hex_string, parse_bytes32_string, sanitize_string
from utils.logger_utils import get_logger

logger = get_logger("Token Sanitizer Service")


class TokenSanitizerService(object):
    """
    Cleans token entries at both ends of the pipeline: structurally invalid
    source entries are dropped before resolution, and on-chain name/symbol
    values are normalized before they are written to the list.
    """

    def remove_invalid_tokens(self, raw_list: RawTokenList) -> SourceTokenList:
        tokens: List[SourceToken] = []
        seen: set[Tuple[str, int]] = set()

        for index, entry in enumerate(raw_list.tokens):
            token = self._parse_source_token(index, entry)
            if token is None:
                continue
            if token.identity in seen:
                logger.warning(f"Dropping duplicate token #{index} {token.address} on chain {token.chain_id}")
                continue
            seen.add(token.identity)
            tokens.append(token)

        dropped = len(raw_list.tokens) - len(tokens)
        if dropped:
            logger.warning(f"Removed {dropped} invalid token entries from '{raw_list.name}'")

        return SourceTokenList(name=raw_list.name, logo_uri=raw_list.logo_uri, tokens=tokens)

    def _parse_source_token(self, index: int, entry: Dict[str, Any]) -> SourceToken | None:
        # Same per-token rules the finished list is validated against
        try:
            SchemaTokenInfo.model_validate(entry)
            token = SourceToken.model_validate(entry)
        except ValidationError as e:
            first = e.errors()[0]
            logger.warning(
                f"Dropping invalid token #{index} {entry.get('address')}: "
                f"{e.error_count()} errors, first: {first['msg']} at {first['loc']}"
            )
            return None

        if not token.name.strip() or not token.symbol.strip():
            logger.warning(f"Dropping token #{index} {token.address} with empty name or symbol")
            return None
        return token

    def sanitize_token_data(self, token_data: TokenData, l1_token_addr: str, l2_address: str) -> Tuple[str, str, int]:
        """
        Returns (name, symbol, decimals) ready for the list.

        Raises:
            DataIntegrityError: if decimals, name or symbol could not be read.
        """
        diagnostic = {
            "l1TokenAddr": l1_token_addr,
            "l2Address": l2_address,
            **token_data.model_dump(),
        }
        if token_data.decimals is None:
            raise DataIntegrityError("Unexpected undefined token decimals", diagnostic)
        if token_data.name is None:
            raise DataIntegrityError("Unexpected undefined token name", diagnostic)
        if token_data.symbol is None:
            raise DataIntegrityError("Unexpected undefined token symbol", diagnostic)

        name = resolve_token_name(token_data.name, l1_token_addr)
        symbol = resolve_token_symbol(token_data.symbol, name)
        return sanitize_string(name), sanitize_string(symbol), token_data.decimals


def resolve_token_name(name: str, l1_token_addr: str) -> str:
    if is_bytes32_hex_string(name):
        name = parse_bytes32_string(name)
    if name == "":
        # Address without 0x fits the 40 character name limit
        return l1_token_addr.removeprefix("0x")
    return name


def resolve_token_symbol(symbol: str, resolved_name: str) -> str:
    if is_bytes32_hex_string(symbol):
        symbol = parse_bytes32_string(symbol)
    if symbol == "":
        return resolved_name[:MAX_TOKEN_SYMBOL_LENGTH]
    return symbol
