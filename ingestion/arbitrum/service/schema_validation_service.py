from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from constants.constants import (
    MAX_LIST_NAME_LENGTH,
    MAX_TOKEN_NAME_LENGTH,
    MAX_TOKEN_SYMBOL_LENGTH,
    MAX_TOKENS_PER_LIST,
)
from ingestion.arbitrum.models.token import ArbTokenList
from utils.exceptions import SchemaValidationError
from utils.logger_utils import get_logger

logger = get_logger("Schema Validation Service")

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


class SchemaVersion(BaseModel):
    model_config = ConfigDict(extra="forbid")

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)


class SchemaTokenInfo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    chainId: int = Field(ge=1)
    address: str = Field(pattern=ADDRESS_PATTERN)
    name: str = Field(min_length=1, max_length=MAX_TOKEN_NAME_LENGTH)
    symbol: str = Field(min_length=1, max_length=MAX_TOKEN_SYMBOL_LENGTH)
    decimals: int = Field(ge=0, le=255)
    logoURI: Optional[str] = Field(default=None, min_length=1)
    tags: Optional[List[str]] = None
    extensions: Optional[Dict[str, Any]] = None


class SchemaTokenList(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=MAX_LIST_NAME_LENGTH)
    timestamp: datetime
    version: SchemaVersion
    tokens: List[SchemaTokenInfo] = Field(min_length=1, max_length=MAX_TOKENS_PER_LIST)
    logoURI: Optional[str] = Field(default=None, min_length=1)
    keywords: Optional[List[str]] = None
    tags: Optional[Dict[str, Any]] = None

    @field_validator("tokens")
    @classmethod
    def tokens_are_unique(cls, tokens: List[SchemaTokenInfo]) -> List[SchemaTokenInfo]:
        seen = set()
        for token in tokens:
            key = (token.address.lower(), token.chainId)
            if key in seen:
                raise ValueError(f"duplicate token {token.address} on chain {token.chainId}")
            seen.add(key)
        return tokens


def validate_token_list(token_list: Dict[str, Any]) -> None:
    """
    Checks a serialized token list against the token list schema.

    Raises:
        SchemaValidationError: with every violation pydantic found.
    """
    try:
        SchemaTokenList.model_validate(token_list)
    except ValidationError as e:
        logger.error(f"Token list '{token_list.get('name')}' failed validation with {e.error_count()} errors")
        raise SchemaValidationError(f"Invalid token list '{token_list.get('name')}': {e}") from e


def is_arb_token_list(data: Dict[str, Any]) -> ArbTokenList:
    """Validates a list read back from disk and parses it."""
    validate_token_list(data)
    try:
        return ArbTokenList.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(f"'{data.get('name')}' is not an arbified token list: {e}") from e
