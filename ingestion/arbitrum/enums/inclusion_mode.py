from enum import Enum

from utils.exceptions import InvalidConfigurationError


class InclusionMode(str, Enum):
    """Which source-chain tokens are appended after the bridged tokens."""

    BRIDGED_ONLY = "bridged-only"
    ALL_SOURCE_TOKENS = "all-source-tokens"
    UNBRIDGED_SOURCE_TOKENS_ONLY = "unbridged-source-tokens-only"

    @classmethod
    def from_flags(cls, include_all_l1_tokens: bool, include_unbridged_l1_tokens: bool) -> "InclusionMode":
        if include_all_l1_tokens and include_unbridged_l1_tokens:
            raise InvalidConfigurationError(
                "Cannot include both of AllL1Tokens and UnbridgedL1Tokens "
                "since UnbridgedL1Tokens is a subset of AllL1Tokens."
            )
        if include_all_l1_tokens:
            return cls.ALL_SOURCE_TOKENS
        if include_unbridged_l1_tokens:
            return cls.UNBRIDGED_SOURCE_TOKENS_ONLY
        return cls.BRIDGED_ONLY
