from typing import Any, Dict, Optional


class ArbTokenListError(Exception):
    """Base class for every fatal condition raised while building a token list."""


class ConfigurationError(ArbTokenListError):
    pass


class InvalidConfigurationError(ConfigurationError):
    pass


class DataIntegrityError(ArbTokenListError):
    """
    Raised when an upstream source returned malformed data for a token that
    already passed resolution. Carries the offending token so the operator can
    find it.
    """

    def __init__(self, message: str, token: Optional[Dict[str, Any]] = None):
        super().__init__(f"{message}: {token}" if token is not None else message)
        self.token = token


class SchemaValidationError(ArbTokenListError):
    pass


class SourceFetchError(ArbTokenListError):
    pass


class PermitProbeError(ArbTokenListError):
    pass
