from enum import Enum


class PermitType(str, Enum):
    VERSION = "version"           # EIP-2612 with version "1" in the domain
    NO_VERSION = "no version"     # EIP-2612 without a version field
    DAI = "dai"                   # DAI style nonce/expiry/allowed


class PermitProbeState(str, Enum):
    NOT_ATTEMPTED = "NOT_ATTEMPTED"
    SIGNED = "SIGNED"
    BATCHED = "BATCHED"
    VERSION = "VERSION"
    NO_VERSION = "NO_VERSION"
    DAI = "DAI"
    UNSUPPORTED = "UNSUPPORTED"
