from enum import IntEnum


class VersionUpgrade(IntEnum):
    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3
