from enum import Enum


class Action(str, Enum):
    ARBIFY = "arbify"
    UPDATE = "update"
    FULL = "full"
    PERMIT_TEST = "permit_test"
