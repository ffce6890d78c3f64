from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class CallSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True
    return_data: bytes = b""


class CallReverted(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: Literal[False] = False
    return_data: bytes = b""


# Outcome of one call inside a Multicall2 tryAggregate batch
CallResult = Union[CallSuccess, CallReverted]


def to_call_result(success: bool, return_data: bytes) -> CallResult:
    if success:
        return CallSuccess(return_data=return_data)
    return CallReverted(return_data=return_data)
