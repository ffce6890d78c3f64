from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GraphTokenResult(BaseModel):
    """A bridged token candidate as reported by the gateway subgraph."""

    model_config = ConfigDict(populate_by_name=True)

    l1_token_addr: str = Field(alias="l1TokenAddr")
    gateway_addr: str = Field(alias="gatewayAddr")
    logo_uri: Optional[str] = Field(default=None, alias="logoUri")


class ResolvedToken(BaseModel):
    """A candidate both gateway routers agree on, with a non-zero L2 address."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    l1_token_addr: str = Field(alias="l1TokenAddr")
    l2_address: str = Field(alias="l2Address")
    gateway_addr: str = Field(alias="gatewayAddr")
    logo_uri: Optional[str] = Field(default=None, alias="logoUri")


class ResolutionMismatch(BaseModel):
    """Why a candidate was left out of the bridged set. Logged, never persisted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    l1_token_addr: str = Field(alias="l1TokenAddr")
    router_address: Optional[str] = Field(default=None, alias="routerAddress")
    deployed_address: Optional[str] = Field(default=None, alias="deployedAddress")
    reason: str


class ResolutionResult(BaseModel):
    resolved: List[ResolvedToken] = Field(default_factory=list)
    mismatches: List[ResolutionMismatch] = Field(default_factory=list)


class TokenData(BaseModel):
    """Raw on-chain metadata. A field is None when its call reverted."""

    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
