from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceToken(BaseModel):
    """A token entry of the source-chain list. Identity is (lowercased address, chain id)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    chain_id: int = Field(alias="chainId")
    address: str
    name: str
    symbol: str
    decimals: int
    logo_uri: Optional[str] = Field(default=None, alias="logoURI")
    tags: Optional[List[str]] = None
    extensions: Optional[Dict[str, Any]] = None

    @property
    def identity(self) -> tuple[str, int]:
        return self.address.lower(), self.chain_id


class RawTokenList(BaseModel):
    """A token list as fetched, before its entries were checked one by one."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    logo_uri: Optional[str] = Field(default=None, alias="logoURI")
    timestamp: Optional[str] = None
    version: Optional[Dict[str, int]] = None
    tokens: List[Dict[str, Any]] = Field(default_factory=list)


class SourceTokenList(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    logo_uri: Optional[str] = Field(default=None, alias="logoURI")
    tokens: List[SourceToken] = Field(default_factory=list)


class BridgeInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token_address: str = Field(alias="tokenAddress")
    origin_bridge_address: str = Field(alias="originBridgeAddress")
    # None when the routing table has no entry for the origin gateway
    dest_bridge_address: Optional[str] = Field(default=None, alias="destBridgeAddress")


class TokenExtensions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    bridge_info: Dict[str, BridgeInfo] = Field(alias="bridgeInfo")

    # Pre-bridgeInfo fields, only written with --include-old-data-fields
    l1_address: Optional[str] = Field(default=None, alias="l1Address")
    l2_gateway_address: Optional[str] = Field(default=None, alias="l2GatewayAddress")
    l1_gateway_address: Optional[str] = Field(default=None, alias="l1GatewayAddress")


class ArbTokenInfo(BaseModel):
    """A token of the generated list, either bridged (with extensions) or passed through."""

    model_config = ConfigDict(populate_by_name=True)

    chain_id: int = Field(alias="chainId")
    address: str
    name: str
    symbol: str
    decimals: int
    logo_uri: Optional[str] = Field(default=None, alias="logoURI")
    extensions: Optional[TokenExtensions] = None

    @property
    def identity(self) -> tuple[str, int]:
        return self.address.lower(), self.chain_id

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Version(BaseModel):
    major: int = 1
    minor: int = 0
    patch: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class ArbTokenList(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    timestamp: str
    version: Version
    tokens: List[ArbTokenInfo] = Field(default_factory=list)
    logo_uri: Optional[str] = Field(default=None, alias="logoURI")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class EtherscanEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    l1_address: str = Field(alias="l1Address")
    l2_address: str = Field(alias="l2Address")
    l1_gateway_address: Optional[str] = Field(default=None, alias="l1GatewayAddress")
    l2_gateway_address: str = Field(alias="l2GatewayAddress")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
