from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants.constants import ARB_ONE_CHAIN_ID, NOVA_CHAIN_ID

ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = ENV_CONFIG

    name: str = Field("Arbitrum Token Lists", validation_alias="APP_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class NetworkSettings(BaseSettings):
    """RPC endpoints for the source chain and both destination networks."""

    model_config = ENV_CONFIG

    l1_rpc_url: str = Field(
        default="https://ethereum-rpc.publicnode.com",
        validation_alias="L1_RPC_URL",
        description="Ethereum JSON-RPC URL",
    )
    arb_one_rpc_url: str = Field(default="https://arb1.arbitrum.io/rpc", validation_alias="ARB_ONE_RPC_URL")
    nova_rpc_url: str = Field(default="https://nova.arbitrum.io/rpc", validation_alias="NOVA_RPC_URL")
    l2_network_id: int = Field(default=ARB_ONE_CHAIN_ID, validation_alias="L2_NETWORK_ID")
    # Timeout for RPC calls (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    # Calls per Multicall2 round trip for resolution and metadata reads
    multicall_batch_size: int = Field(default=500, gt=0, validation_alias="MULTICALL_BATCH_SIZE")

    def l2_rpc_url(self, l2_network_id: int) -> str:
        if l2_network_id == NOVA_CHAIN_ID:
            return self.nova_rpc_url
        return self.arb_one_rpc_url


class IndexerSettings(BaseSettings):
    """Token bridge subgraphs queried for bridged token candidates."""

    model_config = ENV_CONFIG

    arb_one_subgraph_url: str = Field(
        default="https://api.thegraph.com/subgraphs/name/fredlacs/layer2-token-gateway",
        validation_alias="ARB_ONE_SUBGRAPH_URL",
    )
    nova_subgraph_url: str = Field(
        default="https://api.thegraph.com/subgraphs/name/fredlacs/layer2-token-gateway-nova",
        validation_alias="NOVA_SUBGRAPH_URL",
    )
    page_size: int = Field(default=1000, gt=0, le=1000, validation_alias="GRAPH_PAGE_SIZE")
    api_key: Optional[str] = Field(default=None, validation_alias="GRAPH_API_KEY")

    def subgraph_url(self, l2_network_id: int) -> str:
        if l2_network_id == NOVA_CHAIN_ID:
            return self.nova_subgraph_url
        return self.arb_one_subgraph_url


class StorageSettings(BaseSettings):
    """Output locations for generated lists."""

    model_config = ENV_CONFIG

    token_list_dir: str = Field("src/ArbTokenLists", validation_alias="ARB_TOKEN_LIST_DIR")
    full_list_dir: str = Field("src/FullList", validation_alias="FULL_LIST_DIR")


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each group reads its own flat env vars, so `.env` stays a flat KEY=value file.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    network: NetworkSettings = Field(default_factory=NetworkSettings)
    indexer: IndexerSettings = Field(default_factory=IndexerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Singleton instance
settings = Settings()
