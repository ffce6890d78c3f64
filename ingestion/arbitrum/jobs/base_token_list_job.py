from typing import Any, Optional

from config.settings import Settings, settings as default_settings
from constants.gateway_addresses import L2_TO_L1_GATEWAY_ADDRESSES
from ingestion.arbitrum.models.network import ArbitrumNetwork, get_arbitrum_network
from ingestion.arbitrum.models.token import ArbTokenList, SourceTokenList
from ingestion.arbitrum.providers.provider_factory import get_async_web3
from ingestion.arbitrum.service.address_resolver_service import AddressResolverService, GatewayRouterOracle
from ingestion.arbitrum.service.multicall_service import MulticallService
from ingestion.arbitrum.service.token_enricher_service import TokenEnricherService
from ingestion.arbitrum.service.token_list_generator_service import TokenListGeneratorService
from ingestion.arbitrum.service.token_sanitizer_service import TokenSanitizerService
from ingestion.web2.graph_client import GraphClient
from ingestion.web2.logo_client import LogoClient
from ingestion.web2.token_list_client import TokenListClient
from storage.token_list_store import TokenListStore
from utils.async_utils import close_async_session, create_async_session
from utils.logger_utils import get_logger

logger = get_logger("Token List Job")


class BaseTokenListJob(object):
    """
    Wires the clients and services of one run. Collaborators passed in are used
    as they are, the rest are built from settings in _start.
    """

    def __init__(
        self,
        l2_network_id: int,
        token_list: str,
        prev_arbified_list: Optional[str] = None,
        new_arbified_list: Optional[str] = None,
        ignore_previous_list: bool = False,
        app_settings: Optional[Settings] = None,
        token_list_client: Optional[TokenListClient] = None,
        generator: Optional[TokenListGeneratorService] = None,
        store: Optional[TokenListStore] = None,
    ):
        self.l2_network_id = l2_network_id
        self.token_list = token_list
        self.prev_arbified_list = prev_arbified_list
        self.new_arbified_list = new_arbified_list
        self.ignore_previous_list = ignore_previous_list
        self.settings = app_settings or default_settings

        self.network: ArbitrumNetwork = get_arbitrum_network(l2_network_id)
        self.sanitizer = TokenSanitizerService()
        self.token_list_client = token_list_client
        self.generator = generator
        self.store = store or TokenListStore(
            self.settings.storage.token_list_dir,
            self.settings.storage.full_list_dir,
            l2_network_id,
        )
        self.l1_multicall: Optional[MulticallService] = None

    async def run(self) -> Any:
        try:
            await self._start()
            return await self._export()
        finally:
            await self._end()

    async def _start(self) -> None:
        # Providers connect lazily, building them costs no round trip
        network_settings = self.settings.network
        l1_web3 = get_async_web3(network_settings.l1_rpc_url, network_settings.rpc_timeout)
        l2_web3 = get_async_web3(network_settings.l2_rpc_url(self.l2_network_id), network_settings.rpc_timeout)
        self.l1_multicall = MulticallService(l1_web3, self.network.l1_multicall, network_settings.multicall_batch_size)
        l2_multicall = MulticallService(l2_web3, self.network.l2_multicall, network_settings.multicall_batch_size)

        if self.token_list_client is not None and self.generator is not None:
            return

        session = await create_async_session(timeout=network_settings.rpc_timeout)
        if self.token_list_client is None:
            self.token_list_client = TokenListClient(session)
        if self.generator is None:
            indexer_settings = self.settings.indexer
            self.generator = TokenListGeneratorService(
                graph_client=GraphClient(
                    session,
                    indexer_settings.subgraph_url(self.l2_network_id),
                    page_size=indexer_settings.page_size,
                    api_key=indexer_settings.api_key,
                ),
                address_resolver=AddressResolverService(
                    GatewayRouterOracle(self.l1_multicall, self.network.l1_gateway_router),
                    GatewayRouterOracle(l2_multicall, self.network.l2_gateway_router),
                ),
                token_enricher=TokenEnricherService(
                    l2_multicall,
                    LogoClient(session),
                    L2_TO_L1_GATEWAY_ADDRESSES,
                    l1_chain_id=self.network.partner_chain_id,
                    l2_chain_id=self.network.chain_id,
                    sanitizer=self.sanitizer,
                ),
                l1_chain_id=self.network.partner_chain_id,
                l2_chain_id=self.network.chain_id,
            )
        logger.info(f"Generating token lists for {self.network.name} ({self.network.chain_id})")

    async def _export(self) -> Any:
        pass

    async def _end(self) -> None:
        await close_async_session()

    async def load_source_list(self) -> SourceTokenList:
        raw_list = await self.token_list_client.get_token_list(self.token_list)
        return self.sanitizer.remove_invalid_tokens(raw_list)

    def load_prev_list(self, path) -> Optional[ArbTokenList]:
        if self.ignore_previous_list:
            logger.info("Ignoring any previous version of the list")
            return None
        return self.store.get_prev_list(self.prev_arbified_list or path)

    def output_path(self, list_name: str):
        return self.new_arbified_list or self.store.get_path(list_name)
