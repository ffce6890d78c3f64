from typing import Dict, List, Mapping, Optional, Sequence

from constants.constants import DISABLED_GATEWAY
from ingestion.arbitrum.models.resolution import ResolvedToken, TokenData
from ingestion.arbitrum.models.token import ArbTokenInfo, BridgeInfo, TokenExtensions
from ingestion.arbitrum.service.multicall_service import MulticallService
from ingestion.arbitrum.service.token_sanitizer_service import TokenSanitizerService
from ingestion.web2.logo_client import LogoClient
from utils.async_utils import gather_with_concurrency
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Token Enricher Service")

MAX_CONCURRENT_LOGO_REQUESTS = 10


class TokenEnricherService(object):
    """
    Turns resolved tokens into list entries: on-chain metadata from the L2
    multicall, a logo, and bridgeInfo linking back to the L1 token and gateways.
    """

    def __init__(
        self,
        multicall_service: MulticallService,
        logo_client: LogoClient,
        gateway_addresses: Mapping[str, str],
        l1_chain_id: int,
        l2_chain_id: int,
        sanitizer: Optional[TokenSanitizerService] = None,
    ):
        self.multicall_service = multicall_service
        self.logo_client = logo_client
        # lowercased L2 gateway -> L1 gateway, known to be incomplete
        self.gateway_addresses = {to_normalized_address(k): v for k, v in gateway_addresses.items()}
        self.l1_chain_id = l1_chain_id
        self.l2_chain_id = l2_chain_id
        self.sanitizer = sanitizer or TokenSanitizerService()

    async def enrich(self, resolved_tokens: Sequence[ResolvedToken], include_old_data_fields: bool = False) -> List[ArbTokenInfo]:
        """
        Enriched tokens in input order, minus those bridged through the
        disabled gateway.

        Raises:
            DataIntegrityError: a resolved token has no readable decimals, name or symbol.
        """
        if not resolved_tokens:
            return []

        token_data = await self.multicall_service.get_token_data([t.l2_address for t in resolved_tokens])
        logo_uris = await self.get_logo_uris(resolved_tokens)

        enriched = []
        for token, data in zip(resolved_tokens, token_data):
            if to_normalized_address(token.gateway_addr) == DISABLED_GATEWAY:
                logger.info(f"Excluding {token.l1_token_addr} ({data.symbol}), its gateway is disabled")
                continue
            enriched.append(
                self._to_arb_token_info(token, data, logo_uris.get(token.l1_token_addr), include_old_data_fields)
            )
        return enriched

    async def get_logo_uris(self, resolved_tokens: Sequence[ResolvedToken]) -> Dict[str, str]:
        missing = [t.l1_token_addr for t in resolved_tokens if not t.logo_uri]
        looked_up = await gather_with_concurrency(
            MAX_CONCURRENT_LOGO_REQUESTS, *(self.logo_client.get_logo_uri(address) for address in missing)
        )

        logo_uris = {t.l1_token_addr: t.logo_uri for t in resolved_tokens if t.logo_uri}
        for address, uri in zip(missing, looked_up):
            if uri:
                logo_uris[address] = uri
            else:
                logger.info(f"No logo uri for {address}")
        return logo_uris

    def build_bridge_info(self, l1_token_addr: str, l2_gateway_addr: str) -> Dict[str, BridgeInfo]:
        return {
            str(self.l1_chain_id): BridgeInfo(
                token_address=l1_token_addr,
                origin_bridge_address=l2_gateway_addr,
                dest_bridge_address=self.gateway_addresses.get(to_normalized_address(l2_gateway_addr)),
            )
        }

    def _to_arb_token_info(
        self,
        token: ResolvedToken,
        data: TokenData,
        logo_uri: Optional[str],
        include_old_data_fields: bool,
    ) -> ArbTokenInfo:
        name, symbol, decimals = self.sanitizer.sanitize_token_data(data, token.l1_token_addr, token.l2_address)

        extensions = TokenExtensions(bridge_info=self.build_bridge_info(token.l1_token_addr, token.gateway_addr))
        if include_old_data_fields:
            extensions.l1_address = token.l1_token_addr
            extensions.l2_gateway_address = token.gateway_addr
            extensions.l1_gateway_address = self.gateway_addresses.get(to_normalized_address(token.gateway_addr))

        return ArbTokenInfo(
            chain_id=self.l2_chain_id,
            address=token.l2_address,
            name=name,
            symbol=symbol,
            decimals=decimals,
            logo_uri=logo_uri,
            extensions=extensions,
        )
