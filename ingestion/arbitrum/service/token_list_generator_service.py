from datetime import datetime, timezone
from typing import List, Optional

from constants.constants import ARBIFIED_LIST_NAME_PREFIX, MAX_LIST_NAME_LENGTH
from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.models.token import ArbTokenList, SourceToken, SourceTokenList
from ingestion.arbitrum.service.address_resolver_service import AddressResolverService
from ingestion.arbitrum.service.list_merger_service import merge_token_lists
from ingestion.arbitrum.service.schema_validation_service import validate_token_list
from ingestion.arbitrum.service.token_enricher_service import TokenEnricherService
from ingestion.arbitrum.service.version_service import compute_list_version
from ingestion.web2.graph_client import GraphClient
from utils.logger_utils import get_logger

logger = get_logger("Token List Generator Service")


def list_name_to_arbified_list_name(name: str) -> str:
    if not name.startswith(ARBIFIED_LIST_NAME_PREFIX):
        name = ARBIFIED_LIST_NAME_PREFIX + name
    return name[:MAX_LIST_NAME_LENGTH]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_source_token_list(arb_list: SourceTokenList, l1_chain_id: int, l2_chain_id: int) -> SourceTokenList:
    """
    Source-chain view of an arbified list, used by `update`. Source-chain
    entries are kept as they are; bridged entries are mapped back to their L1
    token through bridgeInfo when no source-chain entry exists for it.
    """
    tokens: List[SourceToken] = [t for t in arb_list.tokens if t.chain_id != l2_chain_id]
    seen = {t.identity for t in tokens}

    for token in arb_list.tokens:
        if token.chain_id != l2_chain_id or not token.extensions:
            continue
        bridge_info = (token.extensions.get("bridgeInfo") or {}).get(str(l1_chain_id))
        if not bridge_info:
            continue
        l1_token = SourceToken(
            chain_id=l1_chain_id,
            address=bridge_info["tokenAddress"],
            name=token.name,
            symbol=token.symbol,
            decimals=token.decimals,
            logo_uri=token.logo_uri,
        )
        if l1_token.identity in seen:
            continue
        seen.add(l1_token.identity)
        tokens.append(l1_token)

    return SourceTokenList(name=arb_list.name, logo_uri=arb_list.logo_uri, tokens=tokens)


class TokenListGeneratorService(object):
    """
    Runs the pipeline for one destination network:
    candidates -> dual-path resolution -> enrichment -> merge -> version -> validation.
    """

    def __init__(
        self,
        graph_client: GraphClient,
        address_resolver: AddressResolverService,
        token_enricher: TokenEnricherService,
        l1_chain_id: int,
        l2_chain_id: int,
    ):
        self.graph_client = graph_client
        self.address_resolver = address_resolver
        self.token_enricher = token_enricher
        self.l1_chain_id = l1_chain_id
        self.l2_chain_id = l2_chain_id

    async def _get_candidates(self, source_list: SourceTokenList, get_all_tokens_in_network: bool):
        if get_all_tokens_in_network:
            return await self.graph_client.get_all_tokens()

        l1_tokens = [t for t in source_list.tokens if t.chain_id == self.l1_chain_id]
        logo_uris = {t.address.lower(): t.logo_uri for t in l1_tokens if t.logo_uri}
        return await self.graph_client.get_tokens([t.address for t in l1_tokens], logo_uris)

    async def generate(
        self,
        source_list: SourceTokenList,
        prev_list: Optional[ArbTokenList] = None,
        mode: InclusionMode = InclusionMode.BRIDGED_ONLY,
        get_all_tokens_in_network: bool = False,
        include_old_data_fields: bool = False,
    ) -> ArbTokenList:
        """
        Raises:
            SourceFetchError: the subgraph could not be queried.
            DataIntegrityError: a resolved token has unreadable metadata or the merge produced a duplicate.
            SchemaValidationError: the generated list is not a valid token list.
        """
        candidates = await self._get_candidates(source_list, get_all_tokens_in_network)
        resolution = await self.address_resolver.resolve(candidates)
        bridged_tokens = await self.token_enricher.enrich(resolution.resolved, include_old_data_fields)

        tokens = merge_token_lists(bridged_tokens, source_list.tokens, self.l1_chain_id, self.l2_chain_id, mode)
        version = compute_list_version(prev_list, tokens)

        arb_list = ArbTokenList(
            name=list_name_to_arbified_list_name(source_list.name),
            timestamp=utc_timestamp(),
            version=version,
            tokens=tokens,
            logo_uri=source_list.logo_uri,
        )
        validate_token_list(arb_list.to_dict())

        logger.info(f"Generated list with total {len(arb_list.tokens)} tokens")
        logger.info(f"version: {arb_list.version}")
        return arb_list
