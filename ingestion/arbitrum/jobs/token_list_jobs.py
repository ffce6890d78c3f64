from typing import Dict, Optional

from eth_account import Account

from constants.constants import (
    FULL_LIST_LOGO_URI,
    FULL_LIST_NAME,
    PERMIT_PROBE_DEADLINE,
    PERMIT_PROBE_GAS_LIMIT,
    PERMIT_PROBE_VALUE,
)
from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.enums.permit_type import PermitType
from ingestion.arbitrum.jobs.base_token_list_job import BaseTokenListJob
from ingestion.arbitrum.mappers.etherscan_mapper import EtherscanMapper
from ingestion.arbitrum.models.token import ArbTokenList, SourceTokenList
from ingestion.arbitrum.service.permit_probe_service import PermitProbeService
from ingestion.arbitrum.service.permit_signature_service import PermitSignatureService
from ingestion.arbitrum.service.token_list_generator_service import to_source_token_list
from utils.exceptions import InvalidConfigurationError
from utils.logger_utils import get_logger

logger = get_logger("Token List Jobs")

FULL_TOKEN_LIST_ARGUMENT = "full"


class ArbifyListJob(BaseTokenListJob):
    """Derives the arbified list of a source-chain token list."""

    def __init__(
        self,
        *args,
        inclusion_mode: InclusionMode = InclusionMode.ALL_SOURCE_TOKENS,
        include_old_data_fields: bool = False,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.inclusion_mode = inclusion_mode
        self.include_old_data_fields = include_old_data_fields

    async def _export(self) -> ArbTokenList:
        source_list = await self.load_source_list()
        path = self.output_path(source_list.name)
        prev_list = self.load_prev_list(self.store.get_path(source_list.name))

        arb_list = await self.generator.generate(
            source_list,
            prev_list,
            mode=self.inclusion_mode,
            include_old_data_fields=self.include_old_data_fields,
        )
        self.store.write_list(arb_list, path)
        return arb_list


class UpdateListJob(BaseTokenListJob):
    """Regenerates an existing arbified list from the L1 tokens it describes."""

    def __init__(self, *args, inclusion_mode: InclusionMode = InclusionMode.ALL_SOURCE_TOKENS, **kwargs):
        super().__init__(*args, **kwargs)
        self.inclusion_mode = inclusion_mode

    async def _export(self) -> ArbTokenList:
        arb_list = await self.load_source_list()
        source_list = to_source_token_list(arb_list, self.network.partner_chain_id, self.network.chain_id)
        path = self.output_path(arb_list.name)
        prev_list = self.load_prev_list(self.store.get_path(arb_list.name))

        new_list = await self.generator.generate(source_list, prev_list, mode=self.inclusion_mode)
        self.store.write_list(new_list, path)
        return new_list


class FullListJob(BaseTokenListJob):
    """Every token the subgraph knows for the network, written in the Etherscan shape."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.token_list != FULL_TOKEN_LIST_ARGUMENT:
            raise InvalidConfigurationError(f"expected --token-list '{FULL_TOKEN_LIST_ARGUMENT}'")

    async def _export(self) -> ArbTokenList:
        mock_list = SourceTokenList(name=FULL_LIST_NAME, logo_uri=FULL_LIST_LOGO_URI, tokens=[])
        arb_list = await self.generator.generate(mock_list, None, get_all_tokens_in_network=True)
        self.store.write_etherscan_list(EtherscanMapper.arb_list_to_etherscan_list(arb_list))
        return arb_list


class PermitProbeJob(BaseTokenListJob):
    """Classifies the permit flavour of every bridged token's L1 contract."""

    def __init__(self, *args, permit_probe: Optional[PermitProbeService] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.permit_probe = permit_probe

    async def _start(self) -> None:
        await super()._start()
        if self.permit_probe is not None:
            return

        # Throwaway identities, nothing is signed with a real key
        owner = Account.create()
        spender = Account.create()
        signature_service = PermitSignatureService(
            self.l1_multicall.web3,
            owner,
            spender.address,
            chain_id=self.network.partner_chain_id,
            value=PERMIT_PROBE_VALUE,
            deadline=PERMIT_PROBE_DEADLINE,
        )
        self.permit_probe = PermitProbeService(self.l1_multicall, signature_service, gas_limit=PERMIT_PROBE_GAS_LIMIT)

    async def _export(self) -> Dict[str, PermitType]:
        source_list = await self.load_source_list()
        arb_list = await self.generator.generate(source_list, None, mode=InclusionMode.BRIDGED_ONLY)

        l1_addresses = [entry.l1_address for entry in EtherscanMapper.arb_list_to_etherscan_list(arb_list)]
        permit_tokens = await self.permit_probe.probe(l1_addresses)
        self.store.write_permit_tokens(permit_tokens)
        return permit_tokens
