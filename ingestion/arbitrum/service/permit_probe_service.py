from typing import Dict, List, Optional, Sequence, Tuple

from constants.constants import PERMIT_PROBE_GAS_LIMIT
from ingestion.arbitrum.enums.permit_type import PermitProbeState, PermitType
from ingestion.arbitrum.models.call_result import CallResult
from ingestion.arbitrum.service.multicall_service import MulticallService
from ingestion.arbitrum.service.permit_signature_service import SIGNING_ERRORS, PermitSignatureService
from utils.exceptions import PermitProbeError
from utils.logger_utils import get_logger

logger = get_logger("Permit Probe Service")

CALLS_PER_TOKEN = 3

# Checked in this order, the first successful shape wins
PERMIT_PRIORITY = (PermitType.VERSION, PermitType.NO_VERSION, PermitType.DAI)

PERMIT_TYPE_TO_STATE = {
    PermitType.VERSION: PermitProbeState.VERSION,
    PermitType.NO_VERSION: PermitProbeState.NO_VERSION,
    PermitType.DAI: PermitProbeState.DAI,
}


def classify_permit_results(token_addresses: Sequence[str], results: Sequence[CallResult]) -> Dict[str, PermitType]:
    """
    Reads the batch back in groups of three (version, no version, dai). A token
    none of whose calls succeeded is left out.
    """
    if len(results) != len(token_addresses) * CALLS_PER_TOKEN:
        raise PermitProbeError(
            f"Expected {len(token_addresses) * CALLS_PER_TOKEN} permit results, got {len(results)}"
        )

    permit_tokens: Dict[str, PermitType] = {}
    for i, address in enumerate(token_addresses):
        group = results[i * CALLS_PER_TOKEN : (i + 1) * CALLS_PER_TOKEN]
        for permit_type, result in zip(PERMIT_PRIORITY, group):
            if result.success:
                permit_tokens[address] = permit_type
                break
    return permit_tokens


class PermitProbeService(object):
    """
    Finds out which permit flavour each token accepts by simulating all three
    shapes for every token in a single tryAggregate eth_call.
    """

    def __init__(
        self,
        multicall_service: MulticallService,
        signature_service: PermitSignatureService,
        gas_limit: int = PERMIT_PROBE_GAS_LIMIT,
    ):
        self.multicall_service = multicall_service
        self.signature_service = signature_service
        self.gas_limit = gas_limit
        self.states: Dict[str, PermitProbeState] = {}

    async def _sign_token(self, token_address: str) -> Optional[Tuple[bytes, bytes, bytes]]:
        try:
            calls = await self.signature_service.build_permit_calls(token_address)
        except SIGNING_ERRORS as e:
            logger.debug(f"Could not sign permits for {token_address}, skipping: {e}")
            return None
        self.states[token_address] = PermitProbeState.SIGNED
        return calls

    async def probe(self, token_addresses: Sequence[str]) -> Dict[str, PermitType]:
        """
        Raises:
            PermitProbeError: the batched call itself failed.
        """
        self.states = {address: PermitProbeState.NOT_ATTEMPTED for address in token_addresses}

        signed: List[str] = []
        calls: List[Tuple[str, bytes]] = []
        for address in token_addresses:
            call_data = await self._sign_token(address)
            if call_data is None:
                continue
            signed.append(address)
            calls.extend((address, data) for data in call_data)

        logger.info(f"Signed permits for {len(signed)} of {len(token_addresses)} tokens")
        if not calls:
            return {}

        try:
            results = await self.multicall_service.try_aggregate(calls, gas_limit=self.gas_limit)
        except Exception as e:
            raise PermitProbeError(f"Permit batch of {len(calls)} calls failed: {e}") from e
        for address in signed:
            self.states[address] = PermitProbeState.BATCHED

        permit_tokens = classify_permit_results(signed, results)
        for address in signed:
            permit_type = permit_tokens.get(address)
            self.states[address] = PERMIT_TYPE_TO_STATE[permit_type] if permit_type else PermitProbeState.UNSUPPORTED

        logger.info(f"{len(permit_tokens)} tokens support permit")
        return permit_tokens
