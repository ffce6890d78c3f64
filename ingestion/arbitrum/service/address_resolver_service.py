from typing import List, Optional, Protocol, Sequence

from ingestion.arbitrum.models.resolution import GraphTokenResult, ResolutionMismatch, ResolutionResult, ResolvedToken
from ingestion.arbitrum.service.multicall_service import MulticallService
from utils.exceptions import DataIntegrityError
from utils.formatter_utils import is_zero_address, to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Address Resolver Service")

REASON_MISMATCH = "mismatch"
REASON_UNRESOLVED = "unresolved"


class AddressOracle(Protocol):
    async def get_l2_token_addresses(self, l1_token_addresses: Sequence[str]) -> List[Optional[str]]:
        ...


class GatewayRouterOracle(object):
    """calculateL2TokenAddress on one gateway router, batched through that chain's multicall."""

    def __init__(self, multicall_service: MulticallService, gateway_router: str):
        self.multicall_service = multicall_service
        self.gateway_router = gateway_router

    async def get_l2_token_addresses(self, l1_token_addresses: Sequence[str]) -> List[Optional[str]]:
        return await self.multicall_service.get_l2_token_addresses(l1_token_addresses, self.gateway_router)


def reconcile_addresses(path_a: Sequence[Optional[str]], path_b: Sequence[Optional[str]]) -> List[int]:
    """
    Indices where both lookups returned the same non-zero address.
    """
    if len(path_a) != len(path_b):
        raise DataIntegrityError(
            f"Address lookups returned {len(path_a)} and {len(path_b)} results for the same input"
        )
    return [
        i
        for i, (a, b) in enumerate(zip(path_a, path_b))
        if to_normalized_address(a) == to_normalized_address(b) and not is_zero_address(a)
    ]


class AddressResolverService(object):
    """
    Accepts a bridged token only when the L1 router's arbitrated answer and the
    L2 router's deployed mapping agree. Registrations that are declared but not
    deployed yet, or deployed and since disabled, disagree and are dropped.
    """

    def __init__(self, l1_router_oracle: AddressOracle, l2_router_oracle: AddressOracle):
        self.l1_router_oracle = l1_router_oracle
        self.l2_router_oracle = l2_router_oracle

    async def resolve(self, candidates: Sequence[GraphTokenResult]) -> ResolutionResult:
        l1_addresses = [candidate.l1_token_addr for candidate in candidates]
        if not l1_addresses:
            return ResolutionResult()

        addresses_from_l1 = await self.l1_router_oracle.get_l2_token_addresses(l1_addresses)
        addresses_from_l2 = await self.l2_router_oracle.get_l2_token_addresses(l1_addresses)

        kept = set(reconcile_addresses(addresses_from_l1, addresses_from_l2))

        result = ResolutionResult()
        for i, candidate in enumerate(candidates):
            if i in kept:
                result.resolved.append(
                    ResolvedToken(
                        l1_token_addr=candidate.l1_token_addr,
                        l2_address=addresses_from_l2[i],
                        gateway_addr=candidate.gateway_addr,
                        logo_uri=candidate.logo_uri,
                    )
                )
            else:
                same = to_normalized_address(addresses_from_l1[i]) == to_normalized_address(addresses_from_l2[i])
                result.mismatches.append(
                    ResolutionMismatch(
                        l1_token_addr=candidate.l1_token_addr,
                        router_address=addresses_from_l1[i],
                        deployed_address=addresses_from_l2[i],
                        reason=REASON_UNRESOLVED if same else REASON_MISMATCH,
                    )
                )

        logger.info(
            f"Resolved {len(result.resolved)} of {len(candidates)} candidates "
            f"({len(result.mismatches)} dropped as mismatched or unresolved)"
        )
        for mismatch in result.mismatches:
            logger.debug(
                f"Dropped {mismatch.l1_token_addr}: {mismatch.reason} "
                f"(router={mismatch.router_address}, deployed={mismatch.deployed_address})"
            )
        return result
