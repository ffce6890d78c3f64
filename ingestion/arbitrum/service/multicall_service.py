from typing import Any, Dict, List, Optional, Sequence, Tuple

from eth_abi.exceptions import DecodingError
from eth_utils import to_checksum_address
from eth_utils.abi import filter_abi_by_name, get_abi_output_types
from hexbytes import HexBytes
from web3 import AsyncWeb3

from abi.erc20_abi import ERC20_ABI, ERC20_ABI_ALTERNATIVE_1
from abi.gateway_router_abi import GATEWAY_ROUTER_ABI
from abi.multicall_abi import MULTICALL2_ABI
from ingestion.arbitrum.models.call_result import CallResult, CallSuccess, to_call_result
from ingestion.arbitrum.models.resolution import TokenData
from utils.logger_utils import get_logger

logger = get_logger("Multicall Service")

# Errors meaning "this call returned something we can't read", not a transport failure
IGNORED_DECODE_ERRORS = (DecodingError, OverflowError, ValueError)

DEFAULT_BATCH_SIZE = 500


def get_output_types(abi: List[Dict[str, Any]], fn_name: str) -> List[str]:
    return get_abi_output_types(filter_abi_by_name(fn_name, abi)[0])


class MulticallService(object):
    """
    Read-only batches through a Multicall2 contract.

    Every batch goes through tryAggregate(false, calls) so one reverting call
    never aborts its neighbours; the per-call outcome comes back as CallSuccess
    or CallReverted.
    """

    def __init__(self, web3: AsyncWeb3, multicall_address: str, batch_size: int = DEFAULT_BATCH_SIZE):
        self._web3 = web3
        self.multicall_address = to_checksum_address(multicall_address)
        self.batch_size = batch_size
        self._multicall = web3.eth.contract(address=self.multicall_address, abi=MULTICALL2_ABI)
        # Unbound contracts, only used to build and read calldata
        self._erc20 = web3.eth.contract(abi=ERC20_ABI)
        self._gateway_router = web3.eth.contract(abi=GATEWAY_ROUTER_ABI)

    @property
    def web3(self) -> AsyncWeb3:
        return self._web3

    async def try_aggregate(
        self,
        calls: Sequence[Tuple[str, bytes]],
        gas_limit: Optional[int] = None,
    ) -> List[CallResult]:
        """
        Executes all calls in one eth_call. Transport errors and a revert of the
        multicall itself propagate to the caller.
        """
        if not calls:
            return []

        encoded_calls = [(to_checksum_address(target), bytes(call_data)) for target, call_data in calls]
        transaction: Dict[str, Any] = {}
        if gas_limit is not None:
            transaction["gas"] = gas_limit

        results = await self._multicall.functions.tryAggregate(False, encoded_calls).call(transaction)
        return [to_call_result(success, return_data) for success, return_data in results]

    async def try_aggregate_in_batches(self, calls: Sequence[Tuple[str, bytes]]) -> List[CallResult]:
        results: List[CallResult] = []
        for start in range(0, len(calls), self.batch_size):
            chunk = calls[start : start + self.batch_size]
            logger.debug(f"Multicall batch {start}-{start + len(chunk)} of {len(calls)}")
            results.extend(await self.try_aggregate(chunk))
        return results

    async def get_token_data(self, token_addresses: Sequence[str]) -> List[TokenData]:
        """
        Reads name, symbol and decimals of every token. Order matches the input.
        """
        name_data = HexBytes(self._erc20.encode_abi("name"))
        symbol_data = HexBytes(self._erc20.encode_abi("symbol"))
        decimals_data = HexBytes(self._erc20.encode_abi("decimals"))

        calls: List[Tuple[str, bytes]] = []
        for address in token_addresses:
            calls.append((address, name_data))
            calls.append((address, symbol_data))
            calls.append((address, decimals_data))

        results = await self.try_aggregate_in_batches(calls)

        token_data = []
        for i in range(0, len(results), 3):
            name_result, symbol_result, decimals_result = results[i : i + 3]
            token_data.append(
                TokenData(
                    name=self._decode_string(name_result, "name"),
                    symbol=self._decode_string(symbol_result, "symbol"),
                    decimals=self._decode_value(decimals_result, get_output_types(ERC20_ABI, "decimals")),
                )
            )
        return token_data

    async def get_l2_token_addresses(self, l1_token_addresses: Sequence[str], gateway_router: str) -> List[Optional[str]]:
        """
        Asks a gateway router for the L2 address of every L1 token.
        None where the call reverted or returned garbage.
        """
        calls = [
            (
                gateway_router,
                HexBytes(self._gateway_router.encode_abi("calculateL2TokenAddress", args=[to_checksum_address(address)])),
            )
            for address in l1_token_addresses
        ]
        results = await self.try_aggregate_in_batches(calls)

        output_types = get_output_types(GATEWAY_ROUTER_ABI, "calculateL2TokenAddress")
        addresses = []
        for result in results:
            value = self._decode_value(result, output_types)
            addresses.append(to_checksum_address(value) if value else None)
        return addresses

    def _decode_value(self, result: CallResult, output_types: List[str]) -> Any:
        if not isinstance(result, CallSuccess):
            return None
        try:
            return self._web3.codec.decode(output_types, result.return_data)[0]
        except IGNORED_DECODE_ERRORS:
            return None

    def _decode_string(self, result: CallResult, fn_name: str) -> Optional[str]:
        """
        string first, then the bytes32 variant. bytes32 values are handed back as
        64 hex characters and decoded by the sanitizer.
        """
        value = self._decode_value(result, get_output_types(ERC20_ABI, fn_name))
        if value is not None:
            return value

        raw = self._decode_value(result, get_output_types(ERC20_ABI_ALTERNATIVE_1, fn_name))
        if raw is not None:
            logger.debug(f"{fn_name}() returned bytes32 instead of string")
            return raw.hex()
        return None
