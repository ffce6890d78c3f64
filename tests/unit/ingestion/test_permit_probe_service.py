import pytest
from unittest.mock import AsyncMock, MagicMock

from eth_abi import decode, encode
from eth_account import Account
from eth_utils import function_signature_to_4byte_selector
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3

from constants.constants import PERMIT_PROBE_DEADLINE, PERMIT_PROBE_GAS_LIMIT, PERMIT_PROBE_VALUE
from ingestion.arbitrum.enums.permit_type import PermitProbeState, PermitType
from ingestion.arbitrum.models.call_result import CallReverted, CallSuccess
from ingestion.arbitrum.service.permit_probe_service import PermitProbeService, classify_permit_results
from ingestion.arbitrum.service.permit_signature_service import SIGNING_ERRORS, PermitSignatureService
from utils.exceptions import PermitProbeError

TOKEN_A = "0x" + "aa" * 20
TOKEN_B = "0x" + "bb" * 20
TOKEN_C = "0x" + "cc" * 20

OK = CallSuccess(return_data=b"")
FAIL = CallReverted()


def test_version_wins_over_no_version():
    assert classify_permit_results([TOKEN_A], [OK, OK, FAIL]) == {TOKEN_A: PermitType.VERSION}


def test_classification_priority_per_group():
    results = [FAIL, OK, OK] + [FAIL, FAIL, OK] + [FAIL, FAIL, FAIL]
    assert classify_permit_results([TOKEN_A, TOKEN_B, TOKEN_C], results) == {
        TOKEN_A: PermitType.NO_VERSION,
        TOKEN_B: PermitType.DAI,
    }


def test_classification_result_count_must_match():
    with pytest.raises(PermitProbeError):
        classify_permit_results([TOKEN_A, TOKEN_B], [OK, OK, OK])


@pytest.fixture
def mock_multicall():
    multicall = MagicMock()
    multicall.try_aggregate = AsyncMock()
    return multicall


@pytest.fixture
def mock_signature_service():
    service = MagicMock()

    async def build_permit_calls(address):
        if address == TOKEN_B:
            raise ValueError("execution reverted: nonces()")
        return (b"\x01" + bytes.fromhex(address[2:4]), b"\x02", b"\x03")

    service.build_permit_calls = AsyncMock(side_effect=build_permit_calls)
    return service


@pytest.mark.asyncio
async def test_probe_excludes_tokens_that_cannot_be_signed(mock_multicall, mock_signature_service):
    mock_multicall.try_aggregate.return_value = [FAIL, OK, FAIL, FAIL, FAIL, FAIL]
    probe = PermitProbeService(mock_multicall, mock_signature_service)

    permit_tokens = await probe.probe([TOKEN_A, TOKEN_B, TOKEN_C])

    assert permit_tokens == {TOKEN_A: PermitType.NO_VERSION}
    assert probe.states == {
        TOKEN_A: PermitProbeState.NO_VERSION,
        TOKEN_B: PermitProbeState.NOT_ATTEMPTED,
        TOKEN_C: PermitProbeState.UNSUPPORTED,
    }

    calls, = mock_multicall.try_aggregate.call_args[0]
    assert [target for target, _ in calls] == [TOKEN_A] * 3 + [TOKEN_C] * 3
    assert mock_multicall.try_aggregate.call_args.kwargs["gas_limit"] == PERMIT_PROBE_GAS_LIMIT


@pytest.mark.asyncio
async def test_probe_batch_failure_is_fatal(mock_multicall, mock_signature_service):
    mock_multicall.try_aggregate.side_effect = ConnectionError("rpc down")
    probe = PermitProbeService(mock_multicall, mock_signature_service)

    with pytest.raises(PermitProbeError):
        await probe.probe([TOKEN_A])


@pytest.mark.asyncio
async def test_probe_nothing_signed_skips_batch(mock_multicall, mock_signature_service):
    probe = PermitProbeService(mock_multicall, mock_signature_service)

    assert await probe.probe([TOKEN_B]) == {}
    mock_multicall.try_aggregate.assert_not_called()


PERMIT_SIGNATURE = "permit(address,address,uint256,uint256,uint8,bytes32,bytes32)"
DAI_PERMIT_SIGNATURE = "permit(address,address,uint256,uint256,bool,uint8,bytes32,bytes32)"


@pytest.fixture
def web3():
    web3 = AsyncWeb3(AsyncHTTPProvider("http://localhost:8545"))
    name_selector = function_signature_to_4byte_selector("name()")

    async def call(tx, *args, **kwargs):
        data = bytes(HexBytes(tx["data"]))
        if data[:4] == name_selector:
            return encode(["string"], ["Permit Token"])
        return encode(["uint256"], [7])

    web3.eth.call = AsyncMock(side_effect=call)
    web3.eth.get_code = AsyncMock(return_value=b"")
    return web3


@pytest.mark.asyncio
async def test_signature_service_builds_three_permit_calls(web3):
    owner = Account.create()
    spender = Account.create()
    service = PermitSignatureService(
        web3, owner, spender.address, chain_id=1, value=PERMIT_PROBE_VALUE, deadline=PERMIT_PROBE_DEADLINE
    )

    with_version, without_version, dai = await service.build_permit_calls(TOKEN_A)

    permit_selector = function_signature_to_4byte_selector(PERMIT_SIGNATURE)
    assert with_version[:4] == permit_selector
    assert without_version[:4] == permit_selector
    assert dai[:4] == function_signature_to_4byte_selector(DAI_PERMIT_SIGNATURE)
    # Different domains, different signatures
    assert with_version != without_version

    owner_arg, spender_arg, value, deadline, v, r, s = decode(
        ["address", "address", "uint256", "uint256", "uint8", "bytes32", "bytes32"], bytes(with_version[4:])
    )
    assert owner_arg.lower() == owner.address.lower()
    assert spender_arg.lower() == spender.address.lower()
    assert (value, deadline) == (PERMIT_PROBE_VALUE, PERMIT_PROBE_DEADLINE)
    assert v in (27, 28)

    holder, _, nonce, expiry, allowed, *_ = decode(
        ["address", "address", "uint256", "uint256", "bool", "uint8", "bytes32", "bytes32"], bytes(dai[4:])
    )
    assert holder.lower() == owner.address.lower()
    assert (nonce, expiry, allowed) == (7, PERMIT_PROBE_DEADLINE, True)

    nonce_tx = web3.eth.call.call_args_list[1][0][0]
    assert bytes(HexBytes(nonce_tx["data"]))[:4] == function_signature_to_4byte_selector("nonces(address)")
    assert nonce_tx["to"].lower() == TOKEN_A


@pytest.mark.asyncio
async def test_signature_service_propagates_missing_methods(web3):
    web3.eth.call = AsyncMock(return_value=b"")
    service = PermitSignatureService(
        web3, Account.create(), Account.create().address, 1, PERMIT_PROBE_VALUE, PERMIT_PROBE_DEADLINE
    )

    with pytest.raises(SIGNING_ERRORS):
        await service.build_permit_calls(TOKEN_A)
