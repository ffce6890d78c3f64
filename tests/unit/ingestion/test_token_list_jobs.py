import json

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.enums.permit_type import PermitType
from ingestion.arbitrum.jobs.token_list_jobs import ArbifyListJob, FullListJob, PermitProbeJob, UpdateListJob
from ingestion.arbitrum.models.token import (
    ArbTokenInfo,
    ArbTokenList,
    BridgeInfo,
    RawTokenList,
    TokenExtensions,
    Version,
)
from storage.token_list_store import TokenListStore
from utils.exceptions import InvalidConfigurationError

L1_USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
L2_USDC = "0xff970a61a04b1ca14834a43f5de4533ebddb5cc8"

RAW_SOURCE = RawTokenList(
    name="Test List",
    tokens=[{"chainId": 1, "address": L1_USDC, "name": "USD Coin", "symbol": "USDC", "decimals": 6}],
)


def generated_list(name="Arbed Test List", version=Version()):
    return ArbTokenList(
        name=name,
        timestamp="2024-05-01T12:00:00.000Z",
        version=version,
        tokens=[
            ArbTokenInfo(
                chain_id=42161,
                address=L2_USDC,
                name="USD Coin (Arb1)",
                symbol="USDC",
                decimals=6,
                extensions=TokenExtensions(
                    bridge_info={
                        "1": BridgeInfo(
                            token_address=L1_USDC,
                            origin_bridge_address="0x096760f208390250649e3e8763348e783aef5562",
                            dest_bridge_address="0xcEe284F754E854890e311e3280b767F80797180d",
                        )
                    }
                ),
            )
        ],
    )


@pytest.fixture(autouse=True)
def mock_get_async_web3():
    with patch("ingestion.arbitrum.jobs.base_token_list_job.get_async_web3") as mock:
        yield mock


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.get_token_list = AsyncMock(return_value=RAW_SOURCE)
    return client


@pytest.fixture
def mock_generator():
    generator = MagicMock()
    generator.generate = AsyncMock(return_value=generated_list())
    return generator


@pytest.fixture
def store(tmp_path):
    return TokenListStore(tmp_path / "lists", tmp_path / "full", 42161)


def job_kwargs(mock_client, mock_generator, store, **kwargs):
    return dict(token_list_client=mock_client, generator=mock_generator, store=store, **kwargs)


@pytest.mark.asyncio
async def test_arbify_writes_list_and_uses_previous(mock_client, mock_generator, store):
    job = ArbifyListJob(42161, "list.json", **job_kwargs(mock_client, mock_generator, store))

    await job.run()

    path = store.get_path("Test List")
    assert json.loads(path.read_text())["name"] == "Arbed Test List"
    source_list, prev_list = mock_generator.generate.call_args[0]
    assert [t.symbol for t in source_list.tokens] == ["USDC"]
    assert prev_list is None
    assert mock_generator.generate.call_args.kwargs["mode"] == InclusionMode.ALL_SOURCE_TOKENS

    await ArbifyListJob(42161, "list.json", **job_kwargs(mock_client, mock_generator, store)).run()
    _, prev_list = mock_generator.generate.call_args[0]
    assert prev_list is not None and str(prev_list.version) == "1.0.0"


@pytest.mark.asyncio
async def test_arbify_ignore_previous_and_custom_output(mock_client, mock_generator, store, tmp_path):
    store.write_list(generated_list(), store.get_path("Test List"))
    output = tmp_path / "out" / "custom.json"

    job = ArbifyListJob(
        42161,
        "list.json",
        ignore_previous_list=True,
        new_arbified_list=str(output),
        include_old_data_fields=True,
        **job_kwargs(mock_client, mock_generator, store),
    )
    await job.run()

    assert output.exists()
    _, prev_list = mock_generator.generate.call_args[0]
    assert prev_list is None
    assert mock_generator.generate.call_args.kwargs["include_old_data_fields"] is True


@pytest.mark.asyncio
async def test_update_rebuilds_source_from_arbified_list(mock_client, mock_generator, store):
    mock_client.get_token_list.return_value = RawTokenList.model_validate(generated_list().to_dict())

    await UpdateListJob(42161, "arbed_test_list.json", **job_kwargs(mock_client, mock_generator, store)).run()

    source_list, _ = mock_generator.generate.call_args[0]
    assert [(t.chain_id, t.address) for t in source_list.tokens] == [(1, L1_USDC)]
    assert store.get_path("Arbed Test List").exists()


@pytest.mark.asyncio
async def test_full_list_writes_etherscan_shape(mock_client, mock_generator, store, tmp_path):
    await FullListJob(42161, "full", **job_kwargs(mock_client, mock_generator, store)).run()

    source_list, prev_list = mock_generator.generate.call_args[0]
    assert source_list.name == "Full" and source_list.tokens == []
    assert prev_list is None
    assert mock_generator.generate.call_args.kwargs["get_all_tokens_in_network"] is True

    entries = json.loads((tmp_path / "full" / "all_tokens.json").read_text())
    assert entries == [
        {
            "l1Address": L1_USDC,
            "l2Address": L2_USDC,
            "l1GatewayAddress": "0xcEe284F754E854890e311e3280b767F80797180d",
            "l2GatewayAddress": "0x096760f208390250649e3e8763348e783aef5562",
        }
    ]


def test_full_list_requires_full_argument(mock_client, mock_generator, store):
    with pytest.raises(InvalidConfigurationError):
        FullListJob(42161, "list.json", **job_kwargs(mock_client, mock_generator, store))


@pytest.mark.asyncio
async def test_permit_probe_job(mock_client, mock_generator, store, tmp_path):
    probe = MagicMock()
    probe.probe = AsyncMock(return_value={L1_USDC: PermitType.VERSION})

    job = PermitProbeJob(42161, "list.json", permit_probe=probe, **job_kwargs(mock_client, mock_generator, store))
    await job.run()

    assert mock_generator.generate.call_args.kwargs["mode"] == InclusionMode.BRIDGED_ONLY
    probe.probe.assert_awaited_once_with([L1_USDC])
    assert json.loads((tmp_path / "lists" / "permitTokens.json").read_text()) == {L1_USDC: "version"}
