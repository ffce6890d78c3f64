import pytest

from ingestion.arbitrum.models.token import ArbTokenList
from ingestion.arbitrum.service.schema_validation_service import is_arb_token_list, validate_token_list
from utils.exceptions import SchemaValidationError


def token_dict(address="0x" + "aa" * 20, **overrides):
    token = {
        "chainId": 42161,
        "address": address,
        "name": "Test Token",
        "symbol": "TST",
        "decimals": 18,
        "extensions": {
            "bridgeInfo": {
                "1": {"tokenAddress": "0x" + "bb" * 20, "originBridgeAddress": "0x" + "cc" * 20}
            }
        },
    }
    token.update(overrides)
    return token


def list_dict(tokens=None, **overrides):
    data = {
        "name": "Arbed Test List",
        "timestamp": "2024-05-01T12:00:00.000Z",
        "version": {"major": 1, "minor": 0, "patch": 0},
        "tokens": tokens if tokens is not None else [token_dict()],
        "logoURI": "ipfs://logo",
    }
    data.update(overrides)
    return data


def test_valid_list_passes():
    validate_token_list(list_dict())


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "A" * 31},
        {"name": ""},
        {"version": {"major": -1, "minor": 0, "patch": 0}},
        {"timestamp": "yesterday"},
        {"tokens": []},
    ],
)
def test_invalid_list_fields(overrides):
    with pytest.raises(SchemaValidationError):
        validate_token_list(list_dict(**overrides))


@pytest.mark.parametrize(
    "overrides",
    [
        {"address": "0x1234"},
        {"name": "N" * 41},
        {"symbol": "S" * 21},
        {"symbol": ""},
        {"decimals": 256},
        {"chainId": 0},
        {"unexpected": True},
    ],
)
def test_invalid_token_fields(overrides):
    with pytest.raises(SchemaValidationError):
        validate_token_list(list_dict(tokens=[token_dict(**overrides)]))


def test_duplicate_tokens_are_rejected():
    tokens = [token_dict(), token_dict(address=("0x" + "aa" * 20).upper().replace("0X", "0x"))]
    with pytest.raises(SchemaValidationError):
        validate_token_list(list_dict(tokens=tokens))


def test_same_address_on_other_chain_is_allowed():
    validate_token_list(list_dict(tokens=[token_dict(), token_dict(chainId=1, extensions=None)]))


def test_is_arb_token_list_parses_valid_list():
    arb_list = is_arb_token_list(list_dict())

    assert isinstance(arb_list, ArbTokenList)
    assert str(arb_list.version) == "1.0.0"
    assert arb_list.tokens[0].extensions.bridge_info["1"].token_address == "0x" + "bb" * 20


def test_is_arb_token_list_rejects_invalid_list():
    with pytest.raises(SchemaValidationError):
        is_arb_token_list(list_dict(tokens=[token_dict(decimals=-1)]))
