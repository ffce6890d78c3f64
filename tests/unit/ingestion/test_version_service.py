from ingestion.arbitrum.enums.version_upgrade import VersionUpgrade
from ingestion.arbitrum.models.token import ArbTokenInfo, ArbTokenList, Version
from ingestion.arbitrum.service.version_service import (
    compute_list_version,
    diff_token_lists,
    min_version_bump,
    next_version,
)


def token(address, symbol="TKN", chain_id=42161, logo=None):
    return ArbTokenInfo(chain_id=chain_id, address=address, name=f"{symbol} Token", symbol=symbol, decimals=18, logo_uri=logo)


def prev_list(tokens, version=Version(major=1, minor=2, patch=3)):
    return ArbTokenList(name="Arbed Test", timestamp="2024-01-01T00:00:00.000Z", version=version, tokens=tokens)


A = "0x" + "aa" * 20
B = "0x" + "bb" * 20
C = "0x" + "cc" * 20


def test_no_previous_list_is_1_0_0():
    assert compute_list_version(None, [token(A)]) == Version(major=1, minor=0, patch=0)


def test_only_additions_bump_minor_and_reset_patch():
    version = compute_list_version(prev_list([token(A)]), [token(A), token(B)])
    assert version == Version(major=1, minor=3, patch=0)


def test_removal_bumps_major():
    version = compute_list_version(prev_list([token(A), token(B)]), [token(A), token(C)])
    assert version == Version(major=2, minor=0, patch=0)


def test_changes_only_are_not_bumped():
    version = compute_list_version(prev_list([token(A, logo="ipfs://old")]), [token(A, logo="ipfs://new")])
    assert version == Version(major=1, minor=2, patch=3)


def test_unchanged_tokens_keep_version():
    version = compute_list_version(prev_list([token(A)]), [token(A)])
    assert str(version) == "1.2.3"


def test_diff_is_keyed_by_chain_and_case_insensitive_address():
    base = [token(A).to_dict(), token(B, chain_id=1).to_dict()]
    update = [token(A.upper().replace("0X", "0x")).to_dict(), token(B, chain_id=42161).to_dict()]

    diff = diff_token_lists(base, update)

    assert [t["chainId"] for t in diff.added] == [42161]
    assert [t["chainId"] for t in diff.removed] == [1]
    assert diff.changed == {}


def test_diff_reports_changed_keys():
    diff = diff_token_lists([token(A, symbol="OLD").to_dict()], [token(A, symbol="NEW").to_dict()])
    assert diff.changed == {42161: {A: ["name", "symbol"]}}


def test_min_version_bump_priority():
    assert min_version_bump([token(A).to_dict()], []) == VersionUpgrade.MAJOR
    assert min_version_bump([], [token(A).to_dict()]) == VersionUpgrade.MINOR
    assert min_version_bump([token(A, logo="x").to_dict()], [token(A).to_dict()]) == VersionUpgrade.NONE
    assert min_version_bump([token(A).to_dict()], [token(A, logo="x").to_dict()]) == VersionUpgrade.PATCH


def test_next_version():
    version = Version(major=1, minor=2, patch=3)
    assert next_version(version, VersionUpgrade.MAJOR) == Version(major=2, minor=0, patch=0)
    assert next_version(version, VersionUpgrade.MINOR) == Version(major=1, minor=3, patch=0)
    assert next_version(version, VersionUpgrade.PATCH) == Version(major=1, minor=2, patch=4)
    assert next_version(version, VersionUpgrade.NONE) == version
