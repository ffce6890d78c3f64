from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ingestion.arbitrum.enums.version_upgrade import VersionUpgrade
from ingestion.arbitrum.models.token import ArbTokenInfo, ArbTokenList, Version
from utils.logger_utils import get_logger

logger = get_logger("Version Service")

TokenKey = Tuple[int, str]
IDENTITY_FIELDS = ("address", "chainId")


@dataclass
class TokenListDiff:
    added: List[Dict[str, Any]] = field(default_factory=list)
    removed: List[Dict[str, Any]] = field(default_factory=list)
    # chainId -> address -> names of the keys whose values differ
    changed: Dict[int, Dict[str, List[str]]] = field(default_factory=dict)


def _index_tokens(tokens: Sequence[Dict[str, Any]]) -> Dict[TokenKey, Dict[str, Any]]:
    return {(token["chainId"], token["address"].lower()): token for token in tokens}


def _values_equal(a: Any, b: Any) -> bool:
    # tags are compared as sets, everything else structurally
    if isinstance(a, list) and isinstance(b, list):
        try:
            return sorted(a) == sorted(b)
        except TypeError:
            return a == b
    return a == b


def diff_token_lists(base: Sequence[Dict[str, Any]], update: Sequence[Dict[str, Any]]) -> TokenListDiff:
    """
    Compares two token sets in their serialized (camelCase) form, keyed by
    (chainId, address). A token counts as changed when any key of its updated
    form, other than the identity keys, holds a different value than before.
    """
    base_index = _index_tokens(base)
    update_index = _index_tokens(update)

    diff = TokenListDiff()
    for key, token in update_index.items():
        previous = base_index.get(key)
        if previous is None:
            diff.added.append(token)
            continue
        changed_keys = [
            name
            for name in token
            if name not in IDENTITY_FIELDS and not _values_equal(previous.get(name), token[name])
        ]
        if changed_keys:
            chain_id, address = key
            diff.changed.setdefault(chain_id, {})[address] = changed_keys

    diff.removed = [token for key, token in base_index.items() if key not in update_index]
    return diff


def min_version_bump(base: Sequence[Dict[str, Any]], update: Sequence[Dict[str, Any]]) -> VersionUpgrade:
    diff = diff_token_lists(base, update)
    if diff.removed:
        return VersionUpgrade.MAJOR
    if diff.added:
        return VersionUpgrade.MINOR
    if diff.changed:
        return VersionUpgrade.PATCH
    return VersionUpgrade.NONE


def next_version(version: Version, bump: VersionUpgrade) -> Version:
    if bump == VersionUpgrade.MAJOR:
        return Version(major=version.major + 1, minor=0, patch=0)
    if bump == VersionUpgrade.MINOR:
        return Version(major=version.major, minor=version.minor + 1, patch=0)
    if bump == VersionUpgrade.PATCH:
        return Version(major=version.major, minor=version.minor, patch=version.patch + 1)
    return version.model_copy()


def compute_list_version(prev_list: Optional[ArbTokenList], tokens: Sequence[ArbTokenInfo]) -> Version:
    """
    Version of a freshly generated list. Without a previous list this is
    always 1.0.0. Patch level changes (extension fields, logos) do not bump.
    """
    if prev_list is None:
        return Version()

    bump = min_version_bump(
        [token.to_dict() for token in prev_list.tokens],
        [token.to_dict() for token in tokens],
    )
    if bump == VersionUpgrade.PATCH:
        bump = VersionUpgrade.NONE

    version = next_version(prev_list.version, bump)
    logger.info(f"Version bump {bump.name}: {prev_list.version} -> {version}")
    return version
