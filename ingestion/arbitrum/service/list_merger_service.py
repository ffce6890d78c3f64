from typing import List, Sequence

from ingestion.arbitrum.enums.inclusion_mode import InclusionMode
from ingestion.arbitrum.models.token import ArbTokenInfo, SourceToken
from utils.exceptions import DataIntegrityError
from utils.logger_utils import get_logger

logger = get_logger("List Merger Service")


def sort_by_symbol(tokens: Sequence[ArbTokenInfo]) -> List[ArbTokenInfo]:
    # Plain code point ordering, "Z" sorts before "a"
    return sorted(tokens, key=lambda token: token.symbol)


def to_pass_through_token(source_token: SourceToken) -> ArbTokenInfo:
    return ArbTokenInfo(
        chain_id=source_token.chain_id,
        address=source_token.address,
        name=source_token.name,
        symbol=source_token.symbol,
        decimals=source_token.decimals,
        logo_uri=source_token.logo_uri,
    )


def merge_token_lists(
    bridged_tokens: Sequence[ArbTokenInfo],
    source_tokens: Sequence[SourceToken],
    l1_chain_id: int,
    l2_chain_id: int,
    mode: InclusionMode = InclusionMode.BRIDGED_ONLY,
) -> List[ArbTokenInfo]:
    """
    Bridged tokens sorted by symbol, followed by the source tokens the
    inclusion mode asks for.

    ALL_SOURCE_TOKENS appends every source token that is not already on the
    destination chain, in source order. UNBRIDGED_SOURCE_TOKENS_ONLY appends
    the source-chain tokens that have no bridged counterpart, sorted by symbol.

    Raises:
        DataIntegrityError: two tokens of the merged list share (address, chainId).
    """
    tokens = sort_by_symbol(bridged_tokens)
    logger.info(f"List has {len(tokens)} bridged tokens")

    other_tokens = [to_pass_through_token(t) for t in source_tokens if t.chain_id != l2_chain_id]

    if mode == InclusionMode.ALL_SOURCE_TOKENS:
        tokens.extend(other_tokens)
    elif mode == InclusionMode.UNBRIDGED_SOURCE_TOKENS_ONLY:
        bridged_l1_addresses = {
            info.token_address.lower()
            for token in bridged_tokens
            if token.extensions is not None
            for info in token.extensions.bridge_info.values()
        }
        unbridged_tokens = sort_by_symbol(
            [
                t
                for t in other_tokens
                if t.chain_id == l1_chain_id and t.address.lower() not in bridged_l1_addresses
            ]
        )
        logger.info(f"List has {len(unbridged_tokens)} unbridged tokens")
        tokens.extend(unbridged_tokens)

    assert_unique_tokens(tokens)
    return tokens


def assert_unique_tokens(tokens: Sequence[ArbTokenInfo]) -> None:
    seen = set()
    for token in tokens:
        if token.identity in seen:
            raise DataIntegrityError(
                f"Token {token.address} appears twice on chain {token.chain_id}",
                token.to_dict(),
            )
        seen.add(token.identity)
