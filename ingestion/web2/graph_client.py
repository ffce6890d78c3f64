from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from ingestion.arbitrum.models.resolution import GraphTokenResult
from utils.exceptions import SourceFetchError
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Graph Client")

# Latest gateway registration per token
TOKENS_QUERY = """
query Tokens($first: Int!, $skip: Int!, $ids: [ID!]) {
  tokens(first: $first, skip: $skip, where: { id_in: $ids }) {
    id
    gateway(first: 1, orderBy: l2BlockNum, orderDirection: desc) {
      gateway { id }
    }
  }
}
"""

ALL_TOKENS_QUERY = """
query AllTokens($first: Int!, $skip: Int!) {
  tokens(first: $first, skip: $skip) {
    id
    gateway(first: 1, orderBy: l2BlockNum, orderDirection: desc) {
      gateway { id }
    }
  }
}
"""


class GraphClient(object):
    """
    Queries the token gateway subgraph of a destination network for bridged
    token candidates and the L2 gateway each one was registered through.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        subgraph_url: str,
        page_size: int = 1000,
        api_key: Optional[str] = None,
    ):
        self.session = session
        self.subgraph_url = subgraph_url
        self.page_size = page_size
        self.headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}

    async def _request(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        payload = {"query": query, "variables": variables}
        try:
            async with self.session.post(self.subgraph_url, json=payload, headers=self.headers) as response:
                if response.status != 200:
                    raise SourceFetchError(
                        f"Subgraph {self.subgraph_url} returned status {response.status}: {response.reason}"
                    )
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise SourceFetchError(f"Subgraph request to {self.subgraph_url} failed: {e}") from e

        if data.get("errors"):
            raise SourceFetchError(f"Subgraph query failed: {data['errors']}")
        return data.get("data") or {}

    async def _paginate(self, query: str, variables: Dict[str, Any]) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        skip = 0
        while True:
            data = await self._request(query, {**variables, "first": self.page_size, "skip": skip})
            page = data.get("tokens") or []
            rows.extend(page)
            if len(page) < self.page_size:
                break
            skip += self.page_size
        return rows

    async def get_tokens(self, l1_token_addresses: Sequence[str], logo_uris: Optional[Dict[str, str]] = None) -> List[GraphTokenResult]:
        """
        Candidates for the given L1 tokens, in input order. Tokens the subgraph
        has never seen are left out.
        """
        logo_uris = logo_uris or {}
        ids = list(dict.fromkeys(to_normalized_address(address) for address in l1_token_addresses))
        rows: List[Dict[str, Any]] = []
        for start in range(0, len(ids), self.page_size):
            rows.extend(await self._paginate(TOKENS_QUERY, {"ids": ids[start : start + self.page_size]}))

        by_address = {row["id"].lower(): row for row in rows}
        results = []
        for address in ids:
            row = by_address.get(address)
            if row is None:
                continue
            result = _to_graph_token_result(row, logo_uris.get(address))
            if result is not None:
                results.append(result)

        logger.info(f"Subgraph knows {len(results)} of {len(ids)} requested tokens")
        return results

    async def get_all_tokens(self) -> List[GraphTokenResult]:
        rows = await self._paginate(ALL_TOKENS_QUERY, {})
        results = [r for r in (_to_graph_token_result(row) for row in rows) if r is not None]
        logger.info(f"Subgraph returned {len(results)} bridged tokens")
        return results


def _to_graph_token_result(row: Dict[str, Any], logo_uri: Optional[str] = None) -> Optional[GraphTokenResult]:
    entries = row.get("gateway") or []
    if not entries:
        return None
    return GraphTokenResult(
        l1_token_addr=row["id"].lower(),
        gateway_addr=entries[0]["gateway"]["id"],
        logo_uri=logo_uri,
    )
