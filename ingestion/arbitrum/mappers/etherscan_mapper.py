from typing import List

from ingestion.arbitrum.models.token import ArbTokenList, EtherscanEntry


class EtherscanMapper:
    @staticmethod
    def arb_list_to_etherscan_list(arb_list: ArbTokenList) -> List[EtherscanEntry]:
        """
        One entry per bridged token. Pass-through tokens have no extensions and
        are skipped. Only the first bridgeInfo entry is used, lists have a
        single origin chain.
        """
        entries = []
        for token in arb_list.tokens:
            if token.extensions is None or not token.extensions.bridge_info:
                continue
            bridge_info = next(iter(token.extensions.bridge_info.values()))
            entries.append(
                EtherscanEntry(
                    l1_address=bridge_info.token_address,
                    l2_address=token.address,
                    l1_gateway_address=bridge_info.dest_bridge_address,
                    l2_gateway_address=bridge_info.origin_bridge_address,
                )
            )
        return entries
