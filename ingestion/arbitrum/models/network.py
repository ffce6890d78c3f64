from pydantic import BaseModel

from constants.arbitrum_networks import ARBITRUM_NETWORKS
from utils.exceptions import ConfigurationError


class ArbitrumNetwork(BaseModel):
    chain_id: int
    name: str
    partner_chain_id: int
    l1_gateway_router: str
    l2_gateway_router: str
    l1_multicall: str
    l2_multicall: str


def get_arbitrum_network(chain_id: int) -> ArbitrumNetwork:
    network = ARBITRUM_NETWORKS.get(chain_id)
    if network is None:
        raise ConfigurationError(
            f"Unsupported L2 network id {chain_id}. Supported: {sorted(ARBITRUM_NETWORKS)}"
        )
    return ArbitrumNetwork(**network)
