import pytest

from constants.constants import ARB_ONE_CHAIN_ID, ETHEREUM_CHAIN_ID, NOVA_CHAIN_ID
from ingestion.arbitrum.models.network import get_arbitrum_network
from utils.exceptions import ConfigurationError


@pytest.mark.parametrize("chain_id, name", [(ARB_ONE_CHAIN_ID, "Arbitrum One"), (NOVA_CHAIN_ID, "Arbitrum Nova")])
def test_get_arbitrum_network(chain_id, name):
    network = get_arbitrum_network(chain_id)

    assert network.chain_id == chain_id
    assert network.name == name
    assert network.partner_chain_id == ETHEREUM_CHAIN_ID


def test_unsupported_network_is_rejected():
    with pytest.raises(ConfigurationError):
        get_arbitrum_network(10)
