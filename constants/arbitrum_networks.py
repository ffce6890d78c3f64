from constants.constants import ARB_ONE_CHAIN_ID, ETHEREUM_CHAIN_ID, L1_MULTICALL_ADDRESS, NOVA_CHAIN_ID

# Token bridge contracts per destination network
ARBITRUM_NETWORKS = {
    ARB_ONE_CHAIN_ID: {
        "chain_id": ARB_ONE_CHAIN_ID,
        "name": "Arbitrum One",
        "partner_chain_id": ETHEREUM_CHAIN_ID,
        "l1_gateway_router": "0x72Ce9c846789fdB6fC1f34aC4AD25Dd9ef7031ef",
        "l2_gateway_router": "0x5288c571Fd7aD117beA99bF60FE0846C4E84F933",
        "l1_multicall": L1_MULTICALL_ADDRESS,
        "l2_multicall": "0x842eC2c7D803033Edf55E478F461FC547Bc54EB2",
    },
    NOVA_CHAIN_ID: {
        "chain_id": NOVA_CHAIN_ID,
        "name": "Arbitrum Nova",
        "partner_chain_id": ETHEREUM_CHAIN_ID,
        "l1_gateway_router": "0xC840838Bc438d73C16c2f8b22D2Ce3669963cD48",
        "l2_gateway_router": "0x21903d3F8176b1a0c17E953Cd896610Be9fFDFa8",
        "l1_multicall": L1_MULTICALL_ADDRESS,
        "l2_multicall": "0x5e1eE626420A354BbC9a95FeA1BAd4492e3bcB86",
    },
}
