# L1GatewayRouter / L2GatewayRouter, same function on both sides of the bridge
GATEWAY_ROUTER_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "l1ERC20", "type": "address"}],
        "name": "calculateL2TokenAddress",
        "outputs": [{"name": "", "type": "address"}],
        "type": "function"
    }
]
