# L2 gateway (lowercased) -> L1 counterpart gateway.
# Maintained by hand; gateways missing here end up without a destBridgeAddress.
L2_TO_L1_GATEWAY_ADDRESSES = {
    # L2 ERC20 Gateway mainnet
    "0x09e9222e96e7b4ae2a407b98d48e330053351eee": "0xa3A7B6F88361F48403514059F1F16C8E78d60EeC",
    # L2 Arb-Custom Gateway mainnet
    "0x096760f208390250649e3e8763348e783aef5562": "0xcEe284F754E854890e311e3280b767F80797180d",
    # L2 WETH Gateway mainnet
    "0x6c411ad3e74de3e7bd422b94a27770f5b86c623b": "0xd92023E9d9911199a6711321D1277285e6d4e2db",
    # L2 DAI Gateway mainnet
    "0x467194771dae2967aef3ecbedd3bf9a310c76c65": "0xD3B5b60020504bc3489D6949d545893982BA3011",
    # Livepeer Gateway mainnet
    "0x6d2457a4ad276000a615295f7a80f79e48ccd318": "0x6142f1C8bBF02E6A6bd074E8d564c9A5420a0676",
    # L2 ERC20 Gateway nova
    "0xcf9bab7e53dde48a6dc4f286cb14e05298799257": "0xB2535b988dcE19f9D71dfB22dB6da744aCac21bf",
    # L2 Arb-Custom Gateway nova
    "0xbf544970e6bd77b21c6492c281ab60d0770451f4": "0x23122da8C581AA7E0d07A36Ff1f16F799650232f",
    # L2 WETH Gateway nova
    "0x7626841cb6113412f9c88d3adc720c9fac88d9ed": "0xE4E2121b479017955Be0b175305B35f312330BaE",
}
