ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Gateway the Arbitrum router reports for tokens whose bridging was switched off
DISABLED_GATEWAY = "0x0000000000000000000000000000000000000001"

# Multicall2 deployment on Ethereum mainnet
L1_MULTICALL_ADDRESS = "0x5BA1e12693Dc8F9c48aAD8770482f4739bEeD696"

ARB_ONE_CHAIN_ID = 42161
NOVA_CHAIN_ID = 42170
ETHEREUM_CHAIN_ID = 1

# Token list file naming
ARBIFIED_LIST_FILE_PREFIX = "arbed_"
ARBIFIED_LIST_NAME_PREFIX = "Arbed "
ETHERSCAN_LIST_NAME = "all_tokens"
PERMIT_TOKENS_FILE_NAME = "permitTokens.json"

# Placeholder source list used by the `full` command
FULL_LIST_NAME = "Full"
FULL_LIST_LOGO_URI = "ipfs://QmTvWJ4kmzq9koK74WJQ594ov8Es1HHurHZmMmhU8VY68y"

# Token list schema limits
MAX_LIST_NAME_LENGTH = 30
MAX_TOKEN_NAME_LENGTH = 40
MAX_TOKEN_SYMBOL_LENGTH = 20
MAX_TOKENS_PER_LIST = 10000

# Permit probe parameters
PERMIT_PROBE_VALUE = 10**18
PERMIT_PROBE_DEADLINE = 2**256 - 1
PERMIT_PROBE_GAS_LIMIT = 2_000_000

TRUSTWALLET_ASSET_URL = (
    "https://raw.githubusercontent.com/trustwallet/assets/master/blockchains/ethereum/assets/{address}/logo.png"
)
