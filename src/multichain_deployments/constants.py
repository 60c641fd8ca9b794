"""Configuration constants for multichain-deployments library."""

# Network used when a chain reference is empty and as the fallback of last resort
DEFAULT_NETWORK = "Mantle Testnet"

# Bundled network catalog (chainlist.org record format)
CATALOG_RESOURCE = "chains.json"
CATALOG_PATH_ENV = "MULTICHAIN_CATALOG_PATH"

# RPC URL templates may embed secrets as ${VAR}; these are read from the environment
RPC_SECRET_ENVS = ("INFURA_API_KEY", "ALCHEMY_API_KEY")

# Characters ignored when comparing chain names approximately
IGNORED_NAME_CHARS = "-_"

# Etherscan-compatible explorer APIs used for source verification
EXPLORER_API_URLS = {
    "Mantle Testnet": "https://explorer.testnet.mantle.xyz/api",
    "Ethereum": "https://api.etherscan.io/api",
    "Goerli": "https://api-goerli.etherscan.io/api",
    "Sepolia": "https://api-sepolia.etherscan.io/api",
    "Arbitrum One": "https://api.arbiscan.io/api",
    "Arbitrum Goerli": "https://api-goerli.arbiscan.io/api",
    "Polygon Mainnet": "https://api.polygonscan.com/api",
    "Mumbai": "https://api-testnet.polygonscan.com/api",
    "Optimism": "https://api-optimistic.etherscan.io/api",
    "Optimism Goerli Testnet": "https://api-goerli.optimistic.etherscan.io/api",
}

# Environment variable holding the explorer API key for each network
# None means the explorer accepts unauthenticated requests
EXPLORER_API_KEY_ENVS = {
    "Mantle Testnet": None,
    "Ethereum": "ETHEREUM_EXPLORER_API_KEY",
    "Goerli": "ETHEREUM_EXPLORER_API_KEY",
    "Sepolia": "ETHEREUM_EXPLORER_API_KEY",
    "Arbitrum One": "ARBITRUM_EXPLORER_API_KEY",
    "Arbitrum Goerli": "ARBITRUM_EXPLORER_API_KEY",
    "Polygon Mainnet": "POLYGON_EXPLORER_API_KEY",
    "Mumbai": "POLYGON_EXPLORER_API_KEY",
    "Optimism": "OPTIMISM_EXPLORER_API_KEY",
    "Optimism Goerli Testnet": "OPTIMISM_EXPLORER_API_KEY",
}

# Orchestrator settings; attempts are uncapped unless MULTICHAIN_MAX_WORKERS is set
MAX_WORKERS_ENV = "MULTICHAIN_MAX_WORKERS"
DEPLOY_TIMEOUT_ENV = "MULTICHAIN_DEPLOY_TIMEOUT"
DEFAULT_DEPLOY_TIMEOUT = 180.0  # seconds, per deployment attempt
# Extra time the orchestrator waits past the per-attempt deadline before giving up on a chain
DEADLINE_GRACE = 5.0  # seconds
