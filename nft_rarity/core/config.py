import os

# Aptos indexer / fullnode
INDEXER_API_URL = os.environ.get(
    "INDEXER_API_URL",
    "https://indexer-testnet.staging.gcp.aptosdev.com/v1/graphql",
)
FULLNODE_API_URL = os.environ.get(
    "FULLNODE_API_URL", "https://fullnode.testnet.aptoslabs.com/v1"
)
INDEXER_TIMEOUT_SECONDS = float(os.environ.get("INDEXER_TIMEOUT_SECONDS", "15"))
INDEXER_TOKEN_LIMIT = int(os.environ.get("INDEXER_TOKEN_LIMIT", "10000"))

# Collection identity
COLLECTION_NAME = os.environ.get(
    "COLLECTION_NAME", "Retro 80s NFT Collection 2025-01-08-v2-unique"
)
MODULE_ADDRESS = os.environ.get(
    "MODULE_ADDRESS",
    "0x099d43f357f7993b7021e53c6a7cf9d74a81c11924818a0230ed7625fbcddb2b",
)
MAX_SUPPLY = int(os.environ.get("MAX_SUPPLY", "10000"))

# Image generator endpoint (rendered elsewhere)
IMAGE_BASE_URL = os.environ.get(
    "IMAGE_BASE_URL", "https://www.aptosnft.com/api/nft/generate"
)

# Refresh control
RARITY_REFRESH_INTERVAL_SECONDS = int(
    os.environ.get("RARITY_REFRESH_INTERVAL_SECONDS", "300")
)
REFRESH_ON_STARTUP = os.environ.get("REFRESH_ON_STARTUP", "0") == "1"

# Where tools/ reach the running service
SERVICE_URL = os.environ.get("SERVICE_URL", "http://localhost:8000")
