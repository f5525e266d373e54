
import sys
import requests

from nft_rarity.core.config import SERVICE_URL

# ANSI colors
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RESET = "\033[0m"


def trigger(base_url=SERVICE_URL):
    """Ask the running service to recompute rarity and report the outcome."""
    print(f"Triggering rarity refresh at {base_url}...")
    try:
        resp = requests.post(f"{base_url}/rarity/refresh", timeout=120)
        body = resp.json()
    except (requests.RequestException, ValueError) as e:
        print(f"{RED}Error: {e}{RESET}")
        return 1

    status = body.get("status")
    if status == "updated":
        print(f"{GREEN}Updated: {body.get('tokensProcessed')} tokens at {body.get('updatedAt')}{RESET}")
        return 0
    if status == "in_progress":
        print(f"{YELLOW}Refresh already in progress (last updated {body.get('lastUpdated')}){RESET}")
        return 0

    print(f"{RED}Refresh failed: {body.get('details') or body}{RESET}")
    return 1


if __name__ == "__main__":
    sys.exit(trigger(sys.argv[1] if len(sys.argv) > 1 else SERVICE_URL))
