"""
Runs one !proposals command against the governance canister and prints the result.

Usage:
    GOVERNANCE_CANISTER_ID=rrkah-fqaaa-aaaaa-aaaaq-cai python main.py "!proposals 5 topic 13"
"""

import asyncio
import json
import sys

from nns_governance import GovernancePlugin
from nns_governance.exceptions import GovernanceException


async def main(command_text: str) -> int:
    plugin = GovernancePlugin()
    print(f"--- Running {command_text!r} ---")
    try:
        result = await plugin.handle(command_text)
    except GovernanceException as e:
        print("--- Query failed ---")
        print(f"Error: {e}")
        return 1
    print(json.dumps(result.data["proposals"], indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(" ".join(sys.argv[1:]) or "!proposals")))
