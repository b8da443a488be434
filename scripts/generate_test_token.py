#!/usr/bin/env python3
"""Generate a signed access token for manual API testing.

Usage: python scripts/generate_test_token.py <user-id> [admin|employee]
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.auth import Role, create_access_token  # noqa: E402
from src.core.config import get_settings  # noqa: E402


def main(argv: list[str]) -> int:
    if not argv or len(argv) > 2:
        print(__doc__.strip().splitlines()[-1], file=sys.stderr)
        return 2

    user_id = argv[0]
    role = Role(argv[1]) if len(argv) == 2 else Role.EMPLOYEE
    # The API rejects tokens whose user id is not in the users table
    token = create_access_token(user_id, role=role, settings=get_settings())
    print(f"{role.value.title()} token for {user_id}:\n{token}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
