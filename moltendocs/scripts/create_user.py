"""
Create a user from the command line. Run from project root:
  python -m moltendocs.scripts.create_user USERNAME PASSWORD
Example:
  python -m moltendocs.scripts.create_user editor a-secure-password
"""
import argparse
import logging
import sys

from moltendocs.core.errors import ConflictError
from moltendocs.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN
from moltendocs.services.credential_store import get_credential_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a MoltenDocs admin user.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars, case-sensitive)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    store = get_credential_store()
    try:
        user = store.create_user(username, args.password)
    except ConflictError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    print(f"Created user '{user.username}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
