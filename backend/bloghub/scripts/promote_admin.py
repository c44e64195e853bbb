"""
Promote an existing account to admin.

Admins can only be made by other admins over the API, so the first one is
created from the command line:

    python -m bloghub.scripts.promote_admin alice@example.com

Uses DATABASE_URL from the environment like the API does.
"""

import argparse
import asyncio
import sys

from bloghub.config.settings import settings
from bloghub.shared.core.exceptions import UserNotFoundError
from bloghub.shared.core.logging import logger
from bloghub.shared.db import Database
from bloghub.shared.services.user_service import UserService


async def promote(email: str) -> None:
    database = Database.from_settings(settings)
    try:
        async with database.session() as session:
            user = await UserService(session).promote_by_email(email)
        logger.info("Account promoted to admin", user_id=str(user.id), username=user.username)
    finally:
        await database.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Give an existing account the admin role.")
    parser.add_argument("email", help="Email address of the account to promote")
    args = parser.parse_args(argv)

    try:
        asyncio.run(promote(args.email))
    except UserNotFoundError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
