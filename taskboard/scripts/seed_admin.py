"""
Seed Script: Create the initial Admin account

User creation is admin-only, so a fresh database needs one admin before
anyone can sign in. Safe to re-run: an existing account with the same email
is left as is.

Usage:
    python -m taskboard.scripts.seed_admin --email admin@mail.com --password 'Abc@1234'
"""
import argparse
import asyncio
import logging
import os

from taskboard.modules.database import connect_to_db, disconnect_from_db, init_db
from taskboard.modules.errors import UserAlreadyExists
from taskboard.modules.users.domain.password_policy import check_password_strength
from taskboard.modules.users.domain.user import Role
from taskboard.modules.users.services.user_service import UserService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def seed_admin(name: str, email: str, password: str) -> None:
    await connect_to_db()
    try:
        await init_db()
        user_service = UserService()
        try:
            user = await user_service.create_user(name=name, email=email, password=password, role=Role.ADMIN)
            logger.info(f"Admin created: {user.id} ({user.email})")
        except UserAlreadyExists:
            logger.info(f"Admin {email} already exists, nothing to do")
    finally:
        await disconnect_from_db()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the initial Admin account")
    parser.add_argument("--name", default=os.getenv("TASKBOARD_ADMIN_NAME", "todoAdmin"))
    parser.add_argument("--email", default=os.getenv("TASKBOARD_ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.getenv("TASKBOARD_ADMIN_PASSWORD"))
    args = parser.parse_args(argv)

    if not args.email or not args.password:
        parser.error("--email and --password (or TASKBOARD_ADMIN_EMAIL / TASKBOARD_ADMIN_PASSWORD) are required")

    try:
        check_password_strength(args.password)
    except ValueError as e:
        parser.error(str(e))

    asyncio.run(seed_admin(args.name, args.email, args.password))


if __name__ == "__main__":
    main()
