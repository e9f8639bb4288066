#!/usr/bin/env python3
"""
Issue an API access token for a user, registering the user first if needed.

Login is handled outside this service; operators use this script to hand
out bearer tokens (e.g. for the admin dashboard).

Usage:
    python tools/issue_token.py admin@example.com "Shop Admin" --role admin
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
os.chdir(project_root)

import config
from db import create_db_and_tables, get_db_session
from enums.user_role import UserRole
from services.user import UserService
from utils.access_token import issue_access_token


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a FashionHub API access token")
    parser.add_argument("email", help="User email (created if unknown)")
    parser.add_argument("name", help="Display name for a newly created user")
    parser.add_argument("--role", choices=[role.value for role in UserRole], default=UserRole.USER.value,
                        help="Role for a newly created user (existing users keep their role)")
    return parser.parse_args(argv)


async def issue(email: str, name: str, role: UserRole) -> str:
    await create_db_and_tables()
    async with get_db_session() as session:
        user = await UserService.create_if_not_exist(email, name, role, session)
    print(f"👤 User {user.id} <{user.email}> role={user.role.value}")
    return issue_access_token(user.id, user.role, config.AUTH_TOKEN_SECRET)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if not config.AUTH_TOKEN_SECRET:
        print("❌ AUTH_TOKEN_SECRET is not set", file=sys.stderr)
        sys.exit(1)
    token = asyncio.run(issue(args.email, args.name, UserRole(args.role)))
    print(f"🔑 Token (valid {config.AUTH_TOKEN_MAX_AGE_SECONDS // 3600}h):")
    print(token)


if __name__ == "__main__":
    main()
