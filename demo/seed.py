#!/usr/bin/env python3
"""
Demo seed script — populates the database with sample users and accounts.

!! NOT FOR PRODUCTION !!
Users are provisioned outside the API, so this script inserts them straight
into the database configured by DATABASE_URL, then opens (and closes) a few
accounts through the running API to exercise the real lifecycle.

Usage:
    # With the API server running on localhost:8000:
    python demo/seed.py

    # Drop and recreate all tables first:
    python demo/seed.py --reset

    # Custom server URL:
    python demo/seed.py --base-url http://localhost:9000
"""

import argparse
import asyncio
import sys

import httpx

from bank_accounts.database import AsyncSessionLocal, Base, engine
from bank_accounts.models import User

BASE_URL = "http://localhost:8000"

# name -> opening balances of the accounts to open
DEMO_USERS = {
    "Alice Chen": [850_00, 5_000_00],
    "Bob Martinez": [1_200_00],
    "Carol Nguyen": [3_200_00, 0],
    "Dave Johnson": [0],
}


async def create_users(reset: bool) -> dict[str, int]:
    """Insert the demo users and return their ids by name."""
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        users = [User(name=name) for name in DEMO_USERS]
        session.add_all(users)
        await session.commit()
        ids = {u.name: u.id for u in users}

    await engine.dispose()
    return ids


async def open_accounts(base_url: str, user_ids: dict[str, int]) -> None:
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        for name, balances in DEMO_USERS.items():
            user_id = user_ids[name]
            for balance in balances:
                response = await client.post(
                    "/accounts",
                    json={"user_id": user_id, "initial_balance": balance},
                )
                response.raise_for_status()
                account = response.json()
                print(f"  {name:<14} opened {account['account_number']} ({balance})")

                # Close the empty ones so the demo data has both statuses
                if balance == 0:
                    closed = await client.delete(
                        f"/accounts/{account['account_number']}",
                        params={"user_id": user_id},
                    )
                    closed.raise_for_status()
                    print(f"  {name:<14} closed {account['account_number']}")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Seed demo users and accounts")
    parser.add_argument("--base-url", default=BASE_URL)
    parser.add_argument("--reset", action="store_true", help="Drop all tables first")
    args = parser.parse_args()

    print("Creating users...")
    user_ids = await create_users(args.reset)

    print(f"Opening accounts via {args.base_url}...")
    try:
        await open_accounts(args.base_url, user_ids)
    except httpx.HTTPError as exc:
        print(f"Seeding failed: {exc}", file=sys.stderr)
        return 1

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
