#!/usr/bin/env python3
"""
CLI for account and API key administration.

Provides commands to list, issue and revoke an account's API keys, show
quota usage, and seed a demo account with a key and a welcome paste.
"""

import argparse
import asyncio
import json
import sys

from yuvi_paste.exceptions import PasteAPIError
from yuvi_paste.models.account import Account
from yuvi_paste.repositories.account_repository import AccountRepository
from yuvi_paste.services.api_key_service import ApiKeyService
from yuvi_paste.services.identity_service import IdentityService
from yuvi_paste.services.ingestion_gateway import IngestionGateway
from yuvi_paste.utils.clock import utc_now_iso
from yuvi_paste.utils.email_policy import normalize_email

DEMO_TITLE = "welcome_config.json"
DEMO_CONFIG = {"app": "YUVI PASTE", "status": "operational", "demo": True}


async def _resolve_account(accounts: AccountRepository, email: str) -> Account:
    account = await accounts.get_by_email(normalize_email(email))
    if account is None:
        print(f"✗ Error: no account registered for {email}")
        sys.exit(1)
    return account


async def cmd_list(email: str) -> None:
    """
    List an account's API keys.

    Args:
        email: Account email address
    """
    accounts = AccountRepository()
    account = await _resolve_account(accounts, email)
    keys = await ApiKeyService(accounts=accounts).list_keys(account.account_id)

    if not keys:
        print(f"No API keys found for {account.email}.")
        return

    print(f"\n{'Key ID':<38} {'Preview':<24} {'Status':<10} {'Created':<28}")
    print("-" * 100)
    for api_key in keys:
        print(
            f"{api_key.key_id:<38} {api_key.key_preview:<24}"
            f" {api_key.status:<10} {api_key.created_at:<28}"
        )

    active = sum(1 for k in keys if k.status == "active")
    print(f"\nTotal: {len(keys)} API keys ({active} active)")


async def cmd_issue(email: str) -> None:
    """
    Issue a new API key and print it once.

    Args:
        email: Account email address
    """
    accounts = AccountRepository()
    account = await _resolve_account(accounts, email)
    issued = await ApiKeyService(accounts=accounts).issue_key(account.account_id)

    print("✓ API Key created successfully")
    print(f"\nKey ID: {issued.api_key.key_id}")
    print(f"API Key: {issued.secret}")
    print("\n⚠️  IMPORTANT: Save this API key now!")
    print("   It will not be shown again.")


async def cmd_revoke(email: str, key_id: str) -> None:
    """
    Revoke one of an account's API keys.

    Args:
        email: Account email address
        key_id: The key ID to revoke
    """
    accounts = AccountRepository()
    account = await _resolve_account(accounts, email)
    service = ApiKeyService(accounts=accounts)

    api_key = await service.repository.get_by_id(key_id)
    if api_key is None or api_key.account_id != account.account_id:
        print(f"✗ Error: API key {key_id} not found for {account.email}")
        sys.exit(1)

    if api_key.status == "revoked":
        print(f"⚠️  API key {key_id} is already revoked")
        return

    await service.revoke_key(account.account_id, key_id)
    print(f"✓ API key {key_id} has been revoked")


async def cmd_usage(email: str) -> None:
    """
    Print paste and key quota usage.

    Args:
        email: Account email address
    """
    accounts = AccountRepository()
    account = await _resolve_account(accounts, email)
    usage = await IdentityService(accounts=accounts).get_usage(account.account_id)

    print(f"Account: {account.email} ({'verified' if account.is_verified else 'unverified'})")
    print(f"Pastes:  {usage.pastes_used}/{usage.paste_quota}")
    print(f"Keys:    {usage.active_keys}/{usage.key_quota} active")


async def cmd_seed_demo(email: str, password: str) -> None:
    """
    Create (or reuse) a verified demo account with a key and a paste.

    Args:
        email: Demo account email address
        password: Password used if the account has to be registered
    """
    accounts = AccountRepository()
    account = await accounts.get_by_email(normalize_email(email))
    if account is None:
        account, _ = await IdentityService(accounts=accounts).register(email, password)
        print(f"✓ Registered demo account {account.email}")
    if not account.is_verified:
        account = await accounts.mark_verified(account.account_id, utc_now_iso())

    keys = ApiKeyService(accounts=accounts)
    issued = await keys.issue_key(account.account_id)

    gateway = IngestionGateway(api_keys=keys, accounts=accounts)
    paste = await gateway.publish(
        issued.api_key, DEMO_TITLE, json.dumps(DEMO_CONFIG, indent=2), "json"
    )

    print("✓ Demo data seeded")
    print(f"\nAPI Key: {issued.secret}")
    print(f"Paste:   /paste/{paste.paste_id}")


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Manage accounts and API keys for YUVI Paste",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    list_parser = subparsers.add_parser("list", help="List an account's API keys")
    list_parser.add_argument("email", type=str, help="Account email")

    issue_parser = subparsers.add_parser("issue", help="Issue a new API key")
    issue_parser.add_argument("email", type=str, help="Account email")

    revoke_parser = subparsers.add_parser("revoke", help="Revoke an API key")
    revoke_parser.add_argument("email", type=str, help="Account email")
    revoke_parser.add_argument("key_id", type=str, help="Key ID to revoke")

    usage_parser = subparsers.add_parser("usage", help="Show quota usage")
    usage_parser.add_argument("email", type=str, help="Account email")

    seed_parser = subparsers.add_parser(
        "seed-demo", help="Seed a demo account with a key and a paste"
    )
    seed_parser.add_argument("email", type=str, help="Demo account email")
    seed_parser.add_argument(
        "--password", type=str, default="demo-password", help="Demo password"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "list": lambda: cmd_list(args.email),
        "issue": lambda: cmd_issue(args.email),
        "revoke": lambda: cmd_revoke(args.email, args.key_id),
        "usage": lambda: cmd_usage(args.email),
        "seed-demo": lambda: cmd_seed_demo(args.email, args.password),
    }

    try:
        asyncio.run(commands[args.command]())
    except PasteAPIError as e:
        print(f"✗ Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
