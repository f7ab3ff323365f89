#!/usr/bin/env python3
# =============================================================================
# scripts/dashboard_cli.py - Member Dashboard in the Terminal
# =============================================================================
# Signs in against Supabase Auth and prints the member dashboard, using the
# same session gate and fetchers as the API.
#
# Usage:
#   poetry run python scripts/dashboard_cli.py                        # Signed out
#   poetry run python scripts/dashboard_cli.py --email you@example.com
#   poetry run python scripts/dashboard_cli.py --email you@example.com --code
#
# After the dashboard is printed:
#   <number>  - Open that workshop's details
#   calendar  - Open the workshop calendar
#   join      - Open the membership page
#   contact   - Email School of Ranch
#   logout    - Sign out and show the empty dashboard
#   quit      - Exit
# =============================================================================

import argparse
import asyncio
import getpass
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from app.exceptions import DashboardException
from core.models.dashboard import DashboardView
from core.services.auth_service import AuthService
from core.services.dashboard_service import DashboardService
from core.services.session_gate import SessionGate
from lib.links import open_link
from lib.supabase_client import SupabaseClient, SupabaseClientError


def sign_in(auth: AuthService, email: str, use_code: bool) -> None:
    """Sign in with a password or an emailed one-time code."""
    if use_code:
        auth.send_login_code(email)
        code = input("Enter the 6-digit code from your email: ")
        auth.verify_code(email, code, otp_type="email")
    else:
        password = getpass.getpass("Password: ")
        auth.sign_in_with_password(email, password)
    print(f"Signed in as {email}\n")


def print_dashboard(view: DashboardView) -> None:
    """Render the dashboard sections as plain text."""
    print("=" * 60)
    print("MY WORKSHOPS")
    print("Current registrations for your account.")
    print("-" * 60)
    if view.workshops.error:
        print(f"Failed to load workshops: {view.workshops.error}")
    elif not view.workshops.items:
        print("No workshops yet.")
    else:
        for index, item in enumerate(view.workshops.items, start=1):
            print(f"[{index}] {item.title or '(untitled workshop)'}")
            if item.label:
                print(f"    {item.label} | {item.tickets} Ticket(s)")

    print()
    print("MY MEMBERSHIP")
    print("Memberships earn discounts and benefits.")
    print("-" * 60)
    if view.membership.error:
        print(f"Failed to load membership: {view.membership.error}")
    elif view.membership.card is None:
        print("Join and earn up to 20% off all workshops for a year!")
        print(f"    {view.membership.join_url}")
    else:
        card = view.membership.card
        for label, value in (
            ("ID", card.member_id),
            ("Status", card.status),
            ("Expires", card.expires),
            ("Auto Renew", card.auto_renew),
            ("Level", card.level),
        ):
            print(f"    {label:<12}{value}")
    print("=" * 60)


def handle_command(command: str, view: DashboardView) -> bool:
    """Open the link a command refers to. Returns False for unknown commands."""
    if command.isdigit():
        index = int(command) - 1
        if 0 <= index < len(view.workshops.items):
            url = view.workshops.items[index].details_url
            if url:
                open_link(url)
            else:
                print("That workshop has no details page.")
            return True
        return False

    links = {
        "calendar": view.links.calendar,
        "join": view.links.join,
        "contact": view.links.contact,
    }
    if command in links:
        open_link(links[command])
        return True
    return False


async def run(args: argparse.Namespace) -> int:
    try:
        client = SupabaseClient.get_client()
    except SupabaseClientError as e:
        print(f"ERROR: {e}")
        return 1

    auth = AuthService(client)
    if args.email:
        try:
            sign_in(auth, args.email, args.code)
        except DashboardException as e:
            print(f"ERROR: {e.message}")
            return 1

    gate = SessionGate(client.auth)
    gate.watch()
    service = DashboardService.from_settings(settings)

    try:
        while True:
            view = await service.load(gate, email=auth.get_user_email())
            print_dashboard(view)

            command = input("\n> ").strip().lower()
            if command in ("quit", "exit", "q"):
                return 0
            if command == "logout":
                auth.sign_out()
                continue
            if command and not handle_command(command, view):
                print(f"Unknown command: {command}")
    except (KeyboardInterrupt, EOFError):
        print()
        return 0
    finally:
        gate.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="School of Ranch member dashboard")
    parser.add_argument("--email", help="Sign in with this email address")
    parser.add_argument(
        "--code",
        action="store_true",
        help="Sign in with an emailed one-time code instead of a password",
    )
    return asyncio.run(run(parser.parse_args()))


if __name__ == "__main__":
    sys.exit(main())
