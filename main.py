"""
HRMIS Portal - terminal client for the HRMIS self-service portal.

Signs users in against the portal's Supabase project and lets them view
their dashboard and edit their profile (name, birthday, avatar). Guarded
commands redirect to `login` when nobody is signed in; `login --next`
returns to the command that was asked for.
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from rich.prompt import Prompt

from core.container import ServiceContainer
from core.display import (
    console,
    print_error,
    print_success,
    render_dashboard,
    render_profile,
)
from core.pages import (
    DASHBOARD,
    PROFILE,
    PageResult,
    dashboard_page,
    profile_page,
    sign_out_page,
)
from modules.profiles.models import AvatarFile, ProfilePatch
from modules.session.models import Redirect
from shared.exceptions import PortalError
from shared.logging_config import configure_logging


def show_redirect(redirect: Redirect) -> int:
    """Tell the user to sign in, naming the command to come back to."""
    if redirect.reason:
        console.print(f"[yellow]{redirect.reason}[/yellow]")
    next_hint = f" --next {redirect.next_location}" if redirect.next_location else ""
    console.print(f"[dim]Run:[/dim] hrmis login{next_hint}")
    return 1


def ask_password(label: str = "Password") -> str:
    return Prompt.ask(label, password=True, console=console)


async def cmd_login(container: ServiceContainer, args: argparse.Namespace) -> int:
    password = args.password or ask_password()
    result = await container.auth.login(args.email, password, next_location=args.next)
    print_success("Signed in.")
    if result.next_location == PROFILE:
        return show_profile(await profile_page(container))
    return show_dashboard(await dashboard_page(container))


async def cmd_register(container: ServiceContainer, args: argparse.Namespace) -> int:
    password = ask_password()
    confirm = ask_password("Confirm password")
    result = await container.auth.register(args.email, password, confirm, args.full_name)
    print_success(result.message)
    return 0


async def cmd_forgot_password(container: ServiceContainer, args: argparse.Namespace) -> int:
    print_success(await container.auth.request_password_reset(args.email))
    return 0


async def cmd_callback(container: ServiceContainer, args: argparse.Namespace) -> int:
    await container.auth.complete_callback(args.code)
    print_success("Signed in.")
    return show_dashboard(await dashboard_page(container))


async def cmd_change_password(container: ServiceContainer, args: argparse.Namespace) -> int:
    password = ask_password("New password")
    confirm = ask_password("Confirm new password")
    print_success(await container.auth.change_password(password, confirm))
    return 0


async def cmd_logout(container: ServiceContainer, args: argparse.Namespace) -> int:
    redirect = await sign_out_page(container)
    if redirect is not None:
        return show_redirect(redirect)
    print_success("Signed out.")
    return 0


def show_dashboard(result: PageResult) -> int:
    if isinstance(result, Redirect):
        return show_redirect(result)
    console.print(render_dashboard(result))
    return 0


async def cmd_dashboard(container: ServiceContainer, args: argparse.Namespace) -> int:
    return show_dashboard(await dashboard_page(container))


async def cmd_profile(container: ServiceContainer, args: argparse.Namespace) -> int:
    patch: Optional[ProfilePatch] = None
    edits: dict = {}
    if args.full_name is not None:
        edits["full_name"] = args.full_name
    if args.clear_birthday:
        edits["birthday"] = None
    elif args.birthday is not None:
        edits["birthday"] = args.birthday
    if edits:
        patch = ProfilePatch(**edits)

    avatar: Optional[AvatarFile] = None
    if args.avatar is not None:
        if not args.avatar.exists():
            print_error(f"File not found: {args.avatar}")
            return 1
        avatar = AvatarFile(filename=args.avatar.name, content=args.avatar.read_bytes())

    return show_profile(await profile_page(container, patch=patch, avatar=avatar))


def show_profile(result: PageResult) -> int:
    if isinstance(result, Redirect):
        return show_redirect(result)

    console.print(render_profile(result))
    if result.error:
        print_error(result.error)
        return 1
    if result.message:
        print_success(result.message)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hrmis", description="HRMIS self-service portal")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in with email and password")
    login.add_argument("email")
    login.add_argument("--password", help="Password (prompted when omitted)")
    login.add_argument("--next", choices=[DASHBOARD, PROFILE], help="Where to go after signing in")
    login.set_defaults(handler=cmd_login)

    register = commands.add_parser("register", help="Create an account")
    register.add_argument("email")
    register.add_argument("--full-name")
    register.set_defaults(handler=cmd_register)

    forgot = commands.add_parser("forgot-password", help="Email a password reset link")
    forgot.add_argument("email")
    forgot.set_defaults(handler=cmd_forgot_password)

    callback = commands.add_parser(
        "callback", help="Finish a confirmation or recovery link using its code"
    )
    callback.add_argument("code")
    callback.set_defaults(handler=cmd_callback)

    change = commands.add_parser(
        "change-password", help="Set a new password (also used after a reset link)"
    )
    change.set_defaults(handler=cmd_change_password)

    logout = commands.add_parser("logout", help="Sign out")
    logout.set_defaults(handler=cmd_logout)

    dashboard = commands.add_parser("dashboard", help="Show your dashboard")
    dashboard.set_defaults(handler=cmd_dashboard)

    profile = commands.add_parser("profile", help="Show or edit your profile")
    profile.add_argument("--full-name")
    profile.add_argument("--birthday", type=date.fromisoformat, help="YYYY-MM-DD")
    profile.add_argument("--clear-birthday", action="store_true")
    profile.add_argument("--avatar", type=Path, help="Image file to use as your avatar")
    profile.set_defaults(handler=cmd_profile)

    return parser


async def run(args: argparse.Namespace, container: Optional[ServiceContainer] = None) -> int:
    """Run one command, turning portal errors into a message and exit code 1."""
    if container is None:
        try:
            container = await ServiceContainer.from_supabase()
        except RuntimeError as e:
            # Missing configuration
            print_error(str(e))
            return 1

    try:
        return await args.handler(container, args)
    except PortalError as e:
        print_error(e.message)
        return 1


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
