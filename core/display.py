"""Rich terminal rendering for the portal's views."""

from datetime import date, datetime
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from modules.profiles.state import ProfileState

console = Console()


def format_birthday(birthday: Optional[date]) -> str:
    """Long-form birthday, e.g. "June 15, 1990"."""
    if birthday is None:
        return "Not set"
    return f"{birthday:%B} {birthday.day}, {birthday.year}"


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%Y-%m-%d")


def render_avatar(state: ProfileState) -> Text:
    """The avatar image link, or the initials placeholder."""
    if state.avatar_url:
        return Text.assemble(("◉ ", "bold cyan"), (state.avatar_url, f"link {state.avatar_url}"))
    return Text(f"( {state.initials} )", style="bold magenta")


def _field_table(rows: list[tuple[str, str]]) -> Table:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    for label, value in rows:
        table.add_row(label, value)
    return table


def render_dashboard(state: ProfileState) -> Group:
    """Dashboard: profile information and account overview."""
    profile = state.profile
    session = state.session

    header = Text.assemble(render_avatar(state), "  ", (state.display_name, "bold"))

    profile_panel = Panel(
        _field_table([
            ("Full Name", profile.full_name or ""),
            ("Email", session.email or ""),
            ("Birthday", format_birthday(profile.birthday)),
            ("Age", str(profile.age) if profile.age is not None else "Not set"),
            ("Last Updated", format_date(profile.updated_at)),
        ]),
        title="Profile Information",
        border_style="blue",
    )
    account_panel = Panel(
        _field_table([
            ("Account Created", format_date(session.created_at)),
            ("Email Status", "Verified" if session.email_verified else "Pending Verification"),
        ]),
        title="Account Overview",
        border_style="blue",
    )
    return Group(header, profile_panel, account_panel)


def render_profile(state: ProfileState) -> Panel:
    """Profile settings card."""
    profile = state.profile
    body = Group(
        render_avatar(state),
        _field_table([
            ("Full Name", profile.full_name or ""),
            ("Email", f"{state.session.email or ''} (cannot be changed)"),
            ("Birthday", profile.birthday.isoformat() if profile.birthday else ""),
            ("Age", f"{profile.age if profile.age is not None else ''} (calculated from birthday)"),
        ]),
    )
    return Panel(body, title="Edit Profile", border_style="green")


def print_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]")
