"""Kudos Wall CLI -- sign in, give kudos and manage roles from the terminal."""

from __future__ import annotations

import asyncio
import functools
import shlex
from dataclasses import replace
from typing import Callable, NoReturn, Optional

import click
from rich.console import Console
from rich.table import Table

from kudos_wall import __version__
from kudos_wall.app import KudosApp
from kudos_wall.auth.guard import RoleGuard
from kudos_wall.auth.models import Role, SessionState, UserProfile
from kudos_wall.config import ConfigError, Settings, load_settings
from kudos_wall.forms import validate_login, validate_registration
from kudos_wall.kudos.catalog import CATEGORIES, TEAMS, find_category, find_team
from kudos_wall.kudos.models import CreateKudoCardRequest
from kudos_wall.log import configure_logging
from kudos_wall.messages import error_message
from kudos_wall.navigation import ConsoleNavigator, Route, nav_items
from kudos_wall.result import Err
from kudos_wall.storage import StorageScope
from kudos_wall.users.roster import BannerKind, RoleManagementPanel

console = Console()


def _build_app(settings: Settings, scope: StorageScope) -> KudosApp:
    return KudosApp.build(settings, scope, ConsoleNavigator())


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/]")
    click.get_current_context().exit(1)


def _signed_in_user(app: KudosApp) -> UserProfile:
    user = app.session.user
    if user is None:
        _fail("You are not signed in. Run 'kudos login' first.")
    return user


def _print_field_errors(errors: dict[str, str]) -> None:
    for message in errors.values():
        console.print(f"  [red]-[/] {message}")
    click.get_current_context().exit(1)


def guarded(route: Route) -> Callable:
    """Run the command only if the signed-in user may open *route*.

    A redirect prints where the user was sent and exits with status 1.
    """

    def decorator(f: Callable) -> Callable:
        @click.pass_obj
        @functools.wraps(f)
        def wrapper(app: KudosApp, *args, **kwargs):
            if app.session.state is SessionState.loading:
                app.session.rehydrate()
            app.session.ensure_valid()
            guard = RoleGuard(app.session, app.navigator, route)
            try:
                decision = guard.decision
                if decision.redirect_to is Route.login:
                    _fail("You are not signed in. Run 'kudos login' first.")
                elif not decision.allowed:
                    _fail(f"Your role cannot open {route.value}; redirected to {Route.home.value}.")
                return f(app, *args, **kwargs)
            finally:
                guard.close()

        return wrapper

    return decorator


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log debug events to stderr")
@click.option("--demo", is_flag=True, help="Use the built-in demo backend")
@click.pass_context
def main(ctx: click.Context, verbose: bool, demo: bool):
    """Kudos Wall -- recognise your teammates.

    Sign in with 'kudos login', then browse the wall with 'kudos kudos list'.
    Tech leads and admins can give kudos; admins manage roles.
    """
    if ctx.obj is not None:
        if verbose:
            configure_logging("DEBUG")
        return
    try:
        settings = load_settings()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if demo:
        settings = replace(settings, demo_mode=True)
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = _build_app(settings, StorageScope.durable)


# ── Session ──────────────────────────────────────────────────────────


@main.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.pass_obj
def login(app: KudosApp, email: str, password: str):
    """Sign in and remember the session."""
    errors = validate_login(email, password)
    if errors:
        _print_field_errors(errors)

    result = asyncio.run(app.session.login(email.strip(), password))
    if isinstance(result, Err):
        _fail(error_message(result.failure))
        return

    user = result.value.user
    console.print(f"\n[bold green]Welcome, {user.name}![/] Signed in as {user.role.label}.")
    _print_menu(user.role)


@main.command()
@click.option("--name", prompt=True)
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.option("--confirm-password", prompt="Confirm password", hide_input=True)
@click.pass_obj
def register(app: KudosApp, name: str, email: str, password: str, confirm_password: str):
    """Create an account and sign in."""
    errors = validate_registration(name, email, password, confirm_password)
    if errors:
        _print_field_errors(errors)

    result = asyncio.run(app.session.register(name.strip(), email.strip(), password))
    if isinstance(result, Err):
        _fail(error_message(result.failure))
        return

    user = result.value.user
    console.print(f"\n[bold green]Account created.[/] Welcome, {user.name}!")
    _print_menu(user.role)


@main.command()
@click.pass_obj
def logout(app: KudosApp):
    """Forget the stored session."""
    if app.session.state is SessionState.loading:
        app.session.rehydrate()
    app.session.logout()
    console.print("Signed out.")


@main.command()
@guarded(Route.home)
def whoami(app: KudosApp):
    """Show the signed-in user."""
    user = _signed_in_user(app)
    console.print(f"[bold]{user.name}[/] <{user.email}>  [cyan]{user.role.label}[/]")
    _print_menu(user.role)


def _print_menu(role: Optional[Role]) -> None:
    items = nav_items(role)
    if items:
        console.print("Available: " + ", ".join(f"{item.label} ({item.route.value})" for item in items))


# ── Kudos ────────────────────────────────────────────────────────────


@main.group()
def kudos():
    """Browse and give kudos."""


@kudos.command(name="list")
@guarded(Route.home)
def list_kudos(app: KudosApp):
    """Show every card on the wall."""
    result = asyncio.run(app.list_kudos.execute())
    if isinstance(result, Err):
        _fail(error_message(result.failure))
        return

    cards = result.value
    if not cards:
        console.print("[yellow]No kudos yet.[/]")
        return

    table = Table(title=f"Kudos Wall ({len(cards)} cards)")
    table.add_column("To", style="cyan", no_wrap=True)
    table.add_column("Team")
    table.add_column("Category", style="magenta")
    table.add_column("From")
    table.add_column("Date", style="dim")
    table.add_column("Message")

    for card in cards:
        table.add_row(
            card.recipient_name,
            card.team_name or card.team_id,
            card.category_name or card.category_id,
            card.giver_name or card.author_id,
            card.created_at.strftime("%Y-%m-%d"),
            card.message[:80],
        )

    console.print(table)


@kudos.command()
@click.option("--to", "recipient", help="Who the kudos are for")
@click.option("--team", help="Team id or name")
@click.option("--category", help="Category id or name")
@click.option("--message", "-m")
@guarded(Route.create_kudos)
def create(
    app: KudosApp,
    recipient: Optional[str],
    team: Optional[str],
    category: Optional[str],
    message: Optional[str],
):
    """Give kudos to a teammate (tech leads and admins).

    Options left out are prompted for once access has been checked.
    """
    recipient = recipient if recipient is not None else click.prompt("Recipient name")
    team = team if team is not None else click.prompt("Team")
    category = category if category is not None else click.prompt("Category")
    message = message if message is not None else click.prompt("Message")

    team_ref = find_team(team)
    category_ref = find_category(category)
    request = CreateKudoCardRequest(
        recipient_name=recipient.strip(),
        team_id=team_ref.id if team_ref else team,
        category_id=category_ref.id if category_ref else category,
        message=message.strip(),
        team_name=team_ref.name if team_ref else None,
        category_name=category_ref.name if category_ref else None,
    )

    giver = _signed_in_user(app)
    result = asyncio.run(app.create_kudo.execute(request, giver))
    if isinstance(result, Err):
        _fail(error_message(result.failure))
        return

    console.print(f"[green]Kudos sent to {request.recipient_name}![/] [dim](id {result.value.id})[/]")


@kudos.command()
def catalog():
    """List the teams and categories kudos can be filed under."""
    for title, entries in (("Teams", TEAMS), ("Categories", CATEGORIES)):
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("ID", style="dim")
        for entry in entries:
            table.add_row(entry.name, entry.id)
        console.print(table)


# ── Users ────────────────────────────────────────────────────────────


@main.group()
def users():
    """Admin: list users and change roles."""


@users.command(name="list")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role] + ["all"]),
    default="all",
    help="Only list users with this role",
)
@guarded(Route.admin)
def list_users(app: KudosApp, role: str):
    """List users, optionally filtered by role."""
    result = asyncio.run(app.get_users.execute(None if role == "all" else Role(role)))
    if isinstance(result, Err):
        _fail(error_message(result.failure))
        return
    _print_users(result.value, "Users" if role == "all" else Role(role).label + "s")


@users.command()
@click.argument("user_id")
@click.option("--name", default=None, help="Name to use in the confirmation message")
@guarded(Route.team_members)
def promote(app: KudosApp, user_id: str, name: Optional[str]):
    """Promote a team member to tech lead."""
    panel = app.role_panel(Role.team_member)
    asyncio.run(panel.promote(user_id, name))
    _print_panel(panel)


@users.command()
@click.argument("user_id")
@click.option("--name", default=None, help="Name to use in the confirmation message")
@guarded(Route.tech_leads)
def demote(app: KudosApp, user_id: str, name: Optional[str]):
    """Demote a tech lead to team member."""
    panel = app.role_panel(Role.tech_lead)
    asyncio.run(panel.demote(user_id, name))
    _print_panel(panel)


def _print_users(rows, title: str) -> None:
    if not rows:
        console.print(f"[yellow]No {title.lower()} found.[/]")
        return
    table = Table(title=f"{title} ({len(rows)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Role")
    for user in rows:
        table.add_row(user.id, user.name, user.email, user.role.label)
    console.print(table)


def _print_panel(panel: RoleManagementPanel) -> None:
    banner = panel.banner
    if banner is not None:
        style = "green" if banner.kind is BannerKind.success else "red"
        console.print(f"[{style}]{banner.text}[/]")
    if panel.load_error:
        console.print(f"[red]{panel.load_error}[/]")
    elif panel.users:
        _print_users(panel.users, panel.role.label + "s")
    if banner is not None and banner.kind is BannerKind.error:
        click.get_current_context().exit(1)


# ── Analytics ────────────────────────────────────────────────────────


@main.command()
@click.option(
    "--period",
    "-p",
    type=click.Choice(["Weekly", "Monthly", "Yearly"], case_sensitive=False),
    default="Monthly",
)
@guarded(Route.analytics)
def analytics(app: KudosApp, period: str):
    """Show who and what was recognised most."""
    result = asyncio.run(app.get_analytics.execute(period))
    if isinstance(result, Err):
        _fail(error_message(result.failure))
        return

    report = result.value
    console.print(f"\n[bold blue]Kudos analytics[/] -- {report.period.value}\n")

    for title, rows in (("Top individuals", report.top_individuals), ("Top teams", report.top_teams)):
        table = Table(title=title)
        table.add_column("#", style="dim", width=3)
        table.add_column("Name", style="cyan")
        table.add_column("Kudos", justify="right", style="green")
        for i, row in enumerate(rows, 1):
            table.add_row(str(i), row.name, str(row.kudos_count))
        console.print(table)

    words = ", ".join(f"{w.word} ({w.frequency})" for w in report.trending_words)
    console.print(f"[bold]Trending words:[/] {words or '-'}")
    categories = ", ".join(f"{c.category_name} ({c.kudos_count})" for c in report.trending_categories)
    console.print(f"[bold]Trending categories:[/] {categories or '-'}")


# ── Shell ────────────────────────────────────────────────────────────


@main.command()
@click.pass_obj
def shell(app: KudosApp):
    """Interactive session kept in memory only.

    Signing in here does not touch the stored session, and the session
    ends when the shell exits.
    """
    session_app = _build_app(app.settings, StorageScope.session)
    session_app.session.rehydrate()
    console.print("[bold blue]Kudos Wall[/] shell. Type 'help' for commands, 'exit' to quit.")

    while True:
        try:
            line = console.input("[bold]kudos>[/] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not line:
            continue
        if line in ("exit", "quit"):
            break
        try:
            args = shlex.split(line)
        except ValueError as e:
            console.print(f"[red]{e}[/]")
            continue
        if args[0] == "help":
            args = ["--help"]
        if args[0] == "shell":
            console.print("[yellow]Already in a shell.[/]")
            continue
        try:
            main.main(args, prog_name="kudos", obj=session_app, standalone_mode=False)
        except click.ClickException as e:
            e.show()
        except click.Abort:
            console.print()
