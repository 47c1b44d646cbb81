"""Command-line interface for team access."""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from teamaccess.auth.local import LocalAuthService
from teamaccess.auth.models import SubscriptionTier
from teamaccess.groups.service import FacebookGroupError, facebook_group_service
from teamaccess.logging_config import configure_logging, get_logger
from teamaccess.storage.db import db
from teamaccess.teams.service import team_member_service

# Configure logging
configure_logging()
logger = get_logger(__name__)

app = typer.Typer(
    name="teamaccess",
    help="Team members and Facebook group access for owner accounts",
    no_args_is_help=True,
)

console = Console()
auth_service = LocalAuthService()


@app.command("init")
def init_database() -> None:
    """Initialize the database and create tables."""
    console.print("[bold blue]Initializing database...[/bold blue]")
    db.create_tables()
    console.print("[bold green]✓[/bold green] Database initialized successfully")


@app.command("create-user")
def create_user(
    email: Annotated[str, typer.Option("--email", "-e", help="Account email")],
    name: Annotated[str | None, typer.Option("--name", "-n", help="Display name")] = None,
    password: Annotated[str | None, typer.Option("--password", "-p", help="Login password")] = None,
    tier: Annotated[SubscriptionTier, typer.Option("--tier", "-t", help="Subscription tier")] = SubscriptionTier.FREE,
) -> None:
    """Create an account."""
    try:
        user = auth_service.create_user(email=email, password=password, name=name, subscription_tier=tier)
    except ValueError as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓[/bold green] User created with ID: [bold]{user.id}[/bold]")


@app.command("create-group")
def create_group(
    owner_id: Annotated[int, typer.Argument(help="Owner user ID")],
    name: Annotated[str, typer.Option("--name", "-n", help="Facebook group name")],
    fb_id: Annotated[str | None, typer.Option("--fb-id", help="Facebook group ID")] = None,
) -> None:
    """Register a Facebook group for an owner."""
    try:
        group = facebook_group_service.create_group(owner_id, fb_name=name, fb_id=fb_id)
    except FacebookGroupError as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓[/bold green] Group created with ID: [bold]{group.id}[/bold]")


@app.command("token")
def issue_token(
    user_id: Annotated[int, typer.Argument(help="User ID")],
) -> None:
    """Print a bearer token for an account."""
    user = auth_service.get_user_by_id(user_id)
    if not user:
        console.print(f"[red]User {user_id} not found[/red]")
        raise typer.Exit(1)

    console.print(auth_service.create_access_token(user))


@app.command("team")
def list_team(
    owner_id: Annotated[int, typer.Argument(help="Owner user ID")],
) -> None:
    """List an owner's team members."""
    total, _, members = team_member_service.list_team_members(owner_id)

    if not members:
        console.print("[yellow]No team members found[/yellow]")
        return

    table = Table(title=f"Team members ({total})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email")
    table.add_column("Groups")
    table.add_column("Status")

    for member in members:
        table.add_row(
            str(member["id"]),
            member["name"] or "",
            member["email"],
            ", ".join(member["facebook_groups_id"]) or "-",
            member["status"],
        )

    console.print(table)


@app.command("serve")
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
) -> None:
    """Run the API server."""
    import uvicorn

    uvicorn.run("teamaccess.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
