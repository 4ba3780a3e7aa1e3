"""userhub CLI application using Typer.

This module provides command-line utilities for the userhub backend:
secret generation, schema initialisation, role grants and the API server.
"""

import asyncio
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import typer
import uvicorn
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.application.services import (
    AuthenticationService,
    UserRoleService,
    UserService,
)
from userhub.config import get_settings
from userhub.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
    UserRoleRepositorySQLAlchemy,
)
from userhub.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_session_maker,
)

app = typer.Typer(
    name="userhub",
    help="userhub - user account management CLI",
    no_args_is_help=True,
)
console = Console()


secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)

roles_app = typer.Typer(
    name="roles",
    help="Role membership management",
    no_args_is_help=True,
)
app.add_typer(roles_app)


@asynccontextmanager
async def _session_scope() -> AsyncIterator[AsyncSession]:
    """Yield a session and dispose the engine once the command is done."""
    try:
        async with get_session_maker()() as session:
            yield session
    finally:
        await get_engine().dispose()


def _build_services(session: AsyncSession) -> tuple[UserService, UserRoleService]:
    role_service = UserRoleService(UserRoleRepositorySQLAlchemy(session))
    user_service = UserService(UserRepositorySQLAlchemy(session), role_service)
    return user_service, role_service


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for userhub configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]userhub Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes of entropy for HS256 signing
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env or "
        "config/.env.dev file.[/dim]\n"
    )


@db_app.command("init")
def init_database() -> None:
    """Create all database tables (idempotent)."""

    async def _run() -> None:
        try:
            await create_tables()
        finally:
            await get_engine().dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date.[/green]")


@roles_app.command("grant")
def grant_role(
    email: str = typer.Argument(..., help="Email of the user"),
    role: str = typer.Argument(..., help="Role name, e.g. admin"),
) -> None:
    """Grant a role to a user (no-op if the user already has it)."""

    async def _run() -> bool:
        async with _session_scope() as session:
            user_service, role_service = _build_services(session)
            user = await user_service.get_user_by_email(
                AuthenticationService.normalize_name(email),
            )
            if user is None:
                return False

            await role_service.add_role(user, role)
            await session.commit()
            return True

    if not asyncio.run(_run()):
        console.print(f"[red]No user with email {email}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Granted role[/green] [bold]{role}[/bold] to {email}")


@roles_app.command("list")
def list_roles(
    email: str = typer.Argument(..., help="Email of the user"),
) -> None:
    """Show the role names of a user."""

    async def _run() -> list[str] | None:
        async with _session_scope() as session:
            user_service, _ = _build_services(session)
            user = await user_service.get_user_by_email(
                AuthenticationService.normalize_name(email),
            )
            return None if user is None else user.role_names

    role_names = asyncio.run(_run())
    if role_names is None:
        console.print(f"[red]No user with email {email}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Roles of {email}")
    table.add_column("Role", style="cyan")
    for role_name in role_names:
        table.add_row(role_name)
    console.print(table)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address"),
    port: int | None = typer.Option(None, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "userhub.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
