"""Command-line interface for InviteFlow.

This module provides the CLI commands for running and managing
the InviteFlow application.
"""

import asyncio
from typing import NoReturn

import click

from inviteflow.core.config import get_settings
from inviteflow.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="InviteFlow")
def cli() -> None:
    """InviteFlow - multi-tenant invitations over single-use codes.

    Settings are read from INVITEFLOW_* environment variables or a .env file.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the InviteFlow server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port

    # Configure logging before starting server
    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting InviteFlow server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "inviteflow.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all tables and the default tenant. Use this only in development.
    In production, use migrations instead.
    """
    from inviteflow.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize():
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--id", "tenant_id", type=str, required=True, help="Tenant ID")
@click.option(
    "--subdomain",
    type=str,
    required=True,
    help="Host label the tenant is served under, used verbatim",
)
@click.option("--name", type=str, required=True, help="Display name")
@click.option(
    "--allowed-domain",
    "allowed_domains",
    type=str,
    multiple=True,
    help="Email domain invitations may be sent to (repeatable)",
)
def create_tenant(
    tenant_id: str, subdomain: str, name: str, allowed_domains: tuple[str, ...]
) -> None:
    """Create a tenant reachable under its own subdomain."""
    from sqlalchemy.exc import IntegrityError

    from inviteflow.domain.entities import Tenant
    from inviteflow.infrastructure.persistence.database import get_db_manager
    from inviteflow.infrastructure.persistence.repositories import TenantRepository

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if not subdomain.strip():
        click.echo("Error: Subdomain must not be empty", err=True)
        raise SystemExit(1)

    async def create() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                repo = TenantRepository(session)
                if await repo.get_by_subdomain(subdomain):
                    click.echo(f"Error: Subdomain '{subdomain}' is already in use", err=True)
                    raise SystemExit(1)
                try:
                    tenant = await repo.create(
                        Tenant(
                            id=tenant_id,
                            subdomain=subdomain,
                            name=name,
                            allowed_email_domains=list(allowed_domains),
                        )
                    )
                    await session.commit()
                except IntegrityError:
                    # Lost a race for the subdomain, or the ID is taken
                    await session.rollback()
                    if await repo.get_by_subdomain(subdomain):
                        click.echo(
                            f"Error: Subdomain '{subdomain}' is already in use", err=True
                        )
                    else:
                        click.echo(f"Error: Tenant '{tenant_id}' already exists", err=True)
                    raise SystemExit(1)

            click.echo(
                f"\nTenant created successfully!\n"
                f"  ID:        {tenant.id}\n"
                f"  Subdomain: {tenant.subdomain}\n"
                f"  Name:      {tenant.name}\n"
            )
            logger.info("Tenant created via CLI", tenant_id=tenant.id, subdomain=subdomain)
        finally:
            await db.disconnect()

    asyncio.run(create())


@cli.command()
def purge_codes() -> None:
    """Delete all expired codes now."""
    from inviteflow.infrastructure.persistence.database import get_db_manager
    from inviteflow.infrastructure.tasks import purge_expired_codes

    settings = get_settings()
    configure_logging(settings)

    async def purge() -> int:
        try:
            return await purge_expired_codes()
        finally:
            await get_db_manager().disconnect()

    count = asyncio.run(purge())
    click.echo(f"Purged {count} expired code(s).")


@cli.command()
def info() -> None:
    """Display InviteFlow configuration."""
    settings = get_settings()

    click.echo(f"""
InviteFlow v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:    {settings.environment}
  Debug:          {settings.debug}
  External URL:   {settings.external_url}
  Default Tenant: {settings.default_tenant_id}

Server:
  Host:           {settings.host}
  Port:           {settings.port}

Database:
  URL:            {settings.database_url}
  Pool Size:      {settings.db_pool_size}
  Echo:           {settings.db_echo}

Codes:
  Invite Expiry:  {settings.invitation_expire_days} days
  Code Bytes:     {settings.code_length_bytes}
  Max Attempts:   {settings.code_generation_max_attempts}
  Cleanup Every:  {settings.code_cleanup_interval_seconds} seconds

Logging:
  Level:          {settings.log_level}
  Format:         {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `inviteflow` command is run
    or when using `python -m inviteflow`.
    """
    cli()


if __name__ == "__main__":
    main()
