# cli.py
import json
import logging
from typing import Optional

import click
from dotenv import load_dotenv

from catalog_api.config.settings import Settings, get_settings

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Load environment variables from this file before reading settings",
)
def cli(env_file: Optional[str]):
    """CLI commands for the Catalog API"""
    if env_file:
        load_dotenv(env_file, override=True)
        get_settings.cache_clear()


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to HOST setting)")
@click.option("--port", type=int, default=None, help="Port (defaults to PORT setting)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development only)")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP server with uvicorn"""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    click.echo(f"Server is running on port {port}")
    uvicorn.run(
        "catalog_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command("init-store")
def init_store():
    """Create the database schema or the JSON data file"""
    from catalog_api.dependencies import init_record_store

    settings = get_settings()
    store = init_record_store(settings)
    try:
        click.echo(f"Record store '{store.backend_name}' initialized")
    finally:
        store.close()


@cli.command("show-config")
@click.option("--as-json", is_flag=True, help="Print configuration as JSON")
def show_config(as_json: bool):
    """Show current configuration (credentials are never printed)"""
    settings: Settings = get_settings()
    summary = settings.public_summary()

    if as_json:
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo("Current Configuration:")
    for key, value in summary.items():
        click.echo(f"  {key}: {value}")


if __name__ == "__main__":
    cli()
