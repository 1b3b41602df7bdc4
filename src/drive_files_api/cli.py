# cli.py
import logging
import sys

import click

from drive_files_api.config.settings import ConfigurationError, load_settings
from drive_files_api.main import configure_logging

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Drive Files API"""
    pass


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (defaults to PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes (development only)")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging("ERROR")
        logger.error("Refusing to start: %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)

    import uvicorn

    host = host or settings.host
    port = port or settings.port
    logger.info("Server running on port %s", port)
    logger.info("API Documentation available at http://localhost:%s/docs", port)
    uvicorn.run(
        "drive_files_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@cli.command()
def show_config():
    """Show current configuration"""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        click.echo(f"Configuration invalid: {e}", err=True)
        sys.exit(1)

    click.echo("Current Configuration:")
    for label, value in settings.describe().items():
        click.echo(f"  {label}: {value}")


if __name__ == "__main__":
    cli()
