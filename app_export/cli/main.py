# app_export/cli/main.py
"""Main CLI entry point for app-export"""

import logging
import os
import sys

import click
from rich.logging import RichHandler

from ..constants import APP_NAME, LOG_FORMAT, ENV_LOG_LEVEL
from .commands import export, validate
from .utils.output import console


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)


class Context:
    """CLI context object"""

    def __init__(self):
        self.verbose: bool = False
        self.debug: bool = False


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """App Export - Package applications for distribution

    Converts an application descriptor into a container package (cpk)
    or a metadata archive (ram), optionally bundling every image for
    offline installation.
    """
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(export.export)
cli.add_command(validate.validate)


def main():
    """Main entry point for the CLI application"""
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
