"""Main CLI entry point."""

import logging
import sys

import click
from gaurakshak.database.factories import DB_PATH_ENVVAR, create_sqlite_database
from gaurakshak.domain.errors import StoreError

# Import and register all commands at module level
from gaurakshak.cli.commands import (
    account,
    animal,
    finance,
    ledger,
    milk,
    movement,
    renewal,
    report,
    support,
    user,
)


class GauRakshakGroup(click.Group):
    """Root group that reports store failures once and exits with status 1."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except StoreError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group(cls=GauRakshakGroup)
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENVVAR} environment variable)",
    envvar=DB_PATH_ENVVAR,
)
@click.option("--verbose", "-v", count=True, help="Log progress to stderr (-vv for debug output)")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: int):
    """GauRakshak - Gaushala management.

    Keep the animal registry, entry/exit movements, milk production and the
    gaushala's accounts, and produce ledgers and herd population reports.
    """
    ctx.ensure_object(dict)
    _configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
animal.register_commands(cli)
movement.register_commands(cli)
finance.register_commands(cli)
milk.register_commands(cli)
ledger.register_commands(cli)
report.register_commands(cli)
user.register_commands(cli)
renewal.register_commands(cli)
support.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
