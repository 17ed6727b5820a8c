"""Main CLI entry point."""

import click

from ledgerview.logging_setup import configure_logging
from ledgerview.store.factories import create_http_store

# Import and register all commands at module level
from ledgerview.cli.commands import (
    analytics,
    browse,
    export,
    records,
)


@click.group()
@click.option(
    "--api-url",
    help="Backend URL (overrides LEDGERVIEW_API_URL environment variable)",
    envvar="LEDGERVIEW_API_URL",
)
@click.option(
    "--timeout",
    type=float,
    help="Request timeout in seconds (overrides LEDGERVIEW_TIMEOUT)",
    envvar="LEDGERVIEW_TIMEOUT",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides LEDGERVIEW_LOG_LEVEL)",
    envvar="LEDGERVIEW_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, api_url: str | None, timeout: float | None, log_level: str | None):
    """Ledgerview - income and expense ledger dashboard.

    Browse, filter, edit and export the records kept by a ledger backend,
    and look at analytics for any period.
    """
    ctx.ensure_object(dict)
    if log_level:
        configure_logging(log_level)

    # Connect only when actually running a command (not when showing help).
    # A store passed in through ctx.obj is used as is.
    if ctx.invoked_subcommand is not None and "store" not in ctx.obj:
        store = create_http_store(base_url=api_url, timeout=timeout)
        ctx.obj["store"] = store
        ctx.call_on_close(store.close)


# Register all commands
records.register_commands(cli)
analytics.register_commands(cli)
export.register_commands(cli)
browse.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
