"""CLI error handling helpers."""

import click

from ledgerview.domain.errors import DomainError, StoreError


def handle_domain_error(ctx: click.Context, error: DomainError | StoreError | ValueError) -> None:
    """Render a domain or store error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
