#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command-line entry point for the pylonsd integration harness."""

from __future__ import annotations

import sys

import click
from provide.foundation.cli.decorators import logging_options
from provide.foundation.logger import get_logger
from structlog.typing import FilteringBoundLogger as StructLogger

from inttest import __version__
from inttest.config import CLIOptions, ConfigurationError
from inttest.node import (
    InttestError,
    PylonsdRunner,
    extract_tx_hash,
    get_daemon_status,
    wait_for_block_height_advance,
)

log: StructLogger = get_logger(__name__)


def _runner(node: str | None) -> PylonsdRunner:
    options = CLIOptions.from_env()
    if node:
        options.custom_node = node
    return PylonsdRunner(options)


node_option = click.option(
    "--node",
    default=None,
    envvar="INTTEST_NODE",
    show_envvar=True,
    help="Comma-separated node URLs; one is picked at random per command.",
)


@click.group(name="inttest")
@click.version_option(__version__, prog_name="inttest")
def cli():
    """Helpers for pylonsd integration testing."""


@cli.command(name="status")
@node_option
@logging_options
@click.pass_context
def status(ctx: click.Context, node: str | None, **kwargs):
    """Print the node's latest block height."""
    try:
        daemon_status = get_daemon_status(_runner(node))
    except (InttestError, ConfigurationError) as e:
        log.debug("Status query failed", error=str(e))
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"latest_block_height: {daemon_status.latest_block_height}")


@cli.command(name="wait")
@click.option("-b", "--blocks", type=click.IntRange(min=1), default=1, show_default=True)
@node_option
@logging_options
@click.pass_context
def wait(ctx: click.Context, blocks: int, node: str | None, **kwargs):
    """Wait until the chain advances by BLOCKS blocks."""
    try:
        height = wait_for_block_height_advance(blocks, runner=_runner(node))
    except (InttestError, ConfigurationError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"✅ Reached block {height}")


@cli.command(name="txhash")
@click.argument("source", type=click.File("r"), default="-")
def txhash(source):
    """Extract the txhash from broadcast output (stdin by default)."""
    tx_hash = extract_tx_hash(source.read())
    if not tx_hash:
        click.echo("❌ Error: no txhash found", err=True)
        sys.exit(1)
    click.echo(tx_hash)


@cli.command(name="exec", context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED, required=True)
@click.option("--stdin", "stdin_input", default="", help="Text passed to pylonsd on standard input.")
@node_option
@logging_options
@click.pass_context
def exec_pylonsd(ctx: click.Context, args: tuple[str, ...], stdin_input: str, node: str | None, **kwargs):
    """Run pylonsd ARGS with keyring and node flags added."""
    try:
        result = _runner(node).run(list(args), stdin_input)
    except ConfigurationError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    click.echo(result.log_text, nl=False)
    if result.error is not None:
        click.echo(f"❌ Error: {result.error}", err=True)
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()

# 🔼⚙️🔚
