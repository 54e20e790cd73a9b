# purchase_indexer/cli/__main__.py

"""
Purchase indexer CLI

Usage: python -m purchase_indexer.cli [command] [options]
"""

import asyncio
import sys
from pathlib import Path

import click
import msgspec

from purchase_indexer import create_aggregator
from purchase_indexer.core.config import IndexerConfig
from purchase_indexer.core.exceptions import ConfigurationError
from purchase_indexer.core.logging import IndexerLogger
from purchase_indexer.types import ALL


def parse_limit(ctx, param, value):
    if value is None or value == ALL:
        return value
    try:
        limit = int(value)
    except ValueError:
        raise click.BadParameter(f"must be a positive integer or '{ALL}'")
    if limit <= 0:
        raise click.BadParameter(f"must be a positive integer or '{ALL}'")
    return limit


def emit_events(events) -> None:
    click.echo(msgspec.json.format(msgspec.json.encode(events)).decode())


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Network configuration file (YAML or JSON)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Purchase indexer - query purchase events across all configured networks"""
    ctx.ensure_object(dict)

    try:
        config = IndexerConfig.from_file(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    IndexerLogger.configure(
        log_dir=Path.cwd() / "logs",
        log_level="DEBUG" if verbose else config.log_level,
        console_enabled=True,
        file_enabled=False,
        structured_format=False,
    )

    ctx.obj['config'] = config
    # tests inject an aggregator here
    ctx.obj.setdefault('aggregator_factory', create_aggregator)


@cli.command()
@click.pass_context
def networks(ctx):
    """List configured networks"""
    config = ctx.obj['config']
    for network in config.registry():
        click.echo(
            f"{network.key:<20} chain_id={network.chain_id:<10} "
            f"start_block={network.deployment_block:<10} {network.name}"
        )


@cli.command()
@click.option('--receiver', default=None, help='Only purchases paid to this address')
@click.pass_context
def purchases(ctx, receiver):
    """Full purchase history across all networks"""
    aggregator = ctx.obj['aggregator_factory'](ctx.obj['config'])
    try:
        events = asyncio.run(aggregator.fetch_all_for(receiver))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--receiver')
    emit_events(events)


@cli.command()
@click.option('--limit', default='50', callback=parse_limit, show_default=True,
              help=f"Number of purchases to return, or '{ALL}'")
@click.option('--receiver', default=None, help='Only purchases paid to this address')
@click.pass_context
def latest(ctx, limit, receiver):
    """Most recent purchases across all networks, newest first"""
    aggregator = ctx.obj['aggregator_factory'](ctx.obj['config'])
    try:
        events = asyncio.run(aggregator.fetch_latest(limit, receiver))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--receiver')
    emit_events(events)


def main():
    cli(obj={})


if __name__ == '__main__':
    sys.exit(main())
