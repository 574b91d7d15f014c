"""Main CLI entry point for gnomad-pli.

Provides a command group with global options and subcommands for looking
up gene constraint values and preparing the values file.
"""

import logging
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from gnomad_pli import __version__
from gnomad_pli.constraint.models import HEADER_INFO
from gnomad_pli.constraint.table import DEFAULT_VALUES_PATH
from gnomad_pli.cli.common import fail, get_config
from gnomad_pli.cli.lookup_cmd import lookup
from gnomad_pli.cli.annotate_cmd import annotate
from gnomad_pli.cli.build_cmd import build_values


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def configure_structlog() -> None:
    """Route library (structlog) events through stdlib logging on stderr."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='Path to plugin configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """gnomad-pli: gnomAD pLI and gene constraint values by gene symbol.

    Loads a values file of per-gene constraint metrics (pLI, z-scores,
    observed/expected ratios) and reports them for gene symbols, or
    prepares that file from the gnomAD constraint release.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    configure_structlog()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display plugin information and configuration summary."""
    click.echo(f"gnomADpLI v{__version__}")
    click.echo(f"Config: {ctx.obj['config_path'] or '(defaults)'}")
    click.echo()

    try:
        config = get_config(ctx)
    except (FileNotFoundError, ValidationError) as e:
        fail(f"Error loading config: {e}")

    values_file = config.values_file or DEFAULT_VALUES_PATH

    click.echo(f"Config Hash: {config.config_hash()[:16]}...")
    click.echo()

    click.echo(click.style("Values File:", bold=True))
    click.echo(f"  Path:   {values_file}")
    click.echo(f"  Exists: {'yes' if values_file.is_file() else 'no'}")
    click.echo()

    click.echo(click.style("Source:", bold=True))
    click.echo(f"  gnomAD Version: {config.source.gnomad_version}")
    click.echo(f"  URL:            {config.source.constraint_url}")
    click.echo(f"  Timeout:        {config.source.timeout_seconds}s")


@cli.command()
def header():
    """List the output fields and their descriptions."""
    for name, description in HEADER_INFO.items():
        click.echo(f"{name}\t{description}")


cli.add_command(lookup)
cli.add_command(annotate)
cli.add_command(build_values)


if __name__ == '__main__':
    cli()
