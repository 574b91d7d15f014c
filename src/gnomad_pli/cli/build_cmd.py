"""Build-values command: prepare the values file from gnomAD constraint metrics."""

import logging
import sys
from pathlib import Path

import click
import httpx
import polars as pl
from pydantic import ValidationError

from gnomad_pli.constraint.table import DEFAULT_VALUES_PATH, GeneConstraintTable
from gnomad_pli.errors import GnomADpLIError
from gnomad_pli.resource import (
    build_values_frame,
    download_constraint_table,
    write_values_file,
)
from gnomad_pli.cli.common import fail, get_config

logger = logging.getLogger(__name__)


@click.command('build-values')
@click.option(
    '--source',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='Local gnomAD constraint TSV (skips the download)'
)
@click.option(
    '--url',
    default=None,
    help='Override gnomAD constraint file URL'
)
@click.option(
    '--download-dir',
    type=click.Path(file_okay=False, path_type=Path),
    default=Path('data/gnomad'),
    show_default=True,
    help='Directory for the downloaded constraint table'
)
@click.option(
    '--output',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Values file to write (default: config values_file, else beside the plugin)'
)
@click.option(
    '--force',
    is_flag=True,
    help='Re-download the constraint table even if it exists'
)
@click.pass_context
def build_values(ctx, source, url, download_dir, output, force):
    """Build the gnomADpLI values file from gnomAD constraint metrics.

    Downloads the gnomAD per-gene constraint table (or reads --source),
    selects gene, pLI, z-score and observed/expected columns, and writes
    them in the whitespace-delimited layout the plugin loads. The written
    file is loaded back once as a check.

    Examples:

        # Download gnomAD v2.1.1 constraint metrics and build the values file
        gnomad-pli build-values --output gnomADpLI_values.txt

        # Build from an already downloaded table
        gnomad-pli build-values --source constraint.tsv --output values.txt
    """
    click.echo(click.style("=== gnomADpLI Values File ===", bold=True))
    click.echo()

    try:
        config = get_config(ctx)
    except (FileNotFoundError, ValidationError) as e:
        fail(f"Error loading config: {e}")

    output = output or config.values_file or DEFAULT_VALUES_PATH

    if source is None:
        url = url or config.source.constraint_url
        click.echo("Downloading gnomAD constraint metrics...")
        click.echo(f"  URL: {url}")
        try:
            source = download_constraint_table(
                output_path=download_dir / "constraint_metrics.tsv",
                url=url,
                force=force,
                timeout=config.source.timeout_seconds,
            )
        except httpx.HTTPError as e:
            click.echo(click.style(f"  Error downloading: {e}", fg='red'), err=True)
            logger.exception("Failed to download gnomAD constraint metrics")
            sys.exit(1)
        click.echo(click.style(f"  Downloaded to: {source}", fg='green'))
        click.echo()

    click.echo("Selecting values columns...")
    try:
        df = build_values_frame(source)
        write_values_file(df, output)
        table = GeneConstraintTable.from_file(output)
    except (ValueError, OSError, pl.exceptions.PolarsError, GnomADpLIError) as e:
        fail(f"  Error building values file: {e}")

    click.echo(click.style(f"  Wrote {len(table)} genes to {output}", fg='green'))
    if table.duplicates:
        click.echo(click.style(
            f"  {table.duplicates} duplicate gene symbols (later rows win)",
            fg='yellow'
        ))
