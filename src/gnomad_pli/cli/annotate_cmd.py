"""Annotate command: append constraint columns to a gene table."""

import logging
from pathlib import Path

import click
import polars as pl

from gnomad_pli.constraint.models import HEADER_INFO
from gnomad_pli.cli.common import fail, load_plugin

logger = logging.getLogger(__name__)


@click.command('annotate')
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--gene-column',
    default='SYMBOL',
    help='Column holding gene symbols (default: SYMBOL)'
)
@click.option(
    '--output',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Output TSV path (default: stdout)'
)
@click.option(
    '--values-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Values file to load (overrides config)'
)
@click.pass_context
def annotate(ctx, input_path, gene_column, output, values_file):
    """Append gnomAD constraint columns to a tab-separated table.

    Reads INPUT_PATH, looks up the gene symbol of every row and writes the
    table with the ten gnomAD* columns appended. Every value is kept as text.

    Examples:

        gnomad-pli annotate vep_output.tsv --output annotated.tsv

        gnomad-pli annotate genes.tsv --gene-column gene_symbol
    """
    plugin = load_plugin(ctx, values_file)

    df = pl.read_csv(input_path, separator="\t", infer_schema_length=0, quote_char=None)

    if gene_column not in df.columns:
        fail(f"Column '{gene_column}' not found in {input_path} (columns: {', '.join(df.columns)})")

    annotated = [plugin.annotate(symbol) for symbol in df[gene_column].to_list()]
    annotations = pl.DataFrame(
        {name: [row[name] for row in annotated] for name in HEADER_INFO},
        schema={name: pl.String for name in HEADER_INFO},
    )
    # Re-annotating replaces earlier gnomAD columns
    df = df.drop([name for name in HEADER_INFO if name in df.columns]).hstack(annotations)

    matched = sum(1 for symbol in df[gene_column].to_list() if symbol in plugin.table)
    logger.info(f"Annotated {df.height} rows, {matched} with a known gene")

    if output is None:
        click.echo(df.write_csv(separator="\t", quote_style="never"), nl=False)
        return

    df.write_csv(output, separator="\t", quote_style="never")
    click.echo(click.style(f"Wrote {df.height} rows to {output}", fg='green'), err=True)
