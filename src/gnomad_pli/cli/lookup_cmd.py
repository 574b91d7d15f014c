"""Lookup command: print constraint values for gene symbols."""

import json
from pathlib import Path

import click

from gnomad_pli.constraint.models import HEADER_INFO
from gnomad_pli.cli.common import load_plugin


@click.command('lookup')
@click.argument('symbols', nargs=-1, required=True)
@click.option(
    '--values-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Values file to load (overrides config)'
)
@click.option(
    '--format', 'output_format',
    type=click.Choice(['tsv', 'json']),
    default='tsv',
    help='Output format (default: tsv)'
)
@click.pass_context
def lookup(ctx, symbols, values_file, output_format):
    """Print gnomAD constraint values for one or more gene SYMBOLS.

    Symbols are matched case-insensitively. Unknown symbols are reported
    with empty values.

    Examples:

        gnomad-pli lookup BRCA1 TP53

        gnomad-pli lookup --values-file my_values.txt --format json brca1
    """
    plugin = load_plugin(ctx, values_file)

    # One row per argument, repeated symbols included
    rows = [(symbol, plugin.annotate(symbol)) for symbol in symbols]

    if output_format == 'json':
        click.echo(json.dumps(dict(rows), indent=2))
        return

    click.echo("\t".join(["gene", *HEADER_INFO]))
    for symbol, annotation in rows:
        click.echo("\t".join([symbol, *annotation.values()]))
