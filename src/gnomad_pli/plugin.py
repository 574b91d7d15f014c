"""gnomADpLI: add gnomAD pLI and other gene constraint values to VEP output.

The plugin reports, per transcript, the gnomAD constraint values of the
transcript's gene: pLI (probability of loss-of-function intolerance),
synonymous/missense/LoF z-scores, observed/expected ratios and the upper
bounds of their confidence intervals. pLI is reported by gene; it was
estimated upstream on a representative transcript.

Usage with the default values file installed beside the plugin:

    ./vep -i variants.vcf --plugin gnomADpLI

With another values file:

    ./vep -i variants.vcf --plugin gnomADpLI,values_file.txt
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from gnomad_pli.config.schema import PluginConfig
from gnomad_pli.constraint.models import HEADER_INFO
from gnomad_pli.constraint.table import GeneConstraintTable

# Transcript attributes holding the gene symbol, in fallback order
GENE_SYMBOL_ATTRIBUTES = ("_gene_symbol", "_gene_hgnc")


def _transcript_value(transcript: Any, name: str) -> Any:
    if isinstance(transcript, Mapping):
        return transcript.get(name)
    return getattr(transcript, name, None)


def resolve_gene_symbol(tva: Any) -> str | None:
    """Return the gene symbol of a transcript-variant annotation.

    Tries each of GENE_SYMBOL_ATTRIBUTES on ``tva.transcript`` and returns
    the first non-empty one. Transcripts may be objects or mappings.
    """
    transcript = getattr(tva, "transcript", None)
    if callable(transcript):
        transcript = transcript()
    if transcript is None:
        return None

    for name in GENE_SYMBOL_ATTRIBUTES:
        symbol = _transcript_value(transcript, name)
        if symbol:
            return str(symbol)
    return None


class GnomADpLI:
    """VEP plugin reporting gnomAD gene constraint values per transcript."""

    def __init__(self, *params: str, table: GeneConstraintTable | None = None):
        """Load the constraint table.

        Args:
            *params: Plugin parameters; the first, if given, is the path
                     to an alternate values file
            table: Already loaded table, used instead of reading a file

        Raises:
            ConfigurationError: If the values file cannot be found
            EmptyDatasetError: If the values file holds no data rows
        """
        self.params = list(params)
        if table is None:
            table = GeneConstraintTable.from_file(self.params[0] if self.params else None)
        self.table = table

    @classmethod
    def from_config(cls, config: PluginConfig) -> "GnomADpLI":
        """Create the plugin from a PluginConfig."""
        params = [str(config.values_file)] if config.values_file else []
        return cls(*params)

    @property
    def values_file(self) -> Path | None:
        return self.table.source_path

    def feature_types(self) -> list[str]:
        return ["Transcript"]

    def get_header_info(self) -> dict[str, str]:
        return dict(HEADER_INFO)

    def run(self, tva: Any) -> dict[str, str]:
        """Annotate one transcript-variant.

        Returns:
            All ten gnomAD output fields; empty strings where no value is known
        """
        return self.annotate(resolve_gene_symbol(tva))

    def annotate(self, gene_symbol: str | None) -> dict[str, str]:
        """Output fields for a gene symbol."""
        return self.table.lookup(gene_symbol).to_annotation()
