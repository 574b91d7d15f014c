"""In-memory gene constraint lookup table."""

from collections.abc import Iterable
from pathlib import Path

import structlog

from gnomad_pli.constraint.models import DEFAULT_VALUES_FILENAME, ConstraintRecord
from gnomad_pli.constraint.parse import iter_values_file
from gnomad_pli.errors import ConfigurationError, EmptyDatasetError

logger = structlog.get_logger()

# Values file shipped beside the installed plugin
DEFAULT_VALUES_PATH = Path(__file__).resolve().parent.parent / DEFAULT_VALUES_FILENAME


def resolve_values_path(path: Path | str | None = None) -> Path:
    """Resolve the values file to load.

    Args:
        path: Explicit values file path. Falls back to the file installed
              beside the plugin when None or empty.

    Returns:
        Existing values file path

    Raises:
        ConfigurationError: If the resolved file does not exist
    """
    resolved = Path(path) if path else DEFAULT_VALUES_PATH

    if not resolved.is_file():
        raise ConfigurationError(f"gnomADpLI values file {resolved} not found")

    return resolved


class GeneConstraintTable:
    """Read-only mapping of lowercased gene symbol to ConstraintRecord.

    Built once from a values file and never modified afterwards, so a single
    instance can be shared between readers.
    """

    def __init__(self, records: Iterable[ConstraintRecord], source_path: Path | None = None):
        """Build the table from parsed records.

        Later records replace earlier ones with the same gene symbol.

        Args:
            records: ConstraintRecords in file order
            source_path: File the records came from, if any
        """
        self.source_path = source_path
        self.duplicates = 0
        self._records: dict[str, ConstraintRecord] = {}

        for record in records:
            if record.gene_symbol in self._records:
                self.duplicates += 1
                logger.debug("constraint_duplicate_gene", gene_symbol=record.gene_symbol)
            self._records[record.gene_symbol] = record

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "GeneConstraintTable":
        """Load the table from a values file.

        Args:
            path: Values file path (default: gnomADpLI_values.txt beside the plugin)

        Returns:
            Populated GeneConstraintTable

        Raises:
            ConfigurationError: If the file is missing or unreadable
            EmptyDatasetError: If the file holds no data rows
            MalformedRecordError: If a data row has fewer than 11 fields
        """
        values_path = resolve_values_path(path)
        logger.info("constraint_table_load_start", path=str(values_path))

        try:
            table = cls(iter_values_file(values_path), source_path=values_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read gnomADpLI values file {values_path}: {e}") from e

        if not len(table):
            raise EmptyDatasetError(f"No scores read from {values_path}")

        logger.info(
            "constraint_table_load_complete",
            path=str(values_path),
            genes=len(table),
            duplicates=table.duplicates,
        )

        return table

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, gene_symbol: object) -> bool:
        return isinstance(gene_symbol, str) and gene_symbol.lower() in self._records

    def get(self, gene_symbol: str | None) -> ConstraintRecord | None:
        """Return the stored record for a gene symbol, or None."""
        if not gene_symbol:
            return None
        return self._records.get(gene_symbol.lower())

    def lookup(self, gene_symbol: str | None) -> ConstraintRecord:
        """Look up constraint values for a gene symbol (case-insensitive).

        Never raises. Unknown and empty symbols produce a record whose
        metrics are all empty strings; stored values of "0" or "" are also
        reported as empty.

        Args:
            gene_symbol: Gene symbol in any case, or None

        Returns:
            ConstraintRecord with per-field empty strings for missing data
        """
        if not gene_symbol:
            return ConstraintRecord.empty()

        record = self._records.get(gene_symbol.lower())
        if record is None:
            return ConstraintRecord.empty(gene_symbol.lower())

        return record.masked()
