"""Gene constraint values: parsing and lookup."""

from gnomad_pli.constraint.models import (
    ANNOTATION_FIELDS,
    FALSY_TOKENS,
    HEADER_INFO,
    VALUES_COLUMNS,
    ConstraintRecord,
)
from gnomad_pli.constraint.parse import format_pli, iter_values_file, parse_values_line
from gnomad_pli.constraint.table import (
    DEFAULT_VALUES_PATH,
    GeneConstraintTable,
    resolve_values_path,
)

__all__ = [
    "ANNOTATION_FIELDS",
    "FALSY_TOKENS",
    "HEADER_INFO",
    "VALUES_COLUMNS",
    "ConstraintRecord",
    "format_pli",
    "iter_values_file",
    "parse_values_line",
    "DEFAULT_VALUES_PATH",
    "GeneConstraintTable",
    "resolve_values_path",
]
