"""Values file preparation from the gnomAD constraint release."""

from gnomad_pli.resource.fetch import download_constraint_table
from gnomad_pli.resource.build import (
    COLUMN_VARIANTS,
    build_values_frame,
    map_columns,
    write_values_file,
)

__all__ = [
    "download_constraint_table",
    "COLUMN_VARIANTS",
    "build_values_frame",
    "map_columns",
    "write_values_file",
]
