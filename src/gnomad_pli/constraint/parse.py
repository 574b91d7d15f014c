"""Parse the whitespace-delimited constraint values file."""

from collections.abc import Iterator
from pathlib import Path

import structlog

from gnomad_pli.constraint.models import (
    HEADER_PLI_TOKEN,
    NA_TOKEN,
    VALUES_COLUMNS,
    ConstraintRecord,
)
from gnomad_pli.errors import MalformedRecordError

logger = structlog.get_logger()

PLI_INDEX = VALUES_COLUMNS.index("pLI")


def format_pli(
    token: str,
    path: Path | None = None,
    line_number: int | None = None,
) -> str:
    """Format a raw pLI token to two decimal places.

    Differs from printf-style "%.2f", which turns a non-numeric token into
    "0.00": a token that is neither "NA" nor a number raises
    MalformedRecordError.

    Args:
        token: Raw pLI token from the values file
        path: Values file path, used in error messages
        line_number: Line number, used in error messages

    Returns:
        "NA" unchanged, otherwise the value rounded to two decimals

    Raises:
        MalformedRecordError: If token is neither "NA" nor numeric
    """
    if token == NA_TOKEN:
        return NA_TOKEN
    try:
        return f"{float(token):.2f}"
    except ValueError:
        raise MalformedRecordError(
            f"pLI value {token!r} is not numeric", path=path, line_number=line_number
        ) from None


def is_header(tokens: list[str]) -> bool:
    """A row is a header when its pLI column holds the literal "pLI"."""
    return len(tokens) > PLI_INDEX and tokens[PLI_INDEX] == HEADER_PLI_TOKEN


def parse_values_line(
    line: str,
    path: Path | None = None,
    line_number: int | None = None,
) -> ConstraintRecord | None:
    """Parse one line of the values file.

    Returns:
        ConstraintRecord for a data row, None for header and blank lines

    Raises:
        MalformedRecordError: On rows with fewer than 11 fields or a bad pLI
    """
    tokens = line.split()
    if not tokens or is_header(tokens):
        return None

    if len(tokens) < len(VALUES_COLUMNS):
        raise MalformedRecordError(
            f"expected {len(VALUES_COLUMNS)} fields, got {len(tokens)}",
            path=path,
            line_number=line_number,
        )

    (gene, oe_mis, oe_syn, pli, oe_lof, oe_syn_upper,
     oe_mis_upper, oe_lof_upper, syn_z, mis_z, lof_z) = tokens[:len(VALUES_COLUMNS)]

    return ConstraintRecord(
        gene_symbol=gene.lower(),
        pli=format_pli(pli, path=path, line_number=line_number),
        syn_z=syn_z,
        mis_z=mis_z,
        lof_z=lof_z,
        oe_mis=oe_mis,
        oe_syn=oe_syn,
        oe_lof=oe_lof,
        oe_syn_upper=oe_syn_upper,
        oe_mis_upper=oe_mis_upper,
        oe_lof_upper=oe_lof_upper,
    )


def iter_values_file(path: Path) -> Iterator[ConstraintRecord]:
    """Yield a ConstraintRecord for every data row of a values file.

    Header and blank lines are skipped.

    Args:
        path: Path to the values file

    Yields:
        ConstraintRecord per data row, in file order
    """
    path = Path(path)
    skipped = 0

    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            record = parse_values_line(line, path=path, line_number=line_number)
            if record is None:
                skipped += 1
                continue
            yield record

    logger.debug("values_file_parsed", path=str(path), skipped_lines=skipped)
