"""Build the plugin values file from a gnomAD constraint table."""

from pathlib import Path

import polars as pl
import structlog

from gnomad_pli.constraint.models import NA_TOKEN, VALUES_COLUMNS

logger = structlog.get_logger()

# Values column -> accepted gnomAD column names.
# v2.1.1 uses: gene, oe_mis, pLI, oe_lof_upper, syn_z, ...
# v4.x uses:   gene, mis.oe, lof.pLI, lof.oe_ci.upper, syn.z_score, ...
COLUMN_VARIANTS = {
    "gene": ["gene", "gene_symbol"],
    "oe_mis": ["oe_mis", "mis.oe"],
    "oe_syn": ["oe_syn", "syn.oe"],
    "pLI": ["pLI", "lof.pLI"],
    "oe_lof": ["oe_lof", "lof.oe"],
    "oe_syn_upper": ["oe_syn_upper", "syn.oe_ci.upper"],
    "oe_mis_upper": ["oe_mis_upper", "mis.oe_ci.upper"],
    "oe_lof_upper": ["oe_lof_upper", "lof.oe_ci.upper"],
    "syn_z": ["syn_z", "syn.z_score"],
    "mis_z": ["mis_z", "mis.z_score"],
    "lof_z": ["lof_z", "lof.z_score"],
}

REQUIRED_COLUMNS = ("gene", "pLI")


def map_columns(actual_columns: list[str]) -> dict[str, str]:
    """Map values columns to the first matching column of a gnomAD table."""
    mapping = {}
    for our_name, variants in COLUMN_VARIANTS.items():
        for variant in variants:
            if variant in actual_columns:
                mapping[our_name] = variant
                break
    return mapping


def build_values_frame(tsv_path: Path) -> pl.DataFrame:
    """Select the values file columns from a gnomAD constraint table.

    Every value is read as text so tokens reach the values file unchanged.
    Missing values become "NA". When the table has a ``canonical`` column
    (gnomAD v4.x lists every transcript), only canonical rows are kept.

    Args:
        tsv_path: Path to the tab-separated gnomAD constraint table

    Returns:
        DataFrame with columns in VALUES_COLUMNS order

    Raises:
        ValueError: If the gene or pLI column cannot be found
    """
    tsv_path = Path(tsv_path)

    df = pl.read_csv(
        tsv_path,
        separator="\t",
        infer_schema_length=0,
        quote_char=None,
    )
    mapping = map_columns(df.columns)

    logger.info(
        "values_build_start",
        path=str(tsv_path),
        rows=df.height,
        column_mapping=mapping,
    )

    missing_required = [name for name in REQUIRED_COLUMNS if name not in mapping]
    if missing_required:
        raise ValueError(
            f"{tsv_path} is missing required columns {missing_required} "
            f"(found: {df.columns[:10]})"
        )

    if "canonical" in df.columns:
        df = df.filter(pl.col("canonical").str.to_lowercase() == "true")
        logger.info("values_build_canonical_only", rows=df.height)

    missing_optional = [name for name in VALUES_COLUMNS if name not in mapping]
    if missing_optional:
        logger.warning("values_build_missing_columns", columns=missing_optional)

    df = df.select([
        pl.col(mapping[name]).alias(name) if name in mapping
        else pl.lit(None, dtype=pl.String).alias(name)
        for name in VALUES_COLUMNS
    ])

    df = df.filter(pl.col("gene").is_not_null()).with_columns(
        pl.all().fill_null(NA_TOKEN)
    )

    logger.info("values_build_complete", genes=df.height)

    return df


def write_values_file(df: pl.DataFrame, output_path: Path) -> Path:
    """Write a values frame as a tab-separated file with a header row."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df.select(list(VALUES_COLUMNS)).write_csv(
        output_path,
        separator="\t",
        null_value=NA_TOKEN,
        quote_style="never",
    )

    logger.info("values_file_written", path=str(output_path), genes=df.height)

    return output_path
