"""Data models for gene constraint values."""

from pydantic import BaseModel, ConfigDict

# Default values file name, expected beside the plugin module
DEFAULT_VALUES_FILENAME = "gnomADpLI_values.txt"

# Positional column order of the values file
VALUES_COLUMNS = (
    "gene",
    "oe_mis",
    "oe_syn",
    "pLI",
    "oe_lof",
    "oe_syn_upper",
    "oe_mis_upper",
    "oe_lof_upper",
    "syn_z",
    "mis_z",
    "lof_z",
)

# Token in the pLI column that marks a header row
HEADER_PLI_TOKEN = "pLI"

# pLI sentinel stored verbatim instead of being formatted
NA_TOKEN = "NA"

# Stored values reported as empty on lookup. A z-score of exactly "0" is
# therefore indistinguishable from missing data.
FALSY_TOKENS = frozenset({"", "0"})

# Record field -> host output field, in output order
ANNOTATION_FIELDS = {
    "pli": "gnomADpLI",
    "syn_z": "gnomADsyn_z",
    "mis_z": "gnomADmis_z",
    "lof_z": "gnomADlof_z",
    "oe_mis": "gnomADoe_mis",
    "oe_syn": "gnomADoe_syn",
    "oe_lof": "gnomADoe_lof",
    "oe_syn_upper": "gnomADoe_syn_upper",
    "oe_mis_upper": "gnomADoe_mis_upper",
    "oe_lof_upper": "gnomADoe_lof_upper",
}

HEADER_INFO = {
    "gnomADpLI": "gnomAD pLI value for gene",
    "gnomADsyn_z": "gnomAD syn_z value for gene",
    "gnomADmis_z": "gnomAD mis_z value for gene",
    "gnomADlof_z": "gnomAD lof_z value for gene",
    "gnomADoe_mis": "gnomAD oe_mis value for gene",
    "gnomADoe_syn": "gnomAD oe_syn value for gene",
    "gnomADoe_lof": "gnomAD oe_lof value for gene",
    "gnomADoe_syn_upper": "gnomAD oe_syn_upper value for gene",
    "gnomADoe_mis_upper": "gnomAD oe_mis_upper value for gene",
    "gnomADoe_lof_upper": "gnomAD oe_lof_upper value for gene",
}


class ConstraintRecord(BaseModel):
    """gnomAD constraint values for a single gene.

    Attributes:
        gene_symbol: Lowercased gene symbol (table key)
        pli: pLI formatted to two decimals, or "NA"
        syn_z: Synonymous z-score, raw token
        mis_z: Missense z-score, raw token
        lof_z: Loss-of-function z-score, raw token
        oe_mis: Missense observed/expected ratio, raw token
        oe_syn: Synonymous observed/expected ratio, raw token
        oe_lof: Loss-of-function observed/expected ratio, raw token
        oe_syn_upper: Upper bound of oe_syn confidence interval, raw token
        oe_mis_upper: Upper bound of oe_mis confidence interval, raw token
        oe_lof_upper: Upper bound of oe_lof confidence interval (LOEUF), raw token

    Values are kept as text: only pLI is reformatted, everything else is
    reported exactly as it appears in the values file.
    """

    model_config = ConfigDict(frozen=True)

    gene_symbol: str
    pli: str = ""
    syn_z: str = ""
    mis_z: str = ""
    lof_z: str = ""
    oe_mis: str = ""
    oe_syn: str = ""
    oe_lof: str = ""
    oe_syn_upper: str = ""
    oe_mis_upper: str = ""
    oe_lof_upper: str = ""

    @classmethod
    def empty(cls, gene_symbol: str = "") -> "ConstraintRecord":
        """Record with every metric set to the empty string."""
        return cls(gene_symbol=gene_symbol)

    def masked(self) -> "ConstraintRecord":
        """Copy with falsy metric values replaced by the empty string."""
        updates = {
            name: ""
            for name in ANNOTATION_FIELDS
            if getattr(self, name) in FALSY_TOKENS
        }
        if not updates:
            return self
        return self.model_copy(update=updates)

    def to_annotation(self) -> dict[str, str]:
        """Map metric values onto host output field names."""
        return {
            output_name: getattr(self, name)
            for name, output_name in ANNOTATION_FIELDS.items()
        }
