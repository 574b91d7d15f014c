"""Pydantic models for plugin configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# gnomAD v2.1.1 per-gene constraint table; its column names match the values file
GNOMAD_CONSTRAINT_URL = (
    "https://storage.googleapis.com/gcp-public-data--gnomad/release/2.1.1/constraint/"
    "gnomad.v2.1.1.lof_metrics.by_gene.txt.bgz"
)


class SourceConfig(BaseModel):
    """Where the values file is built from."""

    constraint_url: str = Field(
        default=GNOMAD_CONSTRAINT_URL,
        description="gnomAD constraint metrics download URL",
    )
    timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Download timeout in seconds",
    )
    gnomad_version: str = Field(
        default="v2.1.1",
        description="gnomAD release the values file was built from",
    )


class PluginConfig(BaseModel):
    """Main plugin configuration."""

    values_file: Path | None = Field(
        default=None,
        description="Values file to load (default: gnomADpLI_values.txt beside the plugin)",
    )
    source: SourceConfig = Field(
        default_factory=SourceConfig,
        description="Values file source settings",
    )

    @field_validator("values_file")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ~ in the values file path."""
        return v.expanduser() if v is not None else None

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values.
        """
        config_json = json.dumps(
            self.model_dump(mode="python"),
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
