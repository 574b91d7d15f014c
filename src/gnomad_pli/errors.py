"""Exceptions raised while loading the constraint values file."""

from pathlib import Path


class GnomADpLIError(Exception):
    """Base class for plugin errors."""


class ConfigurationError(GnomADpLIError):
    """Values file could not be resolved or read."""


class EmptyDatasetError(ConfigurationError):
    """Values file was readable but held no data rows."""


class MalformedRecordError(GnomADpLIError, ValueError):
    """A data row could not be parsed.

    Attributes:
        path: Values file containing the row
        line_number: 1-based line number of the row
    """

    def __init__(self, message: str, path: Path | None = None, line_number: int | None = None):
        self.path = path
        self.line_number = line_number
        if path is not None and line_number is not None:
            message = f"{path}:{line_number}: {message}"
        super().__init__(message)
