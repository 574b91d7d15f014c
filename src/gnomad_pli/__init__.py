"""gnomAD gene constraint annotation plugin."""

__version__ = "0.1.0"
