"""Shared helpers for CLI commands."""

import sys
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError

from gnomad_pli.config import PluginConfig, load_config_with_overrides
from gnomad_pli.errors import GnomADpLIError
from gnomad_pli.plugin import GnomADpLI


def get_config(ctx: click.Context, values_file: Path | None = None) -> PluginConfig:
    """Load the configuration selected by the global --config option.

    Args:
        ctx: Click context carrying ``config_path``
        values_file: Command-line override for ``values_file``

    Returns:
        PluginConfig (defaults when no config file was given)
    """
    config_path = ctx.obj.get('config_path')
    overrides = {'values_file': str(values_file)} if values_file is not None else {}

    if config_path:
        return load_config_with_overrides(config_path, overrides)
    return PluginConfig.model_validate(overrides)


def fail(message: str) -> NoReturn:
    """Print an error in red and exit with status 1."""
    click.echo(click.style(message, fg='red'), err=True)
    sys.exit(1)


def load_plugin(ctx: click.Context, values_file: Path | None = None) -> GnomADpLI:
    """Build the plugin from the CLI configuration, exiting on load errors."""
    try:
        config = get_config(ctx, values_file=values_file)
        return GnomADpLI.from_config(config)
    except (FileNotFoundError, ValidationError) as e:
        fail(f"Error loading config: {e}")
    except GnomADpLIError as e:
        fail(f"Error loading values file: {e}")
