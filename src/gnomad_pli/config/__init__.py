from .loader import load_config, load_config_with_overrides
from .schema import GNOMAD_CONSTRAINT_URL, PluginConfig, SourceConfig

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "GNOMAD_CONSTRAINT_URL",
    "PluginConfig",
    "SourceConfig",
]
