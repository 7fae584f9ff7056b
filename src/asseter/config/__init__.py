"""
Configuration helpers for asset manifests and environment settings.
"""

from .models import AssetConfig, ConfigError, ManifestConfig, load_config
from .settings import Settings, get_settings

__all__ = ["AssetConfig", "ConfigError", "ManifestConfig", "load_config", "Settings", "get_settings"]
