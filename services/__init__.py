# services/__init__.py
"""Services package for the North admin console"""

from .catalog import Catalog, build_catalog
from .config_manager import ConfigError, NorthConfig, load_config

__all__ = ["Catalog", "build_catalog", "ConfigError", "NorthConfig", "load_config"]
