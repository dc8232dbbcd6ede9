import importlib.resources
import logging
import os
import runpy
from pathlib import Path
from typing import Union

from opensearchgeo.config.config import ConfigException, OpenSearchGeoConfig

_log = logging.getLogger(__name__)

OPENSEARCHGEO_CONFIG = "OPENSEARCHGEO_CONFIG"

# Global config (lazy-load cache)
_config: Union[OpenSearchGeoConfig, None] = None


def load_from_py_file(path: Union[str, Path], variable: str = "config") -> OpenSearchGeoConfig:
    """Load config from a Python file that defines a `config` variable."""
    path = Path(path)
    _log.debug(f"Loading config from {path}")
    if not path.is_file():
        raise ConfigException(f"Config file not found: {path}")
    config = runpy.run_path(str(path)).get(variable)
    if not isinstance(config, OpenSearchGeoConfig):
        raise ConfigException(f"Expected {OpenSearchGeoConfig.__name__} in {path} but got {type(config).__name__}")
    return config


def get_config(force_reload: bool = False) -> OpenSearchGeoConfig:
    """Get OpenSearchGeoConfig (lazy loaded + cached)."""
    global _config

    if _config is None or force_reload:
        default_path = importlib.resources.files("opensearchgeo.config") / "default.py"
        with importlib.resources.as_file(default_path) as default_config:
            config_path = os.environ.get(OPENSEARCHGEO_CONFIG, default_config)
            _config = load_from_py_file(config_path)
        _log.info(f"Loaded config {_config.id=}")

    return _config


def flush_config():
    """Reset config cache (mainly for tests)"""
    global _config
    _config = None
