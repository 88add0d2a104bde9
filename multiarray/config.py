"""Global configuration settings."""

import copy
from typing import Any, Dict

_DEFAULTS: Dict[str, Any] = {
    # Options passed to numba.njit for the compiled kernels
    "numba": {
        "fastmath": True,
        "cache": False,
        "parallel": False,
    },
    # Debug renderer
    "debug": {
        "wrap_every": 11,  # elements per line on the innermost axis
    },
}


class Config:
    """
    Global configuration for multiarray.

    Keys are dotted paths, e.g. ``Config.get("debug.wrap_every")``.
    Numba options are read once, when ``multiarray.fast_ops`` is imported.
    """

    _config: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        value = cls._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k, default)
            else:
                return default
        return value

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Set configuration value."""
        keys = key.split(".")
        config = cls._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    @classmethod
    def reset(cls) -> None:
        """Reset to default configuration."""
        cls._config = copy.deepcopy(_DEFAULTS)
