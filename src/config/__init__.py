"""Configuration loader helpers."""

from importlib import import_module
from typing import Any


def __getattr__(name: str) -> Any:  # noqa: D401
    if name in ("SETTINGS", "CatalogSettings", "update_from_kwargs"):
        mod = import_module("src.config.settings")
    else:
        mod = import_module("src.config.core")
    value = getattr(mod, name)
    globals()[name] = value
    return value

__all__ = ["parse_args", "CliSettings", "SETTINGS", "CatalogSettings", "update_from_kwargs"]
