"""Data loader for the bundled component catalog.

The catalog holds the two static lookup tables used by the installer:
``requires`` (component -> components it needs) and ``packages``
(component -> third-party package specs).

Caching Strategy:
- The catalog is loaded once on first access and cached at module level
- Use clear_cache() to force a reload (tests do this between cases)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from compsync.config import ConfigError, SyncConfig

_logging = logging.getLogger(__name__)

_catalog_cache: "Catalog | None" = None


@dataclass
class Catalog:
    requires: dict[str, list[str]] = field(default_factory=dict)
    packages: dict[str, list[str]] = field(default_factory=dict)

    def merged_with(self, config: SyncConfig) -> "Catalog":
        """Return a catalog where project entries replace bundled ones."""
        return Catalog(
            requires={**self.requires, **config.requires},
            packages={**self.packages, **config.packages},
        )


def _get_data_dir() -> Path:
    """Get path to bundled data directory."""
    return Path(__file__).parent / "data"


def _read_table(data: dict, key: str, path: Path) -> dict[str, list[str]]:
    table = data.get(key) or {}
    if not isinstance(table, dict):
        raise ConfigError(f"Catalog {path} field '{key}' must be a mapping")
    result = {}
    for name, entries in table.items():
        if not isinstance(entries, list) or not all(
            isinstance(e, str) and e.strip() for e in entries
        ):
            raise ConfigError(
                f"Catalog {path} entry '{key}.{name}' must be a list of non-empty strings"
            )
        result[str(name)] = list(entries)
    return result


def load_catalog(path: Path) -> Catalog:
    """Load and validate a catalog YAML file.

    Raises:
        ConfigError: If the file is missing or malformed
    """
    if not path.is_file():
        raise ConfigError(f"Data file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to load data file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Catalog {path} must be a mapping")

    return Catalog(
        requires=_read_table(data, "requires", path),
        packages=_read_table(data, "packages", path),
    )


def get_catalog() -> Catalog:
    """Get the bundled catalog (cached)."""
    global _catalog_cache
    if _catalog_cache is None:
        path = _get_data_dir() / "catalog.yaml"
        _logging.debug(f"Loading catalog from {path}")
        _catalog_cache = load_catalog(path)
    return _catalog_cache


def get_project_catalog(config: SyncConfig) -> Catalog:
    """Get the bundled catalog extended with the project's own tables."""
    return get_catalog().merged_with(config)


def clear_cache() -> None:
    """Clear the cached catalog."""
    global _catalog_cache
    _catalog_cache = None


__all__ = [
    "Catalog",
    "load_catalog",
    "get_catalog",
    "get_project_catalog",
    "clear_cache",
]
