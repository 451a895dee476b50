"""Project configuration loading and validation."""

import json
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_OUT_DIR = "components"
DEFAULT_PACKAGE_MANAGER = "npm"
PACKAGE_MANAGERS = ("npm", "pnpm", "yarn", "bun")

DEFAULT_RAW_URL = (
    "https://raw.githubusercontent.com/Bluejutzu/advantisui/main/src/components"
)
DEFAULT_API_URL = "https://api.github.com/repos/Bluejutzu/advantisui"
DEFAULT_COMPONENTS_DIR = "src/components"
DEFAULT_EXTENSION = ".tsx"
DEFAULT_FETCH_TIMEOUT = 30
DEFAULT_CONCURRENCY = 8


class ConfigError(Exception):
    """Raised when config loading or parsing fails.

    Provides detailed error messages including line numbers,
    column positions, and caret indicators for syntax errors.
    """
    pass


@dataclass
class RegistryConfig:
    """Where components are fetched from."""
    raw_url: str = DEFAULT_RAW_URL
    api_url: str = DEFAULT_API_URL
    components_dir: str = DEFAULT_COMPONENTS_DIR
    extension: str = DEFAULT_EXTENSION
    timeout: int = DEFAULT_FETCH_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self):
        for name in ("raw_url", "api_url", "components_dir", "extension"):
            value = getattr(self, name)
            if not value or not isinstance(value, str):
                raise ValueError(f"{name} must be a non-empty string")
        if not self.extension.startswith("."):
            raise ValueError("extension must start with '.'")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            raise ValueError("timeout must be a positive integer")
        if (
            isinstance(self.concurrency, bool)
            or not isinstance(self.concurrency, int)
            or self.concurrency <= 0
        ):
            raise ValueError("concurrency must be a positive integer")

    def component_url(self, name: str) -> str:
        return f"{self.raw_url.rstrip('/')}/{name}{self.extension}"

    def listing_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/contents/{self.components_dir.strip('/')}"


@dataclass
class SyncConfig:
    """Configuration for one consumer project."""
    out_dir: str = DEFAULT_OUT_DIR
    package_manager: str = DEFAULT_PACKAGE_MANAGER
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    requires: dict[str, list[str]] = field(default_factory=dict)
    packages: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self):
        if not self.out_dir or not isinstance(self.out_dir, str):
            raise ValueError("outDir must be a non-empty string")
        if self.package_manager not in PACKAGE_MANAGERS:
            raise ValueError(
                f"packageManager must be one of: {', '.join(PACKAGE_MANAGERS)}"
            )
        if not isinstance(self.registry, RegistryConfig):
            raise ValueError("registry must be a RegistryConfig instance")

    def to_dict(self) -> dict:
        """Serialize to the on-disk (camelCase) layout."""
        data: dict = {
            "outDir": self.out_dir,
            "packageManager": self.package_manager,
        }
        if self.registry != RegistryConfig():
            data["registry"] = {
                "rawUrl": self.registry.raw_url,
                "apiUrl": self.registry.api_url,
                "componentsDir": self.registry.components_dir,
                "extension": self.registry.extension,
                "timeout": self.registry.timeout,
                "concurrency": self.registry.concurrency,
            }
        if self.requires:
            data["requires"] = self.requires
        if self.packages:
            data["packages"] = self.packages
        return data


_REGISTRY_FIELDS = {
    "rawUrl": "raw_url",
    "apiUrl": "api_url",
    "componentsDir": "components_dir",
    "extension": "extension",
    "timeout": "timeout",
    "concurrency": "concurrency",
}


def _validate_table(data: dict, key: str) -> dict[str, list[str]]:
    table = data.get(key)
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ConfigError(f"{key} must be an object, got {type(table).__name__}")
    result = {}
    for name, entries in table.items():
        if not isinstance(entries, list):
            raise ConfigError(f"{key}.{name} must be a list")
        for i, entry in enumerate(entries):
            if not isinstance(entry, str) or not entry.strip():
                raise ConfigError(f"{key}.{name}[{i}] must be a non-empty string")
        result[name] = list(entries)
    return result


def validate_config(data: dict) -> SyncConfig:
    """Validate and convert raw dict to SyncConfig dataclass.

    Missing optional fields fall back to defaults.

    Args:
        data: Raw dict from json.loads() containing config data

    Returns:
        SyncConfig with validated RegistryConfig

    Raises:
        ConfigError: If validation fails with clear field path errors
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")

    for key in ("outDir", "packageManager"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"{key} must be a string, got {type(value).__name__}")

    registry_data = data.get("registry") or {}
    if not isinstance(registry_data, dict):
        raise ConfigError(
            f"registry must be an object, got {type(registry_data).__name__}"
        )
    unknown = sorted(set(registry_data) - set(_REGISTRY_FIELDS))
    if unknown:
        raise ConfigError(f"registry has unknown field(s): {', '.join(unknown)}")

    try:
        registry = RegistryConfig(
            **{_REGISTRY_FIELDS[k]: v for k, v in registry_data.items()}
        )
    except ValueError as e:
        raise ConfigError(f"registry: {e}")

    try:
        return SyncConfig(
            out_dir=data.get("outDir") or DEFAULT_OUT_DIR,
            package_manager=data.get("packageManager") or DEFAULT_PACKAGE_MANAGER,
            registry=registry,
            requires=_validate_table(data, "requires"),
            packages=_validate_table(data, "packages"),
        )
    except ValueError as e:
        raise ConfigError(str(e))


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    """Format a JSON syntax error with line, caret, and context."""
    lines = original_text.split("\n")
    msg_parts = [
        f"Config syntax error at line {error.lineno}, col {error.colno}: {error.msg}"
    ]
    if 1 <= error.lineno <= len(lines):
        msg_parts.append(lines[error.lineno - 1])
        msg_parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(msg_parts)


def load_config(path: Path) -> SyncConfig:
    """Load, parse and validate a project config file.

    Raises:
        ConfigError: If the file cannot be read, contains syntax errors
            or fails validation.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except PermissionError:
        raise ConfigError(f"Permission denied reading config file: {path}")
    except UnicodeDecodeError:
        raise ConfigError(f"Config file is not valid UTF-8: {path}")
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(_format_syntax_error(text, e)) from e

    return validate_config(data)


def save_config(config: SyncConfig, path: Path) -> None:
    """Write the project config as formatted JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")


__all__ = [
    "ConfigError",
    "RegistryConfig",
    "SyncConfig",
    "PACKAGE_MANAGERS",
    "validate_config",
    "load_config",
    "save_config",
]
