"""compsync: install source-file components from a registry and keep them in sync."""

import logging

from .config import ConfigError, SyncConfig, load_config, save_config
from .errors import (
    LocalIOError,
    NotFoundError,
    SyncError,
    TransportError,
    format_error,
    format_suggestion,
)
from .execution import DEFAULT_TIMEOUT, INSTALL_TIMEOUT, run_command_async

__version__ = "0.3.0"

_logging = logging.getLogger(__name__)
_logging_configured = False


def setup_logging(debug: bool = False) -> None:
    """Configure root logging once per process.

    DEBUG level with --debug, otherwise only warnings and errors are shown.
    """
    global _logging_configured
    level = logging.DEBUG if debug else logging.WARNING
    if _logging_configured:
        logging.getLogger().setLevel(level)
        return
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    _logging_configured = True


__all__ = [
    "__version__",
    "setup_logging",
    "ConfigError",
    "SyncConfig",
    "load_config",
    "save_config",
    "SyncError",
    "TransportError",
    "NotFoundError",
    "LocalIOError",
    "format_error",
    "format_suggestion",
    "DEFAULT_TIMEOUT",
    "INSTALL_TIMEOUT",
    "run_command_async",
]
