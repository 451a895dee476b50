"""Third-party package detection and installation."""

import logging
import shlex
from pathlib import Path

from compsync.config import PACKAGE_MANAGERS, ConfigError, SyncConfig
from compsync.execution import INSTALL_TIMEOUT, run_command_async

from .models import PackageInstallResult

_logging = logging.getLogger(__name__)

# Package managers whose install subcommand for new packages is "add"
_ADD_COMMANDS = {"pnpm", "yarn", "bun"}


def package_name(spec: str) -> str:
    """Strip the version range from a package spec.

    Examples:
        >>> package_name("clsx@^2.0.0")
        'clsx'
        >>> package_name("@radix-ui/react-slot@^1.2.3")
        '@radix-ui/react-slot'
    """
    spec = spec.strip()
    if spec.startswith("@"):
        at = spec.find("@", 1)
    else:
        at = spec.find("@")
    return spec if at == -1 else spec[:at]


def is_package_resolvable(name: str, project_root: Path) -> bool:
    """Check whether ``name`` resolves from ``project_root`` like a module import.

    node_modules directories of the project and every parent are searched.
    """
    for directory in (project_root, *project_root.parents):
        if (directory / "node_modules" / name / "package.json").is_file():
            return True
    return False


def find_missing_packages(specs: list[str], project_root: Path) -> list[str]:
    """Return the specs whose package is not installed for the project."""
    missing = []
    for spec in specs:
        if not is_package_resolvable(package_name(spec), project_root):
            missing.append(spec)
    return missing


def build_install_command(package_manager: str, specs: list[str]) -> str:
    """Build the shell command that installs ``specs`` with a package manager.

    Raises:
        ConfigError: If the package manager is not supported
    """
    if package_manager not in PACKAGE_MANAGERS:
        raise ConfigError(
            f"Unsupported package manager: {package_manager}. "
            f"Must be one of: {', '.join(PACKAGE_MANAGERS)}"
        )
    subcommand = "add" if package_manager in _ADD_COMMANDS else "install"
    args = " ".join(shlex.quote(spec) for spec in specs)
    return f"{package_manager} {subcommand} {args}"


async def install_packages(
    specs: list[str],
    config: SyncConfig,
    project_root: Path,
    timeout: int = INSTALL_TIMEOUT,
    debug: bool = False,
) -> PackageInstallResult:
    """Install packages with the project's package manager.

    A failing package manager is reported in the result, never raised;
    component files are already in place at this point.
    """
    command = build_install_command(config.package_manager, specs)
    if not specs:
        return PackageInstallResult(command, "skipped", "Nothing to install")

    _logging.debug(f"Installing packages in {project_root}: {command}")
    output, returncode = await run_command_async(
        f"cd {shlex.quote(str(project_root))} && {command}",
        timeout=timeout,
        debug=debug,
    )
    if returncode == 0:
        return PackageInstallResult(command, "success", output)

    _logging.warning(f"Package installation failed ({returncode}): {command}")
    return PackageInstallResult(command, "failed", output)


__all__ = [
    "package_name",
    "is_package_resolvable",
    "find_missing_packages",
    "build_install_command",
    "install_packages",
]
