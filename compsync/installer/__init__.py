"""Installer engine: dependency resolution and component installation."""

from .installation import component_path, install_component, install_components
from .models import InstallReport, PackageInstallResult
from .packages import (
    build_install_command,
    find_missing_packages,
    install_packages,
    is_package_resolvable,
    package_name,
)
from .resolution import resolve_dependencies

__all__ = [
    "InstallReport",
    "PackageInstallResult",
    "resolve_dependencies",
    "component_path",
    "install_component",
    "install_components",
    "package_name",
    "is_package_resolvable",
    "find_missing_packages",
    "build_install_command",
    "install_packages",
]
