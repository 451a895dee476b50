"""Component installation: fetch, write, record provenance."""

import logging
from pathlib import Path

from compsync.config import SyncConfig
from compsync.data_loader import Catalog, get_project_catalog
from compsync.digest import digest_file
from compsync.errors import NotFoundError, TransportError
from compsync.metadata import MetadataStore, load_metadata, save_metadata
from compsync.registry import Registry

from .models import InstallReport
from .packages import find_missing_packages
from .resolution import resolve_dependencies

_logging = logging.getLogger(__name__)


def component_path(out_dir: Path, name: str, config: SyncConfig) -> Path:
    return out_dir / f"{name}{config.registry.extension}"


async def _install_one(
    name: str,
    out_dir: Path,
    config: SyncConfig,
    registry: Registry,
    store: MetadataStore,
    report: InstallReport,
) -> bool:
    try:
        content = await registry.fetch_content(name)
    except NotFoundError as e:
        _logging.debug(f"{name}: {e}")
        report.failed[name] = f"component '{name}' not found in registry"
        return False
    except TransportError as e:
        report.failed[name] = str(e)
        return False

    dest = component_path(out_dir, name, config)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(content)
        file_digest = digest_file(dest)
    except OSError as e:
        _logging.error(f"Failed to write {dest}: {e}")
        report.failed[name] = f"could not write {dest}: {e}"
        return False

    previous = store.get(name)
    store.upsert(name, file_digest)
    try:
        save_metadata(out_dir, store)
    except OSError as e:
        if previous is None:
            del store.records[name]
        else:
            store.records[name] = previous
        _logging.error(f"Failed to save metadata for {name}: {e}")
        report.failed[name] = f"could not save metadata for {name}: {e}"
        return False

    report.installed.append(name)
    _logging.debug(f"Installed {name} -> {dest} ({file_digest[:12]})")
    return True


async def install_component(
    name: str,
    out_dir: Path,
    config: SyncConfig,
    registry: Registry,
    installed: set[str] | None = None,
    catalog: Catalog | None = None,
    project_root: Path | None = None,
) -> InstallReport:
    """Install a component and everything it requires.

    Components are installed in resolver order. A failed fetch or write only
    affects that component: it is reported in ``failed`` and its metadata
    record is left alone, while the remaining components still install.

    Args:
        name: Component to install
        out_dir: Directory receiving component files
        config: Project configuration
        registry: Source of component content
        installed: Names already handled in this invocation; updated in place
        catalog: Dependency tables (default: bundled catalog plus project config)
        project_root: Where third-party packages are looked up (default: cwd)

    Returns:
        InstallReport describing installed, skipped and failed components
        and any third-party packages that are missing
    """
    installed = installed if installed is not None else set()
    catalog = catalog if catalog is not None else get_project_catalog(config)
    project_root = project_root if project_root is not None else Path.cwd()
    report = InstallReport()

    order = resolve_dependencies(name, catalog.requires)
    _logging.debug(f"Install order for {name}: {order}")

    store = load_metadata(out_dir)
    for component in order:
        if component in installed:
            report.skipped.append(component)
            continue
        installed.add(component)

        if not await _install_one(component, out_dir, config, registry, store, report):
            continue

        specs = catalog.packages.get(component, [])
        missing = find_missing_packages(specs, project_root) if specs else []
        if missing:
            report.missing_packages[component] = missing

    return report


async def install_components(
    names: list[str],
    out_dir: Path,
    config: SyncConfig,
    registry: Registry,
    catalog: Catalog | None = None,
    project_root: Path | None = None,
) -> InstallReport:
    """Install several components, sharing one visited set across them."""
    installed: set[str] = set()
    report = InstallReport()
    for name in names:
        report.merge(
            await install_component(
                name,
                out_dir,
                config,
                registry,
                installed=installed,
                catalog=catalog,
                project_root=project_root,
            )
        )
    return report


__all__ = [
    "component_path",
    "install_component",
    "install_components",
]
