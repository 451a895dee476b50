"""Interactive prompts for the CLI.

All prompts use questionary and require a TTY; callers check
``sys.stdin.isatty()`` first and fall back to flags or click prompts.
The engine never calls into this module: it returns structured results
and the CLI feeds the user's choices back in as plain arguments.
"""

import sys

import questionary
from prompt_toolkit.styles import Style

from .config import PACKAGE_MANAGERS, SyncConfig
from .sync import ClassificationResult, ComponentStatus

UPDATE_OUTDATED = "outdated"
UPDATE_SELECT = "select"
UPDATE_CANCEL = "none"

_STYLE = Style(
    [
        ("modified", "fg:ansiyellow"),
        ("outdated", ""),
    ]
)


def _require_tty(what: str) -> None:
    if not sys.stdin.isatty():
        raise RuntimeError(f"Interactive {what} requires a TTY")


def prompt_project_config(defaults: SyncConfig) -> SyncConfig | None:
    """Ask for the output directory and package manager.

    Returns:
        A new SyncConfig based on ``defaults``, or None if the user cancels

    Raises:
        RuntimeError: If not running in a TTY
    """
    _require_tty("config setup")

    try:
        out_dir = questionary.text(
            "Where should components be installed?",
            default=defaults.out_dir,
        ).ask()
        if out_dir is None:
            return None

        package_manager = questionary.select(
            "Which package manager do you use?",
            choices=list(PACKAGE_MANAGERS),
            default=defaults.package_manager,
        ).ask()
    except KeyboardInterrupt:
        return None

    if package_manager is None:
        return None

    return SyncConfig(
        out_dir=out_dir.strip() or defaults.out_dir,
        package_manager=package_manager,
        registry=defaults.registry,
        requires=defaults.requires,
        packages=defaults.packages,
    )


def select_update_choice(outdated_count: int, modified_count: int) -> str | None:
    """Ask how to update: all outdated, pick components, or cancel.

    Returns:
        One of UPDATE_OUTDATED, UPDATE_SELECT, UPDATE_CANCEL, or None on Ctrl+C
    """
    _require_tty("update selection")

    choices = []
    if outdated_count:
        choices.append(
            questionary.Choice(
                title=f"Update all outdated components ({outdated_count})",
                value=UPDATE_OUTDATED,
            )
        )
    choices.append(
        questionary.Choice(title="Select specific components to update", value=UPDATE_SELECT)
    )
    choices.append(questionary.Choice(title="Cancel", value=UPDATE_CANCEL))

    try:
        return questionary.select(
            "How would you like to update components?",
            choices=choices,
        ).ask()
    except KeyboardInterrupt:
        return None


def select_components(results: list[ClassificationResult]) -> list[str] | None:
    """Checkbox selection of components to update.

    Outdated components start checked; modified ones start unchecked and are
    labelled, since updating them overwrites local changes.

    Returns:
        Selected component names, or None if the user cancels
    """
    _require_tty("component selection")

    choices = []
    for result in results:
        if result.status is ComponentStatus.MODIFIED:
            choices.append(
                questionary.Choice(
                    title=[("class:modified", f"{result.component} (modified locally)")],
                    value=result.component,
                    checked=False,
                )
            )
        elif result.status is ComponentStatus.OUTDATED:
            choices.append(
                questionary.Choice(
                    title=[("class:outdated", result.component)],
                    value=result.component,
                    checked=True,
                )
            )

    if not choices:
        return []

    try:
        return questionary.checkbox(
            "Select components to update (will overwrite local changes):",
            choices=choices,
            instruction="Space to toggle, Enter to confirm",
            style=_STYLE,
        ).ask()
    except KeyboardInterrupt:
        return None


def confirm_modified(names: list[str]) -> bool:
    """Separate confirmation before overwriting locally modified components."""
    _require_tty("confirmation")

    listing = ", ".join(names)
    try:
        answer = questionary.confirm(
            f"Also overwrite locally modified components ({listing})? "
            "Your local edits will be lost.",
            default=False,
        ).ask()
    except KeyboardInterrupt:
        return False
    return bool(answer)


def confirm_package_install(missing: list[str], package_manager: str) -> bool:
    """Ask whether to install missing third-party packages now."""
    _require_tty("confirmation")

    listing = "\n".join(f"  {spec}" for spec in missing)
    try:
        answer = questionary.confirm(
            f"Missing dependencies:\n{listing}\nInstall now using {package_manager}?",
            default=True,
        ).ask()
    except KeyboardInterrupt:
        return False
    return bool(answer)


__all__ = [
    "UPDATE_OUTDATED",
    "UPDATE_SELECT",
    "UPDATE_CANCEL",
    "prompt_project_config",
    "select_update_choice",
    "select_components",
    "confirm_modified",
    "confirm_package_install",
]
