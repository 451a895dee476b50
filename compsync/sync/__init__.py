"""Drift detection and update engine."""

from .classifier import check_for_updates, classify, list_local_components
from .models import ClassificationResult, ComponentStatus, UpdateSummary
from .updater import backup, select_for_update, update_components

__all__ = [
    "ComponentStatus",
    "ClassificationResult",
    "UpdateSummary",
    "classify",
    "list_local_components",
    "check_for_updates",
    "backup",
    "update_components",
    "select_for_update",
]
