"""Data models for drift detection and updates."""

from dataclasses import dataclass, field
from enum import Enum


class ComponentStatus(Enum):
    UP_TO_DATE = "up-to-date"
    MODIFIED = "modified"
    OUTDATED = "outdated"


@dataclass(frozen=True)
class ClassificationResult:
    component: str
    status: ComponentStatus


@dataclass
class UpdateSummary:
    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def updated_count(self) -> int:
        return len(self.updated)

    @property
    def failed_count(self) -> int:
        return len(self.failed)


__all__ = [
    "ComponentStatus",
    "ClassificationResult",
    "UpdateSummary",
]
