"""Data models for the installation system."""

from dataclasses import dataclass, field


@dataclass
class InstallReport:
    installed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    missing_packages: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def all_missing_packages(self) -> list[str]:
        """Missing package specs across all components, without duplicates."""
        seen: list[str] = []
        for specs in self.missing_packages.values():
            for spec in specs:
                if spec not in seen:
                    seen.append(spec)
        return seen

    def merge(self, other: "InstallReport") -> None:
        self.installed.extend(n for n in other.installed if n not in self.installed)
        self.failed.update(other.failed)
        self.skipped.extend(
            n
            for n in other.skipped
            if n not in self.skipped and n not in self.installed and n not in self.failed
        )
        self.missing_packages.update(other.missing_packages)


@dataclass
class PackageInstallResult:
    command: str
    status: str
    output: str

    @property
    def ok(self) -> bool:
        return self.status == "success"


__all__ = [
    "InstallReport",
    "PackageInstallResult",
]
