"""Data model shared by the fetcher, verifier and worker pool."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


class DependencyKind(str, enum.Enum):
    """Which manifest section a dependency was declared in."""

    RUNTIME = "dependency"
    DEV = "devDependency"


class LookupStatus(str, enum.Enum):
    """Result of a single registry lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


@dataclass(frozen=True)
class LookupResult:
    """What the registry client reports for one name.

    Attributes:
        status: Found, not found, or failed.
        detail: Failure reason when ``status`` is ``LOOKUP_FAILED``.
    """

    status: LookupStatus
    detail: str | None = None


@dataclass(frozen=True)
class Manifest:
    """Decoded dependency declarations of one fetched document.

    Attributes:
        dependencies: Runtime dependency name → version specifier.
        dev_dependencies: Development dependency name → version specifier.
    """

    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", MappingProxyType(dict(self.dependencies)))
        object.__setattr__(self, "dev_dependencies", MappingProxyType(dict(self.dev_dependencies)))

    def checks(self, source_url: str) -> list[DependencyCheck]:
        """Build one check per entry, runtime entries first."""
        out = [DependencyCheck(name, DependencyKind.RUNTIME, source_url) for name in self.dependencies]
        out.extend(DependencyCheck(name, DependencyKind.DEV, source_url) for name in self.dev_dependencies)
        return out

    def __len__(self) -> int:
        return len(self.dependencies) + len(self.dev_dependencies)


@dataclass(frozen=True)
class DependencyCheck:
    """A single (name, kind, source URL) triple to verify."""

    name: str
    kind: DependencyKind
    source_url: str


@dataclass(frozen=True)
class Outcome:
    """Classified result of one dependency check.

    Attributes:
        check: The check this outcome belongs to.
        status: Registry lookup status.
        detail: Failure reason for ``LOOKUP_FAILED`` outcomes.
    """

    check: DependencyCheck
    status: LookupStatus
    detail: str | None = None

    @property
    def is_potential_confusion(self) -> bool:
        return self.status is LookupStatus.NOT_FOUND

    def key(self) -> tuple[str, str, str, str]:
        """Identity used when comparing runs: (url, name, kind, status)."""
        return (self.check.source_url, self.check.name, self.check.kind.value, self.status.value)


@dataclass
class ScanResults:
    """Container for everything a scan produced.

    Attributes:
        outcomes: One entry per dependency check that ran.
        errors: Human-readable messages for URLs whose fetch failed.
        urls_scanned: Number of URL tasks that finished.
    """

    outcomes: list[Outcome] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    urls_scanned: int = 0

    @property
    def potential_confusion(self) -> list[Outcome]:
        return [o for o in self.outcomes if o.is_potential_confusion]

    def as_dict(self) -> dict[str, Any]:
        return {
            "urls_scanned": self.urls_scanned,
            "urls_failed": len(self.errors),
            "dependencies_checked": len(self.outcomes),
            "potential_confusion": len(self.potential_confusion),
        }
