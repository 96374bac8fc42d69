"""Status sink: formats scan events as tagged stdout lines.

Lines look like::

    [WARNING] Potential Dependency Confusion: 'acme-internal' not found on npm (devDependency, https://x/package.json)
    [INFO] Dependency 'left-pad' exists on npm (https://x/package.json)
    [ERROR] Failed to fetch dependency 'left-pad' from URL 'https://x/package.json': timeout

Only warnings are written unless ``verbose`` is set.
"""

import sys
from typing import Any, TextIO

from .errors import FetchError
from .models import DependencyKind, LookupStatus, Outcome

INFO = "INFO"
WARNING = "WARNING"
ERROR = "ERROR"


def format_outcome(outcome: Outcome) -> tuple[str, str]:
    """Return ``(level, message)`` for a dependency outcome."""
    check = outcome.check
    if outcome.status is LookupStatus.NOT_FOUND:
        where = f"devDependency, {check.source_url}" if check.kind is DependencyKind.DEV else check.source_url
        return WARNING, f"Potential Dependency Confusion: '{check.name}' not found on npm ({where})"
    if outcome.status is LookupStatus.FOUND:
        label = "DevDependency" if check.kind is DependencyKind.DEV else "Dependency"
        return INFO, f"{label} '{check.name}' exists on npm ({check.source_url})"
    return ERROR, (
        f"Failed to fetch {check.kind.value} '{check.name}' from URL '{check.source_url}': "
        f"{outcome.detail or 'unknown error'}"
    )


class StatusReporter:
    """Writes tagged status lines, honouring the verbose switch.

    Attributes:
        verbose: When false only potential-confusion warnings are shown.
        stream: Where lines go (stdout by default).
    """

    def __init__(self, verbose: bool = False, stream: TextIO | None = None):
        self.verbose = verbose
        self.stream = stream

    def _write(self, level: str, message: str) -> None:
        print(f"[{level}] {message}", file=self.stream or sys.stdout, flush=True)

    def info(self, message: str) -> None:
        if self.verbose:
            self._write(INFO, message)

    def warning(self, message: str) -> None:
        self._write(WARNING, message)

    def error(self, message: str) -> None:
        if self.verbose:
            self._write(ERROR, message)

    def fetching(self, url: str) -> None:
        self.info(f"Fetching URL: {url}")

    def fetch_failed(self, exc: FetchError) -> None:
        self.error(f"Failed to fetch '{exc.url}': {exc.message}")

    def outcome(self, outcome: Outcome) -> None:
        level, message = format_outcome(outcome)
        if level == WARNING:
            self.warning(message)
        elif level == INFO:
            self.info(message)
        else:
            self.error(message)

    def summary(self, stats: dict[str, Any]) -> None:
        self.info(
            f"Scanned {stats['urls_scanned']} URL(s), {stats['urls_failed']} failed, "
            f"{stats['dependencies_checked']} dependencies checked, "
            f"{stats['potential_confusion']} potential confusion"
        )
