"""Per-manifest dependency verification.

Every declared dependency gets its own concurrent registry lookup; the
manifest counts as verified once all of them have resolved.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

from .models import DependencyCheck, LookupResult, Manifest, Outcome
from .report import StatusReporter


class Lookup(Protocol):
    async def lookup(self, name: str) -> LookupResult: ...


class DependencyVerifier:
    """Fans out one registry lookup per dependency and joins them.

    Attributes:
        registry: Anything with an async ``lookup(name)`` method.
        reporter: Receives each outcome as soon as it is known.
    """

    def __init__(self, registry: Lookup, reporter: StatusReporter):
        self.registry = registry
        self.reporter = reporter

    async def _check(self, check: DependencyCheck) -> Outcome:
        result = await self.registry.lookup(check.name)
        outcome = Outcome(check, result.status, result.detail)
        self.reporter.outcome(outcome)
        return outcome

    async def verify(self, manifest: Manifest, source_url: str) -> list[Outcome]:
        """Check every dependency of ``manifest``.

        Returns only after all lookups finished.  The returned list is in
        declaration order (runtime first); reporting order is not.
        """
        checks = manifest.checks(source_url)
        if not checks:
            return []
        return list(await asyncio.gather(*(self._check(c) for c in checks)))
