"""Bounded URL worker pool and scan orchestration.

Usage from synchronous code::

    from depradar.pipeline import scan_urls
    results = scan_urls(["https://example.com/package.json"])
    for outcome in results.potential_confusion:
        print(outcome.check.name)
"""

from __future__ import annotations

import asyncio
from typing import Protocol, Sequence

import aiohttp

from .config import ScanConfig
from .errors import FetchError
from .manifest import ManifestFetcher
from .models import Manifest, ScanResults
from .registry import RegistryClient
from .report import StatusReporter
from .verifier import DependencyVerifier


class Fetcher(Protocol):
    async def fetch(self, url: str) -> Manifest: ...


class UrlWorkerPool:
    """Processes URLs with at most ``concurrency`` in flight.

    A slot is taken before each URL task is started and given back when
    that task's fetch and verification are both over, whatever the result.

    Attributes:
        fetcher: Turns a URL into a ``Manifest``.
        verifier: Checks a manifest's dependencies.
        reporter: Status sink for fetch progress and failures.
        concurrency: Slot count; values below 1 mean 1.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        verifier: DependencyVerifier,
        reporter: StatusReporter,
        concurrency: int = 5,
    ):
        self.fetcher = fetcher
        self.verifier = verifier
        self.reporter = reporter
        self.concurrency = max(1, concurrency)

    async def _process(self, url: str, slots: asyncio.Semaphore, results: ScanResults) -> None:
        try:
            self.reporter.fetching(url)
            try:
                manifest = await self.fetcher.fetch(url)
            except FetchError as e:
                self.reporter.fetch_failed(e)
                results.errors.append(str(e))
                return
            results.outcomes.extend(await self.verifier.verify(manifest, url))
        finally:
            results.urls_scanned += 1
            slots.release()

    async def run(self, urls: Sequence[str]) -> ScanResults:
        """Process every URL and wait for all of them.

        Args:
            urls: Manifest URLs, processed in order of admission.

        Returns:
            ``ScanResults`` with all outcomes and fetch errors.
        """
        results = ScanResults()
        slots = asyncio.Semaphore(self.concurrency)
        tasks: list[asyncio.Task] = []
        for url in urls:
            await slots.acquire()
            tasks.append(asyncio.create_task(self._process(url, slots, results)))
        if tasks:
            await asyncio.gather(*tasks)
        return results


def _session_for(config: ScanConfig) -> aiohttp.ClientSession:
    # sock_connect bounds the dial only; waiting for a pooled connection is not a dial
    timeout = aiohttp.ClientTimeout(total=config.request_timeout, sock_connect=config.connect_timeout)
    connector = aiohttp.TCPConnector(
        limit=config.pool_limit,
        limit_per_host=config.pool_limit_per_host,
        keepalive_timeout=config.keepalive_timeout,
    )
    return aiohttp.ClientSession(
        connector=connector,
        timeout=timeout,
        headers={"User-Agent": config.user_agent},
    )


async def _scan(urls: Sequence[str], config: ScanConfig, reporter: StatusReporter) -> ScanResults:
    async with _session_for(config) as session:
        registry = RegistryClient(session, config.registry_search_url, config.not_found_marker)
        pool = UrlWorkerPool(
            ManifestFetcher(session),
            DependencyVerifier(registry, reporter),
            reporter,
            concurrency=config.concurrency,
        )
        return await pool.run(urls)


def scan_urls(
    urls: Sequence[str],
    config: ScanConfig | None = None,
    reporter: StatusReporter | None = None,
) -> ScanResults:
    """Synchronous entry point: scan every URL and return the results.

    One HTTP session (and connection pool) is created for the whole run
    and shared by every fetch and lookup.

    Args:
        urls: Manifest URLs.
        config: Scan settings; defaults to ``ScanConfig()``.
        reporter: Status sink; defaults to one honouring ``config.verbose``.

    Returns:
        ``ScanResults`` for the run.
    """
    config = config or ScanConfig()
    reporter = reporter or StatusReporter(verbose=config.verbose)
    results = asyncio.run(_scan(urls, config, reporter))
    reporter.summary(results.as_dict())
    return results
