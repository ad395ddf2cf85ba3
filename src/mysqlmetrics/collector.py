"""Collector orchestrating one scrape cycle over the enabled scrapers."""

import asyncio
import logging
import re
import time
from collections.abc import Iterable
from dataclasses import dataclass

from mysqlmetrics.adapters.logging_context import get_log_context, set_log_context
from mysqlmetrics.core.config import CollectorConfig
from mysqlmetrics.core.descriptors import (
    COLLECTOR_DURATION,
    COLLECTOR_SUCCESS,
    LAST_SCRAPE_ERROR,
)
from mysqlmetrics.core.models import ValueType
from mysqlmetrics.core.ports import QueryExecutorPort, SampleSinkPort
from mysqlmetrics.core.scrapers.base import Scraper, emit
from mysqlmetrics.core.scrapers.registry import ScraperRegistry, default_registry

VERSION_QUERY = "SELECT @@version"
_VERSION_RE = re.compile(r"^[0-9]+\.[0-9]+")
# Used when the version cannot be determined, so that no scraper is skipped.
UNKNOWN_VERSION = 999.0


@dataclass(frozen=True)
class ScrapeOutcome:
    """How one scraper fared in one cycle.

    Attributes:
        name: Scraper name.
        success: True if scrape() returned without raising.
        duration: Wall clock seconds spent in scrape().
        error: The exception that ended the scrape, if any.
    """

    name: str
    success: bool
    duration: float
    error: Exception | None = None


@dataclass(frozen=True)
class CollectResult:
    """Summary of one scrape cycle.

    Attributes:
        outcomes: One entry per scraper that ran, in run order.
        skipped: Names of scrapers skipped because the server is too old.
        server_version: Probed server version, or None if not probed.
    """

    outcomes: tuple[ScrapeOutcome, ...]
    skipped: tuple[str, ...] = ()
    server_version: float | None = None

    @property
    def success(self) -> bool:
        return all(outcome.success for outcome in self.outcomes)

    def failed(self) -> list[str]:
        """Names of the scrapers that failed."""
        return [outcome.name for outcome in self.outcomes if not outcome.success]


def parse_version(text: str) -> float | None:
    """Return major.minor of a server version string such as "8.0.33-log"."""
    match = _VERSION_RE.match(text)
    if match is None:
        return None
    return float(match.group(0))


class Collector:
    """Runs every enabled scraper once per collect() call.

    A failing scraper is logged and reported through the
    ``mysql_exporter_collector_success`` meta-metric; it never stops the
    other scrapers or the cycle.
    """

    def __init__(
        self,
        executor: QueryExecutorPort,
        scrapers: ScraperRegistry | Iterable[Scraper] | None = None,
        config: CollectorConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            executor: Query executor shared by all scrapers.
            scrapers: Registry or iterable of scrapers. Defaults to every
                built-in scraper.
            config: Collector options. Defaults to CollectorConfig().
            logger: Logger for diagnostics. Defaults to this module's logger.

        Raises:
            KeyError: If config enables a scraper that is not registered.
        """
        if scrapers is None:
            registry = default_registry()
        elif isinstance(scrapers, ScraperRegistry):
            registry = scrapers
        else:
            registry = ScraperRegistry(scrapers)
        self.executor = executor
        self.config = config or CollectorConfig()
        self.logger = logger or logging.getLogger(__name__)
        if self.config.enabled_scrapers is None:
            self.scrapers = list(registry)
        else:
            self.scrapers = registry.select(self.config.enabled_scrapers)

    async def collect(self, sink: SampleSinkPort) -> CollectResult:
        """Run one scrape cycle, writing samples and meta-metrics to sink.

        Args:
            sink: Destination of every sample produced in this cycle.

        Returns:
            CollectResult describing each scraper's outcome.
        """
        deadline = None
        if self.config.scrape_timeout is not None:
            deadline = asyncio.get_running_loop().time() + self.config.scrape_timeout

        version = None
        if self.config.probe_version:
            version = await self._server_version(deadline)

        runnable: list[Scraper] = []
        skipped: list[str] = []
        for scraper in self.scrapers:
            if version is not None and scraper.version > version:
                self.logger.debug(
                    "Skipping scraper %s: requires version %s, server is %s",
                    scraper.name,
                    scraper.version,
                    version,
                )
                skipped.append(scraper.name)
            else:
                runnable.append(scraper)

        if self.config.concurrent:
            outcomes = list(
                await asyncio.gather(
                    *(self._run(scraper, sink, deadline) for scraper in runnable)
                )
            )
        else:
            outcomes = [await self._run(scraper, sink, deadline) for scraper in runnable]

        for outcome in outcomes:
            await emit(
                sink, COLLECTOR_DURATION, ValueType.GAUGE, outcome.duration, outcome.name
            )
            await emit(
                sink,
                COLLECTOR_SUCCESS,
                ValueType.GAUGE,
                1.0 if outcome.success else 0.0,
                outcome.name,
            )
        result = CollectResult(
            outcomes=tuple(outcomes), skipped=tuple(skipped), server_version=version
        )
        await emit(
            sink, LAST_SCRAPE_ERROR, ValueType.GAUGE, 0.0 if result.success else 1.0
        )
        return result

    async def _server_version(self, deadline: float | None) -> float:
        try:
            async with asyncio.timeout_at(deadline):
                result = await self.executor.execute(VERSION_QUERY)
        except Exception as e:
            self.logger.warning("Error querying server version: %s", e)
            return UNKNOWN_VERSION
        version = None
        if result.rows and result.rows[0] and result.rows[0][0] is not None:
            version = parse_version(result.rows[0][0].decode("utf-8", errors="replace"))
        if version is None:
            self.logger.warning("Could not parse server version from %r", result.rows)
            return UNKNOWN_VERSION
        return version

    async def _run(
        self, scraper: Scraper, sink: SampleSinkPort, deadline: float | None
    ) -> ScrapeOutcome:
        previous = get_log_context()
        set_log_context(**{**previous, "scraper": scraper.name})
        start = time.perf_counter()
        try:
            async with asyncio.timeout_at(deadline):
                await scraper.scrape(
                    self.executor, sink, self.logger.getChild(scraper.name)
                )
        except TimeoutError as e:
            self.logger.error("Scraper %s timed out", scraper.name)
            return ScrapeOutcome(scraper.name, False, time.perf_counter() - start, e)
        except Exception as e:
            self.logger.exception("Error from scraper %s", scraper.name)
            return ScrapeOutcome(scraper.name, False, time.perf_counter() - start, e)
        finally:
            set_log_context(**previous)
        return ScrapeOutcome(scraper.name, True, time.perf_counter() - start)
