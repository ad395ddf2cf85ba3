"""Scraper contract and the helpers shared by scraper implementations."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from mysqlmetrics.core.errors import QueryFallbackError
from mysqlmetrics.core.models import (
    MetricDescriptor,
    MetricSample,
    ResultSet,
    ValueType,
)
from mysqlmetrics.core.ports import QueryExecutorPort, SampleSinkPort

logger = logging.getLogger(__name__)


class Scraper(ABC):
    """Abstract base for everything that turns a status query into samples.

    Subclasses set the class attributes and implement scrape().

    Attributes:
        name: Unique key of the scraper.
        help: One line description of what it collects.
        version: Minimum server version (major.minor) it supports.
    """

    name: str = ""
    help: str = ""
    version: float = 0.0

    @abstractmethod
    async def scrape(
        self,
        executor: QueryExecutorPort,
        sink: SampleSinkPort,
        logger: logging.Logger,
    ) -> None:
        """Run the scraper's queries and write derived samples to sink.

        Raises:
            Exception: Any query or parse failure. Samples written before
                the failure are not retracted.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


async def emit(
    sink: SampleSinkPort,
    descriptor: MetricDescriptor,
    value_type: ValueType,
    value: float,
    *label_values: str,
) -> None:
    """Build a MetricSample and write it to sink."""
    await sink.write(
        MetricSample(
            descriptor=descriptor,
            value_type=value_type,
            value=value,
            label_values=label_values,
        )
    )


async def query_with_fallback(
    executor: QueryExecutorPort,
    queries: Sequence[str],
    suffixes: Sequence[str] = ("",),
) -> ResultSet:
    """Execute the first query variant the server accepts.

    Each query text is tried as is; if that fails, each suffix is appended
    to it and tried in turn. A text already attempted is not sent again.

    Args:
        executor: Where to run the queries.
        queries: Candidate query texts, most preferred first.
        suffixes: Suffixes (e.g. lock avoidance hints) to try on failure.

    Returns:
        Result of the first successful execution.

    Raises:
        QueryFallbackError: If every combination failed; chained from the
            last error.
    """
    attempted: list[str] = []
    last_error: Exception | None = None
    for query in queries:
        for candidate in (query, *(query + suffix for suffix in suffixes)):
            if candidate in attempted:
                continue
            attempted.append(candidate)
            try:
                result = await executor.execute(candidate)
            except Exception as e:
                logger.debug("Query %r failed: %s", candidate, e)
                last_error = e
                continue
            logger.debug("Query %r answered", candidate)
            return result
    raise QueryFallbackError(attempted) from last_error
