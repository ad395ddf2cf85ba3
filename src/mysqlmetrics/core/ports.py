"""Port interfaces for the collaborators of the scrape engine.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from mysqlmetrics.core.models import MetricSample, ResultSet


@runtime_checkable
class QueryExecutorPort(Protocol):
    """Port for running read-only status queries.

    Adapters implementing this protocol run one query text and return the
    column names and raw row values of its result.
    Examples: AiomysqlQueryExecutor, InMemoryQueryExecutor.
    """

    async def execute(self, query: str) -> ResultSet:
        """Execute query and return its complete result.

        Implementations raise on any execution failure. Cancelling the
        awaiting task must abort the query.
        """
        ...


@runtime_checkable
class SampleSinkPort(Protocol):
    """Port for delivering metric samples.

    Writes are fire-and-forget from the scraper's point of view. Several
    scrapers may write concurrently; no ordering between them is implied.
    Examples: InMemorySampleSink.
    """

    async def write(self, sample: MetricSample) -> None:
        """Deliver one metric sample."""
        ...
