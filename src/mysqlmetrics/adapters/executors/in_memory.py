"""In-memory query executor returning canned results."""

import asyncio
from collections.abc import Iterable, Mapping, Sequence

from mysqlmetrics.core.errors import QueryExecutionError
from mysqlmetrics.core.models import RawValue, ResultSet


def _raw(value: object) -> RawValue:
    if value is None or isinstance(value, bytes):
        return value
    return str(value).encode()


def result_set(
    columns: Sequence[str], rows: Iterable[Sequence[object]] = ()
) -> ResultSet:
    """Build a ResultSet from plain Python values.

    Values are converted to their textual bytes; None stays None (NULL).

    Example:
        ```python
        result_set(["File", "Position"], [["binlog.000006", 49066]])
        ```
    """
    return ResultSet(
        columns=tuple(columns),
        rows=tuple(tuple(_raw(v) for v in row) for row in rows),
    )


class InMemoryQueryExecutor:
    """In-memory implementation of QueryExecutorPort.

    Maps exact query texts to a ResultSet, or to an exception raised when
    that query is executed. Queries without a response raise
    QueryExecutionError, like a server rejecting unknown syntax.

    Args:
        responses: Query text to ResultSet or exception.
        latency: Seconds every execute() waits before answering.
    """

    def __init__(
        self,
        responses: Mapping[str, ResultSet | Exception] | None = None,
        latency: float = 0.0,
    ) -> None:
        self._responses: dict[str, ResultSet | Exception] = dict(responses or {})
        self.latency = latency
        self.executed: list[str] = []

    def respond(self, query: str, response: ResultSet | Exception) -> None:
        """Set the response for query."""
        self._responses[query] = response

    async def execute(self, query: str) -> ResultSet:
        """Return the canned response for query."""
        self.executed.append(query)
        if self.latency:
            await asyncio.sleep(self.latency)
        response = self._responses.get(query)
        if response is None:
            raise QueryExecutionError(f"You have an error in your SQL syntax: {query!r}")
        if isinstance(response, Exception):
            raise response
        return response
