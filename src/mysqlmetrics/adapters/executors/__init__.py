"""Query executor adapters implementing QueryExecutorPort."""

from mysqlmetrics.adapters.executors.in_memory import (
    InMemoryQueryExecutor,
    result_set,
)

__all__ = [
    "InMemoryQueryExecutor",
    "result_set",
]
