"""aiomysql query executor adapter."""

import datetime
import decimal

import aiomysql

from mysqlmetrics.core.models import RawValue, ResultSet


def to_raw(value: object) -> RawValue:
    """Convert a driver value back to the raw text bytes the server sent.

    Connections opened with an empty ``conv`` mapping already return text;
    with the default converters, numbers and dates are rendered the way
    MySQL prints them.
    """
    if value is None or isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bool):
        return b"1" if value else b"0"
    if isinstance(value, datetime.datetime):
        return value.isoformat(sep=" ").encode()
    if isinstance(value, (int, float, decimal.Decimal, datetime.date, datetime.timedelta)):
        return str(value).encode()
    return str(value).encode("utf-8")


class AiomysqlQueryExecutor:
    """QueryExecutorPort backed by an aiomysql connection pool.

    Every execute() acquires its own connection, so scrapers running as
    concurrent tasks never share one. Creating and closing the pool is the
    caller's business.

    Example:
        ```python
        pool = await aiomysql.create_pool(host="db", user="exporter", conv={})
        collector = Collector(AiomysqlQueryExecutor(pool))
        ```
    """

    def __init__(self, pool: aiomysql.Pool) -> None:
        self._pool = pool

    async def execute(self, query: str) -> ResultSet:
        """Run query on a pooled connection and return its full result."""
        async with self._pool.acquire() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(query)
                description = cursor.description or ()
                rows = await cursor.fetchall()
        return ResultSet(
            columns=tuple(column[0] for column in description),
            rows=tuple(tuple(to_raw(v) for v in row) for row in rows),
        )
