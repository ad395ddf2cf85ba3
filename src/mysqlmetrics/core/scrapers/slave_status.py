"""Scrape `SHOW SLAVE STATUS`.

The column set of this command differs between MySQL, Percona Server and
MariaDB releases, so columns are resolved by name on every call. A few
columns get dedicated metrics; every other column is exported through the
generic status normalization when its value looks numeric.
"""

import logging

from mysqlmetrics.core.descriptors import new_desc
from mysqlmetrics.core.gtid import parse_gtid_set
from mysqlmetrics.core.models import Row, ValueType
from mysqlmetrics.core.ports import QueryExecutorPort, SampleSinkPort
from mysqlmetrics.core.scrapers.base import Scraper, emit, query_with_fallback
from mysqlmetrics.core.status import parse_log_sequence, parse_status

SUBSYSTEM = "slave_status"

# MariaDB answers the first, MySQL and Percona the second, MySQL 8.4 the third.
SLAVE_STATUS_QUERIES = (
    "SHOW ALL SLAVES STATUS",
    "SHOW SLAVE STATUS",
    "SHOW REPLICA STATUS",
)
# Lock-free variants of Percona Server and MySQL 5.7.
SLAVE_STATUS_QUERY_SUFFIXES = (" NONBLOCKING", " NOLOCK", "")

ROW_LABELS = ("master_host", "master_uuid", "channel_name", "connection_name")
GTID_LABELS = (*ROW_LABELS, "executed_server_id", "partition")

# label -> columns that may carry it, first present wins
_LABEL_COLUMNS = {
    "master_host": ("Master_Host", "Source_Host"),
    "master_uuid": ("Master_UUID", "Source_UUID"),
    "channel_name": ("Channel_Name",),  # MySQL & Percona
    "connection_name": ("Connection_name",),  # MariaDB
}
_IDENTITY_COLUMNS = frozenset(
    column for columns in _LABEL_COLUMNS.values() for column in columns
)

GTID_SET_COLUMN = "Executed_Gtid_Set"
LOG_FILE_COLUMNS = frozenset(
    {
        "Master_Log_File",
        "Relay_Master_Log_File",
        "Source_Log_File",
        "Relay_Source_Log_File",
    }
)


def row_labels(row: Row) -> tuple[str, ...]:
    """Return the contextual label values of row, in ROW_LABELS order.

    Columns missing from the result degrade to empty strings.
    """
    values = []
    for label in ROW_LABELS:
        present = [c for c in _LABEL_COLUMNS[label] if c in row]
        values.append(row.text(present[0]) if present else "")
    return tuple(values)


class SlaveStatusScraper(Scraper):
    """Collects replication state from `SHOW SLAVE STATUS` and its variants."""

    name = SUBSYSTEM
    help = "Collect from SHOW SLAVE STATUS"
    version = 5.1

    async def scrape(
        self,
        executor: QueryExecutorPort,
        sink: SampleSinkPort,
        logger: logging.Logger,
    ) -> None:
        result = await query_with_fallback(
            executor, SLAVE_STATUS_QUERIES, SLAVE_STATUS_QUERY_SUFFIXES
        )
        for row in result.records():
            labels = row_labels(row)
            for column in result.columns:
                if column == GTID_SET_COLUMN:
                    await self._emit_gtid_set(sink, row.text(column), labels)
                elif column in LOG_FILE_COLUMNS:
                    await self._emit_log_file(sink, column, row.value(column), labels)
                elif column not in _IDENTITY_COLUMNS:
                    await self._emit_generic(sink, column, row.value(column), labels)

    async def _emit_gtid_set(
        self, sink: SampleSinkPort, text: str, labels: tuple[str, ...]
    ) -> None:
        if not text:
            return
        start = new_desc(
            SUBSYSTEM,
            GTID_SET_COLUMN.lower() + "_start",
            "Executed GTID from SHOW SLAVE STATUS.",
            GTID_LABELS,
        )
        end = new_desc(
            SUBSYSTEM,
            GTID_SET_COLUMN.lower() + "_end",
            "Executed GTID from SHOW SLAVE STATUS.",
            GTID_LABELS,
        )
        for gtid in parse_gtid_set(text):
            await emit(
                sink,
                start,
                ValueType.GAUGE,
                float(gtid.first_transaction),
                *labels,
                gtid.server_id,
                "",
            )
            await emit(
                sink,
                end,
                ValueType.GAUGE,
                float(gtid.last_transaction),
                *labels,
                gtid.server_id,
                "",
            )

    async def _emit_log_file(
        self,
        sink: SampleSinkPort,
        column: str,
        raw: bytes | None,
        labels: tuple[str, ...],
    ) -> None:
        # A replica that never connected reports an empty file name.
        if not raw:
            return
        value = parse_log_sequence(raw.decode("utf-8", errors="replace"))
        await emit(
            sink,
            new_desc(
                SUBSYSTEM,
                column.lower() + "_num",
                "Receive master log file num from SHOW SLAVE STATUS.",
                ROW_LABELS,
            ),
            ValueType.UNTYPED,
            value,
            *labels,
        )

    async def _emit_generic(
        self,
        sink: SampleSinkPort,
        column: str,
        raw: bytes | None,
        labels: tuple[str, ...],
    ) -> None:
        if raw is None:
            return
        value, ok = parse_status(raw)
        if not ok:  # Silently skip unparsable values.
            return
        await emit(
            sink,
            new_desc(
                SUBSYSTEM,
                column.lower(),
                "Generic metric from SHOW SLAVE STATUS.",
                ROW_LABELS,
            ),
            ValueType.UNTYPED,
            value,
            *labels,
        )
