"""Scrape `SHOW MASTER STATUS`."""

import logging

from mysqlmetrics.core.descriptors import new_desc
from mysqlmetrics.core.errors import ColumnCountError
from mysqlmetrics.core.gtid import parse_gtid_set
from mysqlmetrics.core.models import Row, ValueType
from mysqlmetrics.core.ports import QueryExecutorPort, SampleSinkPort
from mysqlmetrics.core.scrapers.base import Scraper, emit, query_with_fallback
from mysqlmetrics.core.status import parse_log_sequence

SUBSYSTEM = "master_status"

# MySQL 8.4 only understands the second form.
MASTER_STATUS_QUERIES = ("SHOW MASTER STATUS", "SHOW BINARY LOG STATUS")

# File, Position, Binlog_Do_DB, Binlog_Ignore_DB[, Executed_Gtid_Set]
_SUPPORTED_COLUMN_COUNTS = (4, 5)

MASTER_BINLOG_POS = new_desc(
    SUBSYSTEM,
    "binlog_pos",
    "Position in the binary log file currently written.",
)
MASTER_BINLOG_FILE_NUM = new_desc(
    SUBSYSTEM,
    "binlog_file_num",
    "Sequence number of the binary log file currently written.",
)
MASTER_EXECUTED_GTID_START = new_desc(
    SUBSYSTEM,
    "executed_gtid_start",
    "First executed transaction number per origin server.",
    ("executed_server_id", "partition"),
)
MASTER_EXECUTED_GTID_END = new_desc(
    SUBSYSTEM,
    "executed_gtid_end",
    "Last executed transaction number per origin server.",
    ("executed_server_id", "partition"),
)


class MasterStatusScraper(Scraper):
    """Collects binary log coordinates from `SHOW MASTER STATUS`."""

    name = SUBSYSTEM
    help = "Collect the master status"
    version = 5.1

    async def scrape(
        self,
        executor: QueryExecutorPort,
        sink: SampleSinkPort,
        logger: logging.Logger,
    ) -> None:
        result = await query_with_fallback(executor, MASTER_STATUS_QUERIES)
        if len(result.columns) not in _SUPPORTED_COLUMN_COUNTS:
            raise ColumnCountError(MASTER_STATUS_QUERIES[0], len(result.columns))

        last: Row | None = None
        for row in result.records():
            last = row
        if last is None:
            logger.debug("Binary logging is disabled, nothing to report")
            return

        filename = last.text("File")
        if filename:
            await emit(
                sink,
                MASTER_BINLOG_FILE_NUM,
                ValueType.GAUGE,
                parse_log_sequence(filename),
            )
            await emit(
                sink,
                MASTER_BINLOG_POS,
                ValueType.GAUGE,
                float(int(last.text("Position") or 0)),
            )

        executed = last.text("Executed_Gtid_Set")
        if executed:
            for gtid in parse_gtid_set(executed):
                await emit(
                    sink,
                    MASTER_EXECUTED_GTID_START,
                    ValueType.GAUGE,
                    float(gtid.first_transaction),
                    gtid.server_id,
                    "",
                )
                await emit(
                    sink,
                    MASTER_EXECUTED_GTID_END,
                    ValueType.GAUGE,
                    float(gtid.last_transaction),
                    gtid.server_id,
                    "",
                )
