"""Shared test fixtures for all test modules."""

import pytest

from mysqlmetrics.adapters.executors.in_memory import InMemoryQueryExecutor, result_set
from mysqlmetrics.adapters.sinks.in_memory import InMemorySampleSink
from mysqlmetrics.core.models import ResultSet
from tests.helpers import SERVER_UUID, SLAVE_COLUMNS


@pytest.fixture
def sink() -> InMemorySampleSink:
    """Fixture providing an empty sample sink."""
    return InMemorySampleSink()


@pytest.fixture
def master_status_result() -> ResultSet:
    """SHOW MASTER STATUS result of a GTID enabled MySQL 8.0 server."""
    return result_set(
        ["File", "Position", "Binlog_Do_DB", "Binlog_Ignore_DB", "Executed_Gtid_Set"],
        [["binlog.000006", 49066, "", "", f"{SERVER_UUID}:1-261530"]],
    )


@pytest.fixture
def slave_status_result() -> ResultSet:
    """SHOW SLAVE STATUS result of a MySQL 5.7 replica."""
    return result_set(
        SLAVE_COLUMNS,
        [
            [
                "Waiting for master to send event",
                "db-primary",
                "repl",
                3306,
                "mysql-bin.000042",
                1234,
                "relay-bin.000007",
                "mysql-bin.000041",
                "Yes",
                "Connecting",
                None,
                SERVER_UUID,
                f"{SERVER_UUID}:1-5:7-9",
                "",
            ]
        ],
    )


@pytest.fixture
def executor_factory():
    """Factory fixture creating an InMemoryQueryExecutor from a mapping.

    Usage:
        def test_something(executor_factory, master_status_result):
            executor = executor_factory({"SHOW MASTER STATUS": master_status_result})
    """

    def _executor(responses=None, latency: float = 0.0) -> InMemoryQueryExecutor:
        return InMemoryQueryExecutor(responses, latency=latency)

    return _executor
