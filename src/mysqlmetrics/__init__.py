"""Derive typed metric samples from MySQL status queries."""

from mysqlmetrics.adapters.executors.in_memory import (
    InMemoryQueryExecutor,
    result_set,
)
from mysqlmetrics.adapters.logging_context import LogContextFilter
from mysqlmetrics.adapters.sinks.in_memory import InMemorySampleSink
from mysqlmetrics.collector import Collector, CollectResult, ScrapeOutcome
from mysqlmetrics.core.config import CollectorConfig
from mysqlmetrics.core.encoding.prometheus import encode_current, encode_samples
from mysqlmetrics.core.errors import (
    ColumnCountError,
    GTIDParseError,
    LogFileSequenceError,
    QueryExecutionError,
    QueryFallbackError,
    ScrapeError,
)
from mysqlmetrics.core.gtid import parse_gtid_set
from mysqlmetrics.core.models import (
    MetricDescriptor,
    MetricSample,
    ResultSet,
    Row,
    TransactionRange,
    TransactionSet,
    ValueType,
)
from mysqlmetrics.core.ports import QueryExecutorPort, SampleSinkPort
from mysqlmetrics.core.scrapers import (
    MasterStatusScraper,
    Scraper,
    ScraperRegistry,
    SlaveStatusScraper,
    default_registry,
)
from mysqlmetrics.core.status import parse_log_sequence, parse_privilege, parse_status

__all__ = [
    "CollectResult",
    "Collector",
    "CollectorConfig",
    "ColumnCountError",
    "GTIDParseError",
    "InMemoryQueryExecutor",
    "InMemorySampleSink",
    "LogContextFilter",
    "LogFileSequenceError",
    "MasterStatusScraper",
    "MetricDescriptor",
    "MetricSample",
    "QueryExecutionError",
    "QueryExecutorPort",
    "QueryFallbackError",
    "ResultSet",
    "Row",
    "SampleSinkPort",
    "ScrapeError",
    "ScrapeOutcome",
    "Scraper",
    "ScraperRegistry",
    "SlaveStatusScraper",
    "TransactionRange",
    "TransactionSet",
    "ValueType",
    "default_registry",
    "encode_current",
    "encode_samples",
    "parse_gtid_set",
    "parse_log_sequence",
    "parse_privilege",
    "parse_status",
    "result_set",
]
