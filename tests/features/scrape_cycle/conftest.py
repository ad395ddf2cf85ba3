"""BDD step definitions for scrape cycle features."""

import asyncio
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from mysqlmetrics.adapters.executors.in_memory import InMemoryQueryExecutor, result_set
from mysqlmetrics.adapters.sinks.in_memory import InMemorySampleSink
from mysqlmetrics.collector import VERSION_QUERY, CollectResult, Collector, parse_version
from mysqlmetrics.core.config import CollectorConfig
from mysqlmetrics.core.encoding.prometheus import encode_samples
from tests.helpers import SERVER_UUID, SLAVE_COLUMNS

MASTER_COLUMNS = [
    "File",
    "Position",
    "Binlog_Do_DB",
    "Binlog_Ignore_DB",
    "Executed_Gtid_Set",
]


@dataclass
class ScrapeCycleContext:
    """State shared between the steps of one scenario."""

    sink: InMemorySampleSink = field(default_factory=InMemorySampleSink)
    executor: InMemoryQueryExecutor = field(default_factory=InMemoryQueryExecutor)
    enabled: tuple[str, ...] | None = None
    result: CollectResult | None = None


@pytest.fixture
def ctx() -> ScrapeCycleContext:
    """Fresh scenario context for each test."""
    return ScrapeCycleContext()


def _value(ctx: ScrapeCycleContext, name: str, collector: str | None = None) -> float:
    samples = ctx.sink.find(name)
    if collector is not None:
        samples = [s for s in samples if s.labels["collector"] == collector]
    assert len(samples) == 1, f"expected one {name} sample, got {samples}"
    return samples[0].value


# === Given ===
@given("an in-memory sample sink")
def step_sink(ctx: ScrapeCycleContext) -> None:
    ctx.sink = InMemorySampleSink()


@given(parsers.parse('a MySQL "{version}" replica of "{host}"'))
def step_replica(ctx: ScrapeCycleContext, version: str, host: str) -> None:
    row = [
        "Waiting for master to send event",
        host,
        "repl",
        3306,
        "mysql-bin.000042",
        1234,
        "relay-bin.000007",
        "mysql-bin.000041",
        "Yes",
        "Yes",
        0,
        SERVER_UUID,
        f"{SERVER_UUID}:1-77",
        "",
    ]
    ctx.executor.respond(VERSION_QUERY, result_set(["@@version"], [[version]]))
    ctx.executor.respond("SHOW SLAVE STATUS", result_set(SLAVE_COLUMNS, [row]))


@given("binary logging is disabled")
def step_no_binlog(ctx: ScrapeCycleContext) -> None:
    # Without log_bin the command is rejected outright on this fake server.
    for query in ("SHOW MASTER STATUS", "SHOW BINARY LOG STATUS"):
        ctx.executor.respond(query, PermissionError("binary logging disabled"))


@given(parsers.parse('a MySQL "{version}" primary at "{file}" position {position:d}'))
def step_primary(ctx: ScrapeCycleContext, version: str, file: str, position: int) -> None:
    status = result_set(
        MASTER_COLUMNS, [[file, position, "", "", f"{SERVER_UUID}:1-{position}"]]
    )
    parsed = parse_version(version)
    query = "SHOW BINARY LOG STATUS" if parsed and parsed >= 8.4 else "SHOW MASTER STATUS"
    ctx.executor.respond(VERSION_QUERY, result_set(["@@version"], [[version]]))
    ctx.executor.respond(query, status)
    ctx.executor.respond("SHOW REPLICA STATUS", result_set(SLAVE_COLUMNS))


@given(parsers.parse('only the "{name}" scraper is enabled'))
def step_only(ctx: ScrapeCycleContext, name: str) -> None:
    ctx.enabled = (name,)


# === When ===
@when("a scrape cycle runs")
def step_collect(ctx: ScrapeCycleContext) -> None:
    collector = Collector(ctx.executor, config=CollectorConfig(enabled_scrapers=ctx.enabled))
    ctx.result = asyncio.run(collector.collect(ctx.sink))


# === Then ===
@then(parsers.parse('the collector "{name}" reports success'))
def step_success(ctx: ScrapeCycleContext, name: str) -> None:
    assert _value(ctx, "mysql_exporter_collector_success", name) == 1.0


@then(parsers.parse('the collector "{name}" reports failure'))
def step_failure(ctx: ScrapeCycleContext, name: str) -> None:
    assert _value(ctx, "mysql_exporter_collector_success", name) == 0.0


@then(parsers.parse('no sample for the collector "{name}" exists'))
def step_absent(ctx: ScrapeCycleContext, name: str) -> None:
    collectors = {
        s.labels["collector"] for s in ctx.sink.find("mysql_exporter_collector_success")
    }
    assert name not in collectors
    assert not any(s.name.startswith(f"mysql_{name}_") for s in ctx.sink.samples)


@then(parsers.parse('the sample "{name}" has value {value:g}'))
def step_sample_value(ctx: ScrapeCycleContext, name: str, value: float) -> None:
    assert _value(ctx, name) == value


@then(parsers.parse("the last scrape error is {value:d}"))
def step_last_error(ctx: ScrapeCycleContext, value: int) -> None:
    assert _value(ctx, "mysql_exporter_last_scrape_error") == value


@then(parsers.parse('the exposition output contains "{text}"'))
def step_exposition(ctx: ScrapeCycleContext, text: str) -> None:
    assert text in encode_samples(ctx.sink.samples)
