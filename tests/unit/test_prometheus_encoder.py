"""Tests for the Prometheus text encoder."""

import math

import pytest

from mysqlmetrics.adapters.sinks.in_memory import InMemorySampleSink
from mysqlmetrics.core.descriptors import new_desc
from mysqlmetrics.core.encoding.prometheus import encode_current, encode_samples
from mysqlmetrics.core.models import MetricSample, ValueType

pytestmark = [pytest.mark.encoding, pytest.mark.tier(0)]

POS = new_desc("master_status", "binlog_pos", "Position of the binlog.")
RUNNING = new_desc(
    "slave_status",
    "slave_io_running",
    "Generic metric from SHOW SLAVE STATUS.",
    ("master_host", "channel_name"),
)


class TestEncodeSamples:
    """Tests for encode_samples()."""

    @pytest.mark.tra("Encoding.Prometheus.Empty")
    def test_no_samples_encode_to_empty_string(self) -> None:
        assert encode_samples([]) == ""

    def test_unlabelled_sample(self) -> None:
        """A family gets HELP and TYPE lines followed by its samples."""
        sample = MetricSample(POS, ValueType.GAUGE, 49066.0)
        assert encode_samples([sample]) == (
            "# HELP mysql_master_status_binlog_pos Position of the binlog.\n"
            "# TYPE mysql_master_status_binlog_pos gauge\n"
            "mysql_master_status_binlog_pos 49066\n"
        )

    @pytest.mark.tra("Encoding.Prometheus.Grouping")
    def test_samples_grouped_by_family(self) -> None:
        """Samples of one family are written together under one header."""
        samples = [
            MetricSample(RUNNING, ValueType.UNTYPED, 1.0, ("a", "x")),
            MetricSample(POS, ValueType.GAUGE, 4.0),
            MetricSample(RUNNING, ValueType.UNTYPED, 0.0, ("b", "y")),
        ]

        lines = encode_samples(samples).splitlines()

        assert lines == [
            "# HELP mysql_slave_status_slave_io_running Generic metric from SHOW SLAVE STATUS.",
            "# TYPE mysql_slave_status_slave_io_running untyped",
            'mysql_slave_status_slave_io_running{master_host="a",channel_name="x"} 1',
            'mysql_slave_status_slave_io_running{master_host="b",channel_name="y"} 0',
            "# HELP mysql_master_status_binlog_pos Position of the binlog.",
            "# TYPE mysql_master_status_binlog_pos gauge",
            "mysql_master_status_binlog_pos 4",
        ]

    def test_label_values_are_escaped(self) -> None:
        """Backslashes, quotes and newlines are escaped in label values."""
        sample = MetricSample(RUNNING, ValueType.UNTYPED, 1.0, ('a"b', "c\\d\ne"))
        body = encode_samples([sample]).splitlines()[-1]
        assert body == (
            'mysql_slave_status_slave_io_running{master_host="a\\"b",channel_name="c\\\\d\\ne"} 1'
        )

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.5, "0.5"),
            (-3.0, "-3"),
            (math.nan, "NaN"),
            (math.inf, "+Inf"),
            (-math.inf, "-Inf"),
            (1e20, "1e+20"),
        ],
    )
    def test_value_formatting(self, value: float, expected: str) -> None:
        sample = MetricSample(POS, ValueType.GAUGE, value)
        assert encode_samples([sample]).splitlines()[-1].split(" ")[-1] == expected


class TestEncodeCurrent:
    """Tests for encode_current()."""

    async def test_encodes_sink_contents(self) -> None:
        """Samples read from a sink encode like a plain list."""
        sink = InMemorySampleSink()
        sample = MetricSample(POS, ValueType.GAUGE, 155.0)
        await sink.write(sample)

        assert await encode_current(sink.read()) == encode_samples([sample])
