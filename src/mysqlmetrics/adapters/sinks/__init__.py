"""Sample sink adapters implementing SampleSinkPort."""

from mysqlmetrics.adapters.sinks.in_memory import InMemorySampleSink

__all__ = [
    "InMemorySampleSink",
]
