"""In-memory sample sink."""

from collections.abc import AsyncIterable

from mysqlmetrics.core.models import MetricSample


class InMemorySampleSink:
    """In-memory implementation of SampleSinkPort.

    Stores metric samples in a list. Suitable for testing and for callers
    that render one cycle's samples right after collecting them.
    """

    def __init__(self) -> None:
        self._samples: list[MetricSample] = []

    async def write(self, sample: MetricSample) -> None:
        """Write a metric sample."""
        self._samples.append(sample)

    async def read(self) -> AsyncIterable[MetricSample]:
        """Yield the stored samples in write order."""
        for sample in list(self._samples):
            yield sample

    @property
    def samples(self) -> list[MetricSample]:
        """Snapshot of the stored samples."""
        return list(self._samples)

    def find(self, name: str) -> list[MetricSample]:
        """Return the stored samples whose fully qualified name is name."""
        return [s for s in self._samples if s.name == name]

    def clear(self) -> None:
        """Drop every stored sample."""
        self._samples.clear()
