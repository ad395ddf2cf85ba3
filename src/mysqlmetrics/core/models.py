"""Core domain models for status scraping."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

RawValue = bytes | None


class ValueType(Enum):
    """Metric type of an emitted sample."""

    GAUGE = "gauge"
    COUNTER = "counter"
    UNTYPED = "untyped"


@dataclass(frozen=True)
class TransactionRange:
    """An inclusive range of transaction numbers from one origin server.

    Attributes:
        start: First transaction number of the range.
        end: Last transaction number of the range.
    """

    start: int
    end: int


@dataclass(frozen=True)
class TransactionSet:
    """All transaction ranges recorded for one origin server.

    Attributes:
        server_id: Origin server identifier (usually a UUID), kept verbatim.
        first_transaction: Start of the first range.
        last_transaction: End of the last range.
        ranges: Ranges in the order they appeared in the source text.
    """

    server_id: str
    first_transaction: int
    last_transaction: int
    ranges: tuple[TransactionRange, ...] = ()


@dataclass(frozen=True)
class MetricDescriptor:
    """Identity of one metric family.

    Attributes:
        namespace: Leading name component (e.g. "mysql").
        subsystem: Middle name component (e.g. "slave_status").
        name: Trailing name component.
        help: Help text.
        label_names: Label names every sample must supply, in order.
    """

    namespace: str
    subsystem: str
    name: str
    help: str
    label_names: tuple[str, ...] = ()

    @property
    def fq_name(self) -> str:
        """Fully qualified name: non-empty components joined by underscores."""
        return "_".join(p for p in (self.namespace, self.subsystem, self.name) if p)


@dataclass(frozen=True)
class MetricSample:
    """A single typed, labelled measurement.

    Attributes:
        descriptor: Metric family the sample belongs to.
        value_type: Gauge, counter or untyped.
        value: The metric value.
        label_values: Values matching descriptor.label_names by position.

    Raises:
        ValueError: If the number of label values does not match the
            descriptor's label names.
    """

    descriptor: MetricDescriptor
    value_type: ValueType
    value: float
    label_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        expected = len(self.descriptor.label_names)
        if len(self.label_values) != expected:
            raise ValueError(
                f"{self.descriptor.fq_name}: expected {expected} label values, "
                f"got {len(self.label_values)}"
            )

    @property
    def name(self) -> str:
        return self.descriptor.fq_name

    @property
    def labels(self) -> dict[str, str]:
        return dict(zip(self.descriptor.label_names, self.label_values, strict=True))


class Row(Mapping[str, RawValue]):
    """One result row as an ordered, read-only mapping of column to raw value.

    Lookups of absent columns through value() or text() return a sentinel
    rather than raising, because column sets differ between server versions.
    """

    __slots__ = ("_values",)

    def __init__(self, columns: tuple[str, ...], values: tuple[RawValue, ...]) -> None:
        if len(columns) != len(values):
            raise ValueError(
                f"row has {len(values)} values for {len(columns)} columns"
            )
        self._values: dict[str, RawValue] = dict(zip(columns, values, strict=True))

    def __getitem__(self, column: str) -> RawValue:
        return self._values[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Row({self._values!r})"

    def value(self, column: str) -> RawValue:
        """Return the raw value of column, or None if absent or NULL."""
        return self._values.get(column)

    def text(self, column: str) -> str:
        """Return the value of column decoded as text; "" if absent or NULL."""
        raw = self._values.get(column)
        if raw is None:
            return ""
        return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ResultSet:
    """Columns and raw rows returned by one query.

    Attributes:
        columns: Column names in result order.
        rows: Raw row values; bytes, or None for SQL NULL.
    """

    columns: tuple[str, ...]
    rows: tuple[tuple[RawValue, ...], ...] = field(default_factory=tuple)

    def records(self) -> Iterator[Row]:
        """Yield one Row per result row."""
        for values in self.rows:
            yield Row(self.columns, values)
