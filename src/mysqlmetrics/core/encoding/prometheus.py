"""Prometheus text exposition format encoder for metric samples."""

import math
from collections.abc import AsyncIterable, Iterable

from mysqlmetrics.core.models import MetricSample


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _format_value(value: float) -> str:
    """Format a sample value as Prometheus expects it.

    Integral values are written without a fractional part; NaN and the
    infinities use the spellings of the exposition format.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _format_sample(sample: MetricSample) -> str:
    if not sample.label_values:
        return f"{sample.name} {_format_value(sample.value)}"
    labels = ",".join(
        f'{name}="{_escape_label_value(value)}"'
        for name, value in zip(
            sample.descriptor.label_names, sample.label_values, strict=True
        )
    )
    return f"{sample.name}{{{labels}}} {_format_value(sample.value)}"


def encode_samples(samples: Iterable[MetricSample]) -> str:
    """Encode samples to the Prometheus text format (version 0.0.4).

    Samples are grouped into families by fully qualified name. Families
    appear in the order their first sample was seen; HELP and TYPE come
    from that first sample.

    Args:
        samples: Samples of one scrape cycle.

    Returns:
        Exposition text, newline terminated. Empty string if no samples.
    """
    families: dict[str, list[MetricSample]] = {}
    for sample in samples:
        families.setdefault(sample.name, []).append(sample)

    lines: list[str] = []
    for name, members in families.items():
        first = members[0]
        lines.append(f"# HELP {name} {_escape_help(first.descriptor.help)}")
        lines.append(f"# TYPE {name} {first.value_type.value}")
        lines.extend(_format_sample(sample) for sample in members)

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


async def encode_current(samples: AsyncIterable[MetricSample]) -> str:
    """Encode samples from an async iterable, e.g. InMemorySampleSink.read()."""
    return encode_samples([sample async for sample in samples])
