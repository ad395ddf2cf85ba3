"""Normalization of untyped status text into metric values.

Status commands return every column as text. The helpers here decide whether
a value can be represented as a number and which number that is. They never
raise for unrecognized input; they report it through the returned ``ok`` flag
so a single odd column never aborts a scrape.
"""

import calendar
import datetime
import re

from mysqlmetrics.core.errors import LogFileSequenceError

_TRUE_WORDS = frozenset({"yes", "on", "primary"})
# "connecting" is what Slave_IO_Running reports while not yet running;
# wsrep_cluster_status reports "non-Primary" or "Disconnected".
_FALSE_WORDS = frozenset(
    {"no", "off", "disabled", "connecting", "non-primary", "disconnected"}
)

_MONTHS = {
    name: number
    for number, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun",
         "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}

# "Jan 02 15:04:05 2006 MST", e.g. Ssl_server_not_after.
_MONTH_DAY_RE = re.compile(
    r"(?P<month>[A-Za-z]{3}) (?P<day>[0-9]{2}) "
    r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})(?:\.[0-9]+)? "
    r"(?P<year>[0-9]{4}) "
    r"(?P<zone>UTC|GMT(?:[+-][0-9]{1,2})?|[A-Z]{3}|[A-Z]{3,4}T)"
)

# "2006-01-02 15:04:05", e.g. Last_IO_Error_Timestamp.
_ISO_RE = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2}) "
    r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})(?:\.[0-9]+)?"
)

# Sequence numbered names such as "mysql-bin.000042".
_SEQUENCE_SUFFIX_RE = re.compile(r".+\.(?P<sequence>[0-9]+)")


def _as_text(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def _epoch(
    year: int, month: int, day: int, hour: int, minute: int, second: int
) -> int | None:
    try:
        datetime.datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None
    return calendar.timegm((year, month, day, hour, minute, second, 0, 0, 0))


def _parse_month_day_time(text: str) -> int | None:
    match = _MONTH_DAY_RE.fullmatch(text)
    if match is None:
        return None
    month = _MONTHS.get(match["month"].lower())
    if month is None:
        return None
    return _epoch(
        int(match["year"]),
        month,
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
    )


def _parse_iso_time(text: str) -> int | None:
    match = _ISO_RE.fullmatch(text)
    if match is None:
        return None
    return _epoch(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
    )


def _parse_float(text: str) -> float | None:
    # float() also takes surrounding whitespace, digit separators and
    # non-ASCII digits, none of which are numerals in status output.
    if not text or not text.isascii() or "_" in text or text != text.strip():
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_status(raw: bytes | str) -> tuple[float, bool]:
    """Convert a status value into a number.

    Tried in order: boolean-like keywords, "Jan 02 15:04:05 2006 MST"
    timestamps, "2006-01-02 15:04:05" timestamps, the dotted sequence suffix
    of names like "mysql-bin.000042", and finally a plain float. Timestamps
    become Unix epoch seconds (UTC).

    The suffix rule only applies to text that is not itself a numeral, so
    "0.5" stays 0.5 while "mysql-bin.000042" yields 42. The zone of a
    month-day timestamp is not applied: "GMT+2" and "MST" both read the
    wall clock time as UTC.

    Args:
        raw: Raw column value.

    Returns:
        Tuple of (value, ok). When ok is False the value is meaningless and
        no sample should be emitted.
    """
    text = _as_text(raw)

    word = text.lower()
    if word in _TRUE_WORDS:
        return 1.0, True
    if word in _FALSE_WORDS:
        return 0.0, True

    timestamp = _parse_month_day_time(text)
    if timestamp is None:
        timestamp = _parse_iso_time(text)
    if timestamp is not None:
        return float(timestamp), True

    number = _parse_float(text)
    if number is not None:
        return number, True
    match = _SEQUENCE_SUFFIX_RE.fullmatch(text)
    if match is not None:
        return float(int(match["sequence"])), True
    return 0.0, False


def parse_privilege(raw: bytes | str) -> tuple[float, bool]:
    """Convert a Y/N privilege flag into 1 or 0.

    Returns:
        (1, True) for "Y", (0, True) for "N", (-1, False) otherwise.
    """
    text = _as_text(raw)
    if text == "Y":
        return 1.0, True
    if text == "N":
        return 0.0, True
    return -1.0, False


def parse_log_sequence(name: str) -> float:
    """Return the sequence number of a log file name such as "binlog.000006".

    Raises:
        LogFileSequenceError: If name has no dot or its final dotted segment
            is not an integer.
    """
    segments = name.split(".")
    if len(segments) < 2:
        raise LogFileSequenceError(f"split {name!r} by '.' item not enough")
    suffix = segments[-1]
    if not suffix.isascii() or not suffix.isdigit():
        raise LogFileSequenceError(
            f"log file {name!r} does not end in a numeric sequence"
        )
    return float(int(suffix))
