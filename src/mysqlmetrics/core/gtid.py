"""Parser for global transaction identifier (GTID) sets.

A GTID set as reported by ``Executed_Gtid_Set`` looks like::

    3E11FA47-71CA-11E1-9E33-C80AA9429562:1-3:11:47-49,
    2174B383-5441-11E8-B90A-C80AA9429562:1-19

Each comma separated entry is ``server_id:range(:range)*`` and each range is
either ``N`` or ``N-M``.
"""

import re

from mysqlmetrics.core.errors import GTIDParseError
from mysqlmetrics.core.models import TransactionRange, TransactionSet

_NUMERAL_RE = re.compile(r"[0-9]+")
_INT64_MAX = 2**63 - 1


def _parse_numeral(text: str) -> int:
    if not _NUMERAL_RE.fullmatch(text):
        raise GTIDParseError(f"parse {text!r} to int64 failed: not a base 10 numeral")
    value = int(text)
    if value > _INT64_MAX:
        raise GTIDParseError(f"parse {text!r} to int64 failed: value out of range")
    return value


def _parse_range(item: str, part: str) -> TransactionRange:
    bounds = part.split("-")
    if len(bounds) > 2:
        raise GTIDParseError(
            f"can not parse gtid: {item}, cut by '-' more than 2 items"
        )
    start = _parse_numeral(bounds[0])
    end = start if len(bounds) == 1 else _parse_numeral(bounds[1])
    return TransactionRange(start=start, end=end)


def parse_gtid_set(text: str) -> list[TransactionSet]:
    """Parse a GTID set string into one TransactionSet per origin server.

    Ranges are kept in source order; overlapping or decreasing ranges are
    accepted as they are.

    Args:
        text: GTID set as reported by the server.

    Returns:
        Transaction sets in the order their entries appear in text.

    Raises:
        GTIDParseError: If any entry is malformed. Nothing is returned for
            the entries that did parse.
    """
    result: list[TransactionSet] = []
    for raw_item in text.split(","):
        item = raw_item.strip()
        parts = item.split(":")
        if len(parts) < 2:
            raise GTIDParseError(
                f"can not parse gtid: {item}, transaction item is too little"
            )
        ranges = tuple(_parse_range(item, part) for part in parts[1:])
        result.append(
            TransactionSet(
                server_id=parts[0],
                first_transaction=ranges[0].start,
                last_transaction=ranges[-1].end,
                ranges=ranges,
            )
        )
    return result
