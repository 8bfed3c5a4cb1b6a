# splits_MultiTimerReader/core/normalize.py
from __future__ import annotations
import math
import re
from decimal import Decimal

from .errors import CorruptData

# [-][d.]hh:mm:ss[.fffffff] (.NET TimeSpan) and the shorter [[H:]M:]S[.f] clocks
_CLOCK_RE = re.compile(
    r"^(?P<sign>-)?"
    r"(?:(?P<days>\d+)\.(?=\d+:\d+:))?"
    r"(?:(?:(?P<hours>\d+):)?(?P<minutes>\d+):)?"
    r"(?P<seconds>\d+(?:\.\d+)?)$"
)

# timers write plain decimals; no exponents, no inf/nan
_SECONDS_RE = re.compile(r"^-?\d+(?:\.\d+)?$")

_EMPTY_MARKERS = ("", "-")


def parse_clock(text: str | None) -> Decimal | None:
    """
    Parse a clock-style time into seconds.
    Accepts 83.45, 1:23.45, 0:01:23.45, 00:01:23.4560000 and 1.02:03:04.5.
    Empty text or '-' means "no time" and yields None.
    """
    if text is None:
        return None
    s = str(text).strip()
    if s in _EMPTY_MARKERS:
        return None
    m = _CLOCK_RE.match(s)
    if m is None:
        raise CorruptData(f"not a clock time: {s!r}")
    total = Decimal(m.group("seconds"))
    if m.group("minutes"):
        total += Decimal(int(m.group("minutes")) * 60)
    if m.group("hours"):
        total += Decimal(int(m.group("hours")) * 3600)
    if m.group("days"):
        total += Decimal(int(m.group("days")) * 86400)
    return -total if m.group("sign") else total


def parse_seconds(text: str | None) -> Decimal | None:
    """Parse plain decimal seconds ('74.38'). Empty text yields None."""
    if text is None:
        return None
    s = str(text).strip()
    if s in _EMPTY_MARKERS:
        return None
    if _SECONDS_RE.match(s) is None:
        raise CorruptData(f"not a number of seconds: {s!r}")
    return Decimal(s)


def parse_count(text: str | None) -> int | None:
    """Parse a non-negative integer counter (attempts). Empty text yields None."""
    if text is None:
        return None
    s = str(text).strip()
    if not s:
        return None
    if not s.isdigit():
        raise CorruptData(f"not a non-negative integer: {s!r}")
    return int(s)


def millis_to_seconds(ms: int) -> Decimal:
    return Decimal(ms) / 1000


def nonzero(value: Decimal | None) -> Decimal | None:
    """Timers write 0 for "never recorded"."""
    if value is None or value == 0:
        return None
    return value


def to_float(value: Decimal | None) -> float | None:
    """Exact seconds to float; a value too large for a float is corrupt."""
    if value is None:
        return None
    out = float(value)
    if not math.isfinite(out):
        raise CorruptData(f"time out of range: {value}")
    return out
