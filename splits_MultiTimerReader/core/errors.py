# splits_MultiTimerReader/core/errors.py
from __future__ import annotations


class FormatMismatch(Exception):
    """Bytes do not satisfy a parser's structural checks.

    Raised inside parsers only; the parser boundary turns it into "no match".
    """


class TruncatedData(FormatMismatch):
    """Ran out of bytes (or lines/nodes) while a record was still expected."""


class CorruptData(FormatMismatch):
    """Input is present but cannot be decoded as the expected record."""
