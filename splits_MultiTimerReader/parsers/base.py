# splits_MultiTimerReader/parsers/base.py
from __future__ import annotations
import logging
import struct
import xml.etree.ElementTree as ET
from decimal import DecimalException
from typing import Protocol, runtime_checkable

from ..core.errors import FormatMismatch
from ..core.model import ParseMode, ProgramId, RunResult

_LOG = logging.getLogger(__name__)

# Everything that means "these bytes are not (a readable) <format>".
# Anything else (MemoryError, OSError, ...) is a fault and propagates.
MISMATCH_ERRORS: tuple[type[BaseException], ...] = (
    FormatMismatch,
    ValueError,            # incl. UnicodeDecodeError and json.JSONDecodeError
    struct.error,
    ET.ParseError,
    DecimalException,      # InvalidOperation, Overflow, ...
    KeyError,
    IndexError,
    TypeError,
)


@runtime_checkable
class FormatParser(Protocol):
    program: ProgramId

    def parse(self, data: bytes, mode: ParseMode) -> RunResult | None:
        """Return the decoded run, or None when the bytes are not this format."""
        ...


class SplitParser:
    """
    Base class for the built-in parsers. Subclasses set ``program`` and
    implement ``_decode``; raising any of MISMATCH_ERRORS there means
    "not this format".
    """

    program: ProgramId

    def parse(self, data: bytes, mode: ParseMode = ParseMode.FULL) -> RunResult | None:
        try:
            return self._decode(data, mode.decode_depth)
        except MISMATCH_ERRORS as e:
            _LOG.debug("%s: no match (%s: %s)", self.program.key, type(e).__name__, e)
            return None

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def decode_text(data: bytes) -> str:
    """UTF-8 (BOM tolerated); anything else is not a text split file."""
    text = data.decode("utf-8-sig")
    if "\x00" in text:
        raise FormatMismatch("NUL byte in text file")
    return text
