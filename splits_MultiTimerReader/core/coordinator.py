# splits_MultiTimerReader/core/coordinator.py
from __future__ import annotations
import logging
from dataclasses import replace

from .cache import RawSplitFile
from .metrics import with_aggregates
from .model import EMPTY_RESULT, ParseMode, ProgramId, RunResult
from .registry import DEFAULT_REGISTRY, FormatRegistry

_LOG = logging.getLogger(__name__)


class ParseCoordinator:
    """
    Detects the format of a split file and parses it, memoizing per mode.

    Order of operations for parse():
      1) a cached result for the requested mode is returned untouched
      2) a known_program that the registry holds is tried alone (no fallback);
         otherwise every parser is tried in registry order
      3) the first parser returning a result wins; totals are derived, the
         result is cached in the mode's slot and returned
      4) no match -> EMPTY_RESULT, not cached, so a later call retries
    Parser faults (anything that is not a format mismatch) propagate.
    """

    def __init__(self, registry: FormatRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def parse(self, split_file: RawSplitFile | bytes,
              mode: ParseMode = ParseMode.FAST,
              known_program: ProgramId | str | None = None) -> RunResult:
        if not isinstance(split_file, RawSplitFile):
            split_file = RawSplitFile(split_file)

        cached = split_file.cache.get(mode)
        if cached is not None:
            return cached

        program = ProgramId.lookup(known_program)
        if program is not None and program in self.registry:
            candidates = [self.registry.get(program)]
        else:
            if known_program is not None:
                _LOG.debug("ignoring unknown program hint %r", known_program)
            candidates = list(self.registry)

        depth = mode.decode_depth
        for parser in candidates:
            result = parser.parse(split_file.data, depth)
            if result is None:
                continue
            result = with_aggregates(replace(result, program=parser.program))
            split_file.cache.store(mode, result)
            _LOG.debug("parsed %s as %s (%s, %d segments)",
                       split_file.digest or f"{len(split_file)} bytes",
                       parser.program.key, mode.value, len(result.segments))
            return result

        _LOG.info("no supported format matched %s", split_file.digest or f"{len(split_file)} bytes")
        return EMPTY_RESULT

    def parses(self, split_file: RawSplitFile | bytes,
               mode: ParseMode = ParseMode.FAST,
               known_program: ProgramId | str | None = None) -> bool:
        return self.parse(split_file, mode, known_program).matched
