# services/typing_session.py
from __future__ import annotations
import logging
from typing import Tuple

from app.errors import EmptyReferenceError
from services.incremental_levenshtein import DistanceTracker, PositionTracker
from services.reference_text import (
    SPACE,
    NormalizedReference,
    normalize_char,
    normalize_reference,
)

log = logging.getLogger(__name__)

BACKSPACE = "\b"
DEFAULT_PRECISION = 5


class TypingSession:
    """
    Typing progress against one reference text.

    Input goes through the same folding as the reference (lowercase, one
    space for any run of spaces/punctuation). A space is only committed once
    the next real character arrives, so trailing spaces cost nothing and a
    backspace right after them erases them for free.
    """

    def __init__(self, reference: NormalizedReference, precision: int = DEFAULT_PRECISION):
        if precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}")
        self.reference = reference
        self._precision = int(precision)
        self._typed_text: list[str] = []
        self.pending_space = False
        self._score = DistanceTracker(reference.normalized_text)
        self._position = PositionTracker(reference.normalized_text)

    @classmethod
    def from_text(cls, text: str, precision: int = DEFAULT_PRECISION) -> "TypingSession":
        return cls(normalize_reference(text), precision=precision)

    # ---------- input ----------
    def add_char(self, ch: str):
        if ch == BACKSPACE:
            if self.pending_space:
                self.pending_space = False
            elif self._typed_text:
                self._pop_char()
            else:
                log.debug("Backspace ignored: nothing typed yet")
            return

        normalized = normalize_char(ch)
        if normalized == SPACE:
            self.pending_space = True
            return
        if self.pending_space:
            self._push(SPACE)
            self.pending_space = False
        self._push(normalized)

    def add_text(self, text: str):
        for ch in text:
            self.add_char(ch)

    def _push(self, text: str):
        self._typed_text.extend(text)
        self._score.append_str(text)
        self._position.append_str(text)

    def _pop_char(self):
        self._typed_text.pop()
        self._score.undo()
        self._position.undo()

    # ---------- readouts ----------
    @property
    def typed_text(self) -> str:
        return "".join(self._typed_text)

    @property
    def lines(self) -> Tuple[str, ...]:
        return self.reference.lines

    @property
    def precision(self) -> int:
        return self._precision

    def correctness(self) -> float:
        """Share of the reference that is typed right, in [0, 1]."""
        total = len(self.reference.normalized_text)
        if total == 0:
            if self._typed_text:
                raise EmptyReferenceError("correctness of typed text against an empty reference")
            return 1.0
        valid = max(0, total - self._score.distance())
        return valid / total

    def position(self) -> int:
        """Estimated position in the normalized reference."""
        return self._position.position(self._precision)

    def position_in_source_text(self) -> int:
        if self.reference.is_empty:
            return 0
        index = self.position()
        offsets = self.reference.index_to_source_offset
        if index < len(offsets):
            return offsets[index]
        log.warning(
            "Position %d is past the last mapped character (%d); using text length %d",
            index, len(offsets), self.reference.source_length,
        )
        return self.reference.source_length

    def position_in_source_lines(self) -> int:
        if self.reference.is_empty:
            return 0
        index = self.position()
        line_map = self.reference.index_to_line
        if index < len(line_map):
            return line_map[index]
        log.warning(
            "Position %d is past the last mapped character (%d); using line count %d",
            index, len(line_map), self.reference.line_count,
        )
        return self.reference.line_count

    def source_text_prefix(self) -> str:
        """The raw reference text the user has typed along so far."""
        return self.reference.source_text[: self.position_in_source_text()]
