# services/incremental_levenshtein.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional

from app.errors import EmptyUndoError, InvalidModeError

# a full copy of the row is kept every CHECKPOINT_INTERVAL typed characters
CHECKPOINT_INTERVAL = 10


class AlignmentMode(Enum):
    EDIT_DISTANCE = "edit_distance"
    TRACKING = "tracking"


class AlignmentMatrixEngine:
    """
    Single-row Wagner-Fischer over a fixed reference, extended one typed
    character at a time.

    EDIT_DISTANCE charges 1 for skipping a reference character, TRACKING
    charges 0, which makes the last row say *where* the typed text currently
    lines up instead of *how far* it is from the whole reference.

    undo() rebuilds from the closest checkpoint, so it never replays more than
    CHECKPOINT_INTERVAL characters.
    """

    def __init__(self, reference: str, mode: AlignmentMode):
        self._reference = reference
        self._mode = mode
        self._typed: List[str] = []
        self._row: List[int] = self._initial_row()
        self._checkpoints: List[Optional[List[int]]] = []

    def _initial_row(self) -> List[int]:
        return list(range(len(self._reference) + 1))

    # ---------- read-only views ----------
    @property
    def mode(self) -> AlignmentMode:
        return self._mode

    @property
    def reference(self) -> str:
        return self._reference

    @property
    def typed(self) -> str:
        return "".join(self._typed)

    @property
    def row(self) -> List[int]:
        return list(self._row)

    def __len__(self) -> int:
        return len(self._typed)

    # ---------- mutation ----------
    def append(self, char: str):
        self._typed.append(char)
        row = self._row
        reference = self._reference
        insertion_cost = 1 if self._mode is AlignmentMode.EDIT_DISTANCE else 0

        row[0] = len(self._typed)
        last_diagonal = len(self._typed) - 1
        for y in range(1, len(reference) + 1):
            old_diagonal = row[y]
            substitution_cost = 0 if reference[y - 1] == char else 1
            row[y] = min(
                row[y] + 1,
                row[y - 1] + insertion_cost,
                last_diagonal + substitution_cost,
            )
            last_diagonal = old_diagonal

        if len(self._typed) % CHECKPOINT_INTERVAL == 0:
            self._checkpoints.append(list(row))
        else:
            self._checkpoints.append(None)

    def append_str(self, text: str):
        for char in text:
            self.append(char)

    def undo(self):
        """Forget the last appended character."""
        if not self._typed:
            raise EmptyUndoError("undo() called with nothing typed")

        self._checkpoints.pop()
        self._typed.pop()

        to_replay: List[str] = []
        restored = False
        while self._checkpoints:
            snapshot = self._checkpoints[-1]
            if snapshot is not None:
                # the snapshot still matches typed[:len(checkpoints)], keep it
                self._row = list(snapshot)
                restored = True
                break
            self._checkpoints.pop()
            to_replay.append(self._typed.pop())

        if not restored:
            self._row = self._initial_row()

        for char in reversed(to_replay):
            self.append(char)

    # ---------- queries ----------
    def distance(self) -> int:
        if self._mode is not AlignmentMode.EDIT_DISTANCE:
            raise InvalidModeError(
                f"an engine built for {self._mode.value} was asked for a distance"
            )
        return self._row[len(self._reference)]

    def position(self, tolerance: int) -> int:
        """
        Estimate how far into the reference the typed text reaches.

        Walks the row backwards and lets up to `tolerance` value changes pass
        as noise; the next change marks where the typed text stops matching.
        """
        if self._mode is not AlignmentMode.TRACKING:
            raise InvalidModeError(
                f"an engine built for {self._mode.value} was asked for a position"
            )
        if len(self._typed) <= tolerance:
            return len(self._typed)

        row = self._row
        boundary = 0
        current = row[-1]
        budget = tolerance
        for index in range(len(row) - 2, -1, -1):
            value = row[index]
            if value == current:
                continue
            if budget > 0:
                budget -= 1
                current = value
            else:
                boundary = index
                break
        return boundary + tolerance + 1


class DistanceTracker:
    def __init__(self, reference: str):
        self._engine = AlignmentMatrixEngine(reference, AlignmentMode.EDIT_DISTANCE)

    @property
    def typed(self) -> str:
        return self._engine.typed

    def __len__(self) -> int:
        return len(self._engine)

    def append(self, char: str):
        self._engine.append(char)

    def append_str(self, text: str):
        self._engine.append_str(text)

    def undo(self):
        self._engine.undo()

    def distance(self) -> int:
        return self._engine.distance()


class PositionTracker:
    def __init__(self, reference: str):
        self._engine = AlignmentMatrixEngine(reference, AlignmentMode.TRACKING)

    @property
    def typed(self) -> str:
        return self._engine.typed

    def __len__(self) -> int:
        return len(self._engine)

    def append(self, char: str):
        self._engine.append(char)

    def append_str(self, text: str):
        self._engine.append_str(text)

    def undo(self):
        self._engine.undo()

    def position(self, tolerance: int) -> int:
        return self._engine.position(tolerance)
