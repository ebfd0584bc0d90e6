# services/reference_text.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

# characters typed or read as a plain space
IGNORED_CHARACTERS = frozenset({"\n", ".", ",", "?", "!", ";", ":", "\r"})
SPACE = " "


@dataclass(frozen=True)
class NormalizedReference:
    source_text: str
    normalized_text: str
    index_to_source_offset: Tuple[int, ...]
    index_to_line: Tuple[int, ...]
    lines: Tuple[str, ...]

    @property
    def source_length(self) -> int:
        return len(self.source_text)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.normalized_text


def normalize_char(char: str) -> str:
    """Return " " for spaces and ignored punctuation, else the lowercase form."""
    if char == SPACE or char in IGNORED_CHARACTERS:
        return SPACE
    return char.lower()


def split_lines(text: str) -> List[str]:
    """
    Split on "\\n" keeping empty lines verbatim.
    A trailing "\\r" is dropped from each line and a trailing empty
    segment (text ending with a line break) is not reported.
    """
    lines = [ln[:-1] if ln.endswith("\r") else ln for ln in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def normalize_reference(text: str) -> NormalizedReference:
    """
    Build the scoring form of a reference text:
      - lowercase
      - spaces, line breaks and . , ? ! ; : folded into single spaces
      - no leading or trailing space
    and, per normalized character, the offset and line it came from.
    A collapsed space points at the first character of the run it replaces.
    """
    out_chars: list[str] = []
    offsets: list[int] = []
    line_numbers: list[int] = []

    line = 0
    # (offset, line) of the first space of the current run
    pending_space: tuple[int, int] | None = None
    for offset, ch in enumerate(text):
        normalized = normalize_char(ch)
        if normalized == SPACE:
            if pending_space is None:
                pending_space = (offset, line)
        else:
            if pending_space is not None and out_chars:
                out_chars.append(SPACE)
                offsets.append(pending_space[0])
                line_numbers.append(pending_space[1])
            pending_space = None
            # lower() can expand one character into several
            for produced in normalized:
                out_chars.append(produced)
                offsets.append(offset)
                line_numbers.append(line)
        if ch == "\n":
            line += 1

    return NormalizedReference(
        source_text=text,
        normalized_text="".join(out_chars),
        index_to_source_offset=tuple(offsets),
        index_to_line=tuple(line_numbers),
        lines=tuple(split_lines(text)),
    )
