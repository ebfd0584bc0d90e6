# utils/file_handler.py
from __future__ import annotations
import logging
from pathlib import Path

from app.errors import ReferenceLoadError

log = logging.getLogger(__name__)

_FALLBACK = (
    "Twinkle, twinkle, little star,\n"
    "How I wonder what you are!\n"
    "Up above the world so high,\n"
    "Like a diamond in the sky.\n"
    "\n"
    "When the blazing sun is gone,\n"
    "When he nothing shines upon,\n"
    "Then you show your little light,\n"
    "Twinkle, twinkle, all the night.\n"
)


def read_reference_file(path) -> str:
    """Read a UTF-8 reference text; line endings are kept as they are."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReferenceLoadError(f"Cannot read {path}: {e}") from e


def load_default_text(path=None) -> str:
    """The configured default text, or the built-in one when it is missing."""
    if path:
        p = Path(path)
        if p.exists():
            try:
                return read_reference_file(p)
            except ReferenceLoadError as e:
                log.warning("Falling back to the built-in text: %s", e)
    return _FALLBACK
