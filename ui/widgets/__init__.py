from .lyrics_view import LyricsView

__all__ = ["LyricsView"]
