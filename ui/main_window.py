# ui/main_window.py
from __future__ import annotations
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFileDialog, QMessageBox, QPushButton, QLabel
)
from PySide6.QtCore import Qt, QTimer

from app.settings import Settings
from core.threads import ReferenceLoadWorker, Workers
from services.reference_text import NormalizedReference, normalize_reference
from services.typing_session import BACKSPACE, TypingSession
from ui.widgets import LyricsView
from utils.file_handler import load_default_text

log = logging.getLogger(__name__)

# characters of typed text shown under the lyrics
_TYPED_TAIL = 80


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings, initial_path: str | None = None):
        super().__init__()
        self.settings = settings
        self.setWindowTitle("Typealong")
        self.resize(1200, 720)
        self.session: TypingSession | None = None
        self._dirty = False

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 16, 16, 16)
        root_v.setSpacing(16)
        self._build_top_bar(root_v)

        self.lyrics = LyricsView(settings, self)
        self.lyrics.charTyped.connect(self._on_char_typed)
        root_v.addWidget(self.lyrics, 1)

        self.lblTyped = QLabel("", self)
        self.lblTyped.setObjectName("lblTyped")
        self.lblTyped.setAlignment(Qt.AlignCenter)
        self.lblTyped.setTextFormat(Qt.PlainText)
        root_v.addWidget(self.lblTyped)

        self.setCentralWidget(root)
        self.setStyleSheet(
            f"""
            QWidget {{ background: {settings.background}; color: {settings.primary}; }}
            QLabel#lblTyped, QLabel#lblLine {{ color: {settings.secondary}; }}
            QLabel#lblScore {{ color: {settings.accent}; }}
            QPushButton#TopBtn {{
                background: transparent;
                border: 1px solid rgba(255,255,255,0.10);
                border-radius: 9px;
                padding: 6px 12px;
            }}
            """
        )

        # host side of the frame loop: poll the session only after new input
        self._frame = QTimer(self)
        self._frame.setInterval(settings.frame_interval_ms)
        self._frame.timeout.connect(self._on_frame)
        self._frame.start()

        if initial_path:
            self._load_path(initial_path)
        else:
            self.start_session(normalize_reference(load_default_text(settings.default_text_path)))
        self.lyrics.setFocus()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 8, 14, 8)
        h.setSpacing(10)

        btn_load = QPushButton("Load text…", bar)
        btn_load.clicked.connect(self._on_load)
        btn_load.setObjectName("TopBtn")
        btn_load.setFocusPolicy(Qt.NoFocus)
        h.addWidget(btn_load)

        btn_reset = QPushButton("Restart", bar)
        btn_reset.clicked.connect(self._restart)
        btn_reset.setObjectName("TopBtn")
        btn_reset.setFocusPolicy(Qt.NoFocus)
        h.addWidget(btn_reset)

        h.addStretch(1)

        self.lblLine = QLabel("line 1", bar)
        self.lblLine.setObjectName("lblLine")
        h.addWidget(self.lblLine)

        self.lblScore = QLabel("100.0 %", bar)
        self.lblScore.setObjectName("lblScore")
        h.addWidget(self.lblScore)

        parent_layout.addWidget(bar)

    # ---------------- Session ----------------
    def start_session(self, reference: NormalizedReference):
        self.session = TypingSession(reference, precision=self.settings.precision)
        self.lyrics.set_lines(reference.lines)
        self._dirty = True
        log.info(
            "Session started: %d lines, %d scoring characters",
            reference.line_count, len(reference.normalized_text),
        )

    def _restart(self):
        if self.session is not None:
            self.start_session(self.session.reference)
        self.lyrics.setFocus()

    def _on_char_typed(self, ch: str):
        if self.session is None:
            return
        if self.session.reference.is_empty and ch != BACKSPACE:
            return  # nothing to type along
        self.session.add_char(ch)
        self._dirty = True

    def _on_frame(self):
        if not self._dirty or self.session is None:
            return
        self._dirty = False
        s = self.session
        line = s.position_in_source_lines()
        score = s.correctness()
        self.lyrics.set_current_line(line)
        self.lblLine.setText(f"line {min(line, max(0, s.reference.line_count - 1)) + 1}")
        self.lblScore.setText(f"{score * 100.0:0.1f} %")
        self.lblTyped.setText(s.typed_text[-_TYPED_TAIL:])
        log.debug("typed=%r correctness=%.3f", s.typed_text, score)
        if log.isEnabledFor(logging.DEBUG):
            log.debug("reference so far=%r", s.source_text_prefix())

    # ---------------- Text Loading ----------------
    def _on_load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open text", "", "Text (*.txt)")
        if not path:
            return
        self._load_path(path)

    def _load_path(self, path: str):
        worker = ReferenceLoadWorker(path)
        worker.signals.loaded.connect(self._on_loaded_reference)
        worker.signals.failed.connect(self._on_load_failed)
        Workers.pool.start(worker)

    def _on_loaded_reference(self, reference):
        self.start_session(reference)
        self.lyrics.setFocus()

    def _on_load_failed(self, msg):
        log.warning("Loading reference text failed: %s", msg)
        QMessageBox.warning(self, "Load Text", msg)
        if self.session is None:
            self.start_session(normalize_reference(load_default_text(self.settings.default_text_path)))
