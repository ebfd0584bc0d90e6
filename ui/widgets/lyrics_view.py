# ui/widgets/lyrics_view.py
from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QFont, QColor, QPaintEvent, QFontMetricsF
from PySide6.QtCore import Qt, QTimer, QPointF, Signal

from services.typing_session import BACKSPACE


def _pick(settings, attr, default):
    return getattr(settings, attr, default)


class LyricsView(QWidget):
    """
    Shows the reference lines one under the other and scrolls so the line
    being typed sits in the vertical center:
      - lines above the current one are muted
      - the current line uses the accent color
      - the offset eases toward its target instead of jumping
    Keys are forwarded as characters through `charTyped`, backspace as "\\b".
    """

    charTyped = Signal(str)

    def __init__(self, settings, parent=None):
        super().__init__(parent)
        self.settings = settings
        self.setFocusPolicy(Qt.StrongFocus)

        self._font = QFont(_pick(settings, "font_family", "Arial"), _pick(settings, "font_size", 48))
        self._line_spacing = float(_pick(settings, "line_spacing", 100))
        self._pad_x = 32

        self._lines: tuple = ()
        self._current_line = 0

        # vertical offset in lines, eased toward the current line
        self._offset = 0.0
        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(16)
        self._anim_timer.timeout.connect(self._anim_tick)
        self._anim_timer.start()

    # ---------- state ----------
    def set_lines(self, lines):
        self._lines = tuple(lines)
        self._current_line = 0
        self._offset = 0.0
        self.update()

    def set_current_line(self, line: int):
        self._current_line = max(0, line)

    # ---------- animation ----------
    def _anim_tick(self):
        target = float(self._current_line)
        if abs(self._offset - target) < 0.005:
            if self._offset == target:
                return
            self._offset = target
        else:
            self._offset += (target - self._offset) * 0.22
        self.update()

    # ---------- painting ----------
    def paintEvent(self, e: QPaintEvent):
        bg = _pick(self.settings, "background", "#0f1115")
        primary = _pick(self.settings, "primary", "#e5e7eb")
        muted = _pick(self.settings, "secondary", "#6b7280")
        accent = _pick(self.settings, "accent", "#eab308")

        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)
        p.fillRect(self.rect(), QColor(bg))
        p.setFont(self._font)
        fm = QFontMetricsF(self._font)

        center_y = self.height() / 2.0
        for index, line in enumerate(self._lines):
            baseline = center_y + (index - self._offset) * self._line_spacing + fm.ascent() / 2.0
            # cull
            if baseline < -self._line_spacing or baseline > self.height() + self._line_spacing:
                continue
            if index < self._current_line:
                color = muted
            elif index == self._current_line:
                color = accent
            else:
                color = primary
            p.setPen(QColor(color))
            x = max(self._pad_x, (self.width() - fm.horizontalAdvance(line)) / 2.0)
            p.drawText(QPointF(x, baseline), line)
        p.end()

    # ---------- input ----------
    def keyPressEvent(self, ev):
        ch = self._normalize_key(ev)
        if ch is None:
            return super().keyPressEvent(ev)
        self.charTyped.emit(ch)
        ev.accept()

    def _normalize_key(self, ev):
        if ev.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return None
        key = ev.key()
        t = ev.text()
        if key == Qt.Key_Backspace:
            return BACKSPACE
        if key in (Qt.Key_Return, Qt.Key_Enter):
            return "\n"
        if t and t >= " ":
            return t
        return None
