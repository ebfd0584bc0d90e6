# core/threads.py
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from app.errors import ReferenceLoadError
from services.reference_text import normalize_reference
from utils.file_handler import read_reference_file


class ReferenceLoadWorkerSignals(QObject):
    loaded = Signal(object)  # NormalizedReference
    failed = Signal(str)


class ReferenceLoadWorker(QRunnable):
    """Read and normalize a reference text off the GUI thread."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.signals = ReferenceLoadWorkerSignals()

    def run(self):
        try:
            text = read_reference_file(self.path)
        except ReferenceLoadError as e:
            self.signals.failed.emit(str(e))
            return
        self.signals.loaded.emit(normalize_reference(text))


class Workers:
    pool = QThreadPool.globalInstance()
