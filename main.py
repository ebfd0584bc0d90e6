# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.settings import Settings, load_settings
from ui.main_window import MainWindow


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.log_file, encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    settings = load_settings()
    setup_logging(settings)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Typealong")
    app.setOrganizationName("Typealong")

    # optional reference text file as the first argument
    args = app.arguments()[1:]
    win = MainWindow(settings, initial_path=args[0] if args else None)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
