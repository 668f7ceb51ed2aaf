"""Application entry point and setup for the TypeTutor typing trainer."""

import logging
import os
import random
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from typetutor.core.engine import TypingEngine
from typetutor.ui.main_window import MainWindow

SEED_ENV = "TYPETUTOR_SEED"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def random_from_env(environ=None) -> Optional[random.Random]:
    """Seeded generator when TYPETUTOR_SEED holds an integer, otherwise None."""
    environ = os.environ if environ is None else environ
    raw = environ.get(SEED_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        seed = int(raw.strip())
    except ValueError:
        logging.warning(f"Ignoring {SEED_ENV}={raw!r}: not an integer")
        return None
    logging.info(f"Using fixed random seed {seed}")
    return random.Random(seed)


def run() -> None:
    """Initialize the application, build the engine, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("TypeTutor")
    app.setApplicationDisplayName("TypeTutor")

    engine = TypingEngine(rng=random_from_env())

    window = MainWindow(engine)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
