"""
Logging configuration for the Lab Dashboard API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called.  Every
module obtains its own logger with ``logging.getLogger(__name__)``;
services log each mutation at INFO and the chat persistence layer
logs swallowed I/O failures at ERROR.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that should receive a copy of every record.
        Parent directories are created when missing.
    """
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if root.handlers:
        # Already configured (tests, repeated create_app calls); only
        # honour a new level.
        root.setLevel(numeric_level)
        return

    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # uvicorn's per-request access lines duplicate what the services log.
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))
