"""
Logging setup for the API process.

Modules log through `logging.getLogger(__name__)`; this only wires the
root handler once.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    # Uvicorn and pytest may have attached handlers already.
    if root.handlers:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)
