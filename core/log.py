# core/log.py
from __future__ import annotations
import logging
import sys

_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"

def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stdout handler to the root logger; safe to call on every rerun."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not any(getattr(h, "_school_records", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._school_records = True
        root.addHandler(handler)
    return root
