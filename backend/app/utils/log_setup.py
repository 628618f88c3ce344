"""
Logging Setup — console output plus an append-only server.log under LOG_DIR.
"""
import logging
import os

from app.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Install console and file handlers on the root logger. Safe to call twice."""
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_file = os.path.join(settings.LOG_DIR, "server.log")

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())

    formatter = logging.Formatter(LOG_FORMAT)
    existing = {getattr(h, "_relay_handler", None) for h in root.handlers}

    if "console" not in existing:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        console._relay_handler = "console"
        root.addHandler(console)

    if "file" not in existing:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler._relay_handler = "file"
        root.addHandler(file_handler)
