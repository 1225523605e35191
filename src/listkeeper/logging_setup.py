# src/listkeeper/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Loggers whose per-mutation chatter the REPL already shows as a re-rendered list.
STORE_LOGGERS = ("listkeeper.tasks", "listkeeper.storage")

LOG_FILE_NAME = "listkeeper.log"


class ReplConsoleFilter(logging.Filter):
    """
    Console rules while the REPL owns the terminal:
    - store/storage records only at WARNING+ (a corrupt slot or unknown id is worth seeing)
    - other listkeeper records pass through to the handler level
    - anything outside listkeeper only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(STORE_LOGGERS):
            return record.levelno >= logging.WARNING
        if name == "listkeeper" or name.startswith("listkeeper."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/listkeeper",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
) -> Path:
    """
    Route logs to stderr (short lines, filtered) and to a size-rotated file
    in `log_dir` (full detail). Returns the log file path.

    Call once at startup; calling again replaces the previous handlers.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    # The REPL stamps its own output; console lines stay short.
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    ch.addFilter(ReplConsoleFilter())
    root.addHandler(ch)

    fh = RotatingFileHandler(
        str(log_file),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    fh.setLevel(file_level)
    fh.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
