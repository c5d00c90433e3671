"""StudySearch logging utilities.

Every line carries a timestamp and an abbreviated level. Lines logged while a
query runs (inside `query_context`) are also tagged with that query, so the
output of several saved queries can be told apart:

    10-19 08:12:01 [INFO] [breast] query=breast - pdx matched=1
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Final, Iterator


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

_current_query: ContextVar[str | None] = ContextVar("studysearch_query", default=None)

log = logging.getLogger("StudySearch")


class _StudySearchFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        query = _current_query.get()
        record.querytag = f"[{query}] " if query else ""
        return super().format(record)


@contextmanager
def query_context(label: str | None) -> Iterator[None]:
    """Tag log lines emitted inside the block with a query label."""
    token = _current_query.set(label or None)
    try:
        yield
    finally:
        _current_query.reset(token)


def configure_logging(*, level: str, action: str, log_to_file: bool, log_dir: str) -> Path | None:
    """Attach console (and optional file) handlers to the StudySearch logger.

    The console follows `level`; the file, written to
    ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log``, always records DEBUG.
    Handlers from a previous call are closed and replaced.

    Returns:
        Path of the log file, or None when logging to console only.
    """
    console_level = getattr(logging, level.upper(), logging.INFO)
    formatter = _StudySearchFormatter(
        fmt="%(asctime)s [%(levelabbr)s] %(querytag)s%(message)s",
        datefmt="%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    log_path: Path | None = None
    if log_to_file:
        action_dir = Path(log_dir) / action
        action_dir.mkdir(parents=True, exist_ok=True)
        log_path = action_dir / f"{action}_{datetime.now().strftime('%m%d%H%M%S')}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for handler in log.handlers:
        handler.close()
    log.handlers = handlers
    log.setLevel(min(logging.DEBUG, console_level))
    log.propagate = False
    return log_path
