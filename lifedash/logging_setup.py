"""Logging configuration for the API server and the CLI."""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Keep lifedash logs on the console; other libraries only from WARNING."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "lifedash" or record.name.startswith("lifedash."):
            return True
        if record.name.startswith("uvicorn"):
            return record.levelno >= logging.INFO
        return record.levelno >= logging.WARNING


def setup_logging(
    *,
    level: str | int = logging.INFO,
    log_dir: str | Path | None = None,
) -> None:
    """Configure root logging.

    Installs a filtered console handler and, when ``log_dir`` is given, a
    file handler writing everything at DEBUG to ``lifedash.log``.

    Call this once, before the first log line.
    """
    console_level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
    if not isinstance(console_level, int):
        console_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path / "lifedash.log"), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.captureWarnings(True)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
