import json
import logging
import os
from typing import Optional

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def _make_console_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _make_json_formatter() -> logging.Formatter:
    class JsonFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            msg = super().format(record)
            return json.dumps(
                {
                    "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
                    "level": record.levelname,
                    "logger": record.name,
                    "msg": msg,
                },
                ensure_ascii=False,
            )

    return JsonFormatter("%(message)s")


def setup_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
) -> None:
    """
    Initialize root logging once.
    Env overrides:
      MEDSHELF_LOG_LEVEL = INFO|DEBUG|...
      MEDSHELF_LOG_FORMAT = text|json
    """
    level = (level or os.getenv("MEDSHELF_LOG_LEVEL") or "WARNING").upper()
    fmt = (fmt or os.getenv("MEDSHELF_LOG_FORMAT") or "text").lower()

    log_level = _LEVELS.get(level, logging.WARNING)
    formatter = _make_json_formatter() if fmt == "json" else _make_console_formatter()

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(log_level)

    # httpx logs every request at INFO; keep it quiet unless we are debugging.
    logging.getLogger("httpx").setLevel(log_level if log_level <= logging.DEBUG else logging.WARNING)
