# Rev 0.1.0

# tasksync – logging setup (Rev 0.1.0)
from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .paths import APP_NAME, logs_dir

try:
    # Qt warnings (signal/slot mismatches etc.) end up in the same log
    from PySide6.QtCore import qInstallMessageHandler, QtMsgType
    def _qt_handler(msg_type, context, message):
        lvl = {
            QtMsgType.QtDebugMsg: logging.DEBUG,
            QtMsgType.QtInfoMsg: logging.INFO,
            QtMsgType.QtWarningMsg: logging.WARNING,
            QtMsgType.QtCriticalMsg: logging.ERROR,
            QtMsgType.QtFatalMsg: logging.CRITICAL,
        }.get(msg_type, logging.INFO)
        logging.getLogger(f"{APP_NAME}.qt").log(lvl, message)
except ImportError:
    qInstallMessageHandler = None

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# transport loggers: one INFO line per request is noise next to our own records
_CHATTY = ("httpx", "httpcore")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{APP_NAME}.{name}")


def _resolve_level(level: Optional[str]) -> tuple[str, int]:
    # env wins over settings
    name = (os.environ.get("TASKSYNC_LOG_LEVEL") or level or "INFO").upper()
    return name, getattr(logging, name, logging.INFO)


def setup_logging(
    app_name: str = APP_NAME,
    log_dir: Path | None = None,
    *,
    level: Optional[str] = None,
    max_bytes: int = 5_000_000,
    backups: int = 7,
) -> Path:
    """
    Rotating file + stdout on the root logger. Calling it again replaces
    the handlers it installed before, so a re-created AppContext does not
    double every line.
    """
    level_name, lvl = _resolve_level(level)

    log_dir = log_dir or logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / f"{app_name}.log"

    root = logging.getLogger()
    for h in root.handlers[:]:
        if getattr(h, "_tasksync", False):
            root.removeHandler(h)
            h.close()
    root.setLevel(lvl)

    fmt = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    fh = RotatingFileHandler(logfile, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    ch = logging.StreamHandler(sys.stdout)
    for h in (fh, ch):
        h.setFormatter(fmt)
        h.setLevel(lvl)
        h._tasksync = True
        root.addHandler(h)

    for name in _CHATTY:
        logging.getLogger(name).setLevel(lvl if lvl <= logging.DEBUG else logging.WARNING)

    def _excepthook(exctype, value, tb):
        get_logger("unhandled").error("Uncaught exception", exc_info=(exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)
    sys.excepthook = _excepthook

    if qInstallMessageHandler is not None:
        qInstallMessageHandler(_qt_handler)

    get_logger("logging").info("Logging initialized at %s; file: %s", level_name, logfile)
    return logfile
