# settings/logging_setup.py
from __future__ import annotations
import logging
import platform
import sys
from datetime import datetime
from pathlib import Path
from contextlib import contextmanager

LOGGER_NAME = "jsontable"
FMT = "%(asctime)s [%(levelname)s] %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(log_dir: Path) -> tuple[logging.FileHandler, Path]:
    log_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    logfile = log_dir / f"{ts}.log"
    handler = logging.FileHandler(logfile, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=FMT, datefmt=DATEFMT))
    return handler, logfile


def _installed_logfile(logger: logging.Logger) -> Path | None:
    for h in logger.handlers:
        if getattr(h, "_jsontable_setup", False):
            return Path(h.baseFilename)
    return None


def setup_logging(log_dir: Path | None, enable_logs: bool = True) -> Path | None:
    """
    Route the library's "jsontable" logger to a timestamped file under log_dir.
    Returns the log file path, or None when logging to file is disabled.
    Repeat calls keep the first file, like logging.basicConfig.
    """
    if not enable_logs or log_dir is None:
        return None
    logger = logging.getLogger(LOGGER_NAME)
    existing = _installed_logfile(logger)
    if existing is not None:
        return existing
    handler, logfile = _file_handler(Path(log_dir))
    handler._jsontable_setup = True  # type: ignore[attr-defined]
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logger.info("=== jsontable start ===")
    logger.info("Python exe : %s", sys.executable)
    logger.info("Python ver : %s", sys.version.replace("\n", " "))
    logger.info("Platform   : %s %s (%s)", platform.system(), platform.release(), platform.machine())
    return logfile


def flog(msg: str, level: int = logging.INFO) -> None:
    logging.getLogger(LOGGER_NAME).log(level, msg)


# always add and remove a dedicated file handler around the block
@contextmanager
def store_logging(log_dir: Path | None, label: str, enable_logs: bool = True):
    if not enable_logs or log_dir is None:
        # still yield a placeholder so caller logic stays the same
        yield None
        return

    handler, logfile = _file_handler(Path(log_dir))
    logger = logging.getLogger(LOGGER_NAME)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    try:
        flog(f"=== {label} ===")
        yield logfile
    finally:
        flog(f"[{label}] log saved to: {logfile}")
        logger.removeHandler(handler)
        handler.close()
