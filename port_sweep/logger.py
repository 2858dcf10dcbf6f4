import json
import logging
import time
from typing import Any, Dict

LOGGER_NAME = "PortSweep"


def create_logger(level: int = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Prevent duplicate handlers if main() runs more than once
    if logger.handlers:
        return logger

    # stderr: stdout carries the report
    sh = logging.StreamHandler()

    # We write JSON ourselves; keep formatter minimal
    sh.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(sh)
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def verbosity_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime())


def log_event(logger: logging.Logger, event: str, fields: Dict[str, Any], level: int = logging.INFO) -> None:
    if not logger.isEnabledFor(level):
        return
    payload = {"ts": now_iso(), "event": event, **fields}
    logger.log(level, json.dumps(payload, ensure_ascii=False))
