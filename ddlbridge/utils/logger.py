import logging
import logging.handlers
import os
from typing import Any, Dict

from ddlbridge.config import config

__all__ = ["setup_logger"]

CONSOLE_FORMAT = "%(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Server/reloader chatter stays on the console only.
_FRAMEWORK_PREFIXES = ("uvicorn", "watchfiles")


def _level(name: str, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback)


def _not_framework(record: logging.LogRecord) -> bool:
    return not record.name.startswith(_FRAMEWORK_PREFIXES)


def _has_console(root: logging.Logger) -> bool:
    return any(
        type(h) is logging.StreamHandler for h in root.handlers
    )


def _has_file(root: logging.Logger, path: str) -> bool:
    return any(getattr(h, "baseFilename", None) == path for h in root.handlers)


def _configure_root_logger() -> None:
    """Attach the console and rotating-file handlers to the root logger once."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    log_cfg: Dict[str, Any] = config.get("logging", {})
    levels = log_cfg.get("level", {})

    if not _has_console(root):
        console = logging.StreamHandler()
        console.setLevel(_level(levels.get("console", "INFO"), logging.INFO))
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        root.addHandler(console)

    logs_dir = config.get("base_dirs", {}).get("logs", "logs")
    os.makedirs(logs_dir, exist_ok=True)
    file_path = os.path.abspath(os.path.join(logs_dir, log_cfg.get("file_name", "ddlbridge.log")))

    if not _has_file(root, file_path):
        rotation = log_cfg.get("rotation", {})
        rotating = logging.handlers.RotatingFileHandler(
            file_path,
            mode="a",
            maxBytes=rotation.get("max_bytes", 10 * 1024 * 1024),
            backupCount=rotation.get("backup_count", 5),
            encoding=rotation.get("encoding", "utf-8"),
        )
        rotating.setLevel(_level(levels.get("file", "DEBUG"), logging.DEBUG))
        rotating.setFormatter(logging.Formatter(FILE_FORMAT))
        rotating.addFilter(_not_framework)
        root.addHandler(rotating)


def setup_logger(name: str) -> logging.Logger:
    """Return the named logger, with its level taken from ``logging.loggers`` when configured."""
    _configure_root_logger()

    logger = logging.getLogger(name)
    overrides = config.get("logging", {}).get("loggers") or {}
    logger.setLevel(_level(overrides.get(name, "DEBUG"), logging.DEBUG))
    return logger
