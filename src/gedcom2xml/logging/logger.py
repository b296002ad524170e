"""
Centralized logging configuration for gedcom2xml.

Key behaviors
-------------
* ``get_logger`` is the single entry point so handlers and formatters match.
* A master log file (default: ``logs/gedcom2xml.log``) plus one file per module.
* Console output on stderr, so XML written to stdout is never interleaved.
* Log level, directory and rotation come from ``config/gedcom2xml.yml``.
"""

from __future__ import annotations

import logging
import sys
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from gedcom2xml.config import get_config

# -----------------------------------------------------------------------------
# Paths and configuration
# -----------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[3]
BASE_LOGGER_NAME = "gedcom2xml"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger_cache: Dict[str, Logger] = {}
_base_configured: bool = False
_effective_level: int = logging.INFO
_log_dir: Optional[Path] = None
_rotate_logs: bool = False


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _log_root() -> Path:
    """Directory that relative log paths hang off.

    The repository checkout when running from source, otherwise the current
    working directory (never the install prefix).
    """
    if (PROJECT_ROOT / "config").is_dir():
        return PROJECT_ROOT
    return Path.cwd()


def _ensure_log_dir() -> Optional[Path]:
    """Resolve and create the log directory; None if it cannot be created."""
    global _log_dir
    cfg = get_config()

    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = _log_root() / log_dir

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Read-only location: keep console logging only.
        return None

    _log_dir = log_dir
    return log_dir


def _build_file_handler(path: Path, level: int) -> logging.Handler:
    if _rotate_logs:
        handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configure_base_logger() -> Logger:
    """Attach the master file and console handlers once per process."""
    global _base_configured, _effective_level, _rotate_logs

    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if _base_configured:
        return base_logger

    cfg = get_config()
    _rotate_logs = bool(cfg.logging.get("rotate", False))
    master_name = cfg.logging.get("file", "gedcom2xml.log")

    level_name = str(cfg.logging.get("level", "INFO")).upper()
    base_level = getattr(logging, level_name, logging.INFO)
    debug_enabled = bool(getattr(cfg, "debug", False))
    _effective_level = logging.DEBUG if debug_enabled else base_level

    base_logger.setLevel(_effective_level)
    base_logger.propagate = False

    log_dir = _ensure_log_dir()
    if log_dir is not None:
        base_logger.addHandler(_build_file_handler(log_dir / master_name, _effective_level))

    console = StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if debug_enabled else logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base_logger.addHandler(console)

    _base_configured = True
    return base_logger


def _module_handler_exists(logger: Logger) -> bool:
    return any(getattr(h, "is_module_handler", False) for h in logger.handlers)


def _attach_module_handler(logger: Logger, module_name: str) -> None:
    log_dir = _ensure_log_dir()
    if log_dir is None:
        return

    handler = _build_file_handler(log_dir / f"{module_name.replace('.', '_')}.log", _effective_level)
    handler.is_module_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def get_logger(name: str | None = None) -> Logger:
    """Return a logger wired to the project-wide handlers.

    * Loggers below ``gedcom2xml`` propagate to the master log and console.
    * Each of them also writes its own ``logs/<module>.log``.
    * ``debug: true`` in the config forces DEBUG level everywhere.
    """
    base_logger = _configure_base_logger()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    logger = logging.getLogger(logger_name)
    logger.setLevel(_effective_level)

    if logger is not base_logger:
        if not _module_handler_exists(logger):
            _attach_module_handler(logger, logger_name)
        logger.propagate = True

    _logger_cache[logger_name] = logger
    return logger


def set_debug(enabled: bool) -> None:
    """Switch every cached logger (and the console) to DEBUG or back."""
    global _effective_level
    base_logger = _configure_base_logger()
    level = logging.DEBUG if enabled else logging.INFO
    _effective_level = level

    for handler in base_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
        else:
            handler.setLevel(logging.DEBUG if enabled else logging.WARNING)

    base_logger.setLevel(level)
    for logger in _logger_cache.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)


def list_active_loggers() -> List[str]:
    """Helper for debugging configuration issues in tests."""
    return list(_logger_cache.keys())
