# comp_model/logging_config.py
"""
Structured logging configuration for the compensation engine.

Engine modules log through ``logging.getLogger(__name__)``; this module only
wires handlers. Result events (budgets, FMV classifications) go to the
``comp_model.evaluation`` logger and get their own file.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

# Define logger names for different concerns
EVALUATION_LOGGER = "comp_model.evaluation"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILES = (
    "combined.log",
    "warnings_errors.log",
    "evaluation_events.log",
    "debug_detail.log",
)

# Track if logging is already configured and the handlers we installed
_LOGGING_CONFIGURED = False
_installed: List[logging.Handler] = []


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = log_dir / name
        if log_file.exists():
            log_file.unlink()


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
        mode="a",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _attach(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.addHandler(handler)
    _installed.append(handler)


def setup_logging(log_dir: Optional[Path] = None, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the application.

    Always installs a console handler (WARNING+). When ``log_dir`` is given,
    also creates:
    - combined.log: all messages (INFO+)
    - warnings_errors.log: warnings and errors (WARNING+)
    - evaluation_events.log: budget and FMV result events (INFO+)
    - debug_detail.log: intermediate values (DEBUG, only if debug=True)

    Args:
        log_dir: Directory where log files will be stored; None logs to console only
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    _attach(root_logger, console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        if clear_existing:
            clear_logs(log_dir)

        _attach(root_logger, _rotating_handler(log_dir / "combined.log", logging.INFO, file_formatter))
        _attach(
            root_logger,
            _rotating_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter),
        )

        eval_logger = logging.getLogger(EVALUATION_LOGGER)
        eval_logger.setLevel(logging.INFO)
        _attach(
            eval_logger,
            _rotating_handler(log_dir / "evaluation_events.log", logging.INFO, file_formatter),
        )
        eval_logger.propagate = True  # Allow to bubble up to root

        if debug:
            _attach(
                root_logger,
                _rotating_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter),
            )

    _LOGGING_CONFIGURED = True
    logging.getLogger(__name__).debug(f"Logging configured (log_dir={log_dir}, debug={debug})")


def reset_logging() -> None:
    """Remove the handlers installed by :func:`setup_logging` so it can run again."""
    global _LOGGING_CONFIGURED
    for handler in _installed:
        for name in (None, EVALUATION_LOGGER):
            logging.getLogger(name).removeHandler(handler)
        handler.close()
    _installed.clear()
    _LOGGING_CONFIGURED = False


__all__ = [
    "EVALUATION_LOGGER",
    "LOG_FORMAT",
    "setup_logging",
    "reset_logging",
    "clear_logs",
]
