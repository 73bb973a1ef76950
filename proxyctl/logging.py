"""Logging configuration for the proxyctl package."""
import logging
import sys

from .config import Config

# Third-party loggers that are chatty at DEBUG/INFO
NOISY_LOGGERS = ("urllib3", "kubernetes", "websocket")


def setup_logging(debug_mode: bool = False) -> logging.Logger:
    """
    Configure root logging for a CLI run.

    Records go to stderr so that stdout only ever carries the report or the
    raw config dump.

    Args:
        debug_mode: Log at DEBUG level and keep third-party loggers verbose

    Returns:
        The package logger
    """
    log_level = logging.DEBUG if debug_mode else Config.LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format=Config.LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )
    # Disable debug logging for noisy libraries
    if not debug_mode:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logging.getLogger("proxyctl")
