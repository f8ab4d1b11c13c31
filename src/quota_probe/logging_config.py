"""
Centralized logging configuration for the command-line tool.

setup_logging configures the root logger once per process with:
- Console output to stdout
- Either a technical formatter or a plain user-friendly one
- Noisy third-party loggers clamped to WARNING
"""

import logging
import sys
import threading

from .config import env_bool

DEBUG_ENV = "QUOTA_PROBE_DEBUG"

_config_lock = threading.Lock()
_TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_TECHNICAL_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _build_console_handler(verbose: bool, user_friendly: bool) -> logging.Handler:
    if user_friendly and not verbose:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(_TECHNICAL_FORMAT, _TECHNICAL_DATEFMT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    if verbose:
        console_handler.setLevel(logging.DEBUG)
    elif user_friendly:
        console_handler.setLevel(logging.WARNING)
    else:
        console_handler.setLevel(logging.INFO)
    return console_handler


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def setup_logging(verbose: bool = False, user_friendly: bool = True) -> None:
    """Configure logging for the application.

    ``QUOTA_PROBE_DEBUG`` forces verbose output regardless of ``verbose``.
    """
    with _config_lock:
        verbose = verbose or bool(env_bool(DEBUG_ENV, or_value=False))
        root_logger = logging.getLogger()
        _close_handlers(root_logger)
        root_logger.addHandler(_build_console_handler(verbose, user_friendly))
        root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        _suppress_noisy_third_parties()


__all__ = ["setup_logging"]
