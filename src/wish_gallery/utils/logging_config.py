"""Logging for WishGallery.

Handlers are attached lazily so importing the package never touches the home
directory. Everything logs through the library-local "wish_gallery" logger,
Qt's own warnings included once install_qt_message_handler() has run.
"""

import logging
import logging.handlers
import os
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Optional, TypeVar

from PySide6.QtCore import QMessageLogContext, QtMsgType, qInstallMessageHandler

# Use typing_extensions for ParamSpec (Python 3.9 compatibility)
from typing_extensions import ParamSpec

# ----------------------------- Logging Configuration -----------------------------

APP_DIR = os.path.expanduser("~/.wish_gallery")
LOG_FILE = os.path.join(APP_DIR, "wish_gallery.log")
LOG_LEVEL_ENV = "WISH_GALLERY_LOG_LEVEL"

logger = logging.getLogger("wish_gallery")

_handlers_initialized = False
_initialization_error: Optional[str] = None

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def level_from_env(default: int = logging.INFO) -> int:
    """Level named by WISH_GALLERY_LOG_LEVEL (e.g. "DEBUG"), or ``default``."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def ensure_handlers_initialized() -> None:
    """Attach console and rotating file handlers on first use.

    File logging is skipped, console logging kept, when the log directory
    cannot be created.
    """
    global _handlers_initialized, _initialization_error

    if _handlers_initialized:
        return

    level = level_from_env()
    logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(funcName)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    try:
        os.makedirs(APP_DIR, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        _initialization_error = f"File logging disabled: {e}"

    # Pillow is chatty while sniffing formats
    logging.getLogger("PIL").setLevel(logging.WARNING)

    _handlers_initialized = True


def qt_message_handler(mode: QtMsgType, context: Optional[QMessageLogContext], message: str) -> None:
    """Forward one Qt log message (QProcess, QPA, stylesheet warnings) to our logger."""
    level = _QT_LEVELS.get(mode, logging.WARNING)
    category = getattr(context, "category", None) if context is not None else None
    logger.log(level, f"[Qt{f' {category}' if category else ''}] {message}")


def install_qt_message_handler() -> None:
    ensure_handlers_initialized()
    qInstallMessageHandler(qt_message_handler)

# ----------------------------- Logging Decorator -----------------------------

P = ParamSpec('P')
R = TypeVar('R')


def log_function(func: Callable[P, R]) -> Callable[P, R]:
    """Log entry and exit at DEBUG, exceptions at ERROR, then re-raise."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        ensure_handlers_initialized()
        name = func.__qualname__
        logger.debug(f"Entering {name}")
        try:
            result: R = func(*args, **kwargs)
            logger.debug(f"Exiting {name}")
            return result
        except Exception as e:
            logger.error(f"Exception in {name}: {e}")
            logger.debug(traceback.format_exc())
            raise

    return wrapper
