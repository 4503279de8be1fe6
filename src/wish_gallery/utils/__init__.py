"""Utility components for WishGallery."""

from .logging_config import ensure_handlers_initialized, install_qt_message_handler, log_function, logger

__all__ = ["ensure_handlers_initialized", "install_qt_message_handler", "log_function", "logger"]
