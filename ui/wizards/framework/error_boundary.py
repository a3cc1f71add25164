# -*- coding: utf-8 -*-
"""
Error Boundary for wizard side effects.

Catches exceptions from best-effort work (draft writes, preview cleanup),
logs them with context and reports them through a signal instead of
letting them interrupt data entry.
"""

from typing import Optional, Callable
from functools import wraps

from PyQt5.QtCore import pyqtSignal, QObject

from utils.logger import get_logger

logger = get_logger(__name__)


class ErrorBoundary(QObject):
    """
    Error boundary for one area of a wizard.

    Wraps callables so that failures are logged and counted, never raised.
    """

    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def __init__(self, area_name: str, parent: Optional[QObject] = None):
        """
        Initialize error boundary.

        Args:
            area_name: Name of the protected area, used in logs
            parent: Parent object
        """
        super().__init__(parent)
        self.area_name = area_name
        self.error_count = 0
        self.last_error: Optional[Exception] = None

    def protect(self, func: Callable, operation_name: str = "operation") -> Callable:
        """
        Wrap a function with error boundary.

        Args:
            func: Function to protect
            operation_name: Name of operation for logging

        Returns:
            Wrapped function that returns None on error
        """
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)

            except (MemoryError, KeyboardInterrupt):
                raise

            except Exception as e:
                self._handle_error(e, operation_name)
                return None

        return wrapper

    def call(self, func: Callable, *args, operation_name: str = "operation", **kwargs):
        """Run func once inside the boundary."""
        return self.protect(func, operation_name)(*args, **kwargs)

    def _handle_error(self, error: Exception, operation: str):
        self.error_count += 1
        self.last_error = error

        logger.error(f"Error in {self.area_name} during {operation}: {error}", exc_info=True)
        self.error_occurred.emit(type(error).__name__, str(error))

