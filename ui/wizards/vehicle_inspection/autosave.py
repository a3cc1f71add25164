# -*- coding: utf-8 -*-
"""
Debounced autosave scheduling.
"""

from typing import Callable, Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from app.config import Config
from utils.logger import get_logger

logger = get_logger(__name__)

STATUS_IDLE = "idle"
STATUS_SAVING = "saving"
STATUS_SAVED = "saved"


class AutosaveScheduler(QObject):
    """
    Runs a save callback after a quiet period.

    Every ``schedule()`` restarts the period, so only the last burst of edits
    triggers a write. ``disable()`` stops it for good (session end, or after
    the draft was consumed by a successful create).

    Signals:
        status_changed(str): "saving" → "saved" → "idle"
    """

    status_changed = pyqtSignal(str)

    def __init__(self, save_callback: Callable[[], bool],
                 should_save: Optional[Callable[[], bool]] = None,
                 interval_ms: Optional[int] = None,
                 saved_display_ms: int = 2000,
                 parent=None):
        super().__init__(parent)
        self._save_callback = save_callback
        self._should_save = should_save
        self._enabled = True
        self._status = STATUS_IDLE

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms if interval_ms is not None else Config.AUTOSAVE_DEBOUNCE_MS)
        self._timer.timeout.connect(self._fire)

        self._idle_timer = QTimer(self)
        self._idle_timer.setSingleShot(True)
        self._idle_timer.setInterval(saved_display_ms)
        self._idle_timer.timeout.connect(lambda: self._set_status(STATUS_IDLE))

    @property
    def status(self) -> str:
        return self._status

    @property
    def enabled(self) -> bool:
        return self._enabled

    def is_pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self):
        """(Re)start the quiet period."""
        if not self._enabled:
            return
        self._timer.start()

    def cancel(self):
        """Drop a pending save."""
        self._timer.stop()

    def disable(self):
        self._enabled = False
        self._timer.stop()
        self._idle_timer.stop()
        if self._status != STATUS_IDLE:
            self._set_status(STATUS_IDLE)

    def enable(self):
        self._enabled = True

    def flush(self) -> bool:
        """Save now if a save is pending. Returns True if a save ran."""
        if not self.is_pending():
            return False
        self._timer.stop()
        self._fire()
        return True

    def _fire(self):
        if not self._enabled:
            return
        if self._should_save is not None and not self._should_save():
            logger.debug("Autosave skipped: nothing meaningful to save yet")
            return

        self._idle_timer.stop()
        self._set_status(STATUS_SAVING)
        saved = bool(self._save_callback())
        if saved:
            self._set_status(STATUS_SAVED)
            self._idle_timer.start()
        else:
            self._set_status(STATUS_IDLE)

    def _set_status(self, status: str):
        if status == self._status:
            return
        self._status = status
        self.status_changed.emit(status)
