# -*- coding: utf-8 -*-
"""
Media staging service.

Gatekeeper between file selection and the session's MediaSet: checks type
and size of a candidate before it replaces a slot, and owns the temporary
preview files shown for staged attachments.
"""

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from app.config import Config
from models.media import (
    GALLERY_SLOTS, MediaSet, StagedAttachment, get_slot
)
from services.exceptions import MediaValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_MIB = 1024 * 1024


@dataclass(frozen=True)
class PreviewHandle:
    """A temporary file rendering a staged attachment; valid until revoked."""

    slot: str
    path: str
    attachment: StagedAttachment

    @property
    def is_alive(self) -> bool:
        return os.path.exists(self.path)


class MediaStaging(QObject):
    """
    Accepts or rejects candidate files for media slots.

    Signals:
        media_changed(str): slot key whose content changed
    """

    media_changed = pyqtSignal(str)

    def __init__(self, media: Optional[MediaSet] = None, parent=None,
                 image_max_bytes: int = None, video_max_bytes: int = None,
                 preview_dir=None):
        super().__init__(parent)
        self._media = media if media is not None else MediaSet()
        self.image_max_bytes = image_max_bytes or Config.IMAGE_MAX_BYTES
        self.video_max_bytes = video_max_bytes or Config.VIDEO_MAX_BYTES
        self._preview_root = Path(preview_dir) if preview_dir else None
        self._preview_dir: Optional[str] = None
        self._previews: Dict[str, PreviewHandle] = {}

    @property
    def media(self) -> MediaSet:
        return self._media

    def set_media(self, media: MediaSet):
        """Replace the managed MediaSet (used when a draft or record loads)."""
        self.release_all()
        self._media = media
        for slot, _ in media.staged_items():
            self.acquire_preview(slot)

    # ==================== Acceptance ====================

    def check(self, slot: str, candidate: StagedAttachment) -> None:
        """
        Raise MediaValidationError if the candidate does not fit the slot.

        Args:
            slot: Target slot key
            candidate: The selected file
        """
        media_slot = get_slot(slot)

        if media_slot.is_video:
            if not candidate.is_video:
                raise MediaValidationError("Please select a video file", slot)
            if candidate.size > self.video_max_bytes:
                raise MediaValidationError(
                    f"Video must be under {self.video_max_bytes // _MIB}MB "
                    f"(approx. 10 seconds)", slot
                )
            return

        if not candidate.is_image:
            raise MediaValidationError("Please select an image file", slot)
        if candidate.size > self.image_max_bytes:
            raise MediaValidationError(
                f"Image must be under {self.image_max_bytes // _MIB}MB", slot
            )

    def accept(self, slot: str, candidate: StagedAttachment) -> MediaSet:
        """
        Stage a candidate for a slot.

        The slot is left untouched when the candidate is rejected. An accepted
        file gets its preview handle right away.

        Returns:
            The updated MediaSet

        Raises:
            MediaValidationError: wrong type or too large
            KeyError: unknown slot
        """
        try:
            self.check(slot, candidate)
        except MediaValidationError as e:
            logger.info(f"Rejected {candidate!r} for {slot}: {e.message}")
            raise

        self._revoke(slot)
        self._media.stage(slot, candidate)
        self.acquire_preview(slot)
        logger.debug(f"Staged {candidate!r} for {slot}")
        self.media_changed.emit(slot)
        return self._media

    def clear(self, slot: str) -> MediaSet:
        """Remove the staged attachment of a slot; existing references stay."""
        self._revoke(slot)
        removed = self._media.unstage(slot)
        if removed is not None:
            self.media_changed.emit(slot)
        return self._media

    # ==================== Previews ====================

    def acquire_preview(self, slot: str) -> Optional[PreviewHandle]:
        """
        Get the preview handle for a slot's staged attachment.

        Handles are created when a file is staged or a MediaSet is loaded;
        a missing or deleted one is written again here. The handle is reused
        while the same attachment stays staged.
        Returns None when nothing is staged in the slot.
        """
        attachment = self._media.staged(slot)
        if attachment is None:
            return None

        handle = self._previews.get(slot)
        if handle is not None and handle.attachment is attachment and handle.is_alive:
            return handle

        self._revoke(slot)
        suffix = Path(attachment.file_name).suffix
        fd, path = tempfile.mkstemp(prefix=f"{slot}-", suffix=suffix, dir=self._session_dir())
        with os.fdopen(fd, "wb") as f:
            f.write(attachment.content)

        handle = PreviewHandle(slot=slot, path=path, attachment=attachment)
        self._previews[slot] = handle
        return handle

    def preview_source(self, slot: str) -> Optional[str]:
        """Path of the live preview, else the existing remote reference."""
        handle = self.acquire_preview(slot)
        if handle is not None:
            return handle.path
        return self._media.existing(slot)

    def release_all(self):
        """Revoke every preview handle and remove the session preview directory."""
        for slot in list(self._previews):
            self._revoke(slot)
        if self._preview_dir:
            shutil.rmtree(self._preview_dir, ignore_errors=True)
            self._preview_dir = None

    def _revoke(self, slot: str):
        handle = self._previews.pop(slot, None)
        if handle is None:
            return
        try:
            os.remove(handle.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove preview {handle.path}: {e}")

    def _session_dir(self) -> str:
        if self._preview_dir is None:
            root = None
            if self._preview_root is not None:
                self._preview_root.mkdir(parents=True, exist_ok=True)
                root = str(self._preview_root)
            self._preview_dir = tempfile.mkdtemp(prefix="tvi-preview-", dir=root)
        return self._preview_dir

    # ==================== Completeness ====================

    def gallery_completeness(self) -> Tuple[int, int, int]:
        """
        Filled slots across the cover and standard gallery positions.

        Returns:
            (filled, total, percent)
        """
        total = len(GALLERY_SLOTS)
        filled = sum(1 for slot in GALLERY_SLOTS if self._media.is_filled(slot))
        return filled, total, round(filled / total * 100)
