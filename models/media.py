# -*- coding: utf-8 -*-
"""
Media slot catalog and MediaSet model.
"""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

from models.checkpoint import CHECKPOINTS


KIND_COVER = "cover"
KIND_GALLERY = "gallery"
KIND_DOCUMENT = "document"
KIND_TYRE = "tyre"
KIND_EVIDENCE_IMAGE = "evidence_image"
KIND_EVIDENCE_VIDEO = "evidence_video"


@dataclass(frozen=True)
class MediaSlot:
    """One fixed attachment position."""

    key: str
    label: str
    kind: str

    @property
    def is_video(self) -> bool:
        return self.kind == KIND_EVIDENCE_VIDEO


COVER_SLOT = "mainImage"
RC_SLOT = "img_rc"
NOC_SLOT = "img_noc"

GALLERY_POSITIONS: Tuple[Tuple[str, str], ...] = (
    ("img_front", "Front"),
    ("img_front_right", "Front Right"),
    ("img_right", "Right"),
    ("img_back_right", "Back Right"),
    ("img_back", "Back"),
    ("img_open_dickey", "Open Dickey"),
    ("img_back_left", "Back Left"),
    ("img_left", "Left"),
    ("img_front_left", "Front Left"),
    ("img_open_bonnet", "Open Bonnet"),
    ("img_dashboard", "Dashboard"),
    ("img_right_front_door", "Right Front Door"),
    ("img_right_back_door", "Right Back Door"),
    ("img_engine", "Engine"),
    ("img_roof", "Roof"),
)

_TYRE_LABELS = {
    "img_tyre_1": "Tyre 1",
    "img_tyre_2": "Tyre 2",
    "img_tyre_3": "Tyre 3",
    "img_tyre_4": "Tyre 4",
    "img_tyre_optional": "Spare Tyre",
}


def _build_catalog() -> Tuple[MediaSlot, ...]:
    slots = [MediaSlot(COVER_SLOT, "Cover Photo", KIND_COVER)]
    slots.extend(MediaSlot(key, label, KIND_GALLERY) for key, label in GALLERY_POSITIONS)
    slots.append(MediaSlot(RC_SLOT, "RC Document", KIND_DOCUMENT))
    slots.append(MediaSlot(NOC_SLOT, "NOC Document", KIND_DOCUMENT))

    seen = {slot.key for slot in slots}
    for cp in CHECKPOINTS:
        for index, key in enumerate(cp.image_slots, start=1):
            if key in seen:
                continue
            if key in _TYRE_LABELS:
                slots.append(MediaSlot(key, _TYRE_LABELS[key], KIND_TYRE))
            else:
                suffix = f" {index}" if len(cp.image_slots) > 1 else ""
                slots.append(MediaSlot(key, f"{cp.label}{suffix}", KIND_EVIDENCE_IMAGE))
            seen.add(key)
        for key in cp.video_slots:
            if key not in seen:
                slots.append(MediaSlot(key, f"{cp.label} Video", KIND_EVIDENCE_VIDEO))
                seen.add(key)
    return tuple(slots)


MEDIA_SLOTS: Tuple[MediaSlot, ...] = _build_catalog()

MEDIA_SLOTS_BY_KEY: Dict[str, MediaSlot] = {slot.key: slot for slot in MEDIA_SLOTS}

# Cover + standard gallery positions; the only slots counted for completeness
GALLERY_SLOTS: Tuple[str, ...] = (COVER_SLOT,) + tuple(key for key, _ in GALLERY_POSITIONS)


def is_media_slot(key: str) -> bool:
    return key in MEDIA_SLOTS_BY_KEY


def get_slot(key: str) -> MediaSlot:
    try:
        return MEDIA_SLOTS_BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown media slot: {key}") from None


@dataclass(frozen=True)
class StagedAttachment:
    """A newly selected file waiting to be uploaded."""

    file_name: str
    mime_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_image(self) -> bool:
        return (self.mime_type or "").startswith("image/")

    @property
    def is_video(self) -> bool:
        return (self.mime_type or "").startswith("video/")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "StagedAttachment":
        """Read a file from disk; MIME type is guessed from the file name."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            file_name=path.name,
            mime_type=mime_type or "application/octet-stream",
            content=path.read_bytes(),
        )

    def __repr__(self):
        return f"StagedAttachment({self.file_name!r}, {self.mime_type!r}, {self.size} bytes)"


class MediaSet:
    """
    Attachments of one record, addressed by slot key.

    Each slot may hold a staged attachment (new upload) and/or an existing
    remote reference (edit flow). A slot is filled when either is present.
    """

    def __init__(self):
        self._staged: Dict[str, StagedAttachment] = {}
        self._existing: Dict[str, str] = {}

    # ==================== Staged attachments ====================

    def stage(self, slot: str, attachment: StagedAttachment) -> None:
        get_slot(slot)
        self._staged[slot] = attachment

    def unstage(self, slot: str) -> Optional[StagedAttachment]:
        get_slot(slot)
        return self._staged.pop(slot, None)

    def staged(self, slot: str) -> Optional[StagedAttachment]:
        return self._staged.get(slot)

    def staged_items(self) -> Iterator[Tuple[str, StagedAttachment]]:
        """Staged attachments in catalog order."""
        for slot in MEDIA_SLOTS:
            if slot.key in self._staged:
                yield slot.key, self._staged[slot.key]

    # ==================== Existing references ====================

    def set_existing(self, slot: str, reference: Optional[str]) -> None:
        get_slot(slot)
        if reference:
            self._existing[slot] = reference
        else:
            self._existing.pop(slot, None)

    def existing(self, slot: str) -> Optional[str]:
        return self._existing.get(slot)

    def existing_items(self) -> Dict[str, str]:
        return dict(self._existing)

    # ==================== Queries ====================

    def is_filled(self, slot: str) -> bool:
        get_slot(slot)
        return slot in self._staged or bool(self._existing.get(slot))

    def filled_slots(self) -> Tuple[str, ...]:
        return tuple(slot.key for slot in MEDIA_SLOTS if self.is_filled(slot.key))

    def is_empty(self) -> bool:
        return not self._staged and not self._existing

    def copy(self) -> "MediaSet":
        clone = MediaSet()
        clone._staged = dict(self._staged)
        clone._existing = dict(self._existing)
        return clone

    def __eq__(self, other):
        if not isinstance(other, MediaSet):
            return NotImplemented
        return self._staged == other._staged and self._existing == other._existing

    def __repr__(self):
        return f"MediaSet(staged={sorted(self._staged)}, existing={sorted(self._existing)})"
