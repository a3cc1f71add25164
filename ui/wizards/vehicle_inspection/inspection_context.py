# -*- coding: utf-8 -*-
"""
Inspection Context - wizard state for one vehicle inspection session.

Owns the session's VehicleRecord, MediaSet and current error set. Nothing
outside the session keeps references to them once the wizard is torn down.
"""

from typing import Any, Dict, Optional

from models.media import MediaSet, is_media_slot
from models.vehicle_record import VehicleRecord
from ui.wizards.framework.wizard_context import WizardContext

MODE_CREATE = "create"
MODE_UPDATE = "update"


class InspectionContext(WizardContext):
    """Context for the vehicle inspection wizard."""

    def __init__(self, mode: str = MODE_CREATE, record_id: Optional[str] = None):
        super().__init__()
        self.mode = mode
        self.record_id = record_id
        self.record = VehicleRecord()
        self.media = MediaSet()
        self.errors: Dict[str, str] = {}

    @property
    def is_edit_mode(self) -> bool:
        return self.mode == MODE_UPDATE

    def replace_state(self, record: VehicleRecord, media: MediaSet):
        """Swap in a loaded record and media set."""
        self.record = record
        self.media = media
        self.errors = {}
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "mode": self.mode,
            "record_id": self.record_id,
            "record": self.record.to_dict(),
            "existing_media": self.media.existing_items(),
            "staged_media": [slot for slot, _ in self.media.staged_items()],
            "issue_count": self.record.issue_count(),
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InspectionContext':
        """Restore a context summary. Staged binaries are not part of the dict."""
        context = cls(mode=data.get("mode", MODE_CREATE), record_id=data.get("record_id"))
        cls._restore_base_fields(context, data)
        context.record = VehicleRecord.from_dict(data.get("record"))
        for slot, reference in (data.get("existing_media") or {}).items():
            if is_media_slot(slot):
                context.media.set_existing(slot, reference)
        return context
