# -*- coding: utf-8 -*-
"""
Submission pipeline.

Turns a finished record and its media into a multipart create/update call:
normalize a copy, drop conditional documents, serialize, upload with
progress, and clear the draft after a confirmed create.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from models.checkpoint import CHECKPOINTS
from models.media import NOC_SLOT, RC_SLOT, MediaSet
from models.vehicle_record import NUMERIC_FIELDS, SCALAR_FIELDS, VehicleRecord
from services.api_client import FormPart, VehicleApiClient
from services.draft_service import DraftService
from utils.logger import get_logger

logger = get_logger(__name__)

MODE_CREATE = "create"
MODE_UPDATE = "update"


def normalize(record: VehicleRecord, media: MediaSet) -> Tuple[VehicleRecord, MediaSet]:
    """
    Prepare copies of record and media for upload.

    - ``year`` takes the manufacturing year
    - numeric fields lose surrounding whitespace and thousands separators
    - the NOC is dropped unless hypothecation is closed
    - the RC is dropped unless the RC is available

    The inputs are not modified.
    """
    record = record.copy()
    media = media.copy()

    for key in NUMERIC_FIELDS:
        value = record.get(key)
        record.set(key, value.strip().replace(",", ""))

    record.set("year", record.get("mfgYear"))

    if record.get("hypothecation") != "Close" and media.staged(NOC_SLOT) is not None:
        media.unstage(NOC_SLOT)
        logger.debug("Dropping NOC: hypothecation is not closed")
    if not record.get("rcAvailable") and media.staged(RC_SLOT) is not None:
        media.unstage(RC_SLOT)
        logger.debug("Dropping RC: RC not available")

    return record, media


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def serialize(record: VehicleRecord, media: MediaSet) -> List[FormPart]:
    """
    Build multipart parts: one text part per record field, one file part per
    staged attachment. Slots holding only an existing reference are omitted.
    """
    parts: List[FormPart] = []

    for spec in SCALAR_FIELDS:
        text = _to_text(record.get(spec.key))
        if text is not None:
            parts.append((spec.key, text))

    for cp in CHECKPOINTS:
        parts.append((cp.status_field, _to_text(record.get(cp.status_field))))
        parts.append((cp.remark_field, _to_text(record.get(cp.remark_field))))

    for slot, attachment in media.staged_items():
        parts.append((slot, (attachment.file_name, attachment.content, attachment.mime_type)))

    return parts


class _TerminalGuard:
    """Lets exactly one terminal outcome through per submit call."""

    def __init__(self, label: str):
        self.label = label
        self.outcome: Optional[str] = None

    def settle(self, outcome: str) -> bool:
        if self.outcome is not None:
            logger.error(
                f"Duplicate terminal outcome '{outcome}' for {self.label} "
                f"(already '{self.outcome}'), ignored"
            )
            return False
        self.outcome = outcome
        return True


class SubmissionService:
    """
    Create or update a vehicle on the server.

    Args:
        api_client: VehicleApiClient
        draft_service: DraftService cleared after a successful create
    """

    def __init__(self, api_client: VehicleApiClient, draft_service: Optional[DraftService] = None):
        self.api = api_client
        self.drafts = draft_service

    def submit(self, mode: str, record: VehicleRecord, media: MediaSet,
               on_progress: Optional[Callable[[int], None]] = None,
               record_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Upload the record.

        Args:
            mode: "create" or "update"
            record: Record to send (not modified)
            media: Media to send (not modified)
            on_progress: Called with increasing percentages, ending at 100 on success
            record_id: Target id for update

        Returns:
            The server record

        Raises:
            ApiException / NetworkException: transport failure; nothing local is changed
            ValueError: bad mode or missing record id
        """
        if mode not in (MODE_CREATE, MODE_UPDATE):
            raise ValueError(f"Unknown submission mode: {mode}")
        if mode == MODE_UPDATE and not record_id:
            raise ValueError("record_id is required for update")

        guard = _TerminalGuard(f"{mode} {record_id or 'new vehicle'}")
        last_percent = [-1]

        def report(percent: int):
            percent = max(0, min(100, int(percent)))
            if guard.outcome is None and percent > last_percent[0]:
                last_percent[0] = percent
                if on_progress is not None:
                    on_progress(percent)

        outgoing_record, outgoing_media = normalize(record, media)
        parts = serialize(outgoing_record, outgoing_media)

        try:
            if mode == MODE_CREATE:
                result = self.api.create_vehicle(parts, on_progress=report)
            else:
                result = self.api.update_vehicle(record_id, parts, on_progress=report)
        except Exception:
            guard.settle("failure")
            logger.warning(f"Submission failed ({mode} {record_id or ''})".rstrip())
            raise

        report(100)
        guard.settle("success")

        if mode == MODE_CREATE and self.drafts is not None:
            self.drafts.clear()

        logger.info(f"Submission succeeded ({mode}) id={server_record_id(result, record_id)}")
        return result


def server_record_id(result: Any, fallback: Optional[str] = None) -> Optional[str]:
    """Pick the record id out of a create/update response."""
    if isinstance(result, dict):
        for source in (result, result.get("data"), result.get("vehicle")):
            if isinstance(source, dict):
                for key in ("id", "_id"):
                    if source.get(key):
                        return str(source[key])
    return fallback
