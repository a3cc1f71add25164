# -*- coding: utf-8 -*-
"""
Vehicle Inspection Wizard.

Eight-step state machine for creating or editing a marketplace listing:
validation on forward moves, conditional evidence/remark visibility,
debounced draft autosave (create flow) and the final upload.

The wizard is UI-agnostic: views call its methods and listen to its signals.
"""

from typing import Any, Dict, List, Optional, Tuple

from PyQt5.QtCore import QCoreApplication, QEventLoop, QObject, pyqtSignal

from app.config import Config, Pages
from controllers.vehicle_controller import VehicleController
from models.checkpoint import STATUS_ISSUE, get_checkpoint
from models.media import MediaSet, StagedAttachment
from models.vehicle_record import VehicleRecord
from services.draft_service import DraftService
from services.error_mapper import map_exception
from services.exceptions import MediaValidationError, NotFoundException
from services.media_staging import MediaStaging
from services.submission_service import SubmissionService, server_record_id
from services.wizard.step_validator import StepValidator
from ui.wizards.framework.base_step import BaseStep, StepValidationResult
from ui.wizards.framework.base_wizard import BaseWizard
from ui.wizards.framework.error_boundary import ErrorBoundary
from utils.logger import get_logger

from .autosave import AutosaveScheduler
from .inspection_context import MODE_CREATE, MODE_UPDATE, InspectionContext
from .steps import CheckpointStep, GalleryStep, ReviewStep, VehicleDetailsStep

logger = get_logger(__name__)

NOTICE_SUCCESS = "success"
NOTICE_ERROR = "error"

FIX_ERRORS_MESSAGE = "Please fix the errors to proceed"


class InspectionWizard(BaseWizard):
    """
    Vehicle inspection wizard.

    Steps are numbered 1..8 in this API (the navigator counts from 0).

    Signals:
        step_changed(int, int): old step, new step
        errors_changed(dict): current field/slot errors
        notice(str, str): level ("success" | "error"), message
        data_changed(str): key of the mutated field or slot
        draft_status_changed(str): "saving" | "saved" | "idle"
        loading_changed(bool)
        submitting_changed(bool)
        upload_progress(int): 0..100
        submission_succeeded(dict): server record
        submission_failed(str): user-facing message
        navigate_requested(str): route, e.g. "stock/<id>"
        load_failed(str): terminal load error
    """

    step_changed = pyqtSignal(int, int)
    errors_changed = pyqtSignal(dict)
    notice = pyqtSignal(str, str)
    data_changed = pyqtSignal(str)
    draft_status_changed = pyqtSignal(str)
    loading_changed = pyqtSignal(bool)
    submitting_changed = pyqtSignal(bool)
    upload_progress = pyqtSignal(int)
    submission_succeeded = pyqtSignal(dict)
    submission_failed = pyqtSignal(str)
    navigate_requested = pyqtSignal(str)
    load_failed = pyqtSignal(str)

    def __init__(self, draft_service: DraftService,
                 submission_service: SubmissionService,
                 vehicle_controller: Optional[VehicleController] = None,
                 autosave_ms: Optional[int] = None,
                 preview_dir=None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)

        self.drafts = draft_service
        self.submissions = submission_service
        self.vehicles = vehicle_controller

        self.staging = MediaStaging(self.context.media, parent=self,
                                    preview_dir=preview_dir or Config.PREVIEW_DIR)
        self.autosave = AutosaveScheduler(
            save_callback=self._write_draft,
            should_save=self._draft_worth_saving,
            interval_ms=autosave_ms,
            parent=self,
        )
        self.autosave.status_changed.connect(self.draft_status_changed)
        self._draft_boundary = ErrorBoundary("Draft autosave", parent=self)

        # Bumped on start/teardown; results from an older session are dropped
        self._generation = 0
        self._closed = False
        self._ready = False
        self._loading = False
        self._submitting = False

        self.navigator.validation_passed.connect(self._on_validation_passed)

    # =========================================================================
    # BaseWizard hooks
    # =========================================================================

    def create_context(self) -> InspectionContext:
        return InspectionContext()

    def create_steps(self) -> List[BaseStep]:
        steps: List[BaseStep] = [VehicleDetailsStep(self.context, parent=self)]
        for number in range(StepValidator.STEP_EXTERIOR, StepValidator.STEP_AIR_CONDITIONING + 1):
            steps.append(CheckpointStep(self.context, number, parent=self))
        steps.append(GalleryStep(self.context, parent=self))
        steps.append(ReviewStep(self.context, parent=self))
        return steps

    def get_wizard_title(self) -> str:
        return "Edit Vehicle" if self.context.is_edit_mode else "Add Vehicle"

    # =========================================================================
    # State
    # =========================================================================

    @property
    def step(self) -> int:
        return self.navigator.current_index + 1

    @property
    def total_steps(self) -> int:
        return self.navigator.get_step_count()

    @property
    def record(self):
        return self.context.record

    @property
    def media(self):
        return self.context.media

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self.context.errors)

    @property
    def is_edit_mode(self) -> bool:
        return self.context.is_edit_mode

    @property
    def is_ready(self) -> bool:
        return self._ready and not self._closed

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def step_title(self, step: Optional[int] = None) -> str:
        return StepValidator.get_step_name(step or self.step)

    def progress_percentage(self) -> float:
        return self.navigator.get_progress_percentage()

    def issue_count(self) -> int:
        """Checkpoints currently flagged as Issue, counted on every call."""
        return self.context.record.issue_count()

    def gallery_completeness(self) -> Tuple[int, int, int]:
        return self.staging.gallery_completeness()

    def current_step(self) -> BaseStep:
        return self.navigator.get_current_step()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, record_id: Optional[str] = None) -> bool:
        """
        Load initial state before the wizard becomes interactive.

        With a record id the server record is loaded (edit flow); without one
        the local draft is restored if there is one (create flow).

        Returns:
            True if the wizard is ready for input
        """
        self._generation += 1
        generation = self._generation
        self._closed = False
        self._ready = False
        self._reset_session()
        self._set_loading(True)

        try:
            if record_id:
                return self._start_edit(record_id, generation)
            return self._start_create(generation)
        finally:
            if generation == self._generation:
                self._set_loading(False)

    def _start_edit(self, record_id: str, generation: int) -> bool:
        self.context.mode = MODE_UPDATE
        self.context.record_id = record_id
        self.autosave.disable()

        if self.vehicles is None:
            raise RuntimeError("Editing requires a VehicleController")

        result = self.vehicles.load_for_edit(record_id)
        if generation != self._generation:
            logger.info(f"Discarding load of {record_id}: wizard was closed")
            return False

        if not result.success:
            if isinstance(result.exception, NotFoundException):
                message = result.message or "Vehicle not found"
                self.load_failed.emit(message)
                self.navigate_requested.emit(Pages.STOCK)
            else:
                self.load_failed.emit(result.message)
                self.notice.emit(NOTICE_ERROR, "Failed to load details")
            return False

        record, media = result.data
        self._apply_state(record, media)
        self._ready = True
        logger.info(f"Editing vehicle {record_id}")
        return True

    def _start_create(self, generation: int) -> bool:
        self.context.mode = MODE_CREATE
        self.context.record_id = None
        self.autosave.enable()

        loaded = self._draft_boundary.call(self.drafts.load, operation_name="loading draft")
        if generation != self._generation:
            logger.info("Discarding draft load: wizard was closed")
            return False

        if loaded is not None:
            record, media = loaded
            self._apply_state(record, media)
            self.notice.emit(NOTICE_SUCCESS, "Draft restored")

        self._ready = True
        return True

    def _apply_state(self, record, media):
        self.context.replace_state(record, media)
        self.staging.set_media(media)
        self.errors_changed.emit({})
        self.data_changed.emit("")

    def _reset_session(self):
        # Nothing from a previous session survives a restart.
        self.context.completed_steps.clear()
        self.context.status = "draft"
        self._apply_state(VehicleRecord(), MediaSet())
        if self.navigator.current_index != 0:
            self.navigator.reset()

    def teardown(self):
        """
        End the session: cancel autosave, discard pending loads, release
        preview files and drop the record and media.
        """
        if self._closed:
            return
        self._closed = True
        self._ready = False
        self._generation += 1
        self.autosave.disable()
        self.staging.release_all()
        self.context.replace_state(VehicleRecord(), MediaSet())
        self.staging.set_media(self.context.media)
        self._loading = False
        logger.debug("Inspection wizard torn down")

    def _set_loading(self, loading: bool):
        if loading != self._loading:
            self._loading = loading
            self.loading_changed.emit(loading)
            if loading:
                self._pump_events()

    def _pump_events(self):
        # Repaint only: user input stays queued until the blocking call returns.
        QCoreApplication.processEvents(QEventLoop.ExcludeUserInputEvents)

    # =========================================================================
    # Navigation
    # =========================================================================

    def next(self) -> bool:
        """
        Validate the current step and advance (the last step stays put).

        Returns:
            True if the step validated
        """
        if self._closed:
            return False
        return self.go_next()

    def back(self) -> bool:
        """Go back one step, never validating. Returns False on step 1."""
        if self._closed:
            return False
        return self.go_back()

    def _on_step_changed(self, old_index: int, new_index: int):
        super()._on_step_changed(old_index, new_index)
        self.step_changed.emit(old_index + 1, new_index + 1)

    def _on_validation_failed(self, result: StepValidationResult):
        super()._on_validation_failed(result)
        self._set_errors(result.errors)
        self.notice.emit(NOTICE_ERROR, FIX_ERRORS_MESSAGE)

    def _on_validation_passed(self, index: int):
        self._set_errors({})

    def _set_errors(self, errors: Dict[str, str]):
        self.context.errors = dict(errors)
        self.errors_changed.emit(dict(errors))

    def _clear_error(self, key: str):
        if key in self.context.errors:
            del self.context.errors[key]
            self.errors_changed.emit(dict(self.context.errors))

    # =========================================================================
    # Mutations
    # =========================================================================

    def set_field(self, key: str, value: Any):
        """
        Replace one record field.

        Raises:
            KeyError: unknown field
            ValueError: value does not fit the field
        """
        self.context.record.set(key, value)
        self._after_mutation(key)

    def set_checkpoint_status(self, checkpoint_id: str, status: str):
        """Set OK / Issue / NA. Statuses the checkpoint does not allow raise ValueError."""
        field = get_checkpoint(checkpoint_id).status_field
        self.set_field(field, status)

    def set_checkpoint_remark(self, checkpoint_id: str, remark: str):
        field = get_checkpoint(checkpoint_id).remark_field
        self.set_field(field, remark)

    def attach_media(self, slot: str, candidate: StagedAttachment) -> bool:
        """
        Stage a file for a slot.

        A rejected file leaves the slot untouched and sets a field error.

        Returns:
            True if accepted
        """
        try:
            self.staging.accept(slot, candidate)
        except MediaValidationError as e:
            self.context.errors[slot] = e.message
            self.errors_changed.emit(dict(self.context.errors))
            self.notice.emit(NOTICE_ERROR, e.message)
            return False

        self._after_mutation(slot)
        return True

    def attach_media_file(self, slot: str, path) -> bool:
        """Stage a file from disk."""
        try:
            candidate = StagedAttachment.from_path(path)
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            self.notice.emit(NOTICE_ERROR, "Could not read the selected file")
            return False
        return self.attach_media(slot, candidate)

    def clear_media(self, slot: str):
        """Remove a staged file; an existing server copy stays referenced."""
        self.staging.clear(slot)
        self._after_mutation(slot)

    def preview_source(self, slot: str) -> Optional[str]:
        """Local preview file for a staged file, else the server reference."""
        source = self.staging.preview_source(slot)
        if source and source == self.context.media.existing(slot) and self.vehicles is not None:
            return self.vehicles.api.media_url(source)
        return source

    def _after_mutation(self, key: str):
        self._clear_error(key)
        self.context.touch()
        self.data_changed.emit(key)
        if self.is_ready and not self.context.is_edit_mode:
            self.autosave.schedule()

    # =========================================================================
    # Conditional visibility
    # =========================================================================

    def should_show_evidence(self, checkpoint_id: str) -> bool:
        """
        Whether the evidence uploader of a checkpoint is shown.

        Shown for an Issue, for always-documented parts, for checkpoints with
        a video slot, and whenever one of its slots already holds media.
        """
        cp = get_checkpoint(checkpoint_id)
        if self.context.record.get(cp.status_field) == STATUS_ISSUE:
            return True
        if cp.always_document or cp.video_slots:
            return True
        return any(self.context.media.is_filled(slot) for slot in cp.slots)

    def should_show_remark(self, checkpoint_id: str) -> bool:
        cp = get_checkpoint(checkpoint_id)
        record = self.context.record
        return record.get(cp.status_field) == STATUS_ISSUE or bool(record.get(cp.remark_field))

    # =========================================================================
    # Autosave
    # =========================================================================

    def _draft_worth_saving(self) -> bool:
        if self._closed or self.context.is_edit_mode:
            return False
        return DraftService.is_worth_saving(self.context.record, self.context.media)

    def _write_draft(self) -> bool:
        saved = self._draft_boundary.call(
            self.drafts.save, self.context.record, self.context.media,
            operation_name="writing draft"
        )
        return bool(saved)

    # =========================================================================
    # Submission
    # =========================================================================

    def on_submit(self) -> bool:
        """Re-validate every step, then upload. Called from the last step."""
        if self._closed:
            return False
        if self._submitting:
            logger.warning("Submit ignored: a submission is already running")
            return False

        failing_step, errors = StepValidator.validate_all(self.context.record, self.context.media)
        if failing_step is not None:
            logger.warning(f"Submit blocked by step {failing_step}: {errors}")
            self._set_errors(errors)
            self.navigator.goto_step(failing_step - 1, skip_validation=True)
            self.notice.emit(NOTICE_ERROR, FIX_ERRORS_MESSAGE)
            return False

        mode = self.context.mode
        record_id = self.context.record_id
        outcome: List[str] = []

        def finish(kind: str) -> bool:
            if outcome:
                logger.error(f"Ignoring second submission outcome '{kind}' after '{outcome[0]}'")
                return False
            outcome.append(kind)
            return True

        self._submitting = True
        self.context.status = "submitting"
        self.submitting_changed.emit(True)
        self.upload_progress.emit(0)

        try:
            result = self.submissions.submit(
                mode, self.context.record, self.context.media,
                on_progress=self._on_upload_progress, record_id=record_id,
            )
        except Exception as e:
            message = map_exception(e, context=f"{mode} vehicle")
            logger.error(f"Submission failed: {e}")
            self.context.status = "draft"
            if finish("failure"):
                self.notice.emit(NOTICE_ERROR, message)
                self.submission_failed.emit(message)
            return False
        finally:
            self._submitting = False
            self.submitting_changed.emit(False)

        if mode == MODE_CREATE:
            # The draft was consumed by the create; nothing may write it again
            self.autosave.disable()

        if mode == MODE_UPDATE:
            target_id = record_id
        else:
            target_id = server_record_id(result)
        route = Pages.vehicle_details(target_id) if target_id else Pages.STOCK

        if finish("success"):
            self.notice.emit(
                NOTICE_SUCCESS,
                "Vehicle Updated" if mode == MODE_UPDATE else "Listing Published"
            )
            self.submission_succeeded.emit(result if isinstance(result, dict) else {})
            self.navigate_requested.emit(route)
        return True

    def _on_upload_progress(self, percent: int):
        if not self._closed:
            self.upload_progress.emit(int(percent))
            self._pump_events()
