# -*- coding: utf-8 -*-
"""
Tests for the wizard framework (navigator, base wizard, error boundary).

Uses a minimal three-step wizard whose steps validate from a dict.
"""

import pytest

from ui.wizards.framework import (
    BaseStep, BaseWizard, ErrorBoundary, StepValidationResult, WizardContext
)


class DictContext(WizardContext):

    def __init__(self):
        super().__init__()
        self.values = {}

    @classmethod
    def from_dict(cls, data):
        context = cls()
        cls._restore_base_fields(context, data)
        return context


class RequiredKeyStep(BaseStep):
    """Valid once its key is present in context.values."""

    def __init__(self, context, key, parent=None):
        super().__init__(context, parent)
        self.key = key

    def validate(self) -> StepValidationResult:
        if self.context.values.get(self.key):
            return StepValidationResult()
        return StepValidationResult.from_errors({self.key: "Required"})


class ThreeStepWizard(BaseWizard):

    submit_result = True
    submitted = 0

    def create_context(self):
        return DictContext()

    def create_steps(self):
        return [RequiredKeyStep(self.context, key, parent=self) for key in ("a", "b", "c")]

    def on_submit(self):
        self.submitted += 1
        return self.submit_result


@pytest.fixture
def wizard(qapp):
    return ThreeStepWizard()


class TestNavigation:
    """Test forward/back movement."""

    def test_starts_at_first_step(self, wizard):
        assert wizard.navigator.current_index == 0
        assert wizard.steps[0].visit_count == 1

    def test_next_blocked_by_validation(self, wizard, qtbot):
        with qtbot.waitSignal(wizard.navigator.validation_failed) as blocker:
            assert wizard.go_next() is False
        assert blocker.args[0].errors == {"a": "Required"}
        assert wizard.navigator.current_index == 0

    def test_next_advances_and_marks_completed(self, wizard):
        wizard.context.values["a"] = 1
        assert wizard.go_next() is True
        assert wizard.navigator.current_index == 1
        assert 0 in wizard.context.completed_steps

    def test_back_never_validates(self, wizard):
        wizard.navigator.goto_step(2, skip_validation=True)
        failures = []
        wizard.navigator.validation_failed.connect(failures.append)

        assert wizard.go_back() is True
        assert wizard.navigator.current_index == 1
        assert failures == []

    def test_back_on_first_step(self, wizard):
        assert wizard.go_back() is False

    def test_next_on_last_step_stays(self, wizard):
        wizard.navigator.goto_step(2, skip_validation=True)
        wizard.context.values["c"] = 1
        assert wizard.go_next() is True
        assert wizard.navigator.current_index == 2

    def test_step_changed_signal(self, wizard, qtbot):
        wizard.context.values["a"] = 1
        with qtbot.waitSignal(wizard.navigator.step_changed) as blocker:
            wizard.go_next()
        assert blocker.args == [0, 1]

    def test_reset_returns_to_first_step(self, wizard):
        wizard.navigator.goto_step(2, skip_validation=True)
        wizard.navigator.reset()
        assert wizard.navigator.current_index == 0
        assert wizard.context.current_step_index == 0

    def test_progress(self, wizard):
        assert wizard.navigator.get_progress_percentage() == pytest.approx(100 / 3)
        wizard.navigator.goto_step(2, skip_validation=True)
        assert wizard.navigator.get_progress_percentage() == 100.0


class TestSubmit:
    """Test submission from the base wizard."""

    def test_submit_only_on_last_step(self, wizard):
        assert wizard.submit() is False
        assert wizard.submitted == 0

    def test_submit_emits_completed(self, wizard, qtbot):
        wizard.navigator.goto_step(2, skip_validation=True)
        wizard.context.values["c"] = 1
        with qtbot.waitSignal(wizard.wizard_completed) as blocker:
            assert wizard.submit() is True
        assert blocker.args[0]["status"] == "completed"

    def test_failed_submit_keeps_status(self, qapp):
        wizard = ThreeStepWizard()
        wizard.submit_result = False
        wizard.navigator.goto_step(2, skip_validation=True)
        wizard.context.values["c"] = 1
        assert wizard.submit() is False
        assert wizard.context.status == "draft"

    def test_context_round_trip(self, wizard):
        wizard.context.values["a"] = 1
        wizard.go_next()
        restored = DictContext.from_dict(wizard.context.to_dict())
        assert restored.completed_steps == {0}
        assert restored.current_step_index == 1


class TestErrorBoundary:
    """Test ErrorBoundary."""

    def test_errors_reported_not_raised(self, qapp, qtbot):
        boundary = ErrorBoundary("Test area")

        def explode():
            raise RuntimeError("bad")

        with qtbot.waitSignal(boundary.error_occurred) as blocker:
            assert boundary.call(explode, operation_name="exploding") is None
        assert blocker.args == ["RuntimeError", "bad"]
        assert boundary.error_count == 1
        assert isinstance(boundary.last_error, RuntimeError)

    def test_result_passed_through(self, qapp):
        assert ErrorBoundary("Test area").call(lambda x: x * 2, 21) == 42
