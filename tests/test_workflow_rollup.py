"""
Tests: project status rollup and checklist progress.

    - precedence completed > delayed > at-risk > on-track
    - a delayed step outranks an at-risk one
    - empty workflows keep the prior status
"""

from __future__ import annotations

from datetime import date

import pytest

from caseflow.config import ProjectStatus
from caseflow.workflow.domain import WorkflowProgress, WorkflowRollup, WorkflowStep, WorkflowStepTracker


NOW = date(2024, 1, 9)


def _make_step(order: int, target: int = 10, start: date | None = date(2024, 1, 1), **fields) -> WorkflowStep:
    return WorkflowStep(
        step_order=order, title=f"Step {order}", sla_target_days=target, start_date=start, **fields
    )


def _done(step: WorkflowStep) -> WorkflowStep:
    return WorkflowStepTracker.mark_done(step, step.start_date or NOW)


@pytest.mark.unit
def test_all_done_is_completed() -> None:
    """Every step done rolls up to completed, even if some finished late."""
    steps = [
        _done(_make_step(1)),
        WorkflowStepTracker.mark_done(_make_step(2, target=1, completion_date=date(2024, 1, 8)), NOW),
    ]
    assert WorkflowRollup().rollup(steps, NOW) is ProjectStatus.COMPLETED


@pytest.mark.unit
def test_delayed_beats_at_risk() -> None:
    """One overdue step and one at-risk step: the project is delayed."""
    steps = [
        _make_step(1, target=5),
        _make_step(2, target=10),
        _done(_make_step(3)),
    ]
    rollup = WorkflowRollup()

    assert rollup.is_at_risk(steps[1], NOW) is True
    assert rollup.rollup(steps, NOW) is ProjectStatus.DELAYED


@pytest.mark.unit
def test_at_risk_from_eighty_percent_of_target() -> None:
    """Eight days into a ten-day target is at-risk; seven is not."""
    rollup = WorkflowRollup()
    assert rollup.rollup([_make_step(1)], NOW) is ProjectStatus.AT_RISK
    assert rollup.rollup([_make_step(1)], date(2024, 1, 8)) is ProjectStatus.ON_TRACK


@pytest.mark.unit
def test_custom_at_risk_ratio() -> None:
    """A lower ratio flags steps earlier."""
    assert WorkflowRollup(at_risk_ratio=0.5).rollup([_make_step(1)], date(2024, 1, 6)) is ProjectStatus.AT_RISK


@pytest.mark.unit
def test_unstarted_steps_are_on_track() -> None:
    """Steps without a start date never flag the project."""
    steps = [_make_step(1, start=None), _make_step(2, start=None)]
    assert WorkflowRollup().rollup(steps, date(2030, 1, 1)) is ProjectStatus.ON_TRACK


@pytest.mark.unit
def test_empty_workflow_keeps_prior_status() -> None:
    """No steps: the previous status is returned unchanged."""
    rollup = WorkflowRollup()
    assert rollup.rollup([], NOW, ProjectStatus.AT_RISK) is ProjectStatus.AT_RISK
    assert rollup.rollup([], NOW) is None


@pytest.mark.unit
def test_progress_counts_and_percent() -> None:
    """Completed/total with a rounded percentage."""
    steps = [_done(_make_step(1)), _done(_make_step(2)), _make_step(3)]
    progress = WorkflowRollup.progress(steps)

    assert progress == WorkflowProgress(completed=2, total=3)
    assert progress.remaining == 1
    assert progress.percent == 67
    assert WorkflowProgress(completed=0, total=0).percent == 0
