"""
Tests: WorkflowService template instantiation, edits and checklist view.
"""

from __future__ import annotations

from datetime import date

import pytest

from caseflow.config import ProjectStatus
from caseflow.shared.domain.clock import ClockPolicy
from caseflow.sla.domain import SLAConfig
from caseflow.workflow.application import (
    WorkflowService,
    WorkflowStepDTO,
    WorkflowTemplateStepDTO,
)
from caseflow.workflow.domain import WorkflowTemplateStep


TEMPLATE_ROWS = [
    {"step_order": 2, "step_title": "Draft minute", "estimated_days": 3, "responsible_party": "Officer"},
    {"step_order": 1, "step_title": "Collect documents", "estimated_days": 5, "step_description": None},
    {"step_order": 3, "step_title": "Submit for signature", "estimated_days": 2},
]


@pytest.mark.unit
def test_instantiate_from_template(workflow_service: WorkflowService) -> None:
    """Steps follow template order and take estimated days as their target."""
    template = [WorkflowTemplateStepDTO(**row).to_domain() for row in TEMPLATE_ROWS]

    steps = workflow_service.instantiate(template)

    assert [s.step_order for s in steps] == [1, 2, 3]
    assert [s.sla_target_days for s in steps] == [5, 3, 2]
    assert steps[1].responsible_party == "Officer"
    assert steps[0].description == ""
    assert all(not s.is_done and s.start_date is None for s in steps)


@pytest.mark.unit
def test_template_rejects_negative_estimate() -> None:
    """A template row cannot carry a negative estimate."""
    with pytest.raises(ValueError):
        WorkflowTemplateStep(step_order=1, title="Bad", estimated_days=-1)


@pytest.mark.unit
def test_toggle_done_uses_service_clock(workflow_service: WorkflowService, today: date) -> None:
    """Ticking a started step without a date completes it today."""
    step = workflow_service.instantiate([WorkflowTemplateStep(1, "Review", 10)])[0]
    started = workflow_service.update_step(step, start_date=date(2024, 2, 20))

    done = workflow_service.toggle_done(started, True)

    assert done.completion_date == today
    assert done.frozen_days_elapsed == 10


@pytest.mark.unit
def test_step_dto_accepts_storage_aliases() -> None:
    """Stored rows may use id/slaTarget and camelCase keys."""
    dto = WorkflowStepDTO.model_validate({
        "id": "step-1",
        "stepOrder": 1,
        "title": "Collect documents",
        "slaTarget": 5,
        "isDone": True,
        "startDate": "2024-01-01",
        "completionDate": "2024-01-04",
        "frozenDaysElapsed": 3,
    })

    step = dto.to_domain()

    assert step.step_id == "step-1"
    assert step.sla_target_days == 5
    assert step.frozen_days_elapsed == 3
    assert WorkflowStepDTO.from_domain(step).model_dump() == dto.model_dump()


@pytest.mark.unit
def test_step_dto_truncates_timestamps() -> None:
    """Stored step dates may be timestamps of either separator, or blank."""
    dto = WorkflowStepDTO.model_validate({
        "stepOrder": 1,
        "title": "Collect documents",
        "slaTarget": 5,
        "startDate": "2024-01-01 10:00:00+00:00",
        "completionDate": "",
    })
    done = WorkflowStepDTO.model_validate({
        "stepOrder": 2,
        "title": "Draft minute",
        "slaTarget": 5,
        "isDone": True,
        "startDate": "2024-01-02T08:00:00Z",
        "completionDate": "2024-01-04 17:30:00",
    })

    assert dto.start_date == date(2024, 1, 1)
    assert dto.completion_date is None
    assert (done.start_date, done.completion_date) == (date(2024, 1, 2), date(2024, 1, 4))


@pytest.mark.unit
def test_project_view(workflow_service: WorkflowService) -> None:
    """Checklist view in step order with rollup, progress and per-step counters."""
    steps = [
        WorkflowStepDTO(step_order=2, title="Draft", sla_target_days=5, start_date=date(2024, 2, 20)).to_domain(),
        WorkflowStepDTO(
            step_order=1, title="Collect", sla_target_days=5, is_done=True,
            start_date=date(2024, 2, 1), completion_date=date(2024, 2, 4), frozen_days_elapsed=3,
        ).to_domain(),
    ]

    view = workflow_service.project_view(steps)
    dumped = view.model_dump(by_alias=True)

    assert view.status == ProjectStatus.DELAYED.value
    assert (view.completed, view.total, view.percent) == (1, 2, 50)
    assert [v.step.step_order for v in view.steps] == [1, 2]
    assert view.steps[0].state == "Done"
    assert view.steps[0].days_elapsed == 3
    assert view.steps[1].days_elapsed == 10
    assert view.steps[1].is_overdue is True
    assert dumped["steps"][1]["daysElapsed"] == 10


@pytest.mark.unit
def test_project_status_for_empty_workflow(workflow_service: WorkflowService) -> None:
    """No steps keeps the stored status."""
    assert workflow_service.project_status([], prior_status=ProjectStatus.ON_TRACK) is ProjectStatus.ON_TRACK
    assert workflow_service.project_view([]).status is None


@pytest.mark.unit
def test_from_config_uses_workflow_ratio(today: date) -> None:
    """The at-risk ratio comes from the SLA config."""
    service = WorkflowService.from_config(SLAConfig(workflow_at_risk_ratio=0.5), ClockPolicy.fixed(today))
    step = WorkflowStepDTO(step_order=1, title="Review", sla_target_days=10, start_date=date(2024, 2, 25)).to_domain()

    assert service.project_status([step]) is ProjectStatus.AT_RISK
    assert WorkflowService(clock=ClockPolicy.fixed(today)).project_status([step]) is ProjectStatus.ON_TRACK
