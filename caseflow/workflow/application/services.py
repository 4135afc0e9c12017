"""
Workflow Application Services
=============================

Coordinates template instantiation, step edits and the project rollup
for the checklist screens.
"""

from typing import Any, Iterable, List, Optional

from caseflow.config import ProjectStatus
from caseflow.shared.domain.clock import ClockPolicy, DateLike
from caseflow.shared.infrastructure.logging import get_logger
from caseflow.sla.domain.value_objects import SLAConfig
from caseflow.workflow.application.dto import (
    ProjectWorkflowResponse,
    WorkflowStepDTO,
    WorkflowStepView,
)
from caseflow.workflow.domain import (
    WorkflowProgress,
    WorkflowRollup,
    WorkflowStep,
    WorkflowStepTracker,
    WorkflowTemplateStep,
)

logger = get_logger(__name__)


class WorkflowService:
    """
    Service for project workflow checklists.

    Steps are immutable; every method that edits returns the new step for
    the caller to persist as a single update.
    """

    def __init__(
        self,
        at_risk_ratio: float = 0.8,
        clock: Optional[ClockPolicy] = None
    ):
        self._clock = clock or ClockPolicy()
        self._rollup = WorkflowRollup(at_risk_ratio)

    @classmethod
    def from_config(cls, config: SLAConfig, clock: Optional[ClockPolicy] = None) -> "WorkflowService":
        return cls(config.workflow_at_risk_ratio, clock)

    def _now(self, now: Optional[DateLike]) -> DateLike:
        return self._clock.today() if now is None else now

    @staticmethod
    def instantiate(template_steps: Iterable[WorkflowTemplateStep]) -> List[WorkflowStep]:
        """One fresh step per template row, in template order."""
        steps = [
            WorkflowStep(
                step_order=t.step_order,
                title=t.title,
                description=t.description,
                sla_target_days=t.estimated_days,
                responsible_party=t.responsible_party,
            )
            for t in sorted(template_steps, key=lambda t: t.step_order)
        ]
        logger.info("Workflow instantiated from template", extra={"step_count": len(steps)})
        return steps

    def update_step(
        self,
        step: WorkflowStep,
        now: Optional[DateLike] = None,
        **changes: Any
    ) -> WorkflowStep:
        """
        Apply a user edit.

        Raises:
            ValidationException, InvalidDateOrderException
        """
        updated = WorkflowStepTracker.apply_update(step, self._now(now), **changes)
        if updated.is_done != step.is_done:
            logger.info(
                "Workflow step completed" if updated.is_done else "Workflow step reopened",
                extra={
                    "step_order": updated.step_order,
                    "frozen_days_elapsed": updated.frozen_days_elapsed,
                }
            )
        return updated

    def toggle_done(
        self,
        step: WorkflowStep,
        is_done: bool,
        now: Optional[DateLike] = None
    ) -> WorkflowStep:
        return self.update_step(step, now, is_done=is_done)

    def project_status(
        self,
        steps: Iterable[WorkflowStep],
        now: Optional[DateLike] = None,
        prior_status: Optional[ProjectStatus] = None
    ) -> Optional[ProjectStatus]:
        return self._rollup.rollup(steps, self._now(now), prior_status)

    def progress(self, steps: Iterable[WorkflowStep]) -> WorkflowProgress:
        return self._rollup.progress(steps)

    def step_view(self, step: WorkflowStep, now: Optional[DateLike] = None) -> WorkflowStepView:
        today = self._now(now)
        return WorkflowStepView(
            step=WorkflowStepDTO.from_domain(step),
            state=WorkflowStepTracker.state(step).value,
            days_elapsed=WorkflowStepTracker.days_elapsed(step, today),
            days_from_dates=WorkflowStepTracker.days_from_dates(step),
            is_overdue=WorkflowStepTracker.is_overdue(step, today),
        )

    def project_view(
        self,
        steps: Iterable[WorkflowStep],
        now: Optional[DateLike] = None,
        prior_status: Optional[ProjectStatus] = None
    ) -> ProjectWorkflowResponse:
        """Checklist in step order with the project rollup."""
        today = self._now(now)
        ordered = sorted(steps, key=lambda s: s.step_order)
        status = self.project_status(ordered, today, prior_status)
        progress = self.progress(ordered)
        return ProjectWorkflowResponse(
            status=status.value if status else None,
            completed=progress.completed,
            total=progress.total,
            percent=progress.percent,
            steps=[self.step_view(step, today) for step in ordered],
        )
