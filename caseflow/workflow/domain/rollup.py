"""
Workflow Rollup
===============

Folds step states into a single project status.

Precedence is strict and evaluated top to bottom, first match wins:
completed > delayed > at-risk > on-track.
"""

from typing import Iterable, Optional

from caseflow.config import ProjectStatus
from caseflow.shared.domain.clock import DateLike
from caseflow.workflow.domain.entities import WorkflowProgress, WorkflowStep
from caseflow.workflow.domain.tracker import WorkflowStepTracker


class WorkflowRollup:
    """Project-level status over a workflow instance."""

    def __init__(self, at_risk_ratio: float = 0.8):
        self.at_risk_ratio = at_risk_ratio

    def is_at_risk(self, step: WorkflowStep, now: DateLike) -> bool:
        if step.is_done:
            return False
        elapsed = WorkflowStepTracker.days_elapsed(step, now)
        if elapsed is None:
            return False
        return elapsed >= self.at_risk_ratio * step.sla_target_days

    def rollup(
        self,
        steps: Iterable[WorkflowStep],
        now: DateLike,
        prior_status: Optional[ProjectStatus] = None
    ) -> Optional[ProjectStatus]:
        """
        Project status for ``steps`` as of ``now``.

        With no steps the prior status is returned unchanged.
        """
        steps = list(steps)
        if not steps:
            return prior_status

        if all(step.is_done for step in steps):
            return ProjectStatus.COMPLETED
        if any(WorkflowStepTracker.is_overdue(step, now) for step in steps):
            return ProjectStatus.DELAYED
        if any(self.is_at_risk(step, now) for step in steps):
            return ProjectStatus.AT_RISK
        return ProjectStatus.ON_TRACK

    @staticmethod
    def progress(steps: Iterable[WorkflowStep]) -> WorkflowProgress:
        steps = list(steps)
        return WorkflowProgress(
            completed=sum(1 for step in steps if step.is_done),
            total=len(steps),
        )
