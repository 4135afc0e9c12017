"""
Workflow Domain Entities
========================

Checklist steps of a project's workflow instance and the template rows
they are created from.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class WorkflowTemplateStep:
    """
    One row of an externally defined workflow template.

    ``estimated_days`` becomes the step's SLA target at instantiation.
    """
    step_order: int
    title: str
    estimated_days: int
    description: str = ""
    responsible_party: Optional[str] = None

    def __post_init__(self):
        if self.estimated_days < 0:
            raise ValueError("estimated_days cannot be negative")


@dataclass(frozen=True)
class WorkflowStep:
    """
    One checklist item inside a project's workflow instance.

    Immutable: every edit goes through ``WorkflowStepTracker.apply_update``
    which returns a new step, so a caller that persists the result gets
    the done flag, completion date and frozen counter in one record.
    """
    step_order: int
    title: str
    sla_target_days: int
    description: str = ""
    is_done: bool = False
    start_date: Optional[date] = None
    completion_date: Optional[date] = None
    frozen_days_elapsed: Optional[int] = None

    step_id: Optional[str] = None
    responsible_party: Optional[str] = None

    @property
    def is_started(self) -> bool:
        return self.start_date is not None


@dataclass(frozen=True)
class WorkflowProgress:
    """Completed/total counts for a project's checklist."""
    completed: int
    total: int

    @property
    def remaining(self) -> int:
        return self.total - self.completed

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return int(self.completed * 100 / self.total + 0.5)
