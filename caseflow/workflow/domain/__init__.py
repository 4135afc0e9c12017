"""
Workflow Domain Layer
=====================

Contains:
- Entities: WorkflowStep, WorkflowTemplateStep, WorkflowProgress
- Domain Services: WorkflowStepTracker (freeze/unfreeze), WorkflowRollup

Pure Python business logic, no infrastructure.
"""

from caseflow.workflow.domain.entities import (
    WorkflowProgress,
    WorkflowStep,
    WorkflowTemplateStep,
)
from caseflow.workflow.domain.tracker import EDITABLE_FIELDS, WorkflowStepTracker
from caseflow.workflow.domain.rollup import WorkflowRollup

__all__ = [
    "WorkflowProgress",
    "WorkflowStep",
    "WorkflowTemplateStep",
    "EDITABLE_FIELDS",
    "WorkflowStepTracker",
    "WorkflowRollup",
]
