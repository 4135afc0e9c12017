"""
Workflow Application Layer
==========================

Contains:
- Services: WorkflowService (instantiation, edits, rollup)
- DTOs: template rows, persisted steps, checklist views
"""

from caseflow.workflow.application.dto import (
    ProjectWorkflowResponse,
    WorkflowStepDTO,
    WorkflowStepView,
    WorkflowTemplateStepDTO,
)
from caseflow.workflow.application.services import WorkflowService

__all__ = [
    "ProjectWorkflowResponse",
    "WorkflowStepDTO",
    "WorkflowStepView",
    "WorkflowTemplateStepDTO",
    "WorkflowService",
]
