"""
Workflow Application DTOs
=========================

Storage-shaped step and template records, and the per-step view the
checklist UI renders.
"""

from datetime import date
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from caseflow.shared.domain.clock import truncate_to_date
from caseflow.workflow.domain import WorkflowStep, WorkflowTemplateStep


class WorkflowTemplateStepDTO(BaseModel):
    """A workflow template row as stored by the template table."""

    model_config = ConfigDict(extra="ignore")

    step_order: int = Field(..., ge=0)
    step_title: str = Field(..., min_length=1)
    step_description: Optional[str] = None
    responsible_party: Optional[str] = None
    estimated_days: int = Field(..., ge=0)

    def to_domain(self) -> WorkflowTemplateStep:
        return WorkflowTemplateStep(
            step_order=self.step_order,
            title=self.step_title,
            estimated_days=self.estimated_days,
            description=self.step_description or "",
            responsible_party=self.responsible_party,
        )


class WorkflowStepDTO(BaseModel):
    """A project's checklist step as persisted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    step_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("step_id", "stepId", "id"),
    )
    step_order: int = Field(..., ge=0)
    title: str
    description: str = ""
    sla_target_days: int = Field(
        ..., ge=0,
        validation_alias=AliasChoices("sla_target_days", "slaTargetDays", "slaTarget"),
    )
    is_done: bool = False
    start_date: Optional[date] = None
    completion_date: Optional[date] = None
    frozen_days_elapsed: Optional[int] = Field(default=None, ge=0)
    responsible_party: Optional[str] = None

    @field_validator("start_date", "completion_date", mode="before")
    @classmethod
    def normalise_dates(cls, v: Any) -> Any:
        return truncate_to_date(v)

    def to_domain(self) -> WorkflowStep:
        return WorkflowStep(
            step_order=self.step_order,
            title=self.title,
            sla_target_days=self.sla_target_days,
            description=self.description,
            is_done=self.is_done,
            start_date=self.start_date,
            completion_date=self.completion_date,
            frozen_days_elapsed=self.frozen_days_elapsed,
            step_id=self.step_id,
            responsible_party=self.responsible_party,
        )

    @classmethod
    def from_domain(cls, step: WorkflowStep) -> "WorkflowStepDTO":
        return cls(
            step_id=step.step_id,
            step_order=step.step_order,
            title=step.title,
            description=step.description,
            sla_target_days=step.sla_target_days,
            is_done=step.is_done,
            start_date=step.start_date,
            completion_date=step.completion_date,
            frozen_days_elapsed=step.frozen_days_elapsed,
            responsible_party=step.responsible_party,
        )


class WorkflowStepView(BaseModel):
    """A step with its derived counters, for the checklist table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    step: WorkflowStepDTO
    state: str
    days_elapsed: Optional[int] = None
    days_from_dates: Optional[int] = None
    is_overdue: bool = False


class ProjectWorkflowResponse(BaseModel):
    """Checklist plus rollup for one project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Optional[str] = None
    completed: int
    total: int
    percent: int
    steps: List[WorkflowStepView] = Field(default_factory=list)
