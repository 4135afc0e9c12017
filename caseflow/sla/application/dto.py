"""
SLA Application DTOs
=====================

Data Transfer Objects at the boundary with the storage layer and the
presentation/export consumers.

Records arrive from storage as plain mappings in either snake_case or
camelCase. Vocabulary fields are kept as raw strings here and parsed in
``to_domain`` so that an unknown value surfaces as
``UnknownEnumValueException`` rather than a generic validation error.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from caseflow.config import CaseType, OverallStatus, Priority
from caseflow.shared.domain.clock import truncate_to_date
from caseflow.sla.domain import Case, DerivedCase

_DATE_FIELDS = (
    "submitted_date",
    "received_date",
    "first_query_issued_date",
    "first_query_response_date",
    "second_query_issued_date",
    "second_query_response_date",
    "submitted_to_higher_date",
    "signed_date",
    "deadline",
)


# ========== Request DTOs ==========

class CaseRecordDTO(BaseModel):
    """A case record as handed over by the storage layer."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    case_id: str = Field(..., min_length=1, description="Human-assigned case ID")
    case_title: str = Field(default="", description="Case title")
    case_type: str = Field(default=CaseType.OTHER.value, description="Case type")
    priority: str = Field(..., description="Urgent | High | Medium | Low")
    overall_status: str = Field(
        default=OverallStatus.PENDING_REVIEW.value,
        description="Lifecycle status"
    )

    submitted_date: Optional[date] = None
    received_date: Optional[date] = None
    first_query_issued_date: Optional[date] = None
    first_query_response_date: Optional[date] = None
    second_query_issued_date: Optional[date] = None
    second_query_response_date: Optional[date] = None
    submitted_to_higher_date: Optional[date] = None
    signed_date: Optional[date] = None
    deadline: Optional[date] = None

    assigned_to: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator(*_DATE_FIELDS, mode="before")
    @classmethod
    def normalise_dates(cls, v: Any) -> Any:
        """Accept blanks, datetimes and ISO timestamps; keep only the calendar date."""
        return truncate_to_date(v)

    def to_domain(self) -> Case:
        """
        Convert to domain entity.

        Raises:
            UnknownEnumValueException: case type, priority or status not recognised
        """
        return Case(
            case_id=self.case_id,
            case_type=CaseType.parse(self.case_type),
            priority=Priority.parse(self.priority),
            overall_status=OverallStatus.parse(self.overall_status),
            submitted_date=self.submitted_date,
            received_date=self.received_date,
            first_query_issued_date=self.first_query_issued_date,
            first_query_response_date=self.first_query_response_date,
            second_query_issued_date=self.second_query_issued_date,
            second_query_response_date=self.second_query_response_date,
            submitted_to_higher_date=self.submitted_to_higher_date,
            signed_date=self.signed_date,
            deadline=self.deadline,
            case_title=self.case_title,
            assigned_to=self.assigned_to,
            remarks=self.remarks,
        )

    @classmethod
    def from_domain(cls, case: Case) -> "CaseRecordDTO":
        """Create from domain entity."""
        return cls(
            case_id=case.case_id,
            case_title=case.case_title,
            case_type=case.case_type.value,
            priority=case.priority.value,
            overall_status=case.overall_status.value,
            submitted_date=case.submitted_date,
            received_date=case.received_date,
            first_query_issued_date=case.first_query_issued_date,
            first_query_response_date=case.first_query_response_date,
            second_query_issued_date=case.second_query_issued_date,
            second_query_response_date=case.second_query_response_date,
            submitted_to_higher_date=case.submitted_to_higher_date,
            signed_date=case.signed_date,
            deadline=case.deadline,
            assigned_to=case.assigned_to,
            remarks=case.remarks,
        )


# ========== Response DTOs ==========

class CaseDerivedResponse(BaseModel):
    """Derived projection of a case, keyed by case ID."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    case_id: str
    priority: str
    overall_status: str
    sla_status: str
    days_in_process: int = Field(..., ge=0)
    overall_sla_days: int
    sla_countdown_days: int = Field(..., description="Negative once past budget")
    first_query_pending_days: int = Field(..., ge=0)
    second_query_pending_days: int = Field(..., ge=0)
    days_received_to_submitted_to_higher: Optional[int] = None
    days_since_last_response: int = Field(..., ge=0)
    deadline: Optional[date] = None

    @classmethod
    def from_derived(cls, item: DerivedCase) -> "CaseDerivedResponse":
        d = item.derived
        return cls(
            case_id=item.case_id,
            priority=item.priority.value,
            overall_status=item.overall_status.value,
            sla_status=d.sla_status.value,
            days_in_process=d.days_in_process,
            overall_sla_days=d.overall_sla_days,
            sla_countdown_days=d.sla_countdown_days,
            first_query_pending_days=d.first_query_pending_days,
            second_query_pending_days=d.second_query_pending_days,
            days_received_to_submitted_to_higher=d.days_received_to_submitted_to_higher,
            days_since_last_response=d.days_since_last_response,
            deadline=item.deadline,
        )


class DerivationError(BaseModel):
    """One entity that could not be derived."""
    case_id: str
    error_type: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class DashboardSummary(BaseModel):
    """Counters for the dashboard KPI cards."""
    total_cases: int
    total_active: int
    pending_review: int
    in_process: int
    dept_query_first_stage: int
    dept_query_higher_authority: int
    pending_higher_approval: int
    returned_for_query: int = Field(..., description="Any department query or ReturnedForQuery")
    approved_last_30_days: int
    sla_breached: int = Field(..., description="Active cases in Overdue")
    at_risk: int = Field(..., description="Active cases in AtRisk or Critical")
    avg_days_to_approval: int
    breach_rate: float = Field(..., description="Percentage of active cases overdue")


class DeadlineCountersResponse(BaseModel):
    """Deadline counter card: counts and the case IDs behind each."""
    overdue: List[str] = Field(default_factory=list)
    this_week: List[str] = Field(default_factory=list)
    upcoming: List[str] = Field(default_factory=list)
    no_deadline: List[str] = Field(default_factory=list)
    total_with_deadline: int = 0
