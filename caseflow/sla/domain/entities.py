"""
SLA Domain Entities
====================

Pure Python domain entities for case SLA tracking.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from caseflow.config import (
    CaseType, OverallStatus, Priority, QueryStage, SLAStatus
)


@dataclass
class Case:
    """
    One tracked matter as supplied by the storage layer.

    ``case_id`` is human-assigned and immutable once set. Date validation
    happens in the engine, not here, so that a malformed record can still
    be loaded and reported on.
    """

    # Identity and classification
    case_id: str
    case_type: CaseType
    priority: Priority
    overall_status: OverallStatus

    # Mandatory dates (optional in the type so missing values can be reported)
    submitted_date: Optional[date]
    received_date: Optional[date]

    # First query cycle
    first_query_issued_date: Optional[date] = None
    first_query_response_date: Optional[date] = None

    # Second query cycle
    second_query_issued_date: Optional[date] = None
    second_query_response_date: Optional[date] = None

    # Escalation and completion
    submitted_to_higher_date: Optional[date] = None
    signed_date: Optional[date] = None
    deadline: Optional[date] = None

    # Descriptive
    case_title: str = ""
    assigned_to: Optional[str] = None
    remarks: Optional[str] = None

    def __post_init__(self):
        """Coerce vocabulary fields; raises UnknownEnumValueException."""
        self.case_type = CaseType.parse(self.case_type)
        self.priority = Priority.parse(self.priority)
        self.overall_status = OverallStatus.parse(self.overall_status)

    @property
    def is_terminal(self) -> bool:
        """ApprovedSigned and NotApproved stop the SLA clock."""
        return self.overall_status.is_terminal

    @property
    def is_active(self) -> bool:
        return not self.is_terminal

    @property
    def query_stage(self) -> Optional[QueryStage]:
        """Which department query the case is waiting on, if any."""
        return self.overall_status.query_stage


@dataclass(frozen=True)
class CaseDerivedFields:
    """
    Values recomputed from a case snapshot and "now".

    Never persisted as source of truth: recompute after every status or
    date change.
    """

    case_id: str
    days_in_process: int
    sla_status: SLAStatus
    overall_sla_days: int
    first_query_pending_days: int
    second_query_pending_days: int
    days_received_to_submitted_to_higher: Optional[int]
    sla_countdown_days: int
    days_since_last_response: int

    @property
    def is_completed(self) -> bool:
        return self.sla_status in (SLAStatus.COMPLETED, SLAStatus.COMPLETED_OVERDUE)

    @property
    def needs_attention(self) -> bool:
        """Overdue, Critical or AtRisk: the tiers shown in the alerts panel."""
        return self.sla_status in (SLAStatus.OVERDUE, SLAStatus.CRITICAL, SLAStatus.AT_RISK)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export and UI consumers."""
        return {
            "case_id": self.case_id,
            "days_in_process": self.days_in_process,
            "sla_status": self.sla_status.value,
            "overall_sla_days": self.overall_sla_days,
            "first_query_pending_days": self.first_query_pending_days,
            "second_query_pending_days": self.second_query_pending_days,
            "days_received_to_submitted_to_higher": self.days_received_to_submitted_to_higher,
            "sla_countdown_days": self.sla_countdown_days,
            "days_since_last_response": self.days_since_last_response,
        }


@dataclass(frozen=True)
class DerivedCase:
    """A case snapshot paired with its derived fields, for sorting and reports."""

    case: Case
    derived: CaseDerivedFields

    @property
    def case_id(self) -> str:
        return self.case.case_id

    @property
    def priority(self) -> Priority:
        return self.case.priority

    @property
    def overall_status(self) -> OverallStatus:
        return self.case.overall_status

    @property
    def case_type(self) -> CaseType:
        return self.case.case_type

    @property
    def deadline(self) -> Optional[date]:
        return self.case.deadline

    @property
    def is_terminal(self) -> bool:
        return self.case.is_terminal

    @property
    def sla_status(self) -> SLAStatus:
        return self.derived.sla_status

    @property
    def days_in_process(self) -> int:
        return self.derived.days_in_process
