"""
Case SLA Engine
================

Turns a case snapshot and "now" into its derived SLA fields.

The main clock (``days_in_process``) and the two query clocks run
independently: a pending department query does not pause the master
deadline.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from caseflow.config import SLAStatus
from caseflow.core.exceptions import (
    InvalidDateOrderException,
    MissingRequiredDateException,
    ValidationException,
)
from caseflow.shared.domain.clock import ClockPolicy, DateLike, as_date
from caseflow.sla.domain.entities import Case, CaseDerivedFields, DerivedCase
from caseflow.sla.domain.value_objects import SLAThresholdPolicy

# (earlier field, later field) pairs that must be chronological when both are set
_ORDERED_DATE_PAIRS = (
    ("first_query_issued_date", "first_query_response_date"),
    ("second_query_issued_date", "second_query_response_date"),
    ("submitted_date", "signed_date"),
    ("received_date", "submitted_to_higher_date"),
)


@dataclass
class BatchDerivation:
    """Outcome of deriving many cases: one entry per case in exactly one map."""
    derived: Dict[str, DerivedCase] = field(default_factory=dict)
    errors: Dict[str, ValidationException] = field(default_factory=dict)

    @property
    def derived_cases(self) -> List[DerivedCase]:
        return list(self.derived.values())

    @property
    def failed_count(self) -> int:
        return len(self.errors)


class CaseSLAEngine:
    """
    Pure SLA calculations for cases.

    Stateless: every call takes the full case and an explicit "now".
    """

    def __init__(self, thresholds: Optional[SLAThresholdPolicy] = None):
        self._thresholds = thresholds or SLAThresholdPolicy()

    @property
    def thresholds(self) -> SLAThresholdPolicy:
        return self._thresholds

    def validate(self, case: Case) -> None:
        """
        Check mandatory dates and date ordering.

        Raises:
            MissingRequiredDateException: submitted or received date absent
            InvalidDateOrderException: a later date precedes its earlier pair
        """
        for required in ("submitted_date", "received_date"):
            if getattr(case, required) is None:
                raise MissingRequiredDateException(case.case_id, required)

        for earlier_field, later_field in _ORDERED_DATE_PAIRS:
            earlier = getattr(case, earlier_field)
            later = getattr(case, later_field)
            if earlier is not None and later is not None and as_date(later) < as_date(earlier):
                raise InvalidDateOrderException(
                    case.case_id, earlier_field, later_field, earlier, later
                )

    def days_in_process(self, case: Case, now: DateLike) -> int:
        """Submitted → now while active; submitted → signed (or now) once terminal."""
        end = case.signed_date if case.is_terminal and case.signed_date else now
        return max(0, ClockPolicy.days_between(case.submitted_date, end))

    def sla_status(self, case: Case, days_in_process: int) -> SLAStatus:
        allowed = self._thresholds.allowed_days(case.priority)
        if case.is_terminal:
            if days_in_process > allowed:
                return SLAStatus.COMPLETED_OVERDUE
            return SLAStatus.COMPLETED
        return self._thresholds.bucket_boundaries(allowed).classify(days_in_process)

    @staticmethod
    def query_pending_days(
        issued: Optional[date],
        responded: Optional[date],
        now: DateLike
    ) -> int:
        """Days a query has been waiting; 0 when not issued or already answered."""
        if issued is None or responded is not None:
            return 0
        return max(0, ClockPolicy.days_between(issued, now))

    @staticmethod
    def days_since_last_response(case: Case, now: DateLike) -> int:
        latest = max(
            as_date(d) for d in (
                case.first_query_response_date,
                case.second_query_response_date,
                case.received_date,
            ) if d is not None
        )
        return max(0, ClockPolicy.days_between(latest, now))

    def compute_case_derived(self, case: Case, now: DateLike) -> CaseDerivedFields:
        """
        Derive SLA fields for one case.

        Args:
            case: Case snapshot from the storage layer
            now: Current date (datetimes are truncated to their date)

        Returns:
            CaseDerivedFields

        Raises:
            MissingRequiredDateException, InvalidDateOrderException,
            UnknownEnumValueException
        """
        self.validate(case)

        allowed = self._thresholds.allowed_days(case.priority)
        days = self.days_in_process(case, now)

        if case.submitted_to_higher_date is not None:
            received_to_higher = ClockPolicy.days_between(
                case.received_date, case.submitted_to_higher_date
            )
        else:
            received_to_higher = None

        return CaseDerivedFields(
            case_id=case.case_id,
            days_in_process=days,
            sla_status=self.sla_status(case, days),
            overall_sla_days=allowed,
            first_query_pending_days=self.query_pending_days(
                case.first_query_issued_date, case.first_query_response_date, now
            ),
            second_query_pending_days=self.query_pending_days(
                case.second_query_issued_date, case.second_query_response_date, now
            ),
            days_received_to_submitted_to_higher=received_to_higher,
            sla_countdown_days=allowed - days,
            days_since_last_response=self.days_since_last_response(case, now),
        )

    def derive(self, case: Case, now: DateLike) -> DerivedCase:
        return DerivedCase(case=case, derived=self.compute_case_derived(case, now))

    def compute_many(self, cases: Iterable[Case], now: DateLike) -> BatchDerivation:
        """
        Derive every case; a failing case is recorded and skipped.

        A case_id that fails once stays in errors even if another case
        with the same id derives cleanly.
        """
        result = BatchDerivation()
        for case in cases:
            try:
                derived = self.derive(case, now)
            except ValidationException as e:
                result.derived.pop(case.case_id, None)
                result.errors[case.case_id] = e
                continue
            if case.case_id not in result.errors:
                result.derived[case.case_id] = derived
        return result
