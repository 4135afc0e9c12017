"""
SLA Application Services
=========================

Application services orchestrate the pure domain services for the
presentation and export layers.

This is the only layer that reads the clock and the only one that logs:
domain calls below it always get an explicit "now".
"""

import math
import uuid
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from caseflow.config import (
    CaseSortField, OverallStatus, ReportGroupField, SLAStatus, SortDirection
)
from caseflow.core.exceptions import ValidationException
from caseflow.shared.domain.clock import ClockPolicy, DateLike, as_date
from caseflow.shared.infrastructure.logging import get_context_logger, log_latency
from caseflow.sla.application.dto import (
    CaseDerivedResponse,
    CaseRecordDTO,
    DashboardSummary,
    DeadlineCountersResponse,
    DerivationError,
)
from caseflow.sla.domain import (
    BatchDerivation,
    Case,
    CaseSLAEngine,
    DeadlineClassifier,
    DeadlineCounters,
    DerivedCase,
    OrderingPolicy,
    SLAConfig,
    SLAThresholdPolicy,
)

CaseRecord = Union[CaseRecordDTO, Mapping[str, Any]]

_QUERY_STATUSES = (
    OverallStatus.DEPT_QUERY_FIRST_STAGE,
    OverallStatus.DEPT_QUERY_HIGHER_AUTHORITY,
    OverallStatus.RETURNED_FOR_QUERY,
)


# ========== Provider Interfaces (Dependency Inversion) ==========

class ISLAConfigProvider(ABC):
    """Interface for SLA configuration access."""

    @abstractmethod
    def get_config(self) -> SLAConfig:
        """Get current SLA configuration."""


# ========== Application Services ==========

class CaseSLAService:
    """
    Derives case SLA fields and the dashboard views built on them.

    The engine is rebuilt from the provider on each call so a reloaded
    threshold file takes effect without restarting.
    """

    def __init__(
        self,
        config_provider: Optional[ISLAConfigProvider] = None,
        clock: Optional[ClockPolicy] = None
    ):
        self._config_provider = config_provider
        self._clock = clock or ClockPolicy()
        self._ordering = OrderingPolicy()

    @property
    def config(self) -> SLAConfig:
        if self._config_provider is None:
            return SLAConfig()
        return self._config_provider.get_config()

    @property
    def engine(self) -> CaseSLAEngine:
        return CaseSLAEngine(SLAThresholdPolicy(self.config))

    @property
    def ordering(self) -> OrderingPolicy:
        return self._ordering

    def _now(self, now: Optional[DateLike]) -> DateLike:
        return self._clock.today() if now is None else now

    # ----- derivation -----

    def derive_case(self, case: Case, now: Optional[DateLike] = None) -> DerivedCase:
        """Derive one case; validation errors propagate to the caller."""
        return self.engine.derive(case, self._now(now))

    def derive_cases(
        self,
        cases: Iterable[Case],
        now: Optional[DateLike] = None,
        correlation_id: Optional[str] = None
    ) -> BatchDerivation:
        """
        Derive a batch of cases.

        A case that fails validation is recorded in ``errors`` and logged;
        the rest of the batch is still derived.
        """
        logger = get_context_logger(__name__, correlation_id or str(uuid.uuid4()))
        cases = list(cases)

        with log_latency(logger, "derive_cases", case_count=len(cases)):
            result = self.engine.compute_many(cases, self._now(now))

        for case_id, error in result.errors.items():
            logger.warning(
                "Case skipped during SLA derivation",
                extra={
                    "case_id": case_id,
                    "error_type": type(error).__name__,
                    "error": error.message,
                }
            )
        return result

    def derive_records(
        self,
        records: Iterable[CaseRecord],
        now: Optional[DateLike] = None,
        correlation_id: Optional[str] = None
    ) -> BatchDerivation:
        """
        Derive storage-layer records, converting each to a domain Case first.

        Conversion failures (malformed fields, unknown vocabulary) are
        isolated per record the same way derivation failures are.
        """
        correlation_id = correlation_id or str(uuid.uuid4())
        cases: List[Case] = []
        conversion_errors: Dict[str, ValidationException] = {}

        for index, record in enumerate(records):
            record_id = _record_id(record, index)
            try:
                dto = record if isinstance(record, CaseRecordDTO) else CaseRecordDTO.model_validate(record)
                cases.append(dto.to_domain())
            except ValidationError as e:
                conversion_errors[record_id] = ValidationException(
                    f"Malformed case record {record_id}",
                    {"errors": e.errors(include_url=False)}
                )
            except ValidationException as e:
                conversion_errors[record_id] = e

        result = self.derive_cases(cases, now, correlation_id)
        if conversion_errors:
            get_context_logger(__name__, correlation_id).warning(
                "Case records rejected during conversion",
                extra={"case_ids": sorted(conversion_errors)}
            )
            for case_id in conversion_errors:
                result.derived.pop(case_id, None)
            result.errors.update(conversion_errors)
        return result

    @staticmethod
    def to_responses(result: BatchDerivation) -> List[CaseDerivedResponse]:
        return [CaseDerivedResponse.from_derived(item) for item in result.derived_cases]

    @staticmethod
    def to_errors(result: BatchDerivation) -> List[DerivationError]:
        return [
            DerivationError(
                case_id=case_id,
                error_type=type(error).__name__,
                message=error.message,
                details=error.details,
            )
            for case_id, error in result.errors.items()
        ]

    # ----- dashboard views -----

    def dashboard_summary(
        self,
        derived_cases: Iterable[DerivedCase],
        now: Optional[DateLike] = None
    ) -> DashboardSummary:
        """KPI counters over a derived snapshot."""
        items = list(derived_cases)
        today = self._now(now)
        cutoff = ClockPolicy.add_days(today, -30)

        active = [c for c in items if not c.is_terminal]
        approved = [c for c in items if c.overall_status == OverallStatus.APPROVED_SIGNED]

        def count_status(status: OverallStatus) -> int:
            return sum(1 for c in items if c.overall_status == status)

        breached = sum(1 for c in active if c.sla_status == SLAStatus.OVERDUE)
        at_risk = sum(1 for c in active if c.sla_status in (SLAStatus.AT_RISK, SLAStatus.CRITICAL))

        if approved:
            mean_days = sum(c.days_in_process for c in approved) / len(approved)
            avg_days = math.floor(mean_days + 0.5)
        else:
            avg_days = 0

        return DashboardSummary(
            total_cases=len(items),
            total_active=len(active),
            pending_review=count_status(OverallStatus.PENDING_REVIEW),
            in_process=count_status(OverallStatus.IN_PROCESS),
            dept_query_first_stage=count_status(OverallStatus.DEPT_QUERY_FIRST_STAGE),
            dept_query_higher_authority=count_status(OverallStatus.DEPT_QUERY_HIGHER_AUTHORITY),
            pending_higher_approval=count_status(OverallStatus.PENDING_HIGHER_APPROVAL),
            returned_for_query=sum(1 for c in items if c.overall_status in _QUERY_STATUSES),
            approved_last_30_days=sum(
                1 for c in approved
                if c.case.signed_date is not None and as_date(c.case.signed_date) >= cutoff
            ),
            sla_breached=breached,
            at_risk=at_risk,
            avg_days_to_approval=avg_days,
            breach_rate=(breached / len(active) * 100) if active else 0.0,
        )

    def sla_alerts(self, derived_cases: Iterable[DerivedCase]) -> List[DerivedCase]:
        """Cases needing attention, most urgent tier first, then by case ID."""
        flagged = [c for c in derived_cases if c.derived.needs_attention]
        return self._ordering.sort_cases(flagged, CaseSortField.SLA_STATUS, SortDirection.ASC)

    def deadline_counters(
        self,
        cases: Iterable[Any],
        now: Optional[DateLike] = None
    ) -> DeadlineCounters:
        classifier = DeadlineClassifier(self.config.deadline_window_days)
        return classifier.counters(cases, self._now(now))

    def deadline_counters_response(
        self,
        cases: Iterable[Any],
        now: Optional[DateLike] = None
    ) -> DeadlineCountersResponse:
        counters = self.deadline_counters(cases, now)
        return DeadlineCountersResponse(
            overdue=[c.case_id for c in counters.overdue],
            this_week=[c.case_id for c in counters.this_week],
            upcoming=[c.case_id for c in counters.upcoming],
            no_deadline=[c.case_id for c in counters.no_deadline],
            total_with_deadline=counters.total_with_deadline,
        )

    # ----- ordering and grouping -----

    def sort_cases(
        self,
        derived_cases: Iterable[DerivedCase],
        sort_field: "CaseSortField | str" = CaseSortField.DAYS_IN_PROCESS,
        direction: "SortDirection | str" = SortDirection.DESC,
        secondary_key: Optional[Callable[[DerivedCase], Any]] = None
    ) -> List[DerivedCase]:
        return self._ordering.sort_cases(derived_cases, sort_field, direction, secondary_key)

    def group_cases(
        self,
        derived_cases: Iterable[DerivedCase],
        group_field: "ReportGroupField | str"
    ) -> Dict[Any, List[DerivedCase]]:
        return self._ordering.group_by(derived_cases, group_field)

    def sla_distribution(self, derived_cases: Iterable[DerivedCase]) -> Dict[SLAStatus, int]:
        return self._ordering.sla_distribution(derived_cases)


def _record_id(record: CaseRecord, index: int) -> str:
    if isinstance(record, CaseRecordDTO):
        return record.case_id
    return str(record.get("case_id") or record.get("caseId") or f"record-{index}")
