"""
Ordering Policy
===============

Fixed total orders over the case vocabularies, shared by table sorting and
report grouping so both always agree.

Ties on the sorted field fall back to a secondary key (``case_id`` unless
the caller supplies another) so that a snapshot always sorts the same way,
which keeps pagination and exports reproducible.
"""

from datetime import date
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional

from caseflow.config import (
    CaseSortField, CaseType, OverallStatus, Priority, ReportGroupField,
    SLAStatus, SortDirection
)
from caseflow.sla.domain.entities import DerivedCase

PRIORITY_RANK: Dict[Priority, int] = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

SLA_STATUS_RANK: Dict[SLAStatus, int] = {
    SLAStatus.OVERDUE: 0,
    SLAStatus.CRITICAL: 1,
    SLAStatus.AT_RISK: 2,
    SLAStatus.WITHIN_SLA: 3,
    SLAStatus.COMPLETED: 4,
    SLAStatus.COMPLETED_OVERDUE: 5,
}

# Lifecycle order, as declared
STATUS_RANK: Dict[OverallStatus, int] = {s: i for i, s in enumerate(OverallStatus)}
CASE_TYPE_RANK: Dict[CaseType, int] = {t: i for i, t in enumerate(CaseType)}


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _deadline_key(deadline: Optional[date]) -> tuple:
    # absent deadlines sort after every real date
    return (deadline is None, deadline or date.min)


class OrderingPolicy:
    """Rank lookups, comparators, sorting and grouping for derived cases."""

    @staticmethod
    def priority_rank(priority: "Priority | str") -> int:
        return PRIORITY_RANK[Priority.parse(priority)]

    @staticmethod
    def sla_status_rank(status: "SLAStatus | str") -> int:
        return SLA_STATUS_RANK[SLAStatus.parse(status)]

    def compare_priority(self, a: "Priority | str", b: "Priority | str") -> int:
        """Negative when ``a`` is more urgent than ``b``."""
        return self.priority_rank(a) - self.priority_rank(b)

    def compare_sla_status(self, a: "SLAStatus | str", b: "SLAStatus | str") -> int:
        """Negative when ``a`` is the more urgent tier."""
        return self.sla_status_rank(a) - self.sla_status_rank(b)

    def compare_field(self, a: DerivedCase, b: DerivedCase, sort_field: CaseSortField) -> int:
        """Signed comparison of two cases on a single field."""
        if sort_field == CaseSortField.CASE_ID:
            return _cmp(a.case_id, b.case_id)
        if sort_field == CaseSortField.PRIORITY:
            return self.compare_priority(a.priority, b.priority)
        if sort_field == CaseSortField.DAYS_IN_PROCESS:
            return _cmp(a.days_in_process, b.days_in_process)
        if sort_field == CaseSortField.SLA_STATUS:
            return self.compare_sla_status(a.sla_status, b.sla_status)
        if sort_field == CaseSortField.OVERALL_STATUS:
            return STATUS_RANK[a.overall_status] - STATUS_RANK[b.overall_status]
        if sort_field == CaseSortField.DEADLINE:
            return _cmp(_deadline_key(a.deadline), _deadline_key(b.deadline))
        if sort_field == CaseSortField.DAYS_SINCE_LAST_RESPONSE:
            return _cmp(a.derived.days_since_last_response, b.derived.days_since_last_response)
        raise ValueError(f"Unsupported sort field: {sort_field}")

    def compare(
        self,
        a: DerivedCase,
        b: DerivedCase,
        sort_field: CaseSortField,
        direction: SortDirection = SortDirection.ASC,
        secondary_key: Optional[Callable[[DerivedCase], Any]] = None
    ) -> int:
        """Direction applies to the primary field; the tie-break is always ascending."""
        primary = self.compare_field(a, b, sort_field)
        if direction == SortDirection.DESC:
            primary = -primary
        if primary:
            return primary
        key = secondary_key or (lambda c: c.case_id)
        return _cmp(key(a), key(b))

    def sort_cases(
        self,
        cases: Iterable[DerivedCase],
        sort_field: "CaseSortField | str" = CaseSortField.DAYS_IN_PROCESS,
        direction: "SortDirection | str" = SortDirection.DESC,
        secondary_key: Optional[Callable[[DerivedCase], Any]] = None
    ) -> List[DerivedCase]:
        """
        Deterministically sorted copy of ``cases``.

        Defaults match the case table: longest-running first.
        """
        sort_field = CaseSortField.parse(sort_field)
        direction = SortDirection.parse(direction)
        return sorted(
            cases,
            key=cmp_to_key(
                lambda a, b: self.compare(a, b, sort_field, direction, secondary_key)
            )
        )

    def group_by(
        self,
        cases: Iterable[DerivedCase],
        group_field: "ReportGroupField | str"
    ) -> Dict[Any, List[DerivedCase]]:
        """
        Report grouping: non-empty groups in the field's rank order, cases
        inside each group ordered by ``case_id``.
        """
        group_field = ReportGroupField.parse(group_field)
        attribute, rank = {
            ReportGroupField.PRIORITY: ("priority", PRIORITY_RANK),
            ReportGroupField.SLA_STATUS: ("sla_status", SLA_STATUS_RANK),
            ReportGroupField.OVERALL_STATUS: ("overall_status", STATUS_RANK),
            ReportGroupField.CASE_TYPE: ("case_type", CASE_TYPE_RANK),
        }[group_field]

        groups: Dict[Any, List[DerivedCase]] = {}
        for case in sorted(cases, key=lambda c: c.case_id):
            groups.setdefault(getattr(case, attribute), []).append(case)

        return {key: groups[key] for key in sorted(groups, key=rank.__getitem__)}

    @staticmethod
    def sla_distribution(cases: Iterable[DerivedCase]) -> Dict[SLAStatus, int]:
        """Count per SLA status, every status present, in rank order."""
        counts = {status: 0 for status in sorted(SLA_STATUS_RANK, key=SLA_STATUS_RANK.__getitem__)}
        for case in cases:
            counts[case.sla_status] += 1
        return counts
