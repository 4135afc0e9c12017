"""
Tests: deterministic ordering, report grouping and SLA distribution.

    - priority and SLA-status total orders
    - direction flips the primary field only; ties fall back to case_id
    - absent deadlines sort last
    - grouping keeps rank order and drops empty groups
"""

from __future__ import annotations

from datetime import date
from typing import List

import pytest

from caseflow.config import (
    CaseSortField, CaseType, OverallStatus, Priority, ReportGroupField,
    SLAStatus, SortDirection
)
from caseflow.core.exceptions import UnknownEnumValueException
from caseflow.sla.domain import CaseSLAEngine, DerivedCase, OrderingPolicy


NOW = date(2024, 3, 1)


def _derive(engine: CaseSLAEngine, cases) -> List[DerivedCase]:
    return [engine.derive(case, NOW) for case in cases]


# ═════════════════════════════════════════════════════════════════════════════
# 1. COMPARATORS
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.unit
def test_priority_order_is_urgent_first() -> None:
    """Urgent < High < Medium < Low."""
    policy = OrderingPolicy()
    ranked = sorted(["Low", "Urgent", "Medium", "High"], key=policy.priority_rank)
    assert ranked == ["Urgent", "High", "Medium", "Low"]
    assert policy.compare_priority(Priority.URGENT, Priority.LOW) < 0
    assert policy.compare_priority("Medium", "Medium") == 0


@pytest.mark.unit
def test_sla_status_order() -> None:
    """Overdue < Critical < AtRisk < WithinSLA < Completed < CompletedOverdue."""
    policy = OrderingPolicy()
    ranked = sorted(SLAStatus, key=policy.sla_status_rank)
    assert ranked == [
        SLAStatus.OVERDUE,
        SLAStatus.CRITICAL,
        SLAStatus.AT_RISK,
        SLAStatus.WITHIN_SLA,
        SLAStatus.COMPLETED,
        SLAStatus.COMPLETED_OVERDUE,
    ]
    assert policy.compare_sla_status("Overdue", "WithinSLA") < 0


@pytest.mark.unit
def test_rank_rejects_unknown_value() -> None:
    """Unknown vocabulary values are not silently ranked."""
    with pytest.raises(UnknownEnumValueException):
        OrderingPolicy.priority_rank("Critical")


# ═════════════════════════════════════════════════════════════════════════════
# 2. SORTING
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.unit
def test_default_sort_is_longest_running_first(engine: CaseSLAEngine, make_case) -> None:
    """Default: days in process descending, ties by case_id ascending."""
    derived = _derive(engine, [
        make_case(case_id="C-3", submitted=date(2024, 2, 20), received=date(2024, 2, 20)),
        make_case(case_id="C-2", submitted=date(2024, 2, 1), received=date(2024, 2, 1)),
        make_case(case_id="C-1", submitted=date(2024, 2, 20), received=date(2024, 2, 20)),
    ])

    ordered = OrderingPolicy().sort_cases(derived)

    assert [c.case_id for c in ordered] == ["C-2", "C-1", "C-3"]


@pytest.mark.unit
def test_sort_by_priority_breaks_ties_by_case_id(engine: CaseSLAEngine, make_case) -> None:
    """Equal priorities are ordered by case_id even when sorting descending."""
    derived = _derive(engine, [
        make_case(case_id="C-4", priority=Priority.LOW),
        make_case(case_id="C-2", priority=Priority.URGENT),
        make_case(case_id="C-3", priority=Priority.URGENT),
        make_case(case_id="C-1", priority=Priority.LOW),
    ])
    policy = OrderingPolicy()

    ascending = policy.sort_cases(derived, "priority", "asc")
    descending = policy.sort_cases(derived, CaseSortField.PRIORITY, SortDirection.DESC)

    assert [c.case_id for c in ascending] == ["C-2", "C-3", "C-1", "C-4"]
    assert [c.case_id for c in descending] == ["C-1", "C-4", "C-2", "C-3"]


@pytest.mark.unit
def test_sort_by_deadline_puts_missing_last(engine: CaseSLAEngine, make_case) -> None:
    """Cases without a deadline come after every dated case when ascending."""
    derived = _derive(engine, [
        make_case(case_id="C-1"),
        make_case(case_id="C-2", deadline=date(2024, 4, 1)),
        make_case(case_id="C-3", deadline=date(2024, 3, 5)),
    ])

    ordered = OrderingPolicy().sort_cases(derived, CaseSortField.DEADLINE, SortDirection.ASC)

    assert [c.case_id for c in ordered] == ["C-3", "C-2", "C-1"]


@pytest.mark.unit
def test_sort_by_sla_status(engine: CaseSLAEngine, make_case) -> None:
    """Most urgent tier first when ascending."""
    derived = _derive(engine, [
        make_case(case_id="C-1", submitted=date(2024, 2, 28), received=date(2024, 2, 28)),
        make_case(case_id="C-2", submitted=date(2024, 1, 1)),
        make_case(case_id="C-3", status=OverallStatus.APPROVED_SIGNED, signed_date=date(2024, 1, 5)),
    ])

    ordered = OrderingPolicy().sort_cases(derived, CaseSortField.SLA_STATUS, SortDirection.ASC)

    assert [c.sla_status for c in ordered] == [SLAStatus.OVERDUE, SLAStatus.WITHIN_SLA, SLAStatus.COMPLETED]


@pytest.mark.unit
def test_sort_by_overall_status_uses_lifecycle_order(engine: CaseSLAEngine, make_case) -> None:
    """PendingReview sorts before InProcess, terminal statuses last."""
    derived = _derive(engine, [
        make_case(case_id="C-1", status=OverallStatus.NOT_APPROVED),
        make_case(case_id="C-2", status=OverallStatus.IN_PROCESS),
        make_case(case_id="C-3", status=OverallStatus.PENDING_REVIEW),
    ])

    ordered = OrderingPolicy().sort_cases(derived, "overallStatus", "asc")

    assert [c.case_id for c in ordered] == ["C-3", "C-2", "C-1"]


@pytest.mark.unit
def test_custom_secondary_key(engine: CaseSLAEngine, make_case) -> None:
    """A caller-supplied tie-break replaces case_id."""
    derived = _derive(engine, [
        make_case(case_id="C-1", case_title="Zeta"),
        make_case(case_id="C-2", case_title="Alpha"),
    ])

    ordered = OrderingPolicy().sort_cases(
        derived, CaseSortField.PRIORITY, SortDirection.ASC,
        secondary_key=lambda c: c.case.case_title,
    )

    assert [c.case_id for c in ordered] == ["C-2", "C-1"]


@pytest.mark.unit
def test_sort_is_stable_under_input_permutation(engine: CaseSLAEngine, make_case) -> None:
    """The same snapshot sorts identically whatever order it arrives in."""
    cases = [
        make_case(case_id=f"C-{i}", priority=p)
        for i, p in enumerate([Priority.HIGH, Priority.LOW, Priority.HIGH, Priority.URGENT])
    ]
    derived = _derive(engine, cases)
    policy = OrderingPolicy()

    forward = policy.sort_cases(derived, CaseSortField.PRIORITY, SortDirection.ASC)
    backward = policy.sort_cases(list(reversed(derived)), CaseSortField.PRIORITY, SortDirection.ASC)

    assert [c.case_id for c in forward] == [c.case_id for c in backward]


@pytest.mark.unit
def test_sort_rejects_unknown_field(engine: CaseSLAEngine, make_case) -> None:
    """Unknown sort fields raise instead of falling back silently."""
    with pytest.raises(UnknownEnumValueException):
        OrderingPolicy().sort_cases(_derive(engine, [make_case()]), "title")


# ═════════════════════════════════════════════════════════════════════════════
# 3. GROUPING AND DISTRIBUTION
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.unit
def test_group_by_priority_in_rank_order(engine: CaseSLAEngine, make_case) -> None:
    """Groups appear Urgent first; empty groups are omitted; members sorted by case_id."""
    derived = _derive(engine, [
        make_case(case_id="C-3", priority=Priority.LOW),
        make_case(case_id="C-1", priority=Priority.LOW),
        make_case(case_id="C-2", priority=Priority.URGENT),
    ])

    groups = OrderingPolicy().group_by(derived, ReportGroupField.PRIORITY)

    assert list(groups) == [Priority.URGENT, Priority.LOW]
    assert [c.case_id for c in groups[Priority.LOW]] == ["C-1", "C-3"]


@pytest.mark.unit
def test_group_by_case_type(engine: CaseSLAEngine, make_case) -> None:
    """Case types group in declaration order."""
    derived = _derive(engine, [
        make_case(case_id="C-1", case_type=CaseType.OTHER),
        make_case(case_id="C-2", case_type=CaseType.MINISTERIAL_INQUIRY),
    ])

    groups = OrderingPolicy().group_by(derived, "caseType")

    assert list(groups) == [CaseType.MINISTERIAL_INQUIRY, CaseType.OTHER]


@pytest.mark.unit
def test_sla_distribution_includes_every_status(engine: CaseSLAEngine, make_case) -> None:
    """All six tiers are present, zero-filled, in rank order."""
    derived = _derive(engine, [
        make_case(case_id="C-1"),
        make_case(case_id="C-2"),
        make_case(case_id="C-3", submitted=date(2024, 2, 29), received=date(2024, 2, 29)),
    ])

    distribution = OrderingPolicy.sla_distribution(derived)

    assert list(distribution) == list(SLAStatus)
    assert distribution[SLAStatus.OVERDUE] == 2
    assert distribution[SLAStatus.WITHIN_SLA] == 1
    assert sum(distribution.values()) == 3
