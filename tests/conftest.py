"""
Shared fixtures for the caseflow test-suite.

Every test runs against a fixed "today" so day counts are reproducible;
nothing here touches the real clock.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

import pytest

from caseflow.config import CaseType, OverallStatus, Priority
from caseflow.shared.domain.clock import ClockPolicy
from caseflow.sla.application import CaseSLAService
from caseflow.sla.domain import Case, CaseSLAEngine
from caseflow.workflow.application import WorkflowService


TODAY = date(2024, 3, 1)


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def clock() -> ClockPolicy:
    return ClockPolicy.fixed(TODAY)


@pytest.fixture()
def engine() -> CaseSLAEngine:
    return CaseSLAEngine()


@pytest.fixture()
def sla_service(clock: ClockPolicy) -> CaseSLAService:
    return CaseSLAService(clock=clock)


@pytest.fixture()
def workflow_service(clock: ClockPolicy) -> WorkflowService:
    return WorkflowService(clock=clock)


@pytest.fixture()
def make_case() -> Callable[..., Case]:
    """Factory for a valid in-process Medium case; override any field by keyword."""

    def _make_case(
        case_id: str = "CASE-2024-001",
        priority: Any = Priority.MEDIUM,
        status: Any = OverallStatus.IN_PROCESS,
        submitted: date | None = date(2024, 1, 1),
        received: date | None = date(2024, 1, 1),
        **fields: Any,
    ) -> Case:
        return Case(
            case_id=case_id,
            case_type=fields.pop("case_type", CaseType.POLICY_REVIEW),
            priority=priority,
            overall_status=status,
            submitted_date=submitted,
            received_date=received,
            **fields,
        )

    return _make_case
