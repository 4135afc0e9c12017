"""
SLA Application Layer
======================

Application layer for case SLA tracking.

Contains:
- Services: Orchestrate domain services, read the clock, log batch outcomes
- DTOs: Storage-layer records in, derived projections out

This layer depends on the domain layer and provider interfaces,
but not on concrete infrastructure implementations.
"""

from caseflow.sla.application.dto import (
    CaseRecordDTO,
    CaseDerivedResponse,
    DerivationError,
    DashboardSummary,
    DeadlineCountersResponse,
)
from caseflow.sla.application.services import (
    CaseSLAService,
    ISLAConfigProvider,
)

__all__ = [
    # DTOs
    "CaseRecordDTO",
    "CaseDerivedResponse",
    "DerivationError",
    "DashboardSummary",
    "DeadlineCountersResponse",
    # Services
    "CaseSLAService",
    # Provider Interfaces
    "ISLAConfigProvider",
]
