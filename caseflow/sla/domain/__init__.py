"""
SLA Domain Layer
================

Domain layer for case SLA tracking.

Contains:
- Entities: Case, CaseDerivedFields, DerivedCase
- Value Objects: SLAConfig, SLABoundaries, SLAThresholdPolicy
- Domain Services: CaseSLAEngine, DeadlineClassifier, OrderingPolicy

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from caseflow.sla.domain.entities import Case, CaseDerivedFields, DerivedCase
from caseflow.sla.domain.value_objects import (
    DEFAULT_SLA_DAYS,
    SLABoundaries,
    SLAConfig,
    SLAThresholdPolicy,
)
from caseflow.sla.domain.engine import BatchDerivation, CaseSLAEngine
from caseflow.sla.domain.deadlines import DeadlineClassifier, DeadlineCounters
from caseflow.sla.domain.ordering import (
    PRIORITY_RANK,
    SLA_STATUS_RANK,
    OrderingPolicy,
)

__all__ = [
    # Entities
    "Case",
    "CaseDerivedFields",
    "DerivedCase",
    # Value Objects
    "DEFAULT_SLA_DAYS",
    "SLABoundaries",
    "SLAConfig",
    "SLAThresholdPolicy",
    # Domain Services
    "BatchDerivation",
    "CaseSLAEngine",
    "DeadlineClassifier",
    "DeadlineCounters",
    "OrderingPolicy",
    "PRIORITY_RANK",
    "SLA_STATUS_RANK",
]
