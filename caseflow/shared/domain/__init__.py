"""
Shared Domain
=============

Framework-free primitives shared across bounded contexts.
"""

from caseflow.shared.domain.clock import ClockPolicy, DateLike, as_date

__all__ = ["ClockPolicy", "DateLike", "as_date"]
