"""
Deadline Classifier
===================

Buckets active cases by their external deadline for the dashboard
counters (overdue / due this week / upcoming / no deadline).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from caseflow.config import DeadlineBucket
from caseflow.shared.domain.clock import ClockPolicy, DateLike, as_date

# Anything exposing ``deadline`` and ``is_terminal`` (Case, DerivedCase)
T = TypeVar("T")


@dataclass
class DeadlineCounters(Generic[T]):
    """Mutually exclusive buckets over the active cases given."""
    buckets: Dict[DeadlineBucket, List[T]] = field(
        default_factory=lambda: {bucket: [] for bucket in DeadlineBucket}
    )

    @property
    def overdue(self) -> List[T]:
        return self.buckets[DeadlineBucket.OVERDUE]

    @property
    def this_week(self) -> List[T]:
        return self.buckets[DeadlineBucket.THIS_WEEK]

    @property
    def upcoming(self) -> List[T]:
        return self.buckets[DeadlineBucket.UPCOMING]

    @property
    def no_deadline(self) -> List[T]:
        return self.buckets[DeadlineBucket.NO_DEADLINE]

    @property
    def total_with_deadline(self) -> int:
        return len(self.overdue) + len(self.this_week) + len(self.upcoming)

    def counts(self) -> Dict[str, int]:
        return {bucket.value: len(items) for bucket, items in self.buckets.items()}


class DeadlineClassifier:
    """Classifies deadlines against a midnight-truncated "today"."""

    def __init__(self, window_days: int = 7):
        self.window_days = window_days

    def classify(self, deadline: Optional[DateLike], now: DateLike) -> DeadlineBucket:
        """
        Bucket for a single deadline.

        ``thisWeek`` is inclusive at both ends: today and today + window.
        """
        if deadline is None:
            return DeadlineBucket.NO_DEADLINE

        today = as_date(now)
        due = as_date(deadline)
        if due < today:
            return DeadlineBucket.OVERDUE
        if due <= ClockPolicy.add_days(today, self.window_days):
            return DeadlineBucket.THIS_WEEK
        return DeadlineBucket.UPCOMING

    def counters(self, cases: Iterable[T], now: DateLike) -> DeadlineCounters[T]:
        """Bucket every active case; terminal cases are not counted."""
        result: DeadlineCounters[T] = DeadlineCounters()
        for case in cases:
            if case.is_terminal:
                continue
            result.buckets[self.classify(case.deadline, now)].append(case)
        return result

    @staticmethod
    def days_until(deadline: date, now: DateLike) -> int:
        """Days remaining to a deadline (negative once past)."""
        return ClockPolicy.days_between(now, deadline)
