"""
Workflow Step Tracker
=====================

State machine for a single checklist step:

    NotStarted --(start_date set)--> Running --(is_done)--> Done
                                        ^                     |
                                        +----(not is_done)----+

Marking a step done freezes its elapsed-day counter; un-marking clears
the frozen value so the counter runs live from ``start_date`` again. The
frozen value is always recomputed from the step's current start and
completion dates, never reused from an earlier freeze.
"""

from dataclasses import replace
from datetime import date
from typing import Any, Optional

from caseflow.config import StepState
from caseflow.core.exceptions import InvalidDateOrderException, ValidationException
from caseflow.shared.domain.clock import ClockPolicy, DateLike, as_date
from caseflow.workflow.domain.entities import WorkflowStep

EDITABLE_FIELDS = frozenset({
    "is_done", "start_date", "completion_date", "title", "description",
    "responsible_party",
})


class WorkflowStepTracker:
    """
    Pure functions over ``WorkflowStep``.

    Stateless utility class: all freeze/unfreeze logic lives here.
    """

    @staticmethod
    def state(step: WorkflowStep) -> StepState:
        if step.is_done:
            return StepState.DONE
        if step.start_date is not None:
            return StepState.RUNNING
        return StepState.NOT_STARTED

    @staticmethod
    def _frozen_value(step: WorkflowStep, completion: date) -> Optional[int]:
        if step.start_date is None:
            return None
        return max(0, ClockPolicy.days_between(step.start_date, completion))

    @staticmethod
    def _check_order(step: WorkflowStep) -> None:
        if (
            step.start_date is not None
            and step.completion_date is not None
            and as_date(step.completion_date) < as_date(step.start_date)
        ):
            raise InvalidDateOrderException(
                step.step_id or f"step {step.step_order}",
                "start_date", "completion_date",
                step.start_date, step.completion_date,
            )

    @classmethod
    def mark_done(cls, step: WorkflowStep, today: DateLike) -> WorkflowStep:
        """
        Running → Done.

        A missing completion date is set to ``today`` as part of the
        transition. An entered completion date earlier than the start date
        is rejected; a defaulted one is clamped to zero elapsed days.

        Raises:
            InvalidDateOrderException
        """
        cls._check_order(step)
        completion = as_date(step.completion_date) if step.completion_date else as_date(today)
        return replace(
            step,
            is_done=True,
            completion_date=completion,
            frozen_days_elapsed=cls._frozen_value(step, completion),
        )

    @staticmethod
    def mark_not_done(step: WorkflowStep) -> WorkflowStep:
        """Done → Running: the counter resumes live from ``start_date``."""
        return replace(step, is_done=False, frozen_days_elapsed=None)

    @classmethod
    def set_done(cls, step: WorkflowStep, is_done: bool, today: DateLike) -> WorkflowStep:
        if is_done:
            return cls.mark_done(step, today)
        return cls.mark_not_done(step)

    @classmethod
    def apply_update(cls, step: WorkflowStep, today: DateLike, **changes: Any) -> WorkflowStep:
        """
        Apply a user edit and any freeze/unfreeze side effect in one step.

        Text and date changes are applied first, then the done transition.
        Editing the dates of a step that stays done re-freezes it from the
        new pair.

        Raises:
            ValidationException: a field that is not user-editable
            InvalidDateOrderException: completion before start
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Cannot edit workflow step fields: {', '.join(sorted(unknown))}",
                {"fields": sorted(unknown)}
            )

        is_done = changes.pop("is_done", None)
        updated = replace(step, **changes)

        if is_done is not None:
            return cls.set_done(updated, is_done, today)

        dates_changed = "start_date" in changes or "completion_date" in changes
        if updated.is_done and dates_changed:
            return cls.mark_done(updated, today)
        return updated

    @staticmethod
    def days_elapsed(step: WorkflowStep, now: DateLike) -> Optional[int]:
        """Frozen value if set; else live days since start; None if not started."""
        if step.frozen_days_elapsed is not None:
            return step.frozen_days_elapsed
        if step.start_date is None:
            return None
        return max(0, ClockPolicy.days_between(step.start_date, now))

    @classmethod
    def is_overdue(cls, step: WorkflowStep, now: DateLike) -> bool:
        if step.is_done:
            return False
        elapsed = cls.days_elapsed(step, now)
        if elapsed is None:
            return False
        return elapsed > step.sla_target_days

    @staticmethod
    def days_from_dates(step: WorkflowStep) -> Optional[int]:
        """Completion minus start, independent of the done flag."""
        if step.start_date is None or step.completion_date is None:
            return None
        return max(0, ClockPolicy.days_between(step.start_date, step.completion_date))
