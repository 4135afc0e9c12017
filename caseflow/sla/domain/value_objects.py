"""
SLA Value Objects
==================

Immutable value objects for the case SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from caseflow.config import Priority, SLAStatus, VALID_PRIORITIES
from caseflow.core.exceptions import UnknownEnumValueException

DEFAULT_SLA_DAYS: Dict[Priority, int] = {
    Priority.URGENT: 3,
    Priority.HIGH: 7,
    Priority.MEDIUM: 14,
    Priority.LOW: 21,
}


class SLAConfig(BaseModel):
    """
    SLA threshold table loaded from YAML.

    Bucket boundary = allowed days × ratio, compared without rounding.

    This is a value object - immutable and defined by its attributes.
    """
    sla_days: Dict[Priority, int] = Field(
        default_factory=lambda: dict(DEFAULT_SLA_DAYS),
        description="Allowed days per case priority"
    )
    at_risk_ratio: float = Field(
        default=0.8, gt=0, le=1,
        description="Fraction of the budget at which a case becomes AtRisk"
    )
    critical_ratio: float = Field(
        default=0.9, gt=0, le=1,
        description="Fraction of the budget at which a case becomes Critical"
    )
    deadline_window_days: int = Field(
        default=7, ge=0,
        description="Width of the 'due this week' deadline bucket"
    )
    workflow_at_risk_ratio: float = Field(
        default=0.8, gt=0, le=1,
        description="Fraction of a step's target at which a project is at-risk"
    )

    model_config = {"frozen": True}

    @field_validator("sla_days", mode="before")
    @classmethod
    def validate_sla_days(cls, v: Optional[dict]) -> Dict[Priority, int]:
        """Parse priority keys strictly and back-fill missing priorities."""
        if v is None:
            v = {}
        if not isinstance(v, dict):
            raise ValueError("sla_days must be a mapping of priority to days")

        parsed: Dict[Priority, int] = {}
        for key, days in v.items():
            priority = Priority.parse(key)
            if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
                raise ValueError(
                    f"sla_days for {priority.value} must be a positive whole number, got {days!r}"
                )
            parsed[priority] = days

        for priority in VALID_PRIORITIES:
            parsed.setdefault(priority, DEFAULT_SLA_DAYS[priority])

        return parsed

    @model_validator(mode="after")
    def validate_ratio_order(self) -> "SLAConfig":
        if self.at_risk_ratio > self.critical_ratio:
            raise ValueError("at_risk_ratio cannot exceed critical_ratio")
        return self

    def get_sla_days(self, priority: Priority) -> int:
        return self.sla_days[Priority.parse(priority)]


@dataclass(frozen=True)
class SLABoundaries:
    """Day counts at which a running case changes SLA tier."""
    at_risk: float
    critical: float
    overdue_at: int

    def classify(self, days_in_process: int) -> SLAStatus:
        """Tier for an active case; checked from most to least urgent."""
        if days_in_process >= self.overdue_at:
            return SLAStatus.OVERDUE
        if days_in_process >= self.critical:
            return SLAStatus.CRITICAL
        if days_in_process >= self.at_risk:
            return SLAStatus.AT_RISK
        return SLAStatus.WITHIN_SLA


class SLAThresholdPolicy:
    """
    Maps a case priority to its allowed-day budget and tier boundaries.

    Stateless apart from the (immutable) config it was built from.
    """

    def __init__(self, config: Optional[SLAConfig] = None):
        self._config = config or SLAConfig()

    @property
    def config(self) -> SLAConfig:
        return self._config

    def allowed_days(self, priority: "Priority | str") -> int:
        """
        Allowed days for a priority.

        Raises:
            UnknownEnumValueException: priority outside the vocabulary
        """
        try:
            return self._config.get_sla_days(priority)
        except KeyError:
            raise UnknownEnumValueException("Priority", priority) from None

    def bucket_boundaries(self, allowed_days: int) -> SLABoundaries:
        return SLABoundaries(
            at_risk=self._config.at_risk_ratio * allowed_days,
            critical=self._config.critical_ratio * allowed_days,
            overdue_at=allowed_days,
        )

    def boundaries_for(self, priority: "Priority | str") -> SLABoundaries:
        return self.bucket_boundaries(self.allowed_days(priority))
