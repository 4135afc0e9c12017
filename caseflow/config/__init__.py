"""
Configuration Module
====================

Application settings and the closed vocabularies shared by every
bounded context.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="caseflow", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")

    # ========== Logging ==========
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== SLA Configuration ==========
    sla_config_path: Path = Field(
        default=Path("sla_config.yaml"),
        description="Path to SLA threshold YAML file"
    )
    sla_config_watch: bool = Field(
        default=False,
        description="Reload the SLA threshold file when it changes on disk"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Vocabularies ==========

class _Vocabulary(str, Enum):
    """String enum with a strict parser for storage-layer values."""

    @classmethod
    def parse(cls, value: "str | _Vocabulary") -> "_Vocabulary":
        """Convert a raw value to a member or raise UnknownEnumValueException."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            from caseflow.core.exceptions import UnknownEnumValueException
            raise UnknownEnumValueException(cls.__name__, value) from None


class Priority(_Vocabulary):
    """Case priority levels."""
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class CaseType(_Vocabulary):
    """Case classification."""
    MINISTERIAL_INQUIRY = "Ministerial Inquiry"
    EVENT_COORDINATION = "Event Coordination"
    POLICY_REVIEW = "Policy Review"
    BUDGET_PROPOSAL = "Budget Proposal"
    CROSS_AGENCY_PROJECT = "Cross-Agency Project"
    SCHOLARSHIP_AWARD = "Scholarship Award"
    ATTACHMENT_OVERSEAS = "Attachment Overseas"
    OTHER = "Other"


class QueryStage(_Vocabulary):
    """Which query/response cycle a department query belongs to."""
    FIRST_STAGE = "FirstStage"
    HIGHER_AUTHORITY = "HigherAuthority"


class OverallStatus(_Vocabulary):
    """Case lifecycle statuses."""
    PENDING_REVIEW = "PendingReview"
    IN_PROCESS = "InProcess"
    DEPT_QUERY_FIRST_STAGE = "DeptQuery:FirstStage"
    DEPT_QUERY_HIGHER_AUTHORITY = "DeptQuery:HigherAuthority"
    SUBMITTED_TO_HIGHER_AUTHORITY = "SubmittedToHigherAuthority"
    PENDING_HIGHER_APPROVAL = "PendingHigherApproval"
    RETURNED_FOR_QUERY = "ReturnedForQuery"
    APPROVED_SIGNED = "ApprovedSigned"
    NOT_APPROVED = "NotApproved"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def query_stage(self) -> Optional[QueryStage]:
        """The DeptQuery kind, or None for non-query statuses."""
        return _QUERY_STAGES.get(self)


class SLAStatus(_Vocabulary):
    """SLA urgency tiers."""
    OVERDUE = "Overdue"
    CRITICAL = "Critical"
    AT_RISK = "AtRisk"
    WITHIN_SLA = "WithinSLA"
    COMPLETED = "Completed"
    COMPLETED_OVERDUE = "CompletedOverdue"


class DeadlineBucket(_Vocabulary):
    """Dashboard deadline counter buckets."""
    OVERDUE = "overdue"
    THIS_WEEK = "thisWeek"
    UPCOMING = "upcoming"
    NO_DEADLINE = "noDeadline"


class StepState(_Vocabulary):
    """Workflow step lifecycle states."""
    NOT_STARTED = "NotStarted"
    RUNNING = "Running"
    DONE = "Done"


class ProjectStatus(_Vocabulary):
    """Project-level workflow status."""
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    DELAYED = "delayed"
    COMPLETED = "completed"


class CaseSortField(_Vocabulary):
    """Fields a case table can be sorted by."""
    CASE_ID = "caseId"
    PRIORITY = "priority"
    DAYS_IN_PROCESS = "daysInProcess"
    SLA_STATUS = "slaStatus"
    OVERALL_STATUS = "overallStatus"
    DEADLINE = "deadline"
    DAYS_SINCE_LAST_RESPONSE = "daysSinceLastResponse"


class SortDirection(_Vocabulary):
    ASC = "asc"
    DESC = "desc"


class ReportGroupField(_Vocabulary):
    """Fields a case report can be grouped by."""
    PRIORITY = "priority"
    SLA_STATUS = "slaStatus"
    OVERALL_STATUS = "overallStatus"
    CASE_TYPE = "caseType"


TERMINAL_STATUSES = frozenset({OverallStatus.APPROVED_SIGNED, OverallStatus.NOT_APPROVED})

_QUERY_STAGES = {
    OverallStatus.DEPT_QUERY_FIRST_STAGE: QueryStage.FIRST_STAGE,
    OverallStatus.DEPT_QUERY_HIGHER_AUTHORITY: QueryStage.HIGHER_AUTHORITY,
}


# ========== Lists for validation ==========

VALID_PRIORITIES = list(Priority)
ACTIVE_STATUSES = [s for s in OverallStatus if s not in TERMINAL_STATUSES]
