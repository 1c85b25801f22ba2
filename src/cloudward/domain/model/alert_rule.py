"""SecMaster SIEM alert rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Final

MAX_TRIGGERS: Final[int] = 5


class AlertRuleStatus(StrEnum):
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


@dataclass(frozen=True, slots=True, kw_only=True)
class QueryPlan:
    query_interval: int
    query_interval_unit: str
    time_window: int
    time_window_unit: str
    execution_delay: int | None = None
    overtime_interval: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AlertTrigger:
    expression: str
    operator: str
    accumulated_times: int
    mode: str
    severity: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AlertRule:
    """An alert rule as configured by the user and as read back from SecMaster.

    ``id``, ``created_at`` and ``updated_at`` are only known once the rule exists.
    """

    workspace_id: str
    pipeline_id: str
    name: str
    severity: str
    type: dict[str, str]
    description: str
    status: AlertRuleStatus
    query_rule: str
    query_type: str
    query_plan: QueryPlan
    triggers: tuple[AlertTrigger, ...]
    custom_information: dict[str, str] = field(default_factory=dict)
    event_grouping: bool = True
    debugging_alarm: bool = True
    suppression: bool | None = None
    id: str | None = None
    region: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 1 <= len(self.triggers) <= MAX_TRIGGERS:
            raise ValueError(
                f"alert rule needs between 1 and {MAX_TRIGGERS} triggers, got {len(self.triggers)}"
            )


# Fields whose change requires a full PUT of the rule; ``status`` has its own endpoints.
ALERT_RULE_CONTENT_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "severity",
    "type",
    "description",
    "query_rule",
    "query_type",
    "query_plan",
    "custom_information",
    "event_grouping",
    "debugging_alarm",
    "triggers",
    "suppression",
)
