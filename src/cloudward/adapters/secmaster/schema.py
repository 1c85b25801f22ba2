"""SecMaster alert-rule payloads, keyed by their wire names."""

from __future__ import annotations

from pydantic import Field

from cloudward.adapters.huaweicloud import HuaweiCloudModel


class AlertRuleSchedule(HuaweiCloudModel):
    frequency_interval: int
    frequency_unit: str
    period_interval: int
    period_unit: str
    delay_interval: int | None = None
    overtime_interval: int | None = None


class AlertRuleTriggerPayload(HuaweiCloudModel):
    expression: str
    operator: str
    accumulated_times: int
    mode: str
    severity: str


class AlertRulePayload(HuaweiCloudModel):
    rule_id: str
    pipe_id: str
    rule_name: str
    severity: str
    alert_type: dict[str, str] = Field(default_factory=dict)
    description: str = ""
    status: str
    query: str
    query_type: str
    schedule: AlertRuleSchedule
    triggers: list[AlertRuleTriggerPayload] = Field(default_factory=list)
    custom_properties: dict[str, str] = Field(default_factory=dict)
    event_grouping: bool = True
    simulation: bool = True
    suppression: bool | None = None
    create_time: float | None = None
    update_time: float | None = None


class CreateAlertRuleResponse(HuaweiCloudModel):
    rule_id: str | None = None
