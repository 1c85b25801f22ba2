"""SecMaster adapter."""

from __future__ import annotations

from .client import SecMasterAlertRuleGateway
from .schema import AlertRulePayload, AlertRuleSchedule, AlertRuleTriggerPayload
from .translator import build_create_body, build_update_body, parse_alert_rule

__all__ = [
    "AlertRulePayload",
    "AlertRuleSchedule",
    "AlertRuleTriggerPayload",
    "SecMasterAlertRuleGateway",
    "build_create_body",
    "build_update_body",
    "parse_alert_rule",
]
