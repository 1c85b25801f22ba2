"""Typed resource models."""

from __future__ import annotations

from .alert_rule import (
    ALERT_RULE_CONTENT_FIELDS,
    MAX_TRIGGERS,
    AlertRule,
    AlertRuleStatus,
    AlertTrigger,
    QueryPlan,
)
from .image_trigger import ImageTrigger, ImageTriggerFilter
from .signature import SignatureAssociation, SignatureBinding

__all__ = [
    "ALERT_RULE_CONTENT_FIELDS",
    "MAX_TRIGGERS",
    "AlertRule",
    "AlertRuleStatus",
    "AlertTrigger",
    "ImageTrigger",
    "ImageTriggerFilter",
    "QueryPlan",
    "SignatureAssociation",
    "SignatureBinding",
]
