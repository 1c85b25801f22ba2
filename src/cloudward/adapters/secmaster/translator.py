"""Conversion between ``AlertRule`` and the SecMaster wire format."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cloudward.adapters.huaweicloud import epoch_millis_to_datetime, ignore_empty
from cloudward.domain.errors import CloudAPIError
from cloudward.domain.model import (
    MAX_TRIGGERS,
    AlertRule,
    AlertRuleStatus,
    AlertTrigger,
    QueryPlan,
)

if TYPE_CHECKING:
    from .schema import AlertRulePayload


def _schedule_body(plan: QueryPlan) -> dict[str, object]:
    return {
        "frequency_interval": plan.query_interval,
        "frequency_unit": plan.query_interval_unit,
        "period_interval": plan.time_window,
        "period_unit": plan.time_window_unit,
        "delay_interval": plan.execution_delay,
        "overtime_interval": plan.overtime_interval,
    }


def _trigger_body(trigger: AlertTrigger) -> dict[str, object]:
    return {
        "expression": trigger.expression,
        "operator": trigger.operator,
        "accumulated_times": trigger.accumulated_times,
        "mode": trigger.mode,
        "severity": trigger.severity,
    }


def build_create_body(rule: AlertRule) -> dict[str, object]:
    return {
        "pipe_id": rule.pipeline_id,
        "rule_name": rule.name,
        "severity": rule.severity,
        "alert_type": rule.type,
        "description": rule.description,
        "status": rule.status.value,
        "query": rule.query_rule,
        "query_type": rule.query_type,
        "schedule": _schedule_body(rule.query_plan),
        "custom_properties": ignore_empty(rule.custom_information),
        "event_grouping": rule.event_grouping,
        "simulation": rule.debugging_alarm,
        "triggers": [_trigger_body(trigger) for trigger in rule.triggers],
        "suppression": rule.suppression,
    }


def build_update_body(rule: AlertRule) -> dict[str, object]:
    """Like the create body, but without the pipeline and with empty values left out."""

    body = build_create_body(rule)
    del body["pipe_id"]
    return {key: ignore_empty(value) for key, value in body.items()}


def parse_alert_rule(payload: AlertRulePayload, *, workspace_id: str) -> AlertRule:
    if not 1 <= len(payload.triggers) <= MAX_TRIGGERS:
        raise CloudAPIError(
            f"alert rule {payload.rule_id} has {len(payload.triggers)} triggers in the response,"
            f" expected between 1 and {MAX_TRIGGERS}"
        )
    schedule = payload.schedule
    return AlertRule(
        id=payload.rule_id,
        workspace_id=workspace_id,
        pipeline_id=payload.pipe_id,
        name=payload.rule_name,
        severity=payload.severity,
        type=dict(payload.alert_type),
        description=payload.description,
        status=AlertRuleStatus(payload.status),
        query_rule=payload.query,
        query_type=payload.query_type,
        query_plan=QueryPlan(
            query_interval=schedule.frequency_interval,
            query_interval_unit=schedule.frequency_unit,
            time_window=schedule.period_interval,
            time_window_unit=schedule.period_unit,
            execution_delay=schedule.delay_interval,
            overtime_interval=schedule.overtime_interval,
        ),
        triggers=tuple(
            AlertTrigger(
                expression=trigger.expression,
                operator=trigger.operator,
                accumulated_times=trigger.accumulated_times,
                mode=trigger.mode,
                severity=trigger.severity,
            )
            for trigger in payload.triggers
        ),
        custom_information=dict(payload.custom_properties),
        event_grouping=payload.event_grouping,
        debugging_alarm=payload.simulation,
        suppression=payload.suppression,
        created_at=epoch_millis_to_datetime(payload.create_time),
        updated_at=epoch_millis_to_datetime(payload.update_time),
    )
