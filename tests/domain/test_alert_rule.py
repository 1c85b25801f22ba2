from __future__ import annotations

import asyncio
from dataclasses import replace

import pytest

from cloudward.domain.alert_rule import AlertRuleResource, parse_import_id
from cloudward.domain.errors import ImportIdError, ResourceNotFoundError
from cloudward.domain.model import AlertRuleStatus
from tests.support.alert_rules import make_alert_rule
from tests.support.fakes import FakeAlertRuleGateway


def test_create_reads_back_the_rule_with_its_id() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway, region="cn-north-4")

    created = asyncio.run(resource.create(make_alert_rule()))

    assert created.id == "rule-1"
    assert created.region == "cn-north-4"
    assert [call[0] for call in gateway.calls] == ["create", "get"]


def test_read_of_deleted_rule_returns_none() -> None:
    resource = AlertRuleResource(FakeAlertRuleGateway())

    assert asyncio.run(resource.read("ws-1", "missing")) is None


def test_update_only_puts_when_content_changed() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway)
    current = asyncio.run(resource.create(make_alert_rule()))
    gateway.calls.clear()

    updated = asyncio.run(resource.update(current, replace(current, severity="HIGH")))

    assert updated.severity == "HIGH"
    assert [call[0] for call in gateway.calls] == ["update", "get"]


def test_status_change_uses_the_status_endpoint_only() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway)
    current = asyncio.run(resource.create(make_alert_rule()))
    gateway.calls.clear()

    updated = asyncio.run(
        resource.update(current, replace(current, status=AlertRuleStatus.DISABLED))
    )

    assert updated.status is AlertRuleStatus.DISABLED
    assert gateway.calls[0] == ("set_status", "ws-1", "rule-1", "DISABLED")
    assert "update" not in [call[0] for call in gateway.calls]


def test_content_and_status_change_together() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway)
    current = asyncio.run(resource.create(make_alert_rule(status=AlertRuleStatus.DISABLED)))
    gateway.calls.clear()

    desired = replace(current, description="tuned", status=AlertRuleStatus.ENABLED)
    updated = asyncio.run(resource.update(current, desired))

    assert [call[0] for call in gateway.calls] == ["update", "set_status", "get"]
    assert updated.description == "tuned"
    assert updated.status is AlertRuleStatus.ENABLED


def test_update_refuses_pipeline_change() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway)
    current = asyncio.run(resource.create(make_alert_rule()))

    with pytest.raises(ValueError, match="recreate"):
        asyncio.run(resource.update(current, replace(current, pipeline_id="pipe-2")))


def test_update_and_delete_need_an_id() -> None:
    resource = AlertRuleResource(FakeAlertRuleGateway())
    rule = make_alert_rule()

    with pytest.raises(ValueError, match="not been created"):
        asyncio.run(resource.update(rule, rule))
    with pytest.raises(ValueError, match="not been created"):
        asyncio.run(resource.delete(rule))


def test_delete_then_read_reports_gone() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway)
    current = asyncio.run(resource.create(make_alert_rule()))

    asyncio.run(resource.delete(current))

    assert asyncio.run(resource.read("ws-1", "rule-1")) is None


def test_import_state() -> None:
    gateway = FakeAlertRuleGateway()
    resource = AlertRuleResource(gateway)
    asyncio.run(resource.create(make_alert_rule()))

    imported = asyncio.run(resource.import_state("ws-1/rule-1"))

    assert imported.id == "rule-1"
    with pytest.raises(ResourceNotFoundError):
        asyncio.run(resource.import_state("ws-2/rule-1"))


def test_parse_import_id() -> None:
    assert parse_import_id("ws-1/rule-1") == ("ws-1", "rule-1")
    with pytest.raises(ImportIdError, match="<workspace_id>/<rule_id>"):
        parse_import_id("rule-1")


def test_rule_needs_one_to_five_triggers() -> None:
    trigger = make_alert_rule().triggers[0]

    with pytest.raises(ValueError, match="between 1 and 5"):
        make_alert_rule(triggers=())
    with pytest.raises(ValueError, match="between 1 and 5"):
        make_alert_rule(triggers=(trigger,) * 6)
