from __future__ import annotations

from dataclasses import replace

from cloudward.domain.changes import changed_fields, has_changes
from cloudward.domain.model import ALERT_RULE_CONTENT_FIELDS
from tests.support.alert_rules import make_alert_rule


def test_changed_fields_reports_only_differences() -> None:
    current = make_alert_rule()
    desired = replace(current, name="renamed", custom_information={"owner": "blue-team"})

    assert changed_fields(current, desired, ALERT_RULE_CONTENT_FIELDS) == {
        "name",
        "custom_information",
    }


def test_has_changes_ignores_unlisted_fields() -> None:
    current = make_alert_rule()
    desired = replace(current, id="rule-9")

    assert not has_changes(current, desired, *ALERT_RULE_CONTENT_FIELDS)
    assert has_changes(current, desired, "id")
