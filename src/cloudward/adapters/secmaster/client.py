"""SIEM alert rules in SecMaster workspaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from cloudward.domain.errors import CloudAPIError
from cloudward.domain.model import AlertRuleStatus

from .schema import AlertRulePayload, CreateAlertRuleResponse
from .translator import build_create_body, build_update_body, parse_alert_rule

if TYPE_CHECKING:
    from cloudward.adapters.huaweicloud import CloudClient
    from cloudward.domain.model import AlertRule

ALERT_RULES_PATH: Final[str] = "v1/{project_id}/workspaces/{workspace_id}/siem/alert-rules"
ALERT_RULE_PATH: Final[str] = f"{ALERT_RULES_PATH}/{{rule_id}}"
ALERT_RULE_ACTION_PATH: Final[str] = f"{ALERT_RULES_PATH}/{{action}}"


class SecMasterAlertRuleGateway:
    """``AlertRuleGateway`` backed by the SecMaster v1 REST API."""

    def __init__(self, client: CloudClient) -> None:
        self._client = client

    async def create(self, rule: AlertRule) -> str:
        payload = await self._client.request(
            "POST",
            ALERT_RULES_PATH,
            path_params={"workspace_id": rule.workspace_id},
            json=build_create_body(rule),
        )
        if not isinstance(payload, dict):
            raise CloudAPIError("error creating alert rule: unexpected response payload")
        rule_id = CreateAlertRuleResponse.model_validate(payload).rule_id
        if not rule_id:
            raise CloudAPIError("error creating alert rule: ID is not found in API response")
        return rule_id

    async def get(self, workspace_id: str, rule_id: str) -> AlertRule:
        payload = await self._client.request(
            "GET",
            ALERT_RULE_PATH,
            path_params={"workspace_id": workspace_id, "rule_id": rule_id},
        )
        if not isinstance(payload, dict):
            raise CloudAPIError(f"unexpected payload retrieving alert rule {rule_id}")
        return parse_alert_rule(AlertRulePayload.model_validate(payload), workspace_id=workspace_id)

    async def update(self, rule: AlertRule) -> None:
        if rule.id is None:
            raise ValueError("alert rule ID is required for an update")
        await self._client.request(
            "PUT",
            ALERT_RULE_PATH,
            path_params={"workspace_id": rule.workspace_id, "rule_id": rule.id},
            json=build_update_body(rule),
        )

    async def set_status(self, workspace_id: str, rule_id: str, status: AlertRuleStatus) -> None:
        action = "enable" if status is AlertRuleStatus.ENABLED else "disable"
        await self._client.request(
            "POST",
            ALERT_RULE_ACTION_PATH,
            path_params={"workspace_id": workspace_id, "action": action},
            json=[rule_id],
        )

    async def delete(self, workspace_id: str, rule_id: str) -> None:
        await self._client.request(
            "DELETE",
            ALERT_RULES_PATH,
            path_params={"workspace_id": workspace_id},
            json=[rule_id],
        )
