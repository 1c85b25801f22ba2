"""Lifecycle of SecMaster alert rules."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from .changes import changed_fields, split_import_id
from .errors import ResourceNotFoundError
from .model import ALERT_RULE_CONTENT_FIELDS

if TYPE_CHECKING:
    from .model import AlertRule
    from .ports import AlertRuleGateway

log = getLogger(__name__)


def parse_import_id(import_id: str) -> tuple[str, str]:
    """Split ``<workspace_id>/<rule_id>``."""

    workspace_id, rule_id = split_import_id(import_id, "workspace_id", "rule_id")
    return workspace_id, rule_id


@dataclass(slots=True)
class AlertRuleResource:
    gateway: AlertRuleGateway
    region: str | None = None

    async def create(self, desired: AlertRule) -> AlertRule:
        rule_id = await self.gateway.create(desired)
        log.info("Created alert rule %s in workspace %s", rule_id, desired.workspace_id)
        return await self._read_existing(desired.workspace_id, rule_id)

    async def read(self, workspace_id: str, rule_id: str) -> AlertRule | None:
        """Return the remote rule, or ``None`` once it has been deleted."""

        try:
            observed = await self.gateway.get(workspace_id, rule_id)
        except ResourceNotFoundError:
            log.info("Alert rule %s no longer exists", rule_id)
            return None
        return replace(observed, region=self.region)

    async def update(self, current: AlertRule, desired: AlertRule) -> AlertRule:
        if current.id is None:
            raise ValueError("cannot update an alert rule that has not been created")
        if (current.workspace_id, current.pipeline_id) != (
            desired.workspace_id,
            desired.pipeline_id,
        ):
            raise ValueError("workspace_id and pipeline_id cannot change; recreate the rule")

        target = replace(desired, id=current.id)
        changed = changed_fields(current, desired, ALERT_RULE_CONTENT_FIELDS)
        if changed:
            log.info("Updating alert rule %s: %s", current.id, ", ".join(sorted(changed)))
            await self.gateway.update(target)
        if current.status != desired.status:
            log.info("Switching alert rule %s to %s", current.id, desired.status)
            await self.gateway.set_status(current.workspace_id, current.id, desired.status)
        return await self._read_existing(current.workspace_id, current.id)

    async def delete(self, current: AlertRule) -> None:
        if current.id is None:
            raise ValueError("cannot delete an alert rule that has not been created")
        await self.gateway.delete(current.workspace_id, current.id)

    async def import_state(self, import_id: str) -> AlertRule:
        workspace_id, rule_id = parse_import_id(import_id)
        return await self._read_existing(workspace_id, rule_id)

    async def _read_existing(self, workspace_id: str, rule_id: str) -> AlertRule:
        observed = await self.read(workspace_id, rule_id)
        if observed is None:
            raise ResourceNotFoundError(
                f"alert rule {rule_id} not found in workspace {workspace_id}",
                status_code=404,
            )
        return observed
