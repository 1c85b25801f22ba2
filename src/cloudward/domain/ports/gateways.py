"""Ports for the remote management APIs used by resource operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cloudward.domain.model import (
        AlertRule,
        AlertRuleStatus,
        ImageTrigger,
        SignatureBinding,
    )


@runtime_checkable
class SignatureGateway(Protocol):
    """Bind and unbind API signatures on a dedicated gateway instance."""

    async def bind(self, instance_id: str, signature_id: str, publish_ids: Sequence[str]) -> None:
        ...

    async def list_bindings(self, instance_id: str, signature_id: str) -> list[SignatureBinding]:
        ...

    async def unbind(self, instance_id: str, bind_id: str) -> None:
        ...


@runtime_checkable
class AlertRuleGateway(Protocol):
    """CRUD access to SIEM alert rules. ``get`` raises ``ResourceNotFoundError``."""

    async def create(self, rule: AlertRule) -> str:
        ...

    async def get(self, workspace_id: str, rule_id: str) -> AlertRule:
        ...

    async def update(self, rule: AlertRule) -> None:
        ...

    async def set_status(self, workspace_id: str, rule_id: str, status: AlertRuleStatus) -> None:
        ...

    async def delete(self, workspace_id: str, rule_id: str) -> None:
        ...


@runtime_checkable
class ImageTriggerGateway(Protocol):
    async def list_triggers(self, organization: str, repository: str) -> list[ImageTrigger]:
        ...


__all__ = ["AlertRuleGateway", "ImageTriggerGateway", "SignatureGateway"]
