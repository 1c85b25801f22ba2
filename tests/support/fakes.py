"""In-memory stand-ins for clocks and remote gateways."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from cloudward.domain.errors import ResourceNotFoundError
from cloudward.domain.model import SignatureBinding
from cloudward.domain.reconciler import Reconciler

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cloudward.domain.model import AlertRule, AlertRuleStatus, ImageTrigger


@dataclass
class FakeClock:
    """Monotonic clock that only advances when something sleeps on it."""

    now: float = 0.0
    sleeps: list[float] = field(default_factory=list)

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def reconciler(self) -> Reconciler:
        return Reconciler(clock=self, sleep=self.sleep)


@dataclass
class _Pending:
    binding: SignatureBinding
    lists_until_visible: int


@dataclass
class FakeSignatureGateway:
    """Gateway whose bind/unbind only show up after ``lag`` list calls."""

    lag: int = 0
    bindings: dict[str, SignatureBinding] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    _pending_binds: list[_Pending] = field(default_factory=list)
    _pending_unbinds: dict[str, int] = field(default_factory=dict)
    _next_id: int = 0

    def seed(self, *publish_ids: str, sign_id: str = "sign-1") -> None:
        for publish_id in publish_ids:
            binding = self._new_binding(publish_id, sign_id)
            self.bindings[binding.bind_id] = binding

    def _new_binding(self, publish_id: str, sign_id: str) -> SignatureBinding:
        self._next_id += 1
        return SignatureBinding(
            bind_id=f"bind-{self._next_id}",
            publish_id=publish_id,
            sign_id=sign_id,
        )

    async def bind(self, instance_id: str, signature_id: str, publish_ids: Sequence[str]) -> None:
        self.calls.append(("bind", instance_id, signature_id, *publish_ids))
        for publish_id in publish_ids:
            binding = self._new_binding(publish_id, signature_id)
            self._pending_binds.append(_Pending(binding, self.lag))

    async def list_bindings(self, instance_id: str, signature_id: str) -> list[SignatureBinding]:
        self.calls.append(("list", instance_id, signature_id))
        still_pending: list[_Pending] = []
        for pending in self._pending_binds:
            if pending.lists_until_visible <= 0:
                self.bindings[pending.binding.bind_id] = pending.binding
            else:
                remaining = pending.lists_until_visible - 1
                still_pending.append(replace(pending, lists_until_visible=remaining))
        self._pending_binds = still_pending
        for bind_id, remaining in list(self._pending_unbinds.items()):
            if remaining <= 0:
                self.bindings.pop(bind_id, None)
                del self._pending_unbinds[bind_id]
            else:
                self._pending_unbinds[bind_id] = remaining - 1
        return [b for b in self.bindings.values() if b.sign_id == signature_id]

    async def unbind(self, instance_id: str, bind_id: str) -> None:
        self.calls.append(("unbind", instance_id, bind_id))
        self._pending_unbinds[bind_id] = self.lag

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@dataclass
class FakeAlertRuleGateway:
    rules: dict[str, AlertRule] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)

    async def create(self, rule: AlertRule) -> str:
        rule_id = f"rule-{len(self.rules) + 1}"
        self.calls.append(("create", rule.workspace_id))
        self.rules[rule_id] = replace(rule, id=rule_id)
        return rule_id

    async def get(self, workspace_id: str, rule_id: str) -> AlertRule:
        self.calls.append(("get", workspace_id, rule_id))
        rule = self.rules.get(rule_id)
        if rule is None or rule.workspace_id != workspace_id:
            raise ResourceNotFoundError(f"rule {rule_id} not found", status_code=404)
        return rule

    async def update(self, rule: AlertRule) -> None:
        assert rule.id is not None
        self.calls.append(("update", rule.workspace_id, rule.id))
        # A PUT does not switch the status; that has its own endpoints.
        self.rules[rule.id] = replace(rule, status=self.rules[rule.id].status)

    async def set_status(self, workspace_id: str, rule_id: str, status: AlertRuleStatus) -> None:
        self.calls.append(("set_status", workspace_id, rule_id, status.value))
        self.rules[rule_id] = replace(self.rules[rule_id], status=status)

    async def delete(self, workspace_id: str, rule_id: str) -> None:
        self.calls.append(("delete", workspace_id, rule_id))
        self.rules.pop(rule_id, None)


@dataclass
class FakeImageTriggerGateway:
    triggers: list[ImageTrigger] = field(default_factory=list)
    requested: list[tuple[str, str]] = field(default_factory=list)

    async def list_triggers(self, organization: str, repository: str) -> list[ImageTrigger]:
        self.requested.append((organization, repository))
        return list(self.triggers)
