"""API gateway signature bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003


@dataclass(frozen=True, slots=True, kw_only=True)
class SignatureAssociation:
    """Desired or observed set of published APIs bound to one signature key."""

    instance_id: str
    signature_id: str
    publish_ids: frozenset[str] = field(default_factory=frozenset)
    region: str | None = None

    @property
    def id(self) -> str:
        return f"{self.instance_id}/{self.signature_id}"


@dataclass(frozen=True, slots=True, kw_only=True)
class SignatureBinding:
    """One published API bound to a signature, as reported by the gateway."""

    bind_id: str
    publish_id: str
    api_id: str | None = None
    api_name: str | None = None
    env_id: str | None = None
    env_name: str | None = None
    sign_id: str | None = None
    sign_name: str | None = None
    bound_at: datetime | None = None
