"""SWR image triggers: automatic workload updates on image pushes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003


@dataclass(frozen=True, slots=True, kw_only=True)
class ImageTrigger:
    name: str
    enabled: bool
    condition_type: str
    condition_value: str
    cluster_id: str | None = None
    cluster_name: str | None = None
    namespace: str | None = None
    workload_type: str | None = None
    workload_name: str | None = None
    container: str | None = None
    type: str | None = None
    action: str | None = None
    creator_name: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ImageTriggerFilter:
    """Client-side filter; ``None`` fields match everything."""

    name: str | None = None
    enabled: bool | None = None
    condition_type: str | None = None
    cluster_name: str | None = None

    def matches(self, trigger: ImageTrigger) -> bool:
        return (
            (self.name is None or trigger.name == self.name)
            and (self.enabled is None or trigger.enabled == self.enabled)
            and (self.condition_type is None or trigger.condition_type == self.condition_type)
            and (self.cluster_name is None or trigger.cluster_name == self.cluster_name)
        )
