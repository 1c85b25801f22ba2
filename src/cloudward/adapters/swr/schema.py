"""SWR trigger payloads."""

from __future__ import annotations

from pydantic import Field

from cloudward.adapters.huaweicloud import HuaweiCloudModel


class TriggerPayload(HuaweiCloudModel):
    name: str
    enable: str = "false"
    trigger_mode: str = Field(description="all, tag or regular")
    condition: str = ""
    action: str | None = None
    app_type: str | None = None
    application: str | None = None
    cluster_id: str | None = None
    cluster_name: str | None = None
    cluster_ns: str | None = None
    container: str | None = None
    trigger_type: str | None = None
    creator_name: str | None = None
    created_at: str | None = None

    @property
    def is_enabled(self) -> bool:
        return self.enable.strip().lower() == "true"
