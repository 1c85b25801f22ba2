"""APIG sign-binding payloads."""

from __future__ import annotations

from pydantic import Field

from cloudward.adapters.huaweicloud import HuaweiCloudModel


class SignBindApiInfo(HuaweiCloudModel):
    bind_id: str = Field(alias="id")
    publish_id: str
    api_id: str | None = None
    api_name: str | None = None
    api_type: int | None = None
    api_remark: str | None = None
    group_name: str | None = None
    env_id: str | None = None
    env_name: str | None = None
    sign_id: str | None = None
    sign_name: str | None = None
    binding_time: str | None = None


class SignBindingPage(HuaweiCloudModel):
    total: int = 0
    size: int = 0
    bindings: list[SignBindApiInfo] = Field(default_factory=list)
