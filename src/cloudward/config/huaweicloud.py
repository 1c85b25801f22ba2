"""Huawei Cloud account and endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_CLOUD_DOMAIN: Final[str] = "myhuaweicloud.com"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

# Service catalog names as they appear in the regional endpoint host.
APIG_SERVICE: Final[str] = "apig"
SECMASTER_SERVICE: Final[str] = "secmaster"
SWR_SERVICE: Final[str] = "swr-api"


@dataclass(frozen=True, slots=True)
class HuaweiCloudConfig:
    """Account scope and credentials shared by every service client."""

    region: str
    project_id: str
    auth_token: str = field(repr=False)
    cloud_domain: str = DEFAULT_CLOUD_DOMAIN
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = field(
        default_factory=lambda: RateLimit(max_calls=10, per_seconds=1.0)
    )

    def endpoint(self, service: str) -> str:
        return f"https://{service}.{self.region}.{self.cloud_domain}/"

    def resilience(self, service: str) -> ResilienceConfig:
        return ResilienceConfig(
            name=service,
            base_url=self.endpoint(service),
            timeout_seconds=self.timeout_seconds,
            retry=self.retry,
            ratelimit=self.ratelimit,
            default_headers={
                "Content-Type": "application/json",
                "X-Auth-Token": self.auth_token,
            },
        )


def get_huaweicloud_config(*, region: str | None = None) -> HuaweiCloudConfig:
    names = ["HW_PROJECT_ID", "HW_AUTH_TOKEN"]
    if region is None:
        names.append("HW_REGION_NAME")
    values = require_env_vars(names)
    return HuaweiCloudConfig(
        region=region or values["HW_REGION_NAME"],
        project_id=values["HW_PROJECT_ID"],
        auth_token=values["HW_AUTH_TOKEN"],
        cloud_domain=optional_env_var("HW_CLOUD_DOMAIN", DEFAULT_CLOUD_DOMAIN),
    )
