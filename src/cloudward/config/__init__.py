"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .huaweicloud import (
    APIG_SERVICE,
    SECMASTER_SERVICE,
    SWR_SERVICE,
    HuaweiCloudConfig,
    get_huaweicloud_config,
)

__all__ = [
    "APIG_SERVICE",
    "SECMASTER_SERVICE",
    "SWR_SERVICE",
    "ConfigurationError",
    "HuaweiCloudConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "get_huaweicloud_config",
    "optional_env_var",
    "require_env_vars",
]
