"""Transport shared by all Huawei Cloud service adapters."""

from __future__ import annotations

from .payloads import ignore_empty, remove_nil
from .schema import HuaweiCloudModel, epoch_millis_to_datetime
from .transport import CloudClient

__all__ = [
    "CloudClient",
    "HuaweiCloudModel",
    "epoch_millis_to_datetime",
    "ignore_empty",
    "remove_nil",
]
