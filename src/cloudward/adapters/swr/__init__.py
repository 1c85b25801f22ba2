"""SWR adapter."""

from __future__ import annotations

from .client import SwrImageTriggerGateway, encode_repository, to_image_trigger
from .schema import TriggerPayload

__all__ = ["SwrImageTriggerGateway", "TriggerPayload", "encode_repository", "to_image_trigger"]
