"""Domain port definitions for adapters."""

from __future__ import annotations

from .gateways import AlertRuleGateway, ImageTriggerGateway, SignatureGateway

__all__ = ["AlertRuleGateway", "ImageTriggerGateway", "SignatureGateway"]
