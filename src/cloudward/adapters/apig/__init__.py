"""APIG adapter."""

from __future__ import annotations

from .client import ApigSignatureGateway, to_signature_binding
from .schema import SignBindApiInfo, SignBindingPage

__all__ = [
    "ApigSignatureGateway",
    "SignBindApiInfo",
    "SignBindingPage",
    "to_signature_binding",
]
