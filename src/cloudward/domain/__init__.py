"""Domain layer: resource models, operations and the reconciliation primitive."""

from __future__ import annotations

from .reconciler import (
    MutationFailedError,
    PollFailedError,
    PollStatus,
    ReconcileError,
    ReconcileOutcome,
    Reconciler,
    ReconcileRequest,
    ReconcileState,
    ReconcileTimeoutError,
    reconcile,
)

__all__ = [
    "MutationFailedError",
    "PollFailedError",
    "PollStatus",
    "ReconcileError",
    "ReconcileOutcome",
    "ReconcileRequest",
    "ReconcileState",
    "ReconcileTimeoutError",
    "Reconciler",
    "reconcile",
]
