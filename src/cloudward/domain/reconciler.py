"""Mutate-then-poll reconciliation for eventually consistent remote APIs.

Many management APIs acknowledge a write before the change becomes visible to
reads. ``Reconciler`` runs the write exactly once and then polls a caller-supplied
predicate until it reports completion, raises, or the deadline passes.

The reconciler knows nothing about resources: whether "done" means an ID appeared
or disappeared is encoded entirely in the predicate. It keeps no state between
calls; the only collaborators it holds are the clock and the sleep function, which
tests replace to avoid real waiting.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import Literal

log = getLogger(__name__)


class PollStatus(StrEnum):
    """Result of one predicate call. Errors are raised, not returned."""

    PENDING = "pending"
    COMPLETED = "completed"


class ReconcileState(StrEnum):
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


type MutatingOperation = Callable[[], Awaitable[object]]
type PollPredicate = Callable[[], Awaitable[PollStatus]]
type Clock = Callable[[], float]
type Sleep = Callable[[float], Awaitable[None]]
type FailurePhase = Literal["mutation", "poll"]


class ReconcileError(RuntimeError):
    """Base class for reconcile outcomes other than completion."""

    def __init__(
        self,
        message: str,
        *,
        error: BaseException | None = None,
        elapsed: float = 0.0,
        polls: int = 0,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.elapsed = elapsed
        self.polls = polls


class MutationFailedError(ReconcileError):
    """The initial side-effecting call raised; no polling took place."""


class PollFailedError(ReconcileError):
    """A predicate call raised while waiting for the mutation to become visible."""


class ReconcileTimeoutError(ReconcileError):
    """The desired state was not observed before the deadline.

    The remote operation may still complete later, so callers should word this
    differently from a hard failure.
    """


@dataclass(slots=True, frozen=True, kw_only=True)
class ReconcileRequest:
    mutate: MutatingOperation
    poll: PollPredicate
    timeout: float
    min_poll_interval: float
    backoff_factor: float = 1.0
    max_poll_interval: float | None = None

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.min_poll_interval <= 0:
            raise ValueError(f"min_poll_interval must be positive, got {self.min_poll_interval}")
        if self.backoff_factor < 1:
            raise ValueError(f"backoff_factor must be at least 1, got {self.backoff_factor}")
        if self.max_poll_interval is not None and self.max_poll_interval < self.min_poll_interval:
            raise ValueError("max_poll_interval must not be smaller than min_poll_interval")

    def next_interval(self, current: float) -> float:
        grown = current * self.backoff_factor
        if self.max_poll_interval is not None:
            grown = min(grown, self.max_poll_interval)
        return max(grown, self.min_poll_interval)


@dataclass(slots=True, frozen=True)
class ReconcileOutcome:
    state: ReconcileState
    error: BaseException | None = None
    elapsed: float = 0.0
    polls: int = 0
    phase: FailurePhase | None = None

    @property
    def completed(self) -> bool:
        return self.state is ReconcileState.COMPLETED

    def raise_for_state(self, description: str = "the operation") -> None:
        """Raise the ``ReconcileError`` matching this outcome, if it did not complete."""

        if self.state is ReconcileState.COMPLETED:
            return
        if self.state is ReconcileState.TIMED_OUT:
            raise ReconcileTimeoutError(
                f"timed out after {self.elapsed:.1f}s waiting for {description}; "
                "the operation may still be in progress",
                elapsed=self.elapsed,
                polls=self.polls,
            )
        if self.phase == "mutation":
            raise MutationFailedError(
                f"error {description}: {self.error}",
                error=self.error,
            ) from self.error
        raise PollFailedError(
            f"error waiting for {description} to complete: {self.error}",
            error=self.error,
            elapsed=self.elapsed,
            polls=self.polls,
        ) from self.error


@dataclass(slots=True, frozen=True)
class Reconciler:
    clock: Clock = time.monotonic
    sleep: Sleep = asyncio.sleep

    async def reconcile(
        self,
        mutate: MutatingOperation,
        poll: PollPredicate,
        *,
        timeout: float,
        min_poll_interval: float,
        backoff_factor: float = 1.0,
        max_poll_interval: float | None = None,
    ) -> ReconcileOutcome:
        request = ReconcileRequest(
            mutate=mutate,
            poll=poll,
            timeout=timeout,
            min_poll_interval=min_poll_interval,
            backoff_factor=backoff_factor,
            max_poll_interval=max_poll_interval,
        )
        return await self.run(request)

    async def run(self, request: ReconcileRequest) -> ReconcileOutcome:
        try:
            await request.mutate()
        except Exception as exc:  # noqa: BLE001 - reported through the outcome
            log.warning("Mutating call failed: %s", exc)
            return ReconcileOutcome(state=ReconcileState.FAILED, error=exc, phase="mutation")

        # The deadline only covers polling; the mutating call is not counted.
        started = self.clock()
        deadline = started + request.timeout
        interval = request.min_poll_interval
        polls = 0

        while True:
            polls += 1
            try:
                status = await request.poll()
            except Exception as exc:  # noqa: BLE001 - reported through the outcome
                elapsed = self.clock() - started
                log.warning("Poll %d failed after %.1fs: %s", polls, elapsed, exc)
                return ReconcileOutcome(
                    state=ReconcileState.FAILED,
                    error=exc,
                    elapsed=elapsed,
                    polls=polls,
                    phase="poll",
                )

            if status == PollStatus.COMPLETED:
                elapsed = self.clock() - started
                log.debug("Reconciled after %d poll(s) in %.1fs", polls, elapsed)
                return ReconcileOutcome(
                    state=ReconcileState.COMPLETED,
                    elapsed=elapsed,
                    polls=polls,
                )

            remaining = deadline - self.clock()
            if remaining <= 0:
                break
            log.debug("Poll %d pending, next check in %.1fs", polls, min(interval, remaining))
            await self.sleep(min(interval, remaining))
            if self.clock() >= deadline:
                break
            interval = request.next_interval(interval)

        elapsed = self.clock() - started
        log.warning("Gave up after %d poll(s) in %.1fs", polls, elapsed)
        return ReconcileOutcome(state=ReconcileState.TIMED_OUT, elapsed=elapsed, polls=polls)


async def reconcile(
    mutate: MutatingOperation,
    poll: PollPredicate,
    *,
    timeout: float,
    min_poll_interval: float,
    backoff_factor: float = 1.0,
    max_poll_interval: float | None = None,
) -> ReconcileOutcome:
    """Run ``mutate`` once, then poll until completion using real time."""

    return await Reconciler().reconcile(
        mutate,
        poll,
        timeout=timeout,
        min_poll_interval=min_poll_interval,
        backoff_factor=backoff_factor,
        max_poll_interval=max_poll_interval,
    )
