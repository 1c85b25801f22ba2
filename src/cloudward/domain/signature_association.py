"""Bind a gateway signature to a set of published APIs and keep it in sync.

Bind and unbind calls are acknowledged before the binding list reflects them, so
each mutation is followed by polling the list until the change is visible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .changes import split_import_id
from .errors import CloudAPIError, ResourceNotFoundError
from .model import SignatureAssociation
from .reconciler import PollStatus, Reconciler

if TYPE_CHECKING:
    from collections.abc import Collection

    from .model import SignatureBinding
    from .ports import SignatureGateway

log = getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 180.0
MIN_POLL_INTERVAL_SECONDS: Final[float] = 2.0
MAX_POLL_INTERVAL_SECONDS: Final[float] = 10.0
POLL_BACKOFF_FACTOR: Final[float] = 2.0


@dataclass(frozen=True, slots=True)
class Timeouts:
    create: float = DEFAULT_TIMEOUT_SECONDS
    update: float = DEFAULT_TIMEOUT_SECONDS
    delete: float = DEFAULT_TIMEOUT_SECONDS


def _publish_ids(bindings: list[SignatureBinding]) -> frozenset[str]:
    return frozenset(binding.publish_id for binding in bindings)


async def bind_signature_to_apis(
    gateway: SignatureGateway,
    *,
    instance_id: str,
    signature_id: str,
    publish_ids: Collection[str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    reconciler: Reconciler | None = None,
) -> None:
    """Bind ``signature_id`` to ``publish_ids`` and wait until every binding is listed.

    An API that already carries another signature has it replaced by this one.
    """

    requested = sorted(publish_ids)

    async def mutate() -> None:
        await gateway.bind(instance_id, signature_id, requested)

    async def poll() -> PollStatus:
        bound = _publish_ids(await gateway.list_bindings(instance_id, signature_id))
        if bound.issuperset(requested):
            return PollStatus.COMPLETED
        return PollStatus.PENDING

    log.info("Binding signature %s to %d API(s)", signature_id, len(requested))
    outcome = await (reconciler or Reconciler()).reconcile(
        mutate,
        poll,
        timeout=timeout,
        min_poll_interval=MIN_POLL_INTERVAL_SECONDS,
        backoff_factor=POLL_BACKOFF_FACTOR,
        max_poll_interval=MAX_POLL_INTERVAL_SECONDS,
    )
    outcome.raise_for_state(f"binding signature {signature_id} to the APIs")


async def unbind_signature_from_apis(
    gateway: SignatureGateway,
    *,
    instance_id: str,
    signature_id: str,
    publish_ids: Collection[str],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    reconciler: Reconciler | None = None,
) -> None:
    """Remove the bindings of ``publish_ids``, waiting for each one to disappear."""

    effective = reconciler or Reconciler()
    try:
        bindings = await gateway.list_bindings(instance_id, signature_id)
    except CloudAPIError as exc:
        raise CloudAPIError(
            f"error getting APIs bound to signature ({signature_id}): {exc}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            error_msg=exc.error_msg,
        ) from exc

    targets = set(publish_ids)
    bind_ids = [binding.bind_id for binding in bindings if binding.publish_id in targets]
    log.info("Unbinding signature %s from %d API(s)", signature_id, len(bind_ids))

    for bind_id in bind_ids:

        async def mutate(bind_id: str = bind_id) -> None:
            await gateway.unbind(instance_id, bind_id)

        async def poll(bind_id: str = bind_id) -> PollStatus:
            remaining = await gateway.list_bindings(instance_id, signature_id)
            if any(binding.bind_id == bind_id for binding in remaining):
                return PollStatus.PENDING
            return PollStatus.COMPLETED

        outcome = await effective.reconcile(
            mutate,
            poll,
            timeout=timeout,
            min_poll_interval=MIN_POLL_INTERVAL_SECONDS,
            backoff_factor=POLL_BACKOFF_FACTOR,
            max_poll_interval=MAX_POLL_INTERVAL_SECONDS,
        )
        outcome.raise_for_state(f"unbinding signature {signature_id} ({bind_id})")


def parse_import_id(import_id: str) -> tuple[str, str]:
    """Split ``<instance_id>/<signature_id>``."""

    instance_id, signature_id = split_import_id(import_id, "instance_id", "signature_id")
    return instance_id, signature_id


@dataclass(slots=True)
class SignatureAssociationResource:
    gateway: SignatureGateway
    reconciler: Reconciler = field(default_factory=Reconciler)
    timeouts: Timeouts = field(default_factory=Timeouts)
    region: str | None = None

    async def create(self, desired: SignatureAssociation) -> SignatureAssociation:
        if not desired.publish_ids:
            raise ValueError("at least one publish ID is required to associate a signature")
        await bind_signature_to_apis(
            self.gateway,
            instance_id=desired.instance_id,
            signature_id=desired.signature_id,
            publish_ids=desired.publish_ids,
            timeout=self.timeouts.create,
            reconciler=self.reconciler,
        )
        return await self._read_existing(desired.instance_id, desired.signature_id)

    async def read(self, instance_id: str, signature_id: str) -> SignatureAssociation | None:
        """Return the observed association, or ``None`` if nothing is bound anymore."""

        try:
            bindings = await self.gateway.list_bindings(instance_id, signature_id)
        except ResourceNotFoundError:
            log.info("Signature association %s/%s is gone", instance_id, signature_id)
            return None
        if not bindings:
            log.info("Signature %s has no bound APIs left", signature_id)
            return None
        return SignatureAssociation(
            instance_id=instance_id,
            signature_id=signature_id,
            publish_ids=_publish_ids(bindings),
            region=self.region,
        )

    async def update(
        self,
        current: SignatureAssociation,
        desired: SignatureAssociation,
    ) -> SignatureAssociation:
        if (current.instance_id, current.signature_id) != (
            desired.instance_id,
            desired.signature_id,
        ):
            raise ValueError("instance_id and signature_id cannot change; recreate the association")
        if not desired.publish_ids:
            raise ValueError("at least one publish ID is required; delete the association instead")

        removed = current.publish_ids - desired.publish_ids
        added = desired.publish_ids - current.publish_ids
        if removed:
            await unbind_signature_from_apis(
                self.gateway,
                instance_id=desired.instance_id,
                signature_id=desired.signature_id,
                publish_ids=removed,
                timeout=self.timeouts.update,
                reconciler=self.reconciler,
            )
        if added:
            await bind_signature_to_apis(
                self.gateway,
                instance_id=desired.instance_id,
                signature_id=desired.signature_id,
                publish_ids=added,
                timeout=self.timeouts.update,
                reconciler=self.reconciler,
            )
        if not removed and not added:
            return current
        return await self._read_existing(desired.instance_id, desired.signature_id)

    async def delete(self, current: SignatureAssociation) -> None:
        await unbind_signature_from_apis(
            self.gateway,
            instance_id=current.instance_id,
            signature_id=current.signature_id,
            publish_ids=current.publish_ids,
            timeout=self.timeouts.delete,
            reconciler=self.reconciler,
        )

    async def import_state(self, import_id: str) -> SignatureAssociation:
        instance_id, signature_id = parse_import_id(import_id)
        return await self._read_existing(instance_id, signature_id)

    async def _read_existing(self, instance_id: str, signature_id: str) -> SignatureAssociation:
        observed = await self.read(instance_id, signature_id)
        if observed is None:
            raise ResourceNotFoundError(
                f"signature {signature_id} has no APIs bound on instance {instance_id}",
                status_code=404,
            )
        return observed
