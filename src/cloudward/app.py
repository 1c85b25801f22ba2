"""Application entry points wiring configuration, adapters and resource operations."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from cloudward.adapters.apig import ApigSignatureGateway
from cloudward.adapters.http_resilience import ResilientClient
from cloudward.adapters.huaweicloud import CloudClient
from cloudward.adapters.secmaster import SecMasterAlertRuleGateway
from cloudward.adapters.swr import SwrImageTriggerGateway
from cloudward.config import (
    APIG_SERVICE,
    SECMASTER_SERVICE,
    SWR_SERVICE,
    HuaweiCloudConfig,
    get_huaweicloud_config,
)
from cloudward.domain.alert_rule import AlertRuleResource
from cloudward.domain.image_triggers import list_image_triggers
from cloudward.domain.model import SignatureAssociation
from cloudward.domain.reconciler import Reconciler
from cloudward.domain.signature_association import SignatureAssociationResource, Timeouts

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable, Collection

    from cloudward.domain.model import (
        AlertRule,
        AlertRuleStatus,
        ImageTrigger,
        ImageTriggerFilter,
    )
    from cloudward.domain.ports import AlertRuleGateway, ImageTriggerGateway, SignatureGateway

log = getLogger(__name__)


@asynccontextmanager
async def open_gateway[G](
    service: str,
    factory: Callable[[CloudClient], G],
    *,
    config: HuaweiCloudConfig,
    gateway: G | None = None,
) -> AsyncIterator[G]:
    """Yield ``gateway`` if given, else one bound to a session client for ``service``."""

    if gateway is not None:
        yield gateway
        return
    async with ResilientClient(config.resilience(service)) as http:
        yield factory(CloudClient(http, project_id=config.project_id))


def _config_for(gateway: object | None, config: HuaweiCloudConfig | None) -> HuaweiCloudConfig:
    if config is not None:
        return config
    if gateway is not None:
        # An injected gateway needs no credentials; region stays unknown.
        return HuaweiCloudConfig(region="", project_id="", auth_token="")
    return get_huaweicloud_config()


def associate_signature(
    *,
    instance_id: str,
    signature_id: str,
    publish_ids: Collection[str],
    config: HuaweiCloudConfig | None = None,
    gateway: SignatureGateway | None = None,
    timeouts: Timeouts | None = None,
    reconciler: Reconciler | None = None,
) -> SignatureAssociation:
    """Converge the signature's bound APIs to exactly ``publish_ids``."""

    effective = _config_for(gateway, config)
    desired = SignatureAssociation(
        instance_id=instance_id,
        signature_id=signature_id,
        publish_ids=frozenset(publish_ids),
        region=effective.region or None,
    )

    async def run() -> SignatureAssociation:
        async with open_gateway(
            APIG_SERVICE, ApigSignatureGateway, config=effective, gateway=gateway
        ) as active:
            resource = SignatureAssociationResource(
                active,
                reconciler=reconciler or Reconciler(),
                timeouts=timeouts or Timeouts(),
                region=desired.region,
            )
            current = await resource.read(instance_id, signature_id)
            if current is None:
                log.info("Creating signature association %s", desired.id)
                return await resource.create(desired)
            log.info("Updating signature association %s", desired.id)
            return await resource.update(current, desired)

    return asyncio.run(run())


def show_signature_association(
    *,
    instance_id: str,
    signature_id: str,
    config: HuaweiCloudConfig | None = None,
    gateway: SignatureGateway | None = None,
) -> SignatureAssociation | None:
    effective = _config_for(gateway, config)

    async def run() -> SignatureAssociation | None:
        async with open_gateway(
            APIG_SERVICE, ApigSignatureGateway, config=effective, gateway=gateway
        ) as active:
            resource = SignatureAssociationResource(active, region=effective.region or None)
            return await resource.read(instance_id, signature_id)

    return asyncio.run(run())


def dissociate_signature(
    *,
    instance_id: str,
    signature_id: str,
    config: HuaweiCloudConfig | None = None,
    gateway: SignatureGateway | None = None,
    timeouts: Timeouts | None = None,
    reconciler: Reconciler | None = None,
) -> bool:
    """Unbind every API from the signature. Returns ``False`` if nothing was bound."""

    effective = _config_for(gateway, config)

    async def run() -> bool:
        async with open_gateway(
            APIG_SERVICE, ApigSignatureGateway, config=effective, gateway=gateway
        ) as active:
            resource = SignatureAssociationResource(
                active,
                reconciler=reconciler or Reconciler(),
                timeouts=timeouts or Timeouts(),
            )
            current = await resource.read(instance_id, signature_id)
            if current is None:
                return False
            await resource.delete(current)
            return True

    return asyncio.run(run())


def apply_alert_rule(
    desired: AlertRule,
    *,
    config: HuaweiCloudConfig | None = None,
    gateway: AlertRuleGateway | None = None,
) -> AlertRule:
    """Create ``desired`` when it has no ID yet, otherwise update the existing rule."""

    effective = _config_for(gateway, config)

    async def run() -> AlertRule:
        async with open_gateway(
            SECMASTER_SERVICE, SecMasterAlertRuleGateway, config=effective, gateway=gateway
        ) as active:
            resource = AlertRuleResource(active, region=effective.region or None)
            if desired.id is None:
                return await resource.create(desired)
            current = await resource.import_state(f"{desired.workspace_id}/{desired.id}")
            return await resource.update(current, desired)

    return asyncio.run(run())


def show_alert_rule(
    *,
    workspace_id: str,
    rule_id: str,
    config: HuaweiCloudConfig | None = None,
    gateway: AlertRuleGateway | None = None,
) -> AlertRule | None:
    effective = _config_for(gateway, config)

    async def run() -> AlertRule | None:
        async with open_gateway(
            SECMASTER_SERVICE, SecMasterAlertRuleGateway, config=effective, gateway=gateway
        ) as active:
            return await AlertRuleResource(active, region=effective.region or None).read(
                workspace_id, rule_id
            )

    return asyncio.run(run())


def set_alert_rule_status(
    *,
    workspace_id: str,
    rule_id: str,
    status: AlertRuleStatus,
    config: HuaweiCloudConfig | None = None,
    gateway: AlertRuleGateway | None = None,
) -> AlertRule:
    effective = _config_for(gateway, config)

    async def run() -> AlertRule:
        async with open_gateway(
            SECMASTER_SERVICE, SecMasterAlertRuleGateway, config=effective, gateway=gateway
        ) as active:
            resource = AlertRuleResource(active, region=effective.region or None)
            current = await resource.import_state(f"{workspace_id}/{rule_id}")
            return await resource.update(current, replace(current, status=status))

    return asyncio.run(run())


def fetch_image_triggers(
    *,
    organization: str,
    repository: str,
    trigger_filter: ImageTriggerFilter | None = None,
    config: HuaweiCloudConfig | None = None,
    gateway: ImageTriggerGateway | None = None,
) -> list[ImageTrigger]:
    effective = _config_for(gateway, config)

    async def run() -> list[ImageTrigger]:
        async with open_gateway(
            SWR_SERVICE, SwrImageTriggerGateway, config=effective, gateway=gateway
        ) as active:
            return await list_image_triggers(
                active,
                organization=organization,
                repository=repository,
                trigger_filter=trigger_filter,
            )

    return asyncio.run(run())
