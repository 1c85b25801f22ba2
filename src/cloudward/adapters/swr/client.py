"""Image triggers of SWR repositories."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import TypeAdapter

from cloudward.domain.errors import CloudAPIError
from cloudward.domain.model import ImageTrigger

from .schema import TriggerPayload

if TYPE_CHECKING:
    from cloudward.adapters.huaweicloud import CloudClient

log = getLogger(__name__)

TRIGGERS_PATH: Final[str] = "v2/manage/namespaces/{organization}/repos/{repository}/triggers"
_TRIGGER_LIST = TypeAdapter(list[TriggerPayload])


def encode_repository(name: str) -> str:
    """SWR addresses nested repository names with ``$`` in place of ``/``."""

    return name.replace("/", "$")


def _parse_created_at(value: str | None) -> datetime | None:
    if not value:
        return None
    normalized = value.strip().replace(" ", "T")
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        log.debug("Unparseable trigger created_at %r", value)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def to_image_trigger(payload: TriggerPayload) -> ImageTrigger:
    return ImageTrigger(
        name=payload.name,
        enabled=payload.is_enabled,
        condition_type=payload.trigger_mode,
        condition_value=payload.condition,
        cluster_id=payload.cluster_id,
        cluster_name=payload.cluster_name,
        namespace=payload.cluster_ns,
        workload_type=payload.app_type,
        workload_name=payload.application,
        container=payload.container,
        type=payload.trigger_type,
        action=payload.action,
        creator_name=payload.creator_name,
        created_at=_parse_created_at(payload.created_at),
    )


class SwrImageTriggerGateway:
    """``ImageTriggerGateway`` backed by the SWR v2 management API."""

    def __init__(self, client: CloudClient) -> None:
        self._client = client

    async def list_triggers(self, organization: str, repository: str) -> list[ImageTrigger]:
        payload = await self._client.request(
            "GET",
            TRIGGERS_PATH,
            path_params={
                "organization": organization,
                "repository": encode_repository(repository),
            },
        )
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise CloudAPIError("Unexpected SWR trigger list payload")
        return [to_image_trigger(item) for item in _TRIGGER_LIST.validate_python(payload)]
