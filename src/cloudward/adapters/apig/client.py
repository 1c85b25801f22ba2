"""Signature bindings on dedicated API gateway instances."""

from __future__ import annotations

from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from cloudward.domain.errors import CloudAPIError
from cloudward.domain.model import SignatureBinding

from .schema import SignBindApiInfo, SignBindingPage

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cloudward.adapters.huaweicloud import CloudClient

log = getLogger(__name__)

SIGN_BINDINGS_PATH: Final[str] = "v2/{project_id}/apigw/instances/{instance_id}/sign-bindings"
BOUND_APIS_PATH: Final[str] = f"{SIGN_BINDINGS_PATH}/binded-apis"
SIGN_BINDING_PATH: Final[str] = f"{SIGN_BINDINGS_PATH}/{{bind_id}}"
LIST_PAGE_LIMIT: Final[int] = 500


def _parse_binding_time(value: str | None) -> datetime | None:
    if not value:
        return None
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        log.debug("Unparseable binding_time %r", value)
        return None


def to_signature_binding(info: SignBindApiInfo) -> SignatureBinding:
    return SignatureBinding(
        bind_id=info.bind_id,
        publish_id=info.publish_id,
        api_id=info.api_id,
        api_name=info.api_name,
        env_id=info.env_id,
        env_name=info.env_name,
        sign_id=info.sign_id,
        sign_name=info.sign_name,
        bound_at=_parse_binding_time(info.binding_time),
    )


class ApigSignatureGateway:
    """``SignatureGateway`` backed by the APIG v2 REST API."""

    def __init__(self, client: CloudClient, *, page_limit: int = LIST_PAGE_LIMIT) -> None:
        self._client = client
        self._page_limit = page_limit

    async def bind(self, instance_id: str, signature_id: str, publish_ids: Sequence[str]) -> None:
        await self._client.request(
            "POST",
            SIGN_BINDINGS_PATH,
            path_params={"instance_id": instance_id},
            json={"sign_id": signature_id, "publish_ids": list(publish_ids)},
            ok_codes=(200, 201),
        )

    async def list_bindings(self, instance_id: str, signature_id: str) -> list[SignatureBinding]:
        bindings: list[SignatureBinding] = []
        offset = 0
        while True:
            payload = await self._client.request(
                "GET",
                BOUND_APIS_PATH,
                path_params={"instance_id": instance_id},
                params={"sign_id": signature_id, "limit": self._page_limit, "offset": offset},
            )
            if not isinstance(payload, dict):
                raise CloudAPIError("Unexpected APIG sign-binding list payload")
            page = SignBindingPage.model_validate(payload)
            bindings.extend(to_signature_binding(info) for info in page.bindings)
            offset += len(page.bindings)
            if not page.bindings or offset >= page.total:
                return bindings

    async def unbind(self, instance_id: str, bind_id: str) -> None:
        await self._client.request(
            "DELETE",
            SIGN_BINDING_PATH,
            path_params={"instance_id": instance_id, "bind_id": bind_id},
            ok_codes=(200, 204),
        )
