"""JSON transport for Huawei Cloud management APIs."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from cloudward.domain.errors import CloudAPIError, ResourceNotFoundError

from .payloads import remove_nil
from .schema import ErrorResponse

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from cloudward.adapters.http_resilience import RequestOptions, ResilientClient

log = getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{([a-z_]+)\}")
DEFAULT_OK_CODES: Final[tuple[int, ...]] = (200,)


class CloudClient:
    """Issues JSON requests against one service endpoint within one project.

    Paths are templates such as ``v1/{project_id}/workspaces/{workspace_id}``;
    ``{project_id}`` is filled in from the client, every other placeholder from
    ``path_params``.
    """

    def __init__(self, http: ResilientClient, *, project_id: str) -> None:
        self._http = http
        self.project_id = project_id

    @property
    def service(self) -> str:
        return self._http.config.name

    def build_path(self, template: str, path_params: Mapping[str, str] | None = None) -> str:
        values = {"project_id": self.project_id, **(path_params or {})}

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in values:
                raise ValueError(f"missing path parameter '{key}' for {template}")
            return quote(str(values[key]), safe="$")

        return _PLACEHOLDER.sub(substitute, template)

    async def request(
        self,
        method: str,
        template: str,
        *,
        path_params: Mapping[str, str] | None = None,
        json: object = None,
        params: Mapping[str, str | int] | None = None,
        ok_codes: Collection[int] = DEFAULT_OK_CODES,
    ) -> object:
        """Send the request and return the decoded JSON body (``None`` when empty)."""

        path = self.build_path(template, path_params)
        options: RequestOptions = {}
        if json is not None:
            options["json"] = remove_nil(json)
        if params:
            options["params"] = dict(params)

        log.debug("%s %s %s", self.service, method, path)
        try:
            response = await self._http.request(method, path, **options)
        except httpx.HTTPError as exc:
            raise CloudAPIError(f"{method} {path}: {exc}") from exc
        if response.status_code not in ok_codes:
            raise _error_from_response(method, path, response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise CloudAPIError(
                f"{method} {path}: response is not valid JSON",
                status_code=response.status_code,
            ) from exc


def _error_from_response(method: str, path: str, response: httpx.Response) -> CloudAPIError:
    code: str | None = None
    message: str | None = None
    try:
        body = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        message = response.text or None
    else:
        code = body.code
        message = body.message

    detail = f"{method} {path} returned {response.status_code}"
    if code or message:
        detail = f"{detail}: [{code or '-'}] {message or ''}".rstrip()
    error_type = ResourceNotFoundError if response.status_code == 404 else CloudAPIError
    return error_type(
        detail,
        status_code=response.status_code,
        error_code=code,
        error_msg=message,
    )
