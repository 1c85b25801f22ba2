from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from cloudward.adapters.huaweicloud import epoch_millis_to_datetime, ignore_empty, remove_nil
from cloudward.domain.errors import CloudAPIError, ResourceNotFoundError
from tests.support.http import make_cloud_client


def _unused(_: httpx.Request) -> httpx.Response:
    raise AssertionError("no request expected")


def test_build_path_fills_project_and_quotes_segments() -> None:
    client = make_cloud_client(_unused)

    path = client.build_path(
        "v2/{project_id}/repos/{repository}/items/{item}",
        {"repository": "team$app", "item": "a b"},
    )

    assert path == "v2/proj-1/repos/team$app/items/a%20b"


def test_build_path_rejects_missing_parameters() -> None:
    client = make_cloud_client(_unused)

    with pytest.raises(ValueError, match="instance_id"):
        client.build_path("v2/{project_id}/apigw/instances/{instance_id}")


def test_request_sends_auth_header_and_drops_nil_fields() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"ok": True})

    client = make_cloud_client(handler)
    result = asyncio.run(
        client.request(
            "POST",
            "v1/{project_id}/things",
            json={"name": "x", "note": None, "nested": {"empty": None}},
            ok_codes=(201,),
        )
    )

    assert result == {"ok": True}
    request = seen[0]
    assert request.url.host == "apig.cn-north-4.myhuaweicloud.com"
    assert request.url.path == "/v1/proj-1/things"
    assert request.headers["X-Auth-Token"] == "token-123"
    assert json.loads(request.content) == {"name": "x"}


def test_empty_body_decodes_to_none() -> None:
    client = make_cloud_client(lambda _: httpx.Response(204))

    assert asyncio.run(client.request("DELETE", "v1/{project_id}/x", ok_codes=(204,))) is None


def test_not_found_maps_to_resource_not_found() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error_code": "APIG.3030", "error_msg": "no instance"})

    client = make_cloud_client(handler)

    with pytest.raises(ResourceNotFoundError) as excinfo:
        asyncio.run(client.request("GET", "v1/{project_id}/x"))

    assert excinfo.value.status_code == 404
    assert excinfo.value.error_code == "APIG.3030"
    assert "[APIG.3030] no instance" in str(excinfo.value)


def test_nested_error_shape_is_understood() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": "SecMaster.2001", "message": "bad"}})

    client = make_cloud_client(handler, service="secmaster")

    with pytest.raises(CloudAPIError) as excinfo:
        asyncio.run(client.request("PUT", "v1/{project_id}/x"))

    assert not isinstance(excinfo.value, ResourceNotFoundError)
    assert excinfo.value.error_code == "SecMaster.2001"
    assert excinfo.value.error_msg == "bad"


def test_non_json_error_keeps_the_text() -> None:
    client = make_cloud_client(lambda _: httpx.Response(403, text="forbidden"))

    with pytest.raises(CloudAPIError) as excinfo:
        asyncio.run(client.request("GET", "v1/{project_id}/x"))

    assert excinfo.value.error_msg == "forbidden"


def test_remove_nil_prunes_recursively() -> None:
    assert remove_nil({"a": None, "b": {"c": None}, "d": [{"e": None, "f": 1}], "g": 0}) == {
        "d": [{"f": 1}],
        "g": 0,
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", None), ({}, None), ([], None), ("x", "x"), (False, False), (0, 0), (None, None)],
)
def test_ignore_empty(value: object, expected: object) -> None:
    assert ignore_empty(value) == expected


def test_epoch_millis_to_datetime() -> None:
    converted = epoch_millis_to_datetime(1_700_000_000_123)

    assert converted is not None
    assert converted.isoformat() == "2023-11-14T22:13:20+00:00"
    assert epoch_millis_to_datetime(None) is None
    assert epoch_millis_to_datetime(0) is None


def test_network_failure_surfaces_as_cloud_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_cloud_client(handler)

    with pytest.raises(CloudAPIError, match="connection refused") as excinfo:
        asyncio.run(client.request("GET", "v1/{project_id}/x"))

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert excinfo.value.status_code is None
