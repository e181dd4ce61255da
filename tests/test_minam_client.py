from __future__ import annotations

from typing import Any, Dict, List

import pytest

from minam.clients import MinamClient, MinamClientError


class FakeResponse:
    def __init__(self, status_code: int, payload: Any, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, responses: List[FakeResponse]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self._responses.pop(0)


def test_routes_and_payloads() -> None:
    session = FakeSession(
        [FakeResponse(200, {"id": "p1"}), FakeResponse(200, [{"a": 1}])]
    )
    client = MinamClient("http://localhost:8787/", session=session, timeout=5)

    assert client.create_provider({"name": "x", "contact_email": "x@y.z"}) == {"id": "p1"}
    assert client.query_api("api-1", {"limit": 1}) == [{"a": 1}]

    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["url"] == "http://localhost:8787/api/providers"
    assert session.calls[0]["json"] == {"name": "x", "contact_email": "x@y.z"}
    assert session.calls[0]["timeout"] == 5
    assert session.calls[1]["url"] == "http://localhost:8787/v1/data/api-1/query"


@pytest.mark.parametrize(
    "method_name, args, http_method, path",
    [
        ("list_providers", (), "GET", "/api/providers"),
        ("list_models", (), "GET", "/api/models"),
        ("create_model", ({},), "POST", "/api/models"),
        ("create_dataset", ({},), "POST", "/api/datasets"),
        ("list_datasets", (), "GET", "/api/datasets"),
        ("preview_dataset", ("d1",), "GET", "/api/datasets/d1/preview"),
        ("run_pipeline", ({},), "POST", "/api/pipelines"),
        ("get_proposal", ("p1",), "GET", "/api/proposals/p1"),
        ("create_api", ({},), "POST", "/api/apis"),
        ("list_apis", (), "GET", "/api/apis"),
    ],
)
def test_each_route(method_name, args, http_method, path) -> None:
    session = FakeSession([FakeResponse(200, [])])
    client = MinamClient("http://api.test", session=session)
    getattr(client, method_name)(*args)
    assert session.calls[0]["method"] == http_method
    assert session.calls[0]["url"] == f"http://api.test{path}"


def test_error_status_raises_with_server_message() -> None:
    session = FakeSession([FakeResponse(409, {"error": "EVALS_NOT_PASSED"})])
    client = MinamClient("http://api.test", session=session)
    with pytest.raises(MinamClientError) as excinfo:
        client.create_api({})
    assert excinfo.value.status_code == 409
    assert excinfo.value.message == "EVALS_NOT_PASSED"


def test_error_status_with_non_json_body() -> None:
    session = FakeSession([FakeResponse(500, ValueError("no json"), text="boom")])
    client = MinamClient("http://api.test", session=session)
    with pytest.raises(MinamClientError, match="HTTP 500: boom"):
        client.list_apis()
