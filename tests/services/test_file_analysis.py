"""
Minam Repository
Introductory remarks: This module is part of the Minam codebase.

Tests for the optional file analysis collaborator.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest
import requests

from minam.services import file_analysis as fa

METADATA = {"filename": "btc_prices.csv", "file_size": 2048, "file_type": "text/csv"}


class FakeResponse:
    """
    FakeResponse: Minimal stand-in for ``requests.Response``.
    """

    def __init__(self, payload: Any, status_ok: bool = True) -> None:
        self._payload = payload
        self._status_ok = status_ok

    def raise_for_status(self) -> None:
        if not self._status_ok:
            raise requests.HTTPError("500 Server Error")

    def json(self) -> Any:
        return self._payload


def _chat_reply(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"content": content}}]}


@pytest.mark.parametrize(
    "filename, file_type, expected",
    [
        ("prices.csv", "text/csv", ["Structured Data (CSV)"]),
        ("dump.json", "application/json", ["JSON Data"]),
        ("server.log", "text/plain", ["Log Files"]),
        ("app_settings.yaml", "text/yaml", ["Configuration Files"]),
        ("photo.png", "image/png", ["Image Data"]),
        ("blob.bin", "application/octet-stream", ["Mixed Data Types"]),
    ],
)
def test_detect_data_patterns(filename, file_type, expected) -> None:
    assert fa.detect_data_patterns(filename, file_type) == expected


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0 Bytes"), (500, "500.00 Bytes"), (2048, "2.00 KB"), (5 * 1024 ** 2, "5.00 MB"), (3 * 1024 ** 4, "3072.00 GB")],
)
def test_format_file_size(size, expected) -> None:
    assert fa.format_file_size(size) == expected


def test_heuristic_analyzer_is_offline(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(*args, **kwargs):
        raise AssertionError("network used")

    monkeypatch.setattr(fa.requests, "post", boom)
    analyzer = fa.HeuristicFileAnalyzer()
    analysis = analyzer.analyze(METADATA)
    assert analysis["path"] == "uploaded/btc_prices.csv"
    assert analysis["total_size"] == "2.00 KB"
    assert analysis["data_patterns"] == ["Structured Data (CSV)"]
    spec = analyzer.generate_specification(analysis)
    assert spec["openapi"] == "3.0.0"
    assert spec["info"]["title"] == "API for uploaded/btc_prices.csv"


def test_openai_analyzer_sends_chat_request(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Dict[str, Any]] = []

    def fake_post(url, **kwargs):
        calls.append({"url": url, **kwargs})
        return FakeResponse(_chat_reply("Use a time-series endpoint."))

    monkeypatch.setattr(fa.requests, "post", fake_post)
    analyzer = fa.OpenAIFileAnalyzer("sk-test")
    analysis = analyzer.analyze(METADATA, model="gpt-4o-mini")

    assert analysis["model_reasoning"] == "Use a time-series endpoint."
    assert analysis["best_model"]["id"] == "gpt-4o-mini"
    assert analysis["suggested_api_structure"]["endpoints"][0]["path"] == "/data"
    assert calls[0]["url"] == fa.OPENAI_CHAT_URL
    assert calls[0]["headers"]["Authorization"] == "Bearer sk-test"
    assert calls[0]["json"]["model"] == "gpt-4o-mini"
    assert "btc_prices.csv" in calls[0]["json"]["messages"][1]["content"]


def test_generate_specification_parses_json_reply(monkeypatch: pytest.MonkeyPatch) -> None:
    reply = json.dumps({"openapi": "3.1.0", "info": {"title": "custom"}})
    monkeypatch.setattr(fa.requests, "post", lambda *a, **k: FakeResponse(_chat_reply(reply)))
    spec = fa.OpenAIFileAnalyzer("sk-test").generate_specification({"path": "uploaded/x.csv"})
    assert spec == {"openapi": "3.1.0", "info": {"title": "custom"}}


def test_generate_specification_falls_back_on_prose(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        fa.requests, "post", lambda *a, **k: FakeResponse(_chat_reply("Here is your spec!"))
    )
    spec = fa.OpenAIFileAnalyzer("sk-test").generate_specification({"path": "uploaded/x.csv"})
    assert spec == fa.default_specification("uploaded/x.csv")


def test_http_failure_raises_analysis_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        fa.requests, "post", lambda *a, **k: FakeResponse({}, status_ok=False)
    )
    with pytest.raises(fa.AnalysisError, match="OpenAI API error"):
        fa.OpenAIFileAnalyzer("sk-test").analyze(METADATA)


def test_malformed_reply_raises_analysis_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(fa.requests, "post", lambda *a, **k: FakeResponse({"choices": []}))
    with pytest.raises(fa.AnalysisError, match="Invalid response"):
        fa.OpenAIFileAnalyzer("sk-test").analyze(METADATA)


def test_connection_error_raises_analysis_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(fa.requests, "post", refuse)
    with pytest.raises(fa.AnalysisError):
        fa.OpenAIFileAnalyzer("sk-test").generate_specification({})


def test_openai_analyzer_requires_key() -> None:
    with pytest.raises(ValueError):
        fa.OpenAIFileAnalyzer("")


def test_build_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert isinstance(fa.build_file_analyzer_from_env(), fa.HeuristicFileAnalyzer)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
    assert isinstance(fa.build_file_analyzer_from_env(), fa.OpenAIFileAnalyzer)
