"""
LLM-assisted analysis of uploaded files (optional enrichment).

The registry core never depends on this module. Analyzers implement the
narrow :class:`FileAnalyzer` interface so the HTTP layer can swap in the
offline heuristics, the OpenAI-backed analyzer, or a test stub.

Configuration (environment variables):
- OPENAI_API_KEY: enables :class:`OpenAIFileAnalyzer` when set.

Without a key we fall back to local heuristics that never touch the
network.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Protocol

import requests

from minam.config import (LLM_ANALYSIS_MAX_TOKENS, LLM_ANALYSIS_MODEL,
                          LLM_ANALYSIS_TEMPERATURE, LLM_SPEC_MAX_TOKENS,
                          LLM_SPEC_TEMPERATURE, LLM_TIMEOUT_SECONDS,
                          OPENAI_CHAT_URL)
from minam.utils.env import openai_api_key

logger = logging.getLogger(__name__)

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

_ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert API architect and data analyst. "
    "Analyze files and suggest optimal API designs."
)
_SPEC_SYSTEM_PROMPT = (
    "You are an expert API architect. "
    "Create complete API specifications based on data analysis."
)


class AnalysisError(RuntimeError):
    """Raised when a remote analyzer cannot produce a result."""


class FileAnalyzer(Protocol):
    def analyze(
        self, file_metadata: Mapping[str, Any], model: Optional[str] = None
    ) -> Dict[str, Any]:
        """Return a directory-style analysis for one uploaded file."""

    def generate_specification(
        self, analysis: Mapping[str, Any], model: Optional[str] = None
    ) -> Dict[str, Any]:
        """Return an API specification derived from ``analysis``."""


def detect_data_patterns(filename: str, file_type: str) -> List[str]:
    """Guess content categories from the file name and MIME type."""
    name = filename.lower()
    patterns = []
    if "csv" in name or "csv" in file_type:
        patterns.append("Structured Data (CSV)")
    if "json" in name or "json" in file_type:
        patterns.append("JSON Data")
    if "log" in name:
        patterns.append("Log Files")
    if "config" in name or "settings" in name:
        patterns.append("Configuration Files")
    if "image" in name or "photo" in name:
        patterns.append("Image Data")
    if not patterns:
        patterns.append("Mixed Data Types")
    return patterns


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    index = min(int(math.floor(math.log(size, 1024))), len(_SIZE_UNITS) - 1)
    return f"{size / (1024 ** index):.2f} {_SIZE_UNITS[index]}"


def default_api_structure() -> Dict[str, Any]:
    return {
        "endpoints": [
            {
                "path": "/data",
                "method": "GET",
                "description": "Retrieve processed data",
                "parameters": [
                    {"name": "format", "type": "string", "required": False, "default": "json"},
                    {"name": "limit", "type": "number", "required": False, "default": 100},
                ],
            }
        ],
        "authentication": {"type": "api_key", "required": True},
        "rate_limits": {"requests_per_minute": 100, "requests_per_hour": 1000},
    }


def default_specification(path: str) -> Dict[str, Any]:
    """OpenAPI 3.0 skeleton used when no usable model output exists."""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": f"API for {path}",
            "version": "1.0.0",
            "description": "Generated API specification",
        },
        "servers": [
            {"url": "https://api.minam.com/v1", "description": "Production server"}
        ],
        "paths": {
            "/data": {
                "get": {
                    "summary": "Retrieve processed data",
                    "parameters": [
                        {"name": "format", "in": "query", "schema": {"type": "string", "default": "json"}},
                        {"name": "limit", "in": "query", "schema": {"type": "integer", "default": 100}},
                    ],
                    "responses": {
                        "200": {
                            "description": "Successful response",
                            "content": {"application/json": {"schema": {"type": "object"}}},
                        }
                    },
                }
            }
        },
        "components": {
            "securitySchemes": {
                "apiKey": {"type": "apiKey", "in": "header", "name": "X-API-Key"}
            }
        },
        "security": [{"apiKey": []}],
    }


def _base_analysis(file_metadata: Mapping[str, Any]) -> Dict[str, Any]:
    filename = str(file_metadata.get("filename", "unknown"))
    file_type = str(file_metadata.get("file_type", "application/octet-stream"))
    file_size = int(file_metadata.get("file_size", 0) or 0)
    return {
        "path": f"uploaded/{filename}",
        "file_count": 1,
        "file_types": [file_type],
        "total_size": format_file_size(file_size),
        "structure": {
            "root": {
                "files": [{"name": filename, "size": file_size, "type": file_type}]
            }
        },
        "data_patterns": detect_data_patterns(filename, file_type),
        "suggested_api_structure": None,
        "best_model": None,
        "model_reasoning": None,
    }


class HeuristicFileAnalyzer:
    """Offline analyzer built purely from file metadata."""

    def analyze(
        self, file_metadata: Mapping[str, Any], model: Optional[str] = None
    ) -> Dict[str, Any]:
        return _base_analysis(file_metadata)

    def generate_specification(
        self, analysis: Mapping[str, Any], model: Optional[str] = None
    ) -> Dict[str, Any]:
        return default_specification(str(analysis.get("path", "dataset")))


class OpenAIFileAnalyzer:
    """Analyzer that asks a chat-completions model for reasoning."""

    def __init__(
        self,
        api_key: str,
        *,
        url: str = OPENAI_CHAT_URL,
        timeout: float = LLM_TIMEOUT_SECONDS,
        default_model: str = LLM_ANALYSIS_MODEL,
    ) -> None:
        if not api_key:
            raise ValueError("api_key must be provided.")
        self._api_key = api_key
        self._url = url
        self._timeout = timeout
        self._default_model = default_model

    def analyze(
        self, file_metadata: Mapping[str, Any], model: Optional[str] = None
    ) -> Dict[str, Any]:
        model_name = model or self._default_model
        analysis = _base_analysis(file_metadata)
        prompt = (
            f"Analyze this file for API generation: {analysis['structure']['root']['files'][0]['name']} "
            f"({file_metadata.get('file_size', 0)} bytes, type: {analysis['file_types'][0]}). "
            "Provide a detailed analysis including data patterns, suggested API structure, "
            "and recommend the best AI model for processing this data."
        )
        content = self._chat(
            model_name,
            _ANALYSIS_SYSTEM_PROMPT,
            prompt,
            max_tokens=LLM_ANALYSIS_MAX_TOKENS,
            temperature=LLM_ANALYSIS_TEMPERATURE,
        )
        analysis["suggested_api_structure"] = default_api_structure()
        analysis["best_model"] = {
            "id": model_name,
            "name": model_name,
            "description": f"AI-selected optimal model for {analysis['file_types'][0]}",
            "max_tokens": 200000,
            "cost_per_1k_tokens": 0.01,
            "capabilities": ["ai-optimized", "auto-selected"],
        }
        analysis["model_reasoning"] = content
        return analysis

    def generate_specification(
        self, analysis: Mapping[str, Any], model: Optional[str] = None
    ) -> Dict[str, Any]:
        path = str(analysis.get("path", "dataset"))
        prompt = (
            "Create a complete API specification based on this analysis:\n\n"
            f"Path: {path}\n"
            f"File Types: {analysis.get('file_types', [])}\n"
            f"Data Patterns: {analysis.get('data_patterns', [])}\n"
            f"Suggested Structure: {json.dumps(analysis.get('suggested_api_structure'), indent=2)}\n\n"
            "Generate a complete API specification including an OpenAPI 3.0 spec, "
            "authentication methods, rate limiting, pricing tiers (Free, Premium, "
            "Enterprise), error handling, documentation and SDK examples.\n\n"
            "Return as JSON."
        )
        content = self._chat(
            model or self._default_model,
            _SPEC_SYSTEM_PROMPT,
            prompt,
            max_tokens=LLM_SPEC_MAX_TOKENS,
            temperature=LLM_SPEC_TEMPERATURE,
        )
        try:
            spec = json.loads(content)
        except ValueError:
            logger.info("Model reply was not JSON; using default specification")
            return default_specification(path)
        if not isinstance(spec, dict):
            return default_specification(path)
        return spec

    def _chat(
        self,
        model: str,
        system_prompt: str,
        prompt: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.post(
                self._url, headers=headers, json=payload, timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise AnalysisError(f"OpenAI API error: {exc}") from exc
        except ValueError as exc:
            raise AnalysisError("Invalid response from OpenAI") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AnalysisError("Invalid response from OpenAI") from exc
        if not isinstance(content, str):
            raise AnalysisError("Invalid response from OpenAI")
        return content


def build_file_analyzer_from_env() -> FileAnalyzer:
    """OpenAI analyzer when OPENAI_API_KEY is configured, else heuristics."""
    api_key = openai_api_key()
    if api_key:
        return OpenAIFileAnalyzer(api_key)
    logger.debug("OPENAI_API_KEY not set; using heuristic file analyzer")
    return HeuristicFileAnalyzer()
