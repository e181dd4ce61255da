"""
Minam Repository
Introductory remarks: This module is part of the Minam codebase.

Central configuration constants for the Minam registry.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from minam.utils.env import load_dotenv

# Pipeline and publishing ---------------------------------------------------

PROPOSAL_SAMPLE_SIZE = 3
"""Number of mapped rows kept on a proposal for preview."""

DATASET_PREVIEW_SIZE = 5
"""Number of raw rows returned by the dataset preview endpoint."""

DEFAULT_MIN_COVERAGE = 0.8
"""Threshold applied when a pipeline request omits ``min_coverage``."""

PRODUCT_VERSION = "v1"
PRODUCT_STATUS_LIVE = "live"

# LLM configuration ---------------------------------------------------------

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"

LLM_ANALYSIS_MODEL = "gpt-4o"
"""Model identifier used when a request does not name one."""

LLM_ANALYSIS_TEMPERATURE = 0.3
LLM_SPEC_TEMPERATURE = 0.2
LLM_ANALYSIS_MAX_TOKENS = 4000
LLM_SPEC_MAX_TOKENS = 6000
LLM_TIMEOUT_SECONDS = 60.0

# Server --------------------------------------------------------------------

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8787

MAX_UPLOAD_BYTES = 2 * 1024 * 1024
"""Request body cap applied to the Flask app; larger uploads get HTTP 413."""


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


def server_settings() -> ServerSettings:
    """Read MINAM_HOST / MINAM_PORT, falling back to defaults."""
    load_dotenv()
    host = os.environ.get("MINAM_HOST", "").strip() or DEFAULT_HOST
    port_raw = os.environ.get("MINAM_PORT", "").strip()
    if not port_raw:
        return ServerSettings(host=host, port=DEFAULT_PORT)
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise ValueError(f"MINAM_PORT '{port_raw}' is not an integer.") from exc
    return ServerSettings(host=host, port=port)
