"""HTTP clients for the Minam API."""

from .minam_client import MinamClient, MinamClientError

__all__ = ["MinamClient", "MinamClientError"]
