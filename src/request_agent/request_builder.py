"""
Request builder utilities for request_agent.
"""
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import httpx

from .exceptions import DeserializationError, SerializationError
from .types import (
    JSON_MIME_TYPE,
    SUPPORTED_METHODS,
    AgentResponse,
    HttpMethod,
    Serializer,
)

logger = logging.getLogger("request_agent.request_builder")

MASKED_HEADERS = frozenset({"authorization", "x-api-key", "cookie"})


def is_absolute_url(url: str) -> bool:
    """True for http(s) URLs that carry a host."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def build_url(base_url: Optional[str], path: str) -> str:
    """Resolve path against base_url by appending it to the base path."""
    if is_absolute_url(path):
        return path

    if base_url is None:
        raise ValueError(f"Relative path requires a base_url: {path!r}")

    if not path:
        return base_url

    # Exactly one slash between base path and appended path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def normalize_method(method: str) -> HttpMethod:
    """Upper-case and validate an HTTP method."""
    normalized = method.upper()
    if normalized not in SUPPORTED_METHODS:
        raise ValueError(
            f"Unsupported method: {method}. Must be one of: {sorted(SUPPORTED_METHODS)}"
        )
    return normalized  # type: ignore[return-value]


def build_headers(defaults: Optional[Dict[str, str]] = None) -> httpx.Headers:
    """Fresh case-insensitive header mapping from stored defaults."""
    return httpx.Headers(defaults or {})


def mask_headers(headers: httpx.Headers) -> Dict[str, str]:
    """Mask credential headers for safe logging."""
    masked = {}
    for key, value in headers.items():
        if key.lower() in MASKED_HEADERS:
            masked[key] = value[:4] + "***" if len(value) > 4 else "***"
        else:
            masked[key] = value
    return masked


def encode_json_body(value: Any, serializer: Serializer) -> bytes:
    """Encode value as UTF-8 JSON bytes."""
    try:
        return serializer.serialize(value).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Value is not JSON encodable: {e}") from e


def decode_json_body(content: bytes, serializer: Serializer) -> Any:
    """Decode UTF-8 JSON bytes."""
    try:
        return serializer.deserialize(content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DeserializationError(f"Response body is not valid JSON: {e}") from e


def parse_mime_type(content_type: Optional[str]) -> Optional[str]:
    """Strip parameters from a Content-Type header value."""
    if not content_type:
        return None
    mime_type = content_type.split(";", 1)[0].strip().lower()
    return mime_type or None


def is_json_mime_type(mime_type: Optional[str]) -> bool:
    return mime_type == JSON_MIME_TYPE


def build_response_metadata(response: httpx.Response) -> AgentResponse:
    """Build response metadata from an httpx response."""
    return AgentResponse(
        status=response.status_code,
        status_text=response.reason_phrase or "",
        headers=dict(response.headers),
        url=str(response.url),
        mime_type=parse_mime_type(response.headers.get("content-type")),
        ok=200 <= response.status_code < 300,
    )
