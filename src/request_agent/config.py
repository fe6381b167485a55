"""
Configuration for request_agent.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from .types import Serializer

logger = logging.getLogger("request_agent.config")

VERBOSE_ENV_VAR = "REQUEST_AGENT_VERBOSE"


def _is_verbose_enabled_by_env() -> bool:
    """
    Check if console tracing is enabled via environment variables.

    Returns True if REQUEST_AGENT_VERBOSE is one of 1, true, yes.
    """
    return os.environ.get(VERBOSE_ENV_VAR, "").strip().lower() in ("1", "true", "yes")


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds, applied by the transport."""

    connect: float = 5.0
    read: float = 30.0
    write: float = 10.0


def _check_string_keys(data: Any) -> None:
    """Raise TypeError for mapping keys json would coerce to strings."""
    if isinstance(data, dict):
        for key, value in data.items():
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, not {type(key).__name__}")
            _check_string_keys(value)
    elif isinstance(data, (list, tuple)):
        for item in data:
            _check_string_keys(item)


class DefaultSerializer:
    """Default JSON serializer.

    Strict: NaN/Infinity and non-string object keys are rejected rather than
    written as invalid or lossy JSON.
    """

    def serialize(self, data: Any) -> str:
        """Serialize data to JSON string."""
        # dumps first so circular references fail before the key walk
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        _check_string_keys(data)
        return text

    def deserialize(self, text: str) -> Any:
        """Deserialize JSON string to data."""
        return json.loads(text)


default_serializer = DefaultSerializer()

# Default values
DEFAULT_TIMEOUT = TimeoutConfig()


@dataclass
class AgentConfig:
    """Agent configuration."""

    base_url: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    serializer: Serializer = field(default_factory=lambda: default_serializer)
    transport: Optional[Any] = None
    verbose: bool = field(default_factory=_is_verbose_enabled_by_env)


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return DEFAULT_TIMEOUT
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def validate_base_url(base_url: str) -> None:
    """Validate a base URL: scheme and host are required."""
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid base_url: {base_url}")


def resolve_config(config: Optional[AgentConfig] = None) -> AgentConfig:
    """Validate a config and return a copy with owned header map."""
    config = config or AgentConfig()
    if config.base_url is not None:
        validate_base_url(config.base_url)

    resolved = AgentConfig(
        base_url=config.base_url,
        headers=dict(config.headers),
        serializer=config.serializer or default_serializer,
        transport=config.transport,
        verbose=config.verbose,
    )
    logger.debug(
        f"resolve_config: base_url={resolved.base_url}, "
        f"header_names={sorted(resolved.headers)}, verbose={resolved.verbose}"
    )
    return resolved
