"""
Type definitions for request_agent.
"""
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Literal,
    NamedTuple,
    Optional,
    Protocol,
    TypedDict,
)

import httpx

from .exceptions import AgentError


# HTTP methods
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

JSON_MIME_TYPE = "application/json"


@dataclass
class AgentRequest:
    """In-progress request owned by an Agent."""

    method: HttpMethod
    url: str
    headers: httpx.Headers
    content: Optional[bytes] = None

    def snapshot(self) -> "AgentRequest":
        """Copy handed to the worker at dispatch time."""
        return AgentRequest(
            method=self.method,
            url=self.url,
            headers=httpx.Headers(self.headers),
            content=self.content,
        )


@dataclass
class AgentResponse:
    """Response metadata delivered to completion callbacks."""

    status: int
    status_text: str
    headers: Dict[str, str]
    url: str
    mime_type: Optional[str]
    ok: bool


class DispatchResult(NamedTuple):
    """Outcome of one dispatch; fields line up with the callback arguments."""

    response: Optional[AgentResponse]
    data: Any
    error: Optional[AgentError]


Completion = Callable[[Optional[AgentResponse], Any, Optional[AgentError]], None]


class Serializer(Protocol):
    """Serializer protocol for custom JSON handling."""

    def serialize(self, data: Any) -> str:
        """Serialize data to string."""
        ...

    def deserialize(self, text: str) -> Any:
        """Deserialize string to data."""
        ...


class RequestOptions(TypedDict, total=False):
    """Options accepted by the verb factory functions."""

    headers: Dict[str, str]
    body: Any
    on_complete: Completion
