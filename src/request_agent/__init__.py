"""
Fluent HTTP request builder for Python.

Builds a request (method, URL, headers, JSON or raw body), dispatches it on a
per-agent work queue, and delivers (response, data, error) to one callback.
"""
from .types import (
    HttpMethod,
    AgentRequest,
    AgentResponse,
    DispatchResult,
    Completion,
    Serializer,
    RequestOptions,
)
from .exceptions import (
    AgentError,
    TransportError,
    SerializationError,
    DeserializationError,
)
from .config import (
    AgentConfig,
    TimeoutConfig,
    DefaultSerializer,
)
from .transport import Transport, HttpxTransport
from .agent import Agent
from .factory import (
    create,
    create_for_base,
    from_options,
    get,
    post,
    put,
    delete,
)

__all__ = [
    # Types
    "HttpMethod",
    "AgentRequest",
    "AgentResponse",
    "DispatchResult",
    "Completion",
    "Serializer",
    "RequestOptions",
    # Errors
    "AgentError",
    "TransportError",
    "SerializationError",
    "DeserializationError",
    # Config
    "AgentConfig",
    "TimeoutConfig",
    "DefaultSerializer",
    # Transport
    "Transport",
    "HttpxTransport",
    # Agent
    "Agent",
    # Factory
    "create",
    "create_for_base",
    "from_options",
    "get",
    "post",
    "put",
    "delete",
]

__version__ = "0.1.0"
