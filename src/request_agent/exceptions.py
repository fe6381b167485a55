"""
Error types delivered through the completion error slot.
"""
from typing import Optional


class AgentError(Exception):
    """Base class for per-request failures."""

    code = "AGENT_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(AgentError):
    """Connection-level failure before a response was obtained."""

    code = "TRANSPORT_ERROR"

    def __init__(self, message: str, body: Optional[bytes] = None) -> None:
        super().__init__(message)
        self.body = body


class SerializationError(AgentError):
    """Value handed to send() could not be encoded as JSON."""

    code = "SERIALIZATION_ERROR"


class DeserializationError(AgentError):
    """Body declared as JSON could not be decoded."""

    code = "DESERIALIZATION_ERROR"
