"""
HTTP transport for request_agent using httpx.
"""
import logging
from typing import Optional, Protocol, Union

import httpx

from .config import TimeoutConfig, normalize_timeout
from .exceptions import TransportError
from .types import AgentRequest

logger = logging.getLogger("request_agent.transport")


class Transport(Protocol):
    """Executes one request; raises TransportError when no response is obtained.

    HTTP error statuses are returned as responses.
    """

    def send(self, request: AgentRequest) -> httpx.Response:
        ...


class HttpxTransport:
    """Transport backed by httpx.Client.

    An injected client is owned by the caller and never closed here. Without
    one, a short-lived client is opened for each send.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: Union[TimeoutConfig, float, None] = None,
    ):
        self._client = client
        self._timeout = normalize_timeout(timeout)

    def _httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._timeout.connect,
            read=self._timeout.read,
            write=self._timeout.write,
            pool=self._timeout.connect,
        )

    def send(self, request: AgentRequest) -> httpx.Response:
        logger.debug(f"HttpxTransport.send: method={request.method}, url={request.url}")
        try:
            if self._client is not None:
                return self._send_with(self._client, request)
            with httpx.Client(timeout=self._httpx_timeout()) as client:
                return self._send_with(client, request)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.debug(f"HttpxTransport.send: transport failure {type(e).__name__}: {e}")
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

    def _send_with(self, client: httpx.Client, request: AgentRequest) -> httpx.Response:
        return client.request(
            method=request.method,
            url=request.url,
            headers=request.headers,
            content=request.content,
        )
