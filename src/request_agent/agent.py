"""
Fluent HTTP request builder with asynchronous dispatch.
"""
import asyncio
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from .config import AgentConfig, resolve_config, validate_base_url
from .console import print_request, print_response
from .exceptions import (
    AgentError,
    DeserializationError,
    SerializationError,
    TransportError,
)
from .request_builder import (
    build_headers,
    build_response_metadata,
    build_url,
    decode_json_body,
    encode_json_body,
    is_json_mime_type,
    mask_headers,
    normalize_method,
)
from .transport import HttpxTransport, Transport
from .types import (
    JSON_MIME_TYPE,
    AgentRequest,
    Completion,
    DispatchResult,
)

logger = logging.getLogger("request_agent.agent")


class Agent:
    """
    Mutable HTTP request builder.

    Two construction forms:

        Agent("GET", "https://api.example.com/users", {"Accept": "application/json"})
        Agent(base_url="https://api.example.com/", headers={"X-Token": "..."})

    The second form holds no request until request() (or get/post/put/delete)
    is called with a path relative to the base URL. Mutators return the same
    instance. end() and raw() dispatch on a single-worker executor owned by
    this agent and return a Future of the DispatchResult.

    Example:
        agent = Agent("POST", "https://api.example.com/users")
        agent.set("X-Trace", "1").send({"name": "ada"}).end(
            lambda response, data, error: print(response.status, data)
        )
    """

    def __init__(
        self,
        method: Optional[str] = None,
        url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        *,
        base_url: Optional[str] = None,
        config: Optional[AgentConfig] = None,
    ):
        self._config = resolve_config(config)
        if base_url is not None:
            validate_base_url(base_url)
            self._base_url: Optional[str] = base_url
        else:
            self._base_url = self._config.base_url
        # Explicit headers replace the configured defaults entirely
        self._default_headers = dict(headers) if headers is not None else self._config.headers
        self._transport: Transport = self._config.transport or HttpxTransport()

        self._request: Optional[AgentRequest] = None
        self._pending_error: Optional[AgentError] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._closed = False
        self.last_dispatch: Optional["Future[DispatchResult]"] = None

        if method is not None or url is not None:
            if method is None or url is None:
                raise ValueError("method and url must be given together")
            self.request(method, url)

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    @property
    def prepared_request(self) -> Optional[AgentRequest]:
        """The request as it would be dispatched right now."""
        return self._request

    def _require_request(self) -> AgentRequest:
        if self._request is None:
            raise RuntimeError("No request defined; call request() first")
        return self._request

    # Re-targeting

    def request(self, method: str, path: str) -> "Agent":
        """(Re)build the request for method against path, re-applying default headers."""
        http_method = normalize_method(method)
        url = build_url(self._base_url, path)
        self._request = AgentRequest(
            method=http_method,
            url=url,
            headers=build_headers(self._default_headers),
        )
        self._pending_error = None
        logger.debug(f"Agent.request: method={http_method}, path={path}, url={url}")
        return self

    def get(self, path: str) -> "Agent":
        return self.request("GET", path)

    def post(self, path: str) -> "Agent":
        return self.request("POST", path)

    def put(self, path: str) -> "Agent":
        return self.request("PUT", path)

    def delete(self, path: str) -> "Agent":
        return self.request("DELETE", path)

    # Mutators

    def set(self, name: str, value: str) -> "Agent":
        """Set one header, overwriting any value under the same name."""
        self._require_request().headers[name] = value
        return self

    set_header = set

    def set_body(self, content: bytes, mime_type: str) -> "Agent":
        """Attach content as the body and declare its Content-Type."""
        request = self._require_request()
        request.headers["Content-Type"] = mime_type
        request.content = content
        self._pending_error = None
        return self

    def send(self, value: Any) -> "Agent":
        """
        Encode value as JSON and attach it as the body.

        An encoding failure does not raise here; it is delivered through the
        error slot of the next end()/raw() call.
        """
        self._require_request()
        try:
            content = encode_json_body(value, self._config.serializer)
        except SerializationError as error:
            logger.debug(f"Agent.send: deferring serialization error: {error}")
            self._pending_error = error
            return self
        return self.set_body(content, JSON_MIME_TYPE)

    # Dispatch

    def end(self, callback: Optional[Completion] = None) -> "Future[DispatchResult]":
        """
        Dispatch and deliver (response, decoded JSON or None, error).

        The body is decoded only when the response declares application/json
        and is non-empty. Other responses deliver no data; use raw() for bytes.
        """
        return self._dispatch(callback, decode_json=True)

    def raw(self, callback: Optional[Completion] = None) -> "Future[DispatchResult]":
        """Dispatch and deliver (response, body bytes, error) without decoding."""
        return self._dispatch(callback, decode_json=False)

    async def end_async(self, callback: Optional[Completion] = None) -> DispatchResult:
        return await asyncio.wrap_future(self.end(callback))

    async def raw_async(self, callback: Optional[Completion] = None) -> DispatchResult:
        return await asyncio.wrap_future(self.raw(callback))

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix=f"request-agent-{id(self):x}",
            )
        return self._executor

    def _dispatch(
        self,
        callback: Optional[Completion],
        decode_json: bool,
    ) -> "Future[DispatchResult]":
        if self._closed:
            raise RuntimeError("Agent has been closed")

        request = self._require_request().snapshot()
        released = threading.Event()
        logger.debug(
            f"Agent._dispatch: method={request.method}, url={request.url}, "
            f"decode_json={decode_json}, pending_error={self._pending_error is not None}"
        )

        future = self._get_executor().submit(
            self._run, request, self._pending_error, decode_json, callback, released
        )
        self.last_dispatch = future
        # Callback may only fire once this call has handed the future back
        released.set()
        return future

    def _run(
        self,
        request: AgentRequest,
        pending_error: Optional[AgentError],
        decode_json: bool,
        callback: Optional[Completion],
        released: threading.Event,
    ) -> DispatchResult:
        try:
            result = self._perform(request, pending_error, decode_json)
        except Exception as e:
            logger.exception(f"Agent._run: dispatch failed for {request.method} {request.url}")
            error = AgentError(f"{request.method} {request.url} failed: {type(e).__name__}: {e}")
            error.__cause__ = e
            result = DispatchResult(None, None, error)

        if self._config.verbose:
            self._trace(print_response, *result)

        released.wait()
        if callback is not None:
            try:
                callback(*result)
            except Exception:
                logger.exception(f"Completion callback raised for {request.method} {request.url}")
                raise
        return result

    def _trace(self, printer: Callable[..., None], *args: Any) -> None:
        """Console tracing never prevents delivery."""
        try:
            printer(*args)
        except Exception:
            logger.exception("Agent._trace: console tracing failed")

    def _perform(
        self,
        request: AgentRequest,
        pending_error: Optional[AgentError],
        decode_json: bool,
    ) -> DispatchResult:
        if pending_error is not None:
            return DispatchResult(None, None, pending_error)

        if self._config.verbose:
            self._trace(
                print_request, request.method, request.url, mask_headers(request.headers), request.content
            )

        try:
            response = self._transport.send(request)
        except TransportError as error:
            return DispatchResult(None, error.body, error)

        metadata = build_response_metadata(response)
        content = response.content
        logger.debug(
            f"Agent._perform: status={metadata.status}, mime_type={metadata.mime_type}, "
            f"bytes={len(content)}"
        )

        if not decode_json:
            return DispatchResult(metadata, content, None)

        if is_json_mime_type(metadata.mime_type) and content:
            try:
                data = decode_json_body(content, self._config.serializer)
            except DeserializationError as error:
                return DispatchResult(metadata, None, error)
            return DispatchResult(metadata, data, None)

        return DispatchResult(metadata, None, None)

    # Lifecycle

    def close(self) -> None:
        """Shut down the work queue, waiting for any outstanding dispatch."""
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "Agent":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._request is None:
            return f"Agent(base_url={self._base_url!r})"
        return f"Agent(method={self._request.method!r}, url={self._request.url!r})"
