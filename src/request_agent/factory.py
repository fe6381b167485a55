"""
Factory functions for creating agents.

Each verb function is a thin composition of Agent primitives:

    get(url, on_complete=cb)          == Agent("GET", url).end(cb)
    post(url, body=value)             == Agent("POST", url).send(value)
    put(url, body=value, on_complete=cb)
                                      == Agent("PUT", url).send(value).end(cb)

The agent is always returned; when on_complete is given the dispatch future
is available as agent.last_dispatch.
"""
from typing import Any, Dict, Optional

from .agent import Agent
from .config import AgentConfig
from .types import Completion, HttpMethod, RequestOptions

# None is a valid JSON body, so absence needs its own marker
_NO_BODY: Any = object()


def create(
    method: HttpMethod,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """Create an agent for method and url. Headers replace the defaults."""
    return Agent(method, url, headers, config=config)


def create_for_base(
    base_url: str,
    headers: Optional[Dict[str, str]] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """
    Create an agent bound to a base URL and default headers.

    Example:
        api = create_for_base("https://api.example.com/", {"X-Token": token})
        api.get("users").end(on_users)
    """
    return Agent(base_url=base_url, headers=headers, config=config)


def from_options(
    method: HttpMethod,
    url: str,
    options: Optional[RequestOptions] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """Create an agent from {headers, body, on_complete} options."""
    options = options or {}
    agent = create(method, url, options.get("headers"), config)
    if "body" in options:
        agent.send(options["body"])
    on_complete = options.get("on_complete")
    if on_complete is not None:
        agent.end(on_complete)
    return agent


def _compose(
    method: HttpMethod,
    url: str,
    headers: Optional[Dict[str, str]],
    body: Any,
    on_complete: Optional[Completion],
    config: Optional[AgentConfig],
) -> Agent:
    options: RequestOptions = {}
    if headers is not None:
        options["headers"] = headers
    if body is not _NO_BODY:
        options["body"] = body
    if on_complete is not None:
        options["on_complete"] = on_complete
    return from_options(method, url, options, config)


def get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    on_complete: Optional[Completion] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """GET request."""
    return _compose("GET", url, headers, _NO_BODY, on_complete, config)


def post(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    body: Any = _NO_BODY,
    on_complete: Optional[Completion] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """POST request; body, when given, is sent as JSON."""
    return _compose("POST", url, headers, body, on_complete, config)


def put(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    body: Any = _NO_BODY,
    on_complete: Optional[Completion] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """PUT request; body, when given, is sent as JSON."""
    return _compose("PUT", url, headers, body, on_complete, config)


def delete(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    on_complete: Optional[Completion] = None,
    config: Optional[AgentConfig] = None,
) -> Agent:
    """DELETE request."""
    return _compose("DELETE", url, headers, _NO_BODY, on_complete, config)
