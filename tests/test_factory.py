"""
Tests for factory.py
Logic testing: Equivalence, Decision/Branch, Path coverage
"""
import json

import httpx
import pytest

import request_agent
from request_agent.agent import Agent
from request_agent.exceptions import SerializationError
from request_agent.factory import (
    create,
    create_for_base,
    delete,
    from_options,
    get,
    post,
    put,
)

TIMEOUT = 5


class TestCreate:
    """Tests for create and create_for_base."""

    def test_create(self):
        agent = create("GET", "https://api.example.com/users", {"Accept": "application/json"})
        assert isinstance(agent, Agent)
        assert agent.prepared_request.headers["accept"] == "application/json"

    def test_create_for_base(self):
        agent = create_for_base("https://api.example.com/", {"X-Token": "t"})
        agent.request("GET", "users")
        assert agent.prepared_request.url == "https://api.example.com/users"
        assert agent.prepared_request.headers["X-Token"] == "t"

    # Path: package-level exports
    def test_exported(self):
        assert request_agent.get is get
        assert request_agent.create_for_base is create_for_base


class TestVerbFactories:
    """Tests for get/post/put/delete."""

    # Happy Path: bodyless factories build the request only
    @pytest.mark.parametrize(
        "factory,method", [(get, "GET"), (post, "POST"), (put, "PUT"), (delete, "DELETE")]
    )
    def test_bodyless(self, factory, method, json_config, sent_requests):
        agent = factory("https://api.example.com/items", headers={"X-A": "1"}, config=json_config)
        assert agent.prepared_request.method == method
        assert agent.prepared_request.headers["X-A"] == "1"
        assert agent.last_dispatch is None
        assert sent_requests == []

    # Equivalence: factory with on_complete == bodyless factory + end
    @pytest.mark.parametrize("factory", [get, post, put, delete])
    def test_on_complete_equivalent_to_end(self, factory, json_config, sent_requests):
        bundled_calls, chained_calls = [], []

        bundled = factory(
            "https://api.example.com/items",
            on_complete=lambda *args: bundled_calls.append(args),
            config=json_config,
        )
        bundled.last_dispatch.result(timeout=TIMEOUT)

        chained = factory("https://api.example.com/items", config=json_config)
        chained.end(lambda *args: chained_calls.append(args)).result(timeout=TIMEOUT)

        assert len(bundled_calls) == len(chained_calls) == 1
        assert bundled_calls[0][1] == chained_calls[0][1] == {"a": 1}
        assert bundled_calls[0][2] is chained_calls[0][2] is None
        assert sent_requests[0].method == sent_requests[1].method
        assert str(sent_requests[0].url) == str(sent_requests[1].url)

    # Equivalence: factory with body == bodyless factory + send
    @pytest.mark.parametrize("factory", [post, put])
    def test_body_equivalent_to_send(self, factory, json_config):
        value = {"name": "ada", "tags": ["x"]}
        bundled = factory("https://api.example.com/items", body=value, config=json_config)
        chained = factory("https://api.example.com/items", config=json_config).send(value)

        assert bundled.prepared_request.content == chained.prepared_request.content
        assert bundled.prepared_request.headers["Content-Type"] == "application/json"

    # Path: body + headers + on_complete
    def test_post_full(self, json_config, sent_requests, recorder):
        agent = post(
            "https://api.example.com/items",
            headers={"X-Token": "t"},
            body={"n": 1},
            on_complete=recorder,
            config=json_config,
        )
        agent.last_dispatch.result(timeout=TIMEOUT)

        sent = sent_requests[0]
        assert sent.headers["X-Token"] == "t"
        assert sent.headers["Content-Type"] == "application/json"
        assert json.loads(sent.content) == {"n": 1}
        assert len(recorder.calls) == 1

    # Boundary: None is a real JSON body
    def test_put_none_body(self, json_config):
        agent = put("https://api.example.com/items", body=None, config=json_config)
        assert agent.prepared_request.content == b"null"

    # Error Path: unencodable body surfaces through the callback
    def test_post_unencodable_body(self, json_config, sent_requests, recorder):
        agent = post(
            "https://api.example.com/items",
            body={"bad": {1, 2}},
            on_complete=recorder,
            config=json_config,
        )
        agent.last_dispatch.result(timeout=TIMEOUT)

        assert isinstance(recorder.last[2], SerializationError)
        assert sent_requests == []

    # Error Path: GET takes no body
    def test_get_rejects_body(self):
        with pytest.raises(TypeError):
            get("https://api.example.com", body={"a": 1})


class TestFromOptions:
    """Tests for from_options."""

    def test_from_options_empty(self):
        agent = from_options("DELETE", "https://api.example.com/items/1")
        assert agent.prepared_request.method == "DELETE"
        assert agent.prepared_request.content is None

    def test_from_options_all(self, json_config, recorder):
        agent = from_options(
            "POST",
            "https://api.example.com/items",
            {"headers": {"X-A": "1"}, "body": [1, 2], "on_complete": recorder},
            config=json_config,
        )
        agent.last_dispatch.result(timeout=TIMEOUT)

        assert agent.prepared_request.content == b"[1,2]"
        assert recorder.last[1] == {"a": 1}
