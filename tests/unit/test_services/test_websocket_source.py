"""Tests for WebSocketSource."""

import asyncio
import json

import pytest

from pagefeed.domain.records import SortDirection


class FakeConnection:
    def __init__(self, reply):
        self.reply = reply
        self.sent = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def send(self, message):
        self.sent.append(json.loads(message))

    async def recv(self):
        return self.reply


def _install(monkeypatch, connection=None, error=None):
    calls = []

    def fake_connect(uri, **kwargs):
        calls.append((uri, kwargs))
        if error is not None:
            raise error
        return connection

    monkeypatch.setattr("pagefeed.services.websocket_source.websockets.connect", fake_connect)
    return calls


def test_fetch_page_sends_request_and_parses_reply(monkeypatch):
    from pagefeed.services.websocket_source import WebSocketSource

    reply = json.dumps(
        {"type": "page", "items": [{"data": {"name": "a"}, "cursor": "c1"}, {"data": {"name": "b"}, "cursor": "c2"}]}
    )
    connection = FakeConnection(reply)
    calls = _install(monkeypatch, connection=connection)
    source = WebSocketSource("ws://localhost:9999", max_size=2048, open_timeout=3)

    page = asyncio.run(source.fetch_page("letters", "name", SortDirection.ASC, 2, "c0"))

    assert [record.data["name"] for record in page] == ["a", "b"]
    assert [record.cursor for record in page] == ["c1", "c2"]
    assert calls == [("ws://localhost:9999", {"max_size": 2048, "open_timeout": 3})]
    assert connection.sent == [
        {
            "action": "get_page",
            "path": "letters",
            "field": "name",
            "direction": "asc",
            "limit": 2,
            "after": "c0",
        }
    ]


@pytest.mark.parametrize("error", [OSError("connection refused"), asyncio.TimeoutError()])
def test_connection_failures_become_fetch_errors(monkeypatch, error):
    from pagefeed.core.errors import SourceFetchError
    from pagefeed.services.websocket_source import WebSocketSource

    _install(monkeypatch, error=error)
    source = WebSocketSource("ws://localhost:9999", max_size=2048)

    with pytest.raises(SourceFetchError) as exc_info:
        asyncio.run(source.fetch_page("letters", "name", SortDirection.DESC, 2))

    assert exc_info.value.path == "letters"
    assert exc_info.value.__cause__ is error


def test_server_error_reply_becomes_fetch_error():
    from pagefeed.core.errors import SourceFetchError
    from pagefeed.services.websocket_source import WebSocketSource

    with pytest.raises(SourceFetchError, match="no such table"):
        WebSocketSource.parse_response(json.dumps({"type": "error", "message": "no such table"}), "cats")


@pytest.mark.parametrize(
    "reply",
    [
        "not json",
        json.dumps([1, 2]),
        json.dumps({"type": "history"}),
        json.dumps({"type": "page", "items": [{"data": 1}]}),
    ],
)
def test_malformed_replies_become_fetch_errors(reply):
    from pagefeed.core.errors import SourceFetchError
    from pagefeed.services.websocket_source import WebSocketSource

    with pytest.raises(SourceFetchError):
        WebSocketSource.parse_response(reply, "cats")


def test_empty_page_reply():
    from pagefeed.services.websocket_source import WebSocketSource

    assert WebSocketSource.parse_response(json.dumps({"type": "page", "items": []}), "cats") == []
