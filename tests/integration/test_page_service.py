"""Tests for PageService request handling."""

import asyncio
import json

import pytest

from pagefeed.server.page_service import PageService
from pagefeed.services.memory_source import MemorySource
from fixtures.websocket import FakeWebSocket, create_websocket_message


@pytest.fixture
def service() -> PageService:
    source = MemorySource({"letters": [{"name": letter} for letter in "abcde"]})
    return PageService(source, max_limit=10)


def _serve(service: PageService, *messages: str) -> FakeWebSocket:
    websocket = FakeWebSocket(list(messages))
    asyncio.run(service.websocket_handler(websocket))
    return websocket


class TestGetPage:
    """Test get_page requests."""

    def test_returns_page_with_cursors(self, service: PageService):
        websocket = _serve(
            service,
            create_websocket_message("get_page", path="letters", field="name", direction="asc", limit=2),
        )

        response = websocket.get_sent_json()
        assert response["type"] == "page"
        assert response["path"] == "letters"
        assert [item["data"]["name"] for item in response["items"]] == ["a", "b"]
        assert all(isinstance(item["cursor"], str) for item in response["items"])

    def test_follow_up_request_resumes_after_cursor(self, service: PageService):
        first = _serve(
            service,
            create_websocket_message("get_page", path="letters", field="name", direction="asc", limit=2),
        ).get_sent_json()
        cursor = first["items"][-1]["cursor"]

        second = _serve(
            service,
            create_websocket_message(
                "get_page", path="letters", field="name", direction="asc", limit=2, after=cursor
            ),
        ).get_sent_json()

        assert [item["data"]["name"] for item in second["items"]] == ["c", "d"]

    def test_direction_defaults_to_descending(self, service: PageService):
        websocket = _serve(
            service, create_websocket_message("get_page", path="letters", field="name", limit=1)
        )

        assert websocket.get_sent_json()["items"][0]["data"]["name"] == "e"


class TestRequestErrors:
    """Test error replies."""

    @pytest.mark.parametrize(
        "message",
        [
            "{not json",
            json.dumps(["get_page"]),
            create_websocket_message("delete_everything"),
            create_websocket_message("get_page", field="name", limit=2),
            create_websocket_message("get_page", path="letters", limit=2),
            create_websocket_message("get_page", path="letters", field="name", limit=0),
            create_websocket_message("get_page", path="letters", field="name", limit=11),
            create_websocket_message("get_page", path="letters", field="name", limit=True),
            create_websocket_message("get_page", path="letters", field="name", limit=2, direction="sideways"),
            create_websocket_message("get_page", path="letters", field="name", limit=2, after="garbage"),
        ],
    )
    def test_bad_request_gets_error_reply(self, service: PageService, message):
        websocket = _serve(service, message)

        response = websocket.get_sent_json()
        assert response["type"] == "error"
        assert response["message"]

    def test_connection_survives_bad_message(self, service: PageService):
        websocket = _serve(
            service,
            create_websocket_message("unknown"),
            create_websocket_message("get_page", path="letters", field="name", direction="asc", limit=1),
        )

        responses = websocket.get_all_sent_json()
        assert [response["type"] for response in responses] == ["error", "page"]

    def test_client_is_forgotten_on_disconnect(self, service: PageService):
        _serve(service)

        assert service.clients == set()
