"""End-to-end tests against a local aiohttp server."""

from __future__ import annotations

import pytest

from rest_resource import CallResult, RestClient, TransportError

pytestmark = pytest.mark.integration


@pytest.fixture
def client(people_server):
    with RestClient("127.0.0.1", "http", {"port": people_server}) as client:
        yield client


class TestDefaultOperations:
    """Test the five default operations over real HTTP."""

    def test_list(self, client):
        """Test list returns the collection."""
        people = client.register("people")
        result = people.list()
        assert [p["name"] for p in result] == ["Ada", "Grace"]

    def test_get(self, client):
        """Test get fetches one person."""
        assert client.register("people").get(2)["name"] == "Grace"

    def test_create_update_delete(self, client):
        """Test a full create, update, delete cycle."""
        people = client.register("people")

        created = people.create({"name": "Katherine"})
        assert created["name"] == "Katherine"

        updated = people.update(created["id"], {"name": "Katherine J."})
        assert updated["name"] == "Katherine J."

        assert people.delete(created["id"]) == ""
        with pytest.raises(TransportError) as exc_info:
            people.get(created["id"])
        assert exc_info.value.status_code == 404

    def test_versioned_path(self, people_server):
        """Test the version option routes to /v2."""
        with RestClient("127.0.0.1", "http", {"port": people_server, "version": 2}) as client:
            result = client.register("people", ["list", "get", "create"]).get(1)
        assert result["version"] == 2


class TestCustomOperations:
    """Test registered custom methods."""

    def test_formatted_address(self, client):
        """Test a custom operation against its own path."""
        client.register("people", ["list", "get", "create"])
        client.register_method(
            "people", {"name": "address", "method": "{id}/formatted_address", "http_method": "GET"}
        )

        assert client.people.address(1) == "12 Analytical Way"


class TestConcurrency:
    """Test callbacks under concurrent in-flight calls."""

    def test_callback_isolation(self, client):
        """Test concurrent callbacks each get their own result."""
        people = client.register("people", ["list", "get", "create"])
        received: dict[int, CallResult] = {}

        f1 = people.get(1, lambda result: received.__setitem__(1, result))
        f2 = people.get(2, lambda result: received.__setitem__(2, result))
        f1.result(timeout=10)
        f2.result(timeout=10)

        assert received[1].value["id"] == 1
        assert received[2].value["id"] == 2

    def test_not_found_delivered_to_callback(self, client):
        """Test a 404 reaches the callback as an error."""
        received: list[CallResult] = []
        client.register("people").get(999, received.append).result(timeout=10)

        assert len(received) == 1
        assert isinstance(received[0].error, TransportError)
        assert received[0].error.status_code == 404

    @pytest.mark.asyncio
    async def test_async_get(self, client):
        """Test awaitable get over real HTTP."""
        person = await client.register("people").get_async(1)
        assert person["name"] == "Ada"


class TestHeaders:
    """Test default and injected headers on the wire."""

    def test_default_headers(self, client):
        """Test default headers reach the server."""
        echo = client.register("echo", ["create"])
        result = echo.create({"a": 1})
        assert result["headers"]["Content-Type"].startswith("application/json")
        assert result["headers"]["User-Agent"].startswith("rest-resource/")

    def test_header_override(self, client):
        """Test overridden headers reach the server."""
        echo = client.register("echo", ["create"])
        client.add_header("Content-Type", "application/xml")
        client.add_header("Authorization", "Bearer secret")

        result = echo.create("<person/>")

        assert result["headers"]["Content-Type"] == "application/xml"
        assert result["headers"]["Authorization"] == "Bearer secret"
        assert result["body"] == "<person/>"

    def test_disabled_default_headers_are_not_sent(self, people_server):
        """Test user_agent and content_type set to False keep those headers off the wire."""
        options = {"port": people_server, "user_agent": False, "content_type": False}
        with RestClient("127.0.0.1", "http", options) as client:
            result = client.register("echo", ["create"]).create({"a": 1})

        assert "User-Agent" not in result["headers"]
        assert "Content-Type" not in result["headers"]
        assert result["body"] == '{"a": 1}'


class TestTransportFailures:
    """Test network failures surface as TransportError."""

    def test_connection_refused(self):
        """Test refused connections raise TransportError."""
        # Port 9 (discard) is not expected to be listening on loopback
        with RestClient("127.0.0.1", "http", {"port": 9}, timeout=5) as client:
            with pytest.raises(TransportError) as exc_info:
                client.register("people").list()
        assert exc_info.value.status_code is None
