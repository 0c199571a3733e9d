"""Shared fixtures for integration tests.

``people_server`` runs a small aiohttp application on a loopback port in its
own thread so tests drive the real client stack end to end without network
access.
"""

from __future__ import annotations

import asyncio
import threading

import pytest
from aiohttp import web


def build_people_app() -> web.Application:
    people: dict[int, dict] = {
        1: {"id": 1, "name": "Ada", "address": "12 Analytical Way"},
        2: {"id": 2, "name": "Grace", "address": "1 Compiler Court"},
    }

    def find(request: web.Request) -> dict:
        person = people.get(int(request.match_info["id"]))
        if person is None:
            raise web.HTTPNotFound(
                text='{"error": "not found"}', content_type="application/json"
            )
        return person

    async def list_people(request: web.Request) -> web.Response:
        return web.json_response(list(people.values()))

    async def get_person(request: web.Request) -> web.Response:
        person = find(request)
        # Person 1 answers last so concurrent calls complete out of order
        await asyncio.sleep(0.1 if person["id"] == 1 else 0)
        return web.json_response(person)

    async def create_person(request: web.Request) -> web.Response:
        body = await request.json()
        new_id = max(people) + 1
        people[new_id] = {"id": new_id, **body}
        return web.json_response(people[new_id], status=201)

    async def update_person(request: web.Request) -> web.Response:
        person = find(request)
        person.update(await request.json())
        return web.json_response(person)

    async def delete_person(request: web.Request) -> web.Response:
        person = find(request)
        del people[person["id"]]
        return web.Response(status=204)

    async def formatted_address(request: web.Request) -> web.Response:
        return web.Response(text=find(request)["address"], content_type="text/plain")

    async def versioned_person(request: web.Request) -> web.Response:
        return web.json_response({"version": 2, **find(request)})

    async def echo_headers(request: web.Request) -> web.Response:
        return web.json_response(
            {"headers": dict(request.headers), "body": await request.text()}
        )

    app = web.Application()
    app.add_routes(
        [
            web.get("/people", list_people),
            web.post("/people", create_person),
            web.get("/people/{id}", get_person),
            web.patch("/people/{id}", update_person),
            web.delete("/people/{id}", delete_person),
            web.get("/people/{id}/formatted_address", formatted_address),
            web.get("/v2/people/{id}", versioned_person),
            web.post("/echo", echo_headers),
        ]
    )
    return app


@pytest.fixture
def people_server():
    """Start the people app on 127.0.0.1 and yield its port."""
    loop = asyncio.new_event_loop()
    runner = web.AppRunner(build_people_app())
    started = threading.Event()
    state: dict[str, int] = {}

    def run() -> None:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", 0)
        loop.run_until_complete(site.start())
        state["port"] = runner.addresses[0][1]
        started.set()
        loop.run_forever()

    thread = threading.Thread(target=run, name="people-server", daemon=True)
    thread.start()
    assert started.wait(10), "test server did not start"

    yield state["port"]

    asyncio.run_coroutine_threadsafe(runner.cleanup(), loop).result(10)
    loop.call_soon_threadsafe(loop.stop)
    thread.join(10)
    loop.close()
