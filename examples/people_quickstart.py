#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging

from rest_resource import CallResult, RestClient, TransportError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Call a people resource on a REST API")
    p.add_argument("host", nargs="?", default="httpbin.org")
    p.add_argument("person_id", nargs="?", default="42")
    p.add_argument("--scheme", default="https", choices=["http", "https"])
    p.add_argument("--version", default=None, help="API version prefix, e.g. 2 -> /v2/")
    p.add_argument("--token", default=None, help="Bearer token sent as Authorization")
    p.add_argument("--debug", action="store_true")
    return p.parse_args()


def on_done(result: CallResult) -> None:
    if result.ok:
        print(f"[callback] {result.value!r:.200}")
    else:
        print(f"[callback] failed: {result.error}")


def main() -> None:
    args = parse_args()
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    options = {"version": args.version} if args.version else {}
    with RestClient(args.host, args.scheme, options) as client:
        if args.token:
            client.add_header("Authorization", f"Bearer {args.token}")

        people = client.register("anything", ["list", "get", "create"])
        client.register_method(
            "anything",
            {"name": "address", "method": "{id}/formatted_address", "http_method": "GET"},
        )

        print("=" * 65)
        try:
            print(f"get({args.person_id})     : {people.get(args.person_id)!r:.200}")
            print(f"address({args.person_id}) : {people.address(args.person_id)!r:.200}")
        except TransportError as e:
            print(f"Request failed ({e.status_code}): {e}")
        print("=" * 65)

        future = people.list(on_done)
        future.result(timeout=30)


if __name__ == "__main__":
    main()
