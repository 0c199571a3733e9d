"""REST transport turning bound requests into HTTP calls."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from multidict import CIMultiDict
from pydantic import BaseModel

from ...core.config import ClientConfig
from ...core.request import BoundRequest
from .http_client import HTTPClient

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Headers aiohttp adds on its own when a request does not set them
AUTO_HEADERS = ("User-Agent", "Content-Type")


def encode_body(payload: Any, content_type: str | None) -> tuple[Any, Any]:
    """Split a payload into aiohttp's ``(json, data)`` arguments.

    JSON content types go through ``json=``. Form content types send
    mappings as form fields. str and bytes are always sent verbatim.
    Anything else, including payloads with no content type at all, is sent
    as JSON text through ``data=`` so aiohttp does not set a type itself.
    """
    if payload is None:
        return None, None
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    if isinstance(payload, (str, bytes, bytearray)):
        return None, payload

    ct = (content_type or "").lower()
    if "json" in ct:
        return payload, None
    if FORM_CONTENT_TYPE in ct and isinstance(payload, Mapping):
        return None, dict(payload)
    return None, json.dumps(payload)


class RESTTransport:
    """Builds URL, headers and body for a BoundRequest and executes it."""

    def __init__(self, config: ClientConfig, *, http: HTTPClient | None = None) -> None:
        self._config = config
        self._http = http or HTTPClient(timeout=config.timeout, ssl=config.ssl_option())

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build_url(self, bound: BoundRequest, resource_name: str) -> str:
        return self._config.build_url(resource_name, bound.resolved_path())

    async def send(
        self,
        bound: BoundRequest,
        resource_name: str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Execute ``bound`` against ``resource_name`` and return the decoded body."""
        url = self.build_url(bound, resource_name)
        request_headers = (
            CIMultiDict(headers) if headers is not None else self._config.default_headers()
        )
        json_body, data = encode_body(bound.payload, request_headers.get("Content-Type"))
        skip = [name for name in AUTO_HEADERS if name not in request_headers]

        logger.debug(
            "Sending request",
            extra={
                "operation": bound.name,
                "method": bound.http_method.value,
                "url": url,
                "has_payload": bound.has_payload,
            },
        )
        response = await self._http.request(
            bound.http_method.value,
            url,
            headers=request_headers,
            json_body=json_body,
            data=data,
            skip_auto_headers=skip,
        )
        return response.decode()

    async def close(self) -> None:
        await self._http.close()
