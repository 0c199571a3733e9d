"""Client connection configuration.

Holds everything the transport needs to turn a bound request into a URL and
a header set: scheme, host, port, version prefix, default headers, TLS
trust settings and timeout. Instances are frozen; the only mutable header
state lives on the client and is snapshotted per dispatch.
"""

from __future__ import annotations

import ssl
from collections.abc import Mapping
from typing import Any, Literal

from multidict import CIMultiDict
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_USER_AGENT = "rest-resource/0.1.0"
DEFAULT_TIMEOUT = 30.0

# Keys accepted in the options mapping passed to RestClient
OPTION_KEYS = frozenset(
    {"version", "port", "cert", "content_type", "user_agent", "insecure", "timeout", "headers"}
)


class ClientConfig(BaseModel):
    """Validated connection settings for a RestClient."""

    host: str = Field(..., min_length=1)
    scheme: Literal["http", "https"] = "https"
    port: int | None = Field(default=None, ge=1, le=65535)
    version: str | None = None
    cert: str | None = None
    content_type: str | Literal[False] = DEFAULT_CONTENT_TYPE
    user_agent: str | Literal[False] = DEFAULT_USER_AGENT
    insecure: bool = False
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Reject hosts that carry a scheme or path."""
        if "://" in v or "/" in v:
            raise ValueError("host must be a bare hostname, e.g. 'api.example.com'")
        return v

    @field_validator("scheme", mode="before")
    @classmethod
    def normalize_scheme(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("version", mode="before")
    @classmethod
    def normalize_version(cls, v: Any) -> str | None:
        """Turn ``2`` or ``"2"`` into ``"v2"``; keep other strings verbatim."""
        if v is None or v is False:
            return None
        if isinstance(v, bool):
            raise ValueError("version must be an integer or string")
        if isinstance(v, int):
            return f"v{v}"
        text = str(v).strip().strip("/")
        if not text:
            return None
        return f"v{text}" if text.isdigit() else text

    @classmethod
    def from_options(
        cls,
        host: str,
        scheme: str = "https",
        options: Mapping[str, Any] | None = None,
    ) -> ClientConfig:
        """Build a config from a host, scheme and the recognized option keys.

        Raises:
            ConfigurationError: On unknown option keys or invalid values
        """
        options = dict(options or {})
        unknown = sorted(set(options) - OPTION_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown client option(s): {', '.join(unknown)}")
        try:
            return cls(host=host, scheme=scheme, **options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    @property
    def base_url(self) -> str:
        netloc = self.host if self.port is None else f"{self.host}:{self.port}"
        return f"{self.scheme}://{netloc}"

    def build_url(self, resource: str, path: str = "") -> str:
        """Build ``{scheme}://{host}[:{port}]/[{version}/]{resource}[/{path}]``."""
        segments = [s.strip("/") for s in (self.version, resource, path) if s]
        return "/".join([self.base_url, *[s for s in segments if s]])

    def default_headers(self) -> CIMultiDict[str]:
        """Default headers before any client-level overrides."""
        headers: CIMultiDict[str] = CIMultiDict()
        if self.content_type:
            headers["Content-Type"] = self.content_type
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        for name, value in self.headers.items():
            headers[name] = value
        return headers

    def ssl_option(self) -> bool | ssl.SSLContext:
        """Value for aiohttp's ``ssl=`` argument."""
        if self.insecure:
            return False
        if self.cert:
            try:
                return ssl.create_default_context(cafile=self.cert)
            except OSError as e:
                raise ConfigurationError(f"Cannot load certificate bundle {self.cert!r}: {e}") from e
        return True
