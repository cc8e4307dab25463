"""Web service endpoint settings resolved from the environment.

A service needs to know whether to serve HTTPS, which host and port to bind,
and the public URL clients should use. Each setting accepts the aliases that
different hosting setups export (``PORT`` on most PaaS, ``SERVER_PORT``
elsewhere).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from procenv.resolver import ConfigResolver, format_number

ENABLE_HTTPS_KEYS = ("HAMMERPACK_ENABLE_HTTPS", "ENABLEHTTPS", "ENABLE_HTTPS")
PORT_KEYS = ("PORT", "SERVER_PORT")
HOST_KEYS = ("HOST", "SERVER_HOST")
PUBLIC_URL_KEYS = ("PUBLICURL", "PUBLIC_URL")
ENVIRONMENT_KEYS = ("NODE_ENV", "ENVIRONMENT")

DEFAULT_PORT = 8080
_DEFAULT_SCHEME_PORTS = {80, 443}


class ServerEndpoint(BaseModel):
    """Where a web service listens and how it is reached."""

    enable_https: bool = Field(default=False)
    host: str | None = Field(default=None)
    port: int | float = Field(
        default=DEFAULT_PORT,
        description="nan when PORT/SERVER_PORT is set but not an integer.",
    )
    public_url: str = Field(..., description="Always ends with exactly one '/'.")


def default_public_url(enable_https: bool, host: str | None, port: int | float) -> str:
    """Build ``scheme://host[:port]``; the port is omitted for 80 and 443."""
    scheme = "https://" if enable_https else "http://"
    url = scheme + (host or "localhost")
    if port not in _DEFAULT_SCHEME_PORTS:
        url += ":" + format_number(port)
    return url


def resolve_server_endpoint(resolver: ConfigResolver) -> ServerEndpoint:
    """Resolve endpoint settings through ``resolver``."""

    enable_https = resolver.resolve_as_boolean(False, *ENABLE_HTTPS_KEYS)
    port = resolver.resolve_as_number(DEFAULT_PORT, *PORT_KEYS)
    host = resolver.resolve_as_string(None, *HOST_KEYS)

    fallback_url = default_public_url(enable_https, host, port)
    public_url = resolver.resolve_as_string(fallback_url, *PUBLIC_URL_KEYS)

    return ServerEndpoint(
        enable_https=enable_https,
        host=host,
        port=port,
        public_url=public_url.rstrip("/") + "/",
    )


def is_production(resolver: ConfigResolver) -> bool:
    return resolver.resolve_as_string(None, *ENVIRONMENT_KEYS) == "production"
