from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final
from urllib.parse import urlsplit

from .endpoints import EndpointVariant, get_variant
from .errors import InvalidAddress

if TYPE_CHECKING:
    from .config import Settings

DEFAULT_PORT: Final[int] = 80


class _EndpointCache:
    """Single slot, last write wins. Racing writers all store the same discovered variant."""

    __slots__ = ("variant",)

    def __init__(self) -> None:
        self.variant: EndpointVariant | None = None


@dataclass(frozen=True)
class DeviceHandle:
    """Address of one Awair device on the local network.

    ``endpoint`` pins a firmware variant; leave it ``None`` to auto-detect on
    the first fetch. The detected variant is remembered on the handle.
    """

    host: str
    port: int = DEFAULT_PORT
    endpoint: EndpointVariant | None = None
    _cache: _EndpointCache = field(default_factory=_EndpointCache, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        host = (self.host or "").strip()
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        if not host:
            raise InvalidAddress("Device host must not be empty")
        if "/" in host or any(c.isspace() for c in host):
            raise InvalidAddress(f"Device host must be a hostname or IP address, got {self.host!r}")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise InvalidAddress(f"Device port must be in 1..65535, got {self.port!r}")
        if self.endpoint is not None and not isinstance(self.endpoint, EndpointVariant):
            raise TypeError(f"endpoint must be an EndpointVariant or None, got {type(self.endpoint).__name__}")
        object.__setattr__(self, "host", host)

    @classmethod
    def from_url(cls, url: str, endpoint: EndpointVariant | None = None) -> DeviceHandle:
        """Build a handle from a base URL such as ``http://192.168.1.10``."""
        try:
            parts = urlsplit(url.strip())
            port = parts.port
        except ValueError as exc:
            raise InvalidAddress(f"Invalid device URL {url!r}: {exc}") from exc
        if parts.scheme != "http":
            raise InvalidAddress(f"Device URL must use plain http, got {url!r}")
        if not parts.hostname:
            raise InvalidAddress(f"Device URL has no host: {url!r}")
        if parts.path not in ("", "/") or parts.query or parts.fragment or parts.username:
            raise InvalidAddress(f"Device URL cannot be used as an API base: {url!r}")
        return cls(host=parts.hostname, port=DEFAULT_PORT if port is None else port, endpoint=endpoint)

    @classmethod
    def from_settings(cls, settings: Settings) -> DeviceHandle:
        return cls(host=settings.host, port=settings.port, endpoint=get_variant(settings.endpoint))

    @property
    def base_url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port == DEFAULT_PORT:
            return f"http://{host}"
        return f"http://{host}:{self.port}"

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def discovered_endpoint(self) -> EndpointVariant | None:
        return self._cache.variant

    def remember_endpoint(self, variant: EndpointVariant) -> None:
        self._cache.variant = variant

    def forget_endpoint(self) -> None:
        self._cache.variant = None
