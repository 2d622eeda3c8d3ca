from __future__ import annotations

import logging
import socket
import time
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

import requests
from urllib3.exceptions import NameResolutionError

from .backoff import BackoffPolicy
from .decode import decode_config, decode_reading
from .device import DeviceHandle
from .endpoints import CONFIG_PATH, ENDPOINT_VARIANTS, EndpointVariant
from .errors import (
    ClientError,
    DecodeError,
    HttpError,
    MalformedPayload,
    ResponseDecodeError,
    TransportError,
)
from .models import DeviceConfig, Reading

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)


def _is_resolution_failure(exc: BaseException) -> bool:
    """Walk the requests -> urllib3 -> socket chain looking for a DNS failure."""
    pending: list[BaseException] = [exc]
    seen: set[int] = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, (NameResolutionError, socket.gaierror)):
            return True
        linked = [current.__cause__, current.__context__, getattr(current, "reason", None), *current.args]
        pending.extend(e for e in linked if isinstance(e, BaseException))
    return False


class DeviceClient:
    """Talks to Awair devices over the Local API.

    The client keeps no per-device state; everything device specific lives on
    the ``DeviceHandle``. Every request opens its own connection, so one client
    can serve many handles from different threads.

    ``sleep`` and ``clock`` are the waiting and monotonic-time functions used by
    ``poll``; swap them to drive the schedule from something other than
    ``time``.
    """

    def __init__(
        self,
        timeout_secs: float = 5.0,
        backoff: BackoffPolicy | None = None,
        user_agent: str = "awair-local/1.0",
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout_secs <= 0:
            raise ValueError(f"timeout_secs must be positive, got {timeout_secs}")
        self.timeout_secs = float(timeout_secs)
        self.backoff = backoff or BackoffPolicy()
        self.user_agent = user_agent
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> DeviceClient:
        return cls(
            timeout_secs=settings.timeout_secs,
            backoff=BackoffPolicy(settings.backoff_base_secs, settings.backoff_max_secs),
            user_agent=settings.user_agent,
        )

    # --- transport ---------------------------------------------------------

    def _get_json(self, url: str) -> Any:
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        logger.debug("GET %s", url)
        try:
            resp = requests.get(url, headers=headers, timeout=self.timeout_secs)
        except requests.Timeout as exc:
            raise TransportError(url, TransportError.TIMEOUT, str(exc)) from exc
        except requests.ConnectionError as exc:
            reason = TransportError.RESOLUTION if _is_resolution_failure(exc) else TransportError.CONNECTION
            raise TransportError(url, reason, str(exc)) from exc
        except requests.RequestException as exc:
            raise TransportError(url, TransportError.REQUEST, str(exc)) from exc

        status = int(resp.status_code)
        if status != 200:
            raise HttpError(url, status)
        try:
            return resp.json()
        except ValueError as exc:
            raise ResponseDecodeError(url, MalformedPayload(f"body is not JSON ({exc})")) from exc

    def _fetch_variant(self, handle: DeviceHandle, variant: EndpointVariant) -> Reading:
        url = handle.url_for(variant.path)
        payload = self._get_json(url)
        try:
            return decode_reading(payload, variant)
        except DecodeError as exc:
            raise ResponseDecodeError(url, exc) from exc

    def _probe(self, handle: DeviceHandle) -> Reading:
        rejected: list[ClientError] = []
        for variant in ENDPOINT_VARIANTS:
            try:
                reading = self._fetch_variant(handle, variant)
            except (HttpError, ResponseDecodeError) as exc:
                if exc.transient:
                    raise
                logger.debug("Endpoint %s not served by %s: %s", variant.name, handle.base_url, exc)
                rejected.append(exc)
                continue
            handle.remember_endpoint(variant)
            logger.info("Detected endpoint %s (%s) on %s", variant.name, variant.path, handle.base_url)
            return reading
        logger.warning("No known endpoint variant matched %s", handle.base_url)
        raise rejected[0]

    # --- public API --------------------------------------------------------

    def fetch_latest(self, handle: DeviceHandle) -> Reading:
        """Fetch the device's current reading. Never retries.

        Raises ``TransportError`` when the device can't be reached,
        ``HttpError`` for a non-200 status and ``ResponseDecodeError`` when the
        body doesn't match the endpoint's contract.
        """
        if handle.endpoint is not None:
            return self._fetch_variant(handle, handle.endpoint)

        cached = handle.discovered_endpoint
        if cached is None:
            return self._probe(handle)
        try:
            return self._fetch_variant(handle, cached)
        except (HttpError, ResponseDecodeError) as exc:
            if not exc.transient:
                # Firmware changed under us; probe again on the next call.
                logger.info("Endpoint %s stopped matching %s; will re-detect", cached.name, handle.base_url)
                handle.forget_endpoint()
            raise

    def get_config(self, handle: DeviceHandle) -> DeviceConfig:
        url = handle.url_for(CONFIG_PATH)
        payload = self._get_json(url)
        try:
            return decode_config(payload)
        except DecodeError as exc:
            raise ResponseDecodeError(url, exc) from exc

    def poll(self, handle: DeviceHandle, interval_secs: float, max_retries: int) -> Iterator[Reading | ClientError]:
        """Yield one result per ``interval_secs``, forever.

        Each item is a ``Reading`` or the ``ClientError`` that ended that tick.
        Transport errors and 5xx responses are retried ``max_retries`` times
        with exponential backoff first; everything else is yielded at once.
        Ticks are scheduled from the previous tick's nominal time, so slow
        fetches don't push the schedule back. Stop iterating to cancel.
        """
        if interval_secs <= 0:
            raise ValueError(f"interval_secs must be positive, got {interval_secs}")
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        return self._poll(handle, float(interval_secs), int(max_retries))

    def _poll(self, handle: DeviceHandle, interval_secs: float, max_retries: int) -> Iterator[Reading | ClientError]:
        logger.info("Polling %s every %ss (max_retries=%s)", handle.base_url, interval_secs, max_retries)
        next_tick = self._clock()
        while True:
            wait = next_tick - self._clock()
            if wait > 0:
                self._sleep(wait)
            yield self._fetch_with_retry(handle, max_retries)

            next_tick += interval_secs
            now = self._clock()
            if now > next_tick:
                logger.debug("Tick overran by %.3fs; fetching again immediately", now - next_tick)
                next_tick = now

    def _fetch_with_retry(self, handle: DeviceHandle, max_retries: int) -> Reading | ClientError:
        attempt = 0
        while True:
            try:
                return self.fetch_latest(handle)
            except ClientError as exc:
                if not exc.transient:
                    logger.debug("Non-transient failure from %s: %s", handle.base_url, exc)
                    return exc
                if attempt >= max_retries:
                    logger.warning("Giving up on %s after %d retries: %s", handle.base_url, attempt, exc)
                    return exc
                delay = self.backoff.delay_for(attempt)
                attempt += 1
                logger.info(
                    "Transient failure from %s (%s); retry %d/%d in %.2fs",
                    handle.base_url,
                    exc,
                    attempt,
                    max_retries,
                    delay,
                )
                self._sleep(delay)
