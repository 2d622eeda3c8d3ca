from typing import Any


class AwairError(Exception):
    """Base class for every error raised by this package."""


class InvalidAddress(AwairError, ValueError):
    pass


# --- decoding -----------------------------------------------------------------


class DecodeError(AwairError):
    """A device payload could not be mapped onto the reading model.

    Never transient: it means the firmware speaks a shape we don't know.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class MissingField(DecodeError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"missing required field {field!r}")


class TypeMismatch(DecodeError):
    def __init__(self, field: str, expected: str, value: Any) -> None:
        super().__init__(field, f"field {field!r} expected {expected}, got {type(value).__name__}")
        self.expected = expected
        self.value = value


class ValueOutOfRange(DecodeError):
    def __init__(self, field: str, value: Any, detail: str) -> None:
        super().__init__(field, f"field {field!r} out of range ({detail}): {value!r}")
        self.value = value


class MalformedPayload(DecodeError):
    ROOT = "$"

    def __init__(self, detail: str) -> None:
        super().__init__(self.ROOT, f"malformed payload: {detail}")


# --- client -------------------------------------------------------------------


class ClientError(AwairError):
    """A request against a device failed. ``transient`` drives retries in ``poll``."""

    transient = False

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class TransportError(ClientError):
    """The device could not be reached (timeout, refused, reset, DNS)."""

    transient = True

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    RESOLUTION = "resolution"
    REQUEST = "request"

    def __init__(self, url: str, reason: str, detail: str) -> None:
        super().__init__(url, f"{reason} error talking to {url}: {detail}")
        self.reason = reason
        self.detail = detail


class HttpError(ClientError):
    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, f"HTTP status {status} from {url}")
        self.status = status

    @property
    def transient(self) -> bool:  # type: ignore[override]
        return self.status >= 500


class ResponseDecodeError(ClientError):
    def __init__(self, url: str, error: DecodeError) -> None:
        super().__init__(url, f"undecodable response from {url}: {error}")
        self.error = error
