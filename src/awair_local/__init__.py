"""Client for the Awair Local API served by Awair air-quality monitors on the LAN."""

from .backoff import BackoffPolicy
from .client import DeviceClient
from .config import Settings, load_settings
from .decode import decode_config, decode_reading
from .device import DeviceHandle
from .endpoints import ENDPOINT_VARIANTS, LEGACY, LOCAL_API, EndpointVariant, get_variant
from .errors import (
    AwairError,
    ClientError,
    DecodeError,
    HttpError,
    InvalidAddress,
    MalformedPayload,
    MissingField,
    ResponseDecodeError,
    TransportError,
    TypeMismatch,
    ValueOutOfRange,
)
from .models import DeviceConfig, LedConfig, Reading

__all__ = [
    "AwairError",
    "BackoffPolicy",
    "ClientError",
    "DecodeError",
    "DeviceClient",
    "DeviceConfig",
    "DeviceHandle",
    "ENDPOINT_VARIANTS",
    "EndpointVariant",
    "HttpError",
    "InvalidAddress",
    "LEGACY",
    "LOCAL_API",
    "LedConfig",
    "MalformedPayload",
    "MissingField",
    "Reading",
    "ResponseDecodeError",
    "Settings",
    "TransportError",
    "TypeMismatch",
    "ValueOutOfRange",
    "decode_config",
    "decode_reading",
    "get_variant",
    "load_settings",
]
