"""Translation from raw device JSON to the reading model.

Each endpoint variant carries its own key mapping; the decoder itself never
changes when a firmware variant is added. Validation is delegated to the
pydantic models in strict mode, and the first validation error is mapped onto
the package's ``DecodeError`` taxonomy so callers never see pydantic types.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from .endpoints import LOCAL_API, EndpointVariant
from .errors import DecodeError, MalformedPayload, MissingField, TypeMismatch, ValueOutOfRange
from .models import DeviceConfig, Reading

_RANGE_ERRORS = frozenset({"greater_than", "greater_than_equal", "less_than", "less_than_equal"})

_EXPECTED = {
    "int_type": "integer",
    "float_type": "number",
    "string_type": "string",
    "datetime_type": "datetime",
    "datetime_parsing": "ISO-8601 datetime or epoch seconds",
    "datetime_from_date_parsing": "ISO-8601 datetime or epoch seconds",
    "device_timestamp": "ISO-8601 date-time or epoch seconds",
    "finite_number": "finite number",
    "model_type": "object",
    "dict_type": "object",
}


def _require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise MalformedPayload(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def _translate(exc: ValidationError, field_name: Callable[[tuple[Any, ...]], str]) -> DecodeError:
    # pydantic reports errors in model field order, so the first one is stable.
    err = exc.errors(include_url=False)[0]
    name = field_name(tuple(err["loc"]))
    kind = err["type"]
    value = err.get("input")
    if kind == "missing":
        return MissingField(name)
    if kind in _RANGE_ERRORS:
        return ValueOutOfRange(name, value, err["msg"])
    return TypeMismatch(name, _EXPECTED.get(kind, kind), value)


def _validate(model: type[BaseModel], data: Mapping[str, Any], field_name: Callable[[tuple[Any, ...]], str]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise _translate(exc, field_name) from exc


def decode_reading(payload: Any, variant: EndpointVariant = LOCAL_API) -> Reading:
    """Decode one air-data object into a ``Reading``.

    Raises ``MissingField`` / ``TypeMismatch`` / ``ValueOutOfRange`` naming the
    wire key, or ``MalformedPayload`` if the body isn't a JSON object. Keys the
    variant doesn't know are ignored; ``null`` on an optional key means absent.
    """
    obj = _require_object(payload)
    data: dict[str, Any] = {}
    for attribute, key in variant.fields.items():
        if key not in obj:
            continue
        value = obj[key]
        if value is None and not Reading.model_fields[attribute].is_required():
            continue
        data[attribute] = value

    def field_name(loc: tuple[Any, ...]) -> str:
        return variant.wire_key(str(loc[0])) if loc else MalformedPayload.ROOT

    reading: Reading = _validate(Reading, data, field_name)
    return reading


def decode_config(payload: Any) -> DeviceConfig:
    """Decode the ``/settings/config/data`` object."""
    obj = _require_object(payload)

    def field_name(loc: tuple[Any, ...]) -> str:
        return ".".join(str(part) for part in loc) if loc else MalformedPayload.ROOT

    config: DeviceConfig = _validate(DeviceConfig, obj, field_name)
    return config
