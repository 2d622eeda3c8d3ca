from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from .models import Reading


@dataclass(frozen=True)
class EndpointVariant:
    """An air-data path plus the wire keys its firmware uses.

    ``fields`` maps ``Reading`` attribute -> JSON key. Attributes that a
    variant doesn't list are always absent on readings from it.
    """

    name: str
    path: str
    fields: Mapping[str, str] = field(hash=False)

    def __post_init__(self) -> None:
        unknown = set(self.fields) - set(Reading.model_fields)
        if unknown:
            raise ValueError(f"Endpoint {self.name!r} maps unknown reading fields: {sorted(unknown)}")
        for required in ("timestamp", "score"):
            if required not in self.fields:
                raise ValueError(f"Endpoint {self.name!r} must map {required!r}")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def wire_key(self, attribute: str) -> str:
        return self.fields.get(attribute, attribute)


# Awair Element Local API (firmware 1.1+).
LOCAL_API: Final = EndpointVariant(
    name="local-api",
    path="/air-data/latest",
    fields={
        "timestamp": "timestamp",
        "score": "score",
        "dew_point": "dew_point",
        "temperature": "temp",
        "humidity": "humid",
        "absolute_humidity": "abs_humid",
        "co2": "co2",
        "estimated_co2": "co2_est",
        "estimated_co2_baseline": "co2_est_baseline",
        "voc": "voc",
        "voc_baseline": "voc_baseline",
        "voc_h2_raw": "voc_h2_raw",
        "voc_ethanol_raw": "voc_ethanol_raw",
        "pm25": "pm25",
        "estimated_pm10": "pm10_est",
    },
)

# Earlier firmware: flat object with the core metrics only.
LEGACY: Final = EndpointVariant(
    name="legacy",
    path="/air-data",
    fields={
        "timestamp": "timestamp",
        "score": "score",
        "temperature": "temp",
        "humidity": "humid",
        "co2": "co2",
        "voc": "voc",
        "pm25": "pm25",
    },
)

# Probe order for auto-detection: newest firmware first.
ENDPOINT_VARIANTS: Final[tuple[EndpointVariant, ...]] = (LOCAL_API, LEGACY)

CONFIG_PATH: Final[str] = "/settings/config/data"

AUTO: Final[str] = "auto"


def get_variant(name: str) -> EndpointVariant | None:
    """Look up a variant by name; ``"auto"`` returns ``None`` (probe on first use)."""
    if name.strip().lower() == AUTO:
        return None
    for variant in ENDPOINT_VARIANTS:
        if variant.name == name:
            return variant
    known = ", ".join([AUTO, *(v.name for v in ENDPOINT_VARIANTS)])
    raise ValueError(f"Unknown endpoint variant {name!r} (expected one of: {known})")
