from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictInt, StrictStr
from pydantic_core import PydanticCustomError

from .timeutil import parse_device_timestamp


def _device_timestamp(value: object) -> datetime:
    try:
        return parse_device_timestamp(value)
    except ValueError as exc:
        raise PydanticCustomError("device_timestamp", "{reason}", {"reason": str(exc)}) from exc


DeviceTimestamp = Annotated[datetime, BeforeValidator(_device_timestamp)]


class Reading(BaseModel):
    """One air-data sample, in the device's native units.

    Optional metrics are ``None`` when the firmware doesn't report them; a
    zero is a real zero.
    """

    model_config = ConfigDict(frozen=True, strict=True, allow_inf_nan=False)

    timestamp: DeviceTimestamp
    score: int = Field(ge=0, le=100)
    temperature: float | None = None
    humidity: float | None = None
    co2: int | None = None
    voc: int | None = None
    pm25: int | None = None
    dew_point: float | None = None
    absolute_humidity: float | None = None
    estimated_co2: int | None = None
    estimated_co2_baseline: int | None = None
    voc_baseline: int | None = None
    voc_h2_raw: int | None = None
    voc_ethanol_raw: int | None = None
    estimated_pm10: int | None = None


class LedConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: StrictStr
    brightness: StrictInt | None = None


class DeviceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    # The firmware calls this a uuid; it is not formatted as one.
    device_id: StrictStr = Field(alias="device_uuid")
    firmware_version: StrictStr = Field(alias="fw_version")
    wifi_mac: StrictStr | None = None
    ssid: StrictStr | None = None
    ip: StrictStr | None = None
    netmask: StrictStr | None = None
    gateway: StrictStr | None = None
    timezone: StrictStr | None = None
    display: StrictStr | None = None
    led: LedConfig | None = None
    voc_feature_set: StrictInt | None = None
