from typing import Any

LOCAL_API_BODY: dict[str, Any] = {
    "timestamp": "2020-10-05T21:11:40.150Z",
    "score": 88,
    "dew_point": 9.81,
    "temp": 21.5,
    "humid": 40.2,
    "abs_humid": 7.55,
    "co2": 612,
    "co2_est": 400,
    "co2_est_baseline": 37001,
    "voc": 91,
    "voc_baseline": 37982,
    "voc_h2_raw": 26,
    "voc_ethanol_raw": 38,
    "pm25": 3,
    "pm10_est": 4,
}

LEGACY_BODY: dict[str, Any] = {
    "timestamp": 1700000000,
    "score": 88,
    "temp": 21.5,
    "humid": 40.2,
    "co2": 612,
}

CONFIG_BODY: dict[str, Any] = {
    "device_uuid": "awair-element_1234",
    "wifi_mac": "70:88:6B:00:00:01",
    "ssid": "home",
    "ip": "192.168.1.10",
    "netmask": "255.255.255.0",
    "gateway": "192.168.1.1",
    "fw_version": "1.2.8",
    "timezone": "America/Los_Angeles",
    "display": "score",
    "led": {"mode": "auto", "brightness": 179},
    "voc_feature_set": 34,
}


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self._body = body
        self._text = text
        self.headers = {"Content-Type": "application/json"}

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError(f"Expecting value: {self._text[:20]!r}")
        return self._body


class FakeClock:
    """Monotonic clock that only moves when something sleeps or works."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, secs: float) -> None:
        self.sleeps.append(round(secs, 6))
        self.now += secs

    def advance(self, secs: float) -> None:
        self.now += secs
