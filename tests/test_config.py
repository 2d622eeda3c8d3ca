import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from awair_local.client import DeviceClient
from awair_local.config import ENV_KEYS, Settings, load_settings
from awair_local.device import DeviceHandle
from awair_local.endpoints import LEGACY


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # load_dotenv searches from the working directory; keep it away from any real .env
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = Settings.model_validate({"AWAIR_HOST": "192.168.1.10"})
    assert settings.port == 80
    assert settings.endpoint == "auto"
    assert settings.timeout_secs == 5.0
    assert settings.poll_interval_secs == 10.0
    assert settings.max_retries == 3


def test_load_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWAIR_HOST", "awair-elem-1234.local")
    monkeypatch.setenv("AWAIR_PORT", "8080")
    monkeypatch.setenv("AWAIR_ENDPOINT", "legacy")
    monkeypatch.setenv("AWAIR_TIMEOUT_SECS", "2.5")
    monkeypatch.setenv("AWAIR_BACKOFF_BASE_SECS", "1")
    monkeypatch.setenv("AWAIR_BACKOFF_MAX_SECS", "8")

    settings = load_settings()
    handle = DeviceHandle.from_settings(settings)
    client = DeviceClient.from_settings(settings)

    assert handle.base_url == "http://awair-elem-1234.local:8080"
    assert handle.endpoint is LEGACY
    assert client.timeout_secs == 2.5
    assert client.backoff.delay_for(5) == 8.0


def test_load_from_dotenv_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # load_dotenv writes into os.environ; give it a throwaway copy
    monkeypatch.setattr(os, "environ", os.environ.copy())
    (tmp_path / ".env").write_text("AWAIR_HOST=10.0.0.7\nAWAIR_MAX_RETRIES=5\n", encoding="utf-8")
    settings = load_settings()
    assert settings.host == "10.0.0.7"
    assert settings.max_retries == 5


def test_auto_endpoint_leaves_handle_unpinned() -> None:
    settings = Settings.model_validate({"AWAIR_HOST": "10.0.0.1"})
    assert DeviceHandle.from_settings(settings).endpoint is None


def test_missing_host_is_reported() -> None:
    with pytest.raises(RuntimeError, match="AWAIR_HOST"):
        load_settings()


@pytest.mark.parametrize(
    "overrides",
    [{"AWAIR_ENDPOINT": "v9"}, {"AWAIR_POLL_INTERVAL_SECS": "0"}, {"AWAIR_MAX_RETRIES": "-1"}],
)
def test_invalid_values_fail_validation(overrides: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        Settings.model_validate({"AWAIR_HOST": "10.0.0.1", **overrides})
