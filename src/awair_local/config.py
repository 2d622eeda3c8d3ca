import os
from typing import Final

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .endpoints import get_variant


class Settings(BaseModel):
    host: str = Field(validation_alias="AWAIR_HOST")
    port: int = Field(default=80, validation_alias="AWAIR_PORT")
    # "auto" probes the known endpoint variants; otherwise a variant name to pin.
    endpoint: str = Field(default="auto", validation_alias="AWAIR_ENDPOINT")
    user_agent: str = Field(default="awair-local/1.0", validation_alias="AWAIR_USER_AGENT")

    timeout_secs: float = Field(default=5.0, gt=0, validation_alias="AWAIR_TIMEOUT_SECS")
    # The device refreshes its air data every 10 seconds.
    poll_interval_secs: float = Field(default=10.0, gt=0, validation_alias="AWAIR_POLL_INTERVAL_SECS")
    max_retries: int = Field(default=3, ge=0, validation_alias="AWAIR_MAX_RETRIES")
    backoff_base_secs: float = Field(default=0.5, gt=0, validation_alias="AWAIR_BACKOFF_BASE_SECS")
    backoff_max_secs: float = Field(default=30.0, gt=0, validation_alias="AWAIR_BACKOFF_MAX_SECS")

    @field_validator("endpoint")
    @classmethod
    def _known_endpoint(cls, value: str) -> str:
        get_variant(value)
        return value


ENV_KEYS: Final[tuple[str, ...]] = (
    "AWAIR_HOST",
    "AWAIR_PORT",
    "AWAIR_ENDPOINT",
    "AWAIR_USER_AGENT",
    "AWAIR_TIMEOUT_SECS",
    "AWAIR_POLL_INTERVAL_SECS",
    "AWAIR_MAX_RETRIES",
    "AWAIR_BACKOFF_BASE_SECS",
    "AWAIR_BACKOFF_MAX_SECS",
)


def load_settings() -> Settings:
    # Load .env from the working directory if present (does nothing if file missing)
    load_dotenv(find_dotenv(usecwd=True))
    data: dict[str, str] = {}
    for key in ENV_KEYS:
        if key in os.environ:
            data[key] = os.environ[key]

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        if "AWAIR_HOST" not in data:
            raise RuntimeError("Missing required configuration: AWAIR_HOST") from e
        raise
