from datetime import UTC, datetime


def ensure_utc(dt: datetime) -> datetime:
    """Device clocks report UTC; a naive value is taken as UTC rather than local time."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def parse_device_timestamp(value: object) -> datetime:
    """Accept exactly the two wire forms devices send: epoch seconds or an ISO-8601 date-time.

    Numeric strings, date-only strings and booleans are rejected with ``ValueError``.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, int | float) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"epoch seconds out of range: {value!r}") from exc
    if isinstance(value, str):
        text = value.strip()
        # fromisoformat happily turns a bare date into midnight; require a time part.
        if "T" not in text.upper() and " " not in text:
            raise ValueError(f"timestamp has no time part: {value!r}")
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError as exc:
            raise ValueError(f"not an ISO-8601 date-time: {value!r}") from exc
    raise ValueError(f"expected epoch seconds or ISO-8601 string, got {type(value).__name__}")
