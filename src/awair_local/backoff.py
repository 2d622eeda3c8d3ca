from dataclasses import dataclass


@dataclass(frozen=True)
class BackoffPolicy:
    """Exponential backoff: ``base * 2**attempt`` seconds, capped at ``max_delay_secs``."""

    base_delay_secs: float = 0.5
    max_delay_secs: float = 30.0

    def __post_init__(self) -> None:
        if self.base_delay_secs <= 0:
            raise ValueError(f"base_delay_secs must be positive, got {self.base_delay_secs}")
        if self.max_delay_secs < self.base_delay_secs:
            raise ValueError(
                f"max_delay_secs ({self.max_delay_secs}) must be >= base_delay_secs ({self.base_delay_secs})"
            )

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number ``attempt + 1`` (``attempt`` counts from 0)."""
        # Clamp the exponent so huge attempt counts can't overflow the float.
        exponent = min(max(0, int(attempt)), 64)
        return float(min(self.max_delay_secs, self.base_delay_secs * (2**exponent)))
