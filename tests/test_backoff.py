import pytest

from awair_local.backoff import BackoffPolicy


def test_delays_double_and_cap() -> None:
    policy = BackoffPolicy(base_delay_secs=0.5, max_delay_secs=3.0)
    assert [policy.delay_for(i) for i in range(5)] == [0.5, 1.0, 2.0, 3.0, 3.0]


def test_large_attempts_stay_capped() -> None:
    assert BackoffPolicy().delay_for(10_000) == 30.0


@pytest.mark.parametrize(("base", "cap"), [(0, 1), (-1, 1), (2, 1)])
def test_invalid_policy_fails_at_construction(base: float, cap: float) -> None:
    with pytest.raises(ValueError):
        BackoffPolicy(base_delay_secs=base, max_delay_secs=cap)
