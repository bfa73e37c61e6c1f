"""
Tests for the retry policy and backoff
"""
import random

import pytest

from cloudflare_dyndns.lib.retry import ExponentialBackoff, RetryPolicy, MAX_TRIES


def test_backoff_without_jitter_doubles_until_capped():
    """Test un-jittered durations grow exponentially and stop at the maximum"""
    backoff = ExponentialBackoff(base=0.5, factor=2.0, maximum=3.0, jitter=False)

    assert [backoff.duration(n) for n in range(5)] == [0.5, 1.0, 2.0, 3.0, 3.0]


def test_backoff_jitter_stays_in_upper_half():
    """Test jittered durations stay between half and the full un-jittered value"""
    backoff = ExponentialBackoff(base=0.5, factor=2.0, maximum=10.0, rng=random.Random(42))

    for attempt in range(6):
        ceiling = min(0.5 * 2 ** attempt, 10.0)
        for _ in range(20):
            assert ceiling / 2 <= backoff.duration(attempt) <= ceiling


def test_backoff_increases_apart_from_jitter():
    """Test consecutive jitter ranges never overlap below the cap"""
    backoff = ExponentialBackoff(base=0.5, factor=2.0, maximum=10.0, rng=random.Random(7))

    durations = [backoff.duration(n) for n in range(4)]
    assert durations == sorted(durations)


def test_backoff_rejects_invalid_parameters():
    """Test invalid backoff parameters"""
    with pytest.raises(ValueError):
        ExponentialBackoff(base=0)
    with pytest.raises(ValueError):
        ExponentialBackoff(factor=0.5)
    with pytest.raises(ValueError):
        ExponentialBackoff(base=2.0, maximum=1.0)


def test_attempts_sleep_only_between_attempts():
    """Test the policy sleeps before each retry but not before the first or after the last"""
    sleeps = []
    policy = RetryPolicy(
        max_attempts=4,
        backoff=ExponentialBackoff(base=1.0, jitter=False),
        sleep=sleeps.append,
    )

    assert list(policy.attempts()) == [1, 2, 3, 4]
    assert sleeps == [1.0, 2.0, 4.0]


def test_attempts_stop_when_caller_breaks():
    """Test breaking out of the loop ends the retries without extra sleeps"""
    sleeps = []
    policy = RetryPolicy(max_attempts=5, sleep=sleeps.append)

    for attempt in policy.attempts():
        if attempt == 2:
            break

    assert len(sleeps) == 1


def test_policy_requires_an_attempt():
    """Test max_attempts must be positive"""
    with pytest.raises(ValueError, match="max_attempts"):
        RetryPolicy(max_attempts=0)


def test_default_worst_case_wait_is_bounded():
    """Test the default policy waits seconds rather than minutes"""
    policy = RetryPolicy()

    assert policy.max_attempts == MAX_TRIES
    assert 1.0 <= policy.worst_case_wait() <= 30.0
