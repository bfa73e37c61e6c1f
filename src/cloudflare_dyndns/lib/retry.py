"""
Retry policy with jittered exponential backoff
"""
import random
import time
from typing import Callable, Iterator, Optional

# Default number of attempts for the IP echo service
MAX_TRIES = 5


class ExponentialBackoff:
    """
    Exponential backoff duration generator

    The un-jittered duration for attempt ``n`` (0-based) is
    ``min(base * factor ** n, maximum)``. With jitter enabled the value is drawn
    uniformly from the upper half of that range, so the curve keeps rising from
    one attempt to the next while retries from several hosts do not line up.
    """

    def __init__(
        self,
        base: float = 0.5,
        factor: float = 2.0,
        maximum: float = 10.0,
        jitter: bool = True,
        rng: Optional[random.Random] = None,
    ):
        if base <= 0 or factor < 1 or maximum < base:
            raise ValueError("Backoff needs base > 0, factor >= 1 and maximum >= base")
        self.base = base
        self.factor = factor
        self.maximum = maximum
        self.jitter = jitter
        self._rng = rng or random.Random()

    def duration(self, attempt: int) -> float:
        """Seconds to wait after the given (0-based) failed attempt"""
        ceiling = min(self.base * self.factor ** attempt, self.maximum)
        if not self.jitter:
            return ceiling
        return self._rng.uniform(ceiling / 2, ceiling)


class RetryPolicy:
    """
    Bounded retry policy

    Iterate over ``attempts()`` and ``return``/``break`` on success; the policy
    sleeps between consecutive attempts and stops after ``max_attempts``.

    Example:
        >>> policy = RetryPolicy(max_attempts=3, sleep=lambda s: None)
        >>> [attempt for attempt in policy.attempts()]
        [1, 2, 3]
    """

    def __init__(
        self,
        max_attempts: int = MAX_TRIES,
        backoff: Optional[ExponentialBackoff] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ExponentialBackoff()
        self._sleep = sleep

    def attempts(self) -> Iterator[int]:
        """Yield 1-based attempt numbers, sleeping before every retry"""
        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                self._sleep(self.backoff.duration(attempt - 2))
            yield attempt

    def worst_case_wait(self) -> float:
        """Total un-jittered sleep time when every attempt fails"""
        return sum(
            min(self.backoff.base * self.backoff.factor ** n, self.backoff.maximum)
            for n in range(self.max_attempts - 1)
        )
