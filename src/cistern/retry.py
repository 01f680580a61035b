"""Retry scheduler — bounded retry for eventually-consistent remote calls."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import tenacity

from .gateway import Fatal, Ok, Outcome, Transient

logger = logging.getLogger(__name__)

CREATE_TIMEOUT = 120.0


@dataclass(frozen=True)
class TimeoutExceeded:
    """The operation kept failing transiently until the deadline passed."""

    timeout: float
    attempts: int
    last_reason: str

    def __str__(self) -> str:
        return f"timeout after {self.timeout:g}s ({self.attempts} attempts): {self.last_reason}"


def _is_transient(result: Outcome) -> bool:
    return isinstance(result, Transient)


class RetryScheduler:
    """Run an operation until it succeeds, fails fatally, or the deadline passes.

    The operation is always attempted at least once, however small the timeout.
    Backoff between attempts is exponential and never sleeps past the deadline.
    """

    def __init__(
        self,
        timeout: float = CREATE_TIMEOUT,
        *,
        backoff: float = 0.5,
        max_backoff: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.timeout = timeout
        self.backoff = backoff
        self.max_backoff = max_backoff
        self._clock = clock
        self._sleep = sleep

    def run(
        self,
        operation: Callable[[], Outcome],
        description: str = "operation",
    ) -> Ok | Fatal | TimeoutExceeded:
        deadline = self._clock() + self.timeout
        backoff = tenacity.wait_exponential(multiplier=self.backoff, max=self.max_backoff)

        def past_deadline(retry_state: tenacity.RetryCallState) -> bool:
            return self._clock() >= deadline

        def wait(retry_state: tenacity.RetryCallState) -> float:
            return max(0.0, min(backoff(retry_state), deadline - self._clock()))

        def before_sleep(retry_state: tenacity.RetryCallState) -> None:
            result = retry_state.outcome.result() if retry_state.outcome else None
            logger.warning(
                "Attempt %d of %s failed: %s. Retrying in %.1fs...",
                retry_state.attempt_number,
                description,
                getattr(result, "reason", result),
                retry_state.next_action.sleep if retry_state.next_action else 0,
            )

        def timed_out(retry_state: tenacity.RetryCallState) -> TimeoutExceeded:
            result = retry_state.outcome.result() if retry_state.outcome else None
            logger.error(
                "Giving up on %s after %d attempts over %gs",
                description,
                retry_state.attempt_number,
                self.timeout,
            )
            return TimeoutExceeded(
                timeout=self.timeout,
                attempts=retry_state.attempt_number,
                last_reason=getattr(result, "reason", ""),
            )

        retrying = tenacity.Retrying(
            retry=tenacity.retry_if_result(_is_transient),
            stop=past_deadline,
            wait=wait,
            sleep=self._sleep,
            before_sleep=before_sleep,
            retry_error_callback=timed_out,
        )
        return retrying(operation)
