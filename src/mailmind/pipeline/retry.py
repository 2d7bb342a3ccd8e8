from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

Sleep = Callable[[float], None]
DelaySchedule = Callable[[int], float]


class RetryState(str, Enum):
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted_retries"


def fixed(seconds: float) -> DelaySchedule:
    return lambda attempt: seconds


def linear(step: float) -> DelaySchedule:
    # attempt 1 -> step, attempt 2 -> 2 * step, ...
    return lambda attempt: step * attempt


@dataclass
class RetryLoop:
    """
    Bounded retry as a small state machine.

    WAITING -> SUCCEEDED when the probe returns True,
    WAITING -> EXHAUSTED once max_attempts probes have failed.
    Sleeps only between attempts, never after the last one.
    """

    max_attempts: int
    delay: DelaySchedule = field(default_factory=lambda: fixed(0.0))
    sleep: Sleep = time.sleep
    state: RetryState = RetryState.WAITING
    attempts: int = 0
    waited: float = 0.0

    def step(self, probe: Callable[[], bool]) -> RetryState:
        if self.state is not RetryState.WAITING:
            return self.state

        self.attempts += 1
        if probe():
            self.state = RetryState.SUCCEEDED
        elif self.attempts >= max(1, self.max_attempts):
            self.state = RetryState.EXHAUSTED
        else:
            pause = max(0.0, self.delay(self.attempts))
            if pause:
                self.sleep(pause)
            self.waited += pause
        return self.state

    def run(self, probe: Callable[[], bool]) -> RetryState:
        while self.state is RetryState.WAITING:
            self.step(probe)
        return self.state

    @property
    def succeeded(self) -> bool:
        return self.state is RetryState.SUCCEEDED
