"""Throttle Gate — minimum spacing between accepted advice requests.

Two states per gate:
  - IDLE: no acceptance yet, or ``min_interval_ms`` has elapsed since the last one
  - COOLING: within ``min_interval_ms`` of the last accepted call

Every ACCEPTED decision moves the gate to COOLING and records ``now``.
A REJECTED decision leaves the state untouched.

The check-and-update runs under a single ``threading.Lock`` so two
near-simultaneous callers can never both observe IDLE, whether they run
on separate threads or as coroutines on one event loop.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

from krishi_sakhi.advisor.types import ThrottleDecision

logger = logging.getLogger(__name__)

DEFAULT_MIN_INTERVAL_MS = 3000


def monotonic_ms() -> float:
    """Process-local monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


@dataclass
class ThrottleState:
    """Timestamp (monotonic ms) of the last accepted dispatch; None until the first one."""

    last_accepted_at: float | None = None


class ThrottleGate:
    """Lock-guarded owner of a ThrottleState.

    Usage:
        gate = ThrottleGate(min_interval_ms=3000)

        if gate.try_acquire() is ThrottleDecision.REJECTED:
            return OutcomeResult.failure(OutcomeKind.THROTTLED)
    """

    def __init__(
        self,
        min_interval_ms: int = DEFAULT_MIN_INTERVAL_MS,
        state: ThrottleState | None = None,
        clock=monotonic_ms,
    ):
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must not be negative")
        self.min_interval_ms = min_interval_ms
        self._state = state or ThrottleState()
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def last_accepted_at(self) -> float | None:
        return self._state.last_accepted_at

    def _cooling(self, now: float, min_interval_ms: float) -> bool:
        last = self._state.last_accepted_at
        return last is not None and now - last < min_interval_ms

    def try_acquire(self, now: float | None = None, min_interval_ms: int | None = None) -> ThrottleDecision:
        """Accept iff the gate is IDLE at ``now``; on acceptance advance the clock to ``now``.

        Args:
            now: Current time in monotonic milliseconds (defaults to the gate's clock)
            min_interval_ms: Per-call override of the configured spacing
        """
        interval = self.min_interval_ms if min_interval_ms is None else min_interval_ms
        with self._lock:
            if now is None:
                now = self._clock()
            if self._cooling(now, interval):
                logger.debug(
                    "Throttle rejected: %.0fms since last accepted call (min %dms)",
                    now - self._state.last_accepted_at,
                    interval,
                )
                return ThrottleDecision.REJECTED
            self._state.last_accepted_at = now
            return ThrottleDecision.ACCEPTED

    def remaining_ms(self, now: float | None = None, min_interval_ms: int | None = None) -> float:
        """Milliseconds until the gate is IDLE again (0 when already IDLE)."""
        interval = self.min_interval_ms if min_interval_ms is None else min_interval_ms
        with self._lock:
            if now is None:
                now = self._clock()
            last = self._state.last_accepted_at
            if last is None:
                return 0.0
            return max(0.0, interval - (now - last))

    def reset(self) -> None:
        """Forget the last acceptance (gate returns to IDLE)."""
        with self._lock:
            self._state.last_accepted_at = None
