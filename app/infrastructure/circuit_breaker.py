"""
Circuit Breaker configuration for outbound notification calls.

When the notification endpoint keeps failing the breaker opens and further
deliveries fail fast; the dispatcher then parks them in the notification
outbox instead of waiting on a dead endpoint.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if the endpoint recovered, one request allowed
"""

import asyncio
import logging
from typing import Any, Callable

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


notification_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    name="notification_circuit_breaker",
)


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str) -> None:
    logger.warning(
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        },
    )


class StateChangeLogger(CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        old_name = old_state.name if old_state is not None else "none"
        log_circuit_state_change(self.name, old_name, new_state.name)


notification_breaker.add_listener(StateChangeLogger("notification"))


async def call_in_thread(breaker: CircuitBreaker, func: Callable[..., Any], *args: Any) -> Any:
    """
    Run a blocking call under the breaker without blocking the event loop.

    pybreaker's own call_async depends on tornado, so the breaker guards a
    synchronous call that runs in a worker thread instead.
    """
    return await asyncio.to_thread(breaker.call, func, *args)


__all__ = [
    "notification_breaker",
    "call_in_thread",
    "CircuitBreakerError",
    "StateChangeLogger",
]
