"""Cooperative cancellation for long-running law checks.

The runner polls the token between trials (between batches when running
on several workers) and between shrink attempts. Cancelling never
interrupts a proposition mid-evaluation.

Python 3.13+.
"""

from __future__ import annotations

import threading

__all__ = ["CancellationToken"]


class CancellationToken:
    """Thread-safe, one-way cancellation flag.

    Example:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        """Initialize an uncancelled token."""
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Idempotent."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._event.is_set()

    def __repr__(self) -> str:
        """Return state-bearing representation."""
        return f"CancellationToken(cancelled={self.cancelled})"
