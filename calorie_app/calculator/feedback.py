"""Single-slot, auto-expiring feedback message."""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3.0


class FeedbackChannel:
    """Holds at most one message; each ``show`` replaces the previous one.

    Expiry is scheduled on the running event loop (or the loop passed in).
    Without a loop the message stays until replaced or cleared.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._ttl = ttl_seconds
        self._loop = loop
        self._message: str | None = None
        self._expiry: asyncio.TimerHandle | None = None
        self._closed = False

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def expiry_pending(self) -> bool:
        return self._expiry is not None

    def show(self, text: str) -> None:
        if self._closed:
            logger.debug("Feedback channel closed, dropping %r", text)
            return
        self._cancel_expiry()
        self._message = text
        self._schedule_expiry()

    def clear(self) -> None:
        self._cancel_expiry()
        self._message = None

    def close(self) -> None:
        """Cancel any pending expiry; later ``show`` calls are ignored."""
        self.clear()
        self._closed = True

    def _schedule_expiry(self) -> None:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop, feedback will not auto-expire")
                return
        self._expiry = loop.call_later(self._ttl, self._expire)

    def _expire(self) -> None:
        self._expiry = None
        self._message = None

    def _cancel_expiry(self) -> None:
        if self._expiry is not None:
            self._expiry.cancel()
            self._expiry = None
