from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["InFlightGuard"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class InFlightGuard:
    """Allows at most one conversion at a time.

    A second request that arrives while one is outstanding is rejected rather than
    queued; the caller treats the rejection as a silent no-op.
    """

    def __init__(self) -> None:
        self._lock: asyncio.Lock = asyncio.Lock()
        self._busy: bool = False

    @property
    def is_busy(self) -> bool:
        """True while a conversion holds the guard."""
        return self._busy

    async def try_acquire(self) -> bool:
        """Claim the guard.

        Returns:
            bool: True if the caller now owns the guard, False if a conversion is already in flight.
        """
        async with self._lock:
            if self._busy:
                logger.debug("Conversion already in flight; request ignored")
                return False
            self._busy = True
            return True

    async def release(self) -> None:
        """Release the guard. Releasing an idle guard is a no-op."""
        async with self._lock:
            if not self._busy:
                logger.warning("Attempted to release an idle in-flight guard")
            self._busy = False
