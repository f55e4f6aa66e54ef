from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Iterator

    from models.learning_models import ConversionHistoryEntry

__all__: list[str] = ["ConversionHistory"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class ConversionHistory:
    """Bounded, append-only log of model corrections.

    When an append makes the log longer than ``MAX_ENTRIES`` it is cut back to the
    ``TRIM_TO`` most recent entries.

    Attributes:
        MAX_ENTRIES (ClassVar[int]): Length that triggers trimming when exceeded.
        TRIM_TO (ClassVar[int]): Number of entries kept after trimming.
        PERSISTED_ENTRIES (ClassVar[int]): Number of most recent entries written to storage.
    """

    MAX_ENTRIES: ClassVar[int] = 100
    TRIM_TO: ClassVar[int] = 50
    PERSISTED_ENTRIES: ClassVar[int] = 20

    def __init__(self, entries: Iterable[ConversionHistoryEntry] = ()) -> None:
        self._entries: list[ConversionHistoryEntry] = list(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConversionHistoryEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> list[ConversionHistoryEntry]:
        return list(self._entries)

    def append(self, entry: ConversionHistoryEntry) -> None:
        self._entries.append(entry)
        if len(self._entries) > self.MAX_ENTRIES:
            self._entries = self._entries[-self.TRIM_TO :]
            logger.debug("Conversion history trimmed to %d entries", self.TRIM_TO)

    def recent(self, count: int | None = None) -> list[ConversionHistoryEntry]:
        """Return the most recent entries, oldest first."""
        count = self.PERSISTED_ENTRIES if count is None else count
        if count <= 0:
            return []
        return self._entries[-count:]

    def clear(self) -> None:
        self._entries.clear()
