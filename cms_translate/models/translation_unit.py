"""Data models for translation units and bulk dispatch progress."""

from dataclasses import dataclass
from enum import Enum


class UnitStatus(str, Enum):
    """Status of one (content item, locale) pair."""
    MISSING = "missing"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    NEEDS_REVIEW = "needs_review"

    @property
    def is_completed(self) -> bool:
        return self is UnitStatus.COMPLETED

    @property
    def is_active(self) -> bool:
        """Check if the server is currently working on this unit."""
        return self in (UnitStatus.PENDING, UnitStatus.IN_PROGRESS)


@dataclass(frozen=True)
class TranslationUnit:
    """The atomic item of translation work."""

    content_id: str
    locale: str
    status: UnitStatus = UnitStatus.MISSING


@dataclass
class DispatchProgress:
    """Progress update for a bulk dispatch run."""
    current: int
    total: int
    percentage: float
    message: str = ""
    content_id: str = ""


@dataclass
class TranslationJob:
    """
    Ephemeral progress record for one bulk dispatch run.

    ``total`` is fixed when the run starts; ``completed`` and ``failed`` only
    ever grow and never sum past ``total``.
    """

    total: int
    completed: int = 0
    failed: int = 0

    @property
    def current(self) -> int:
        return self.completed + self.failed

    @property
    def is_done(self) -> bool:
        return self.current == self.total

    def record_success(self, count: int) -> None:
        self._check_room(count)
        self.completed += count

    def record_failure(self, count: int) -> None:
        self._check_room(count)
        self.failed += count

    def _check_room(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        if self.current + count > self.total:
            raise ValueError(
                f"Job overflow: {self.current} + {count} exceeds total {self.total}"
            )

    def progress(self, message: str = "", content_id: str = "") -> DispatchProgress:
        return DispatchProgress(
            current=self.current,
            total=self.total,
            percentage=round(self.current / self.total * 100, 1) if self.total > 0 else 0,
            message=message,
            content_id=content_id,
        )


@dataclass
class BulkResult:
    """Terminal summary of a bulk dispatch run."""

    completed: int
    failed: int
    total: int
    requests: int = 0

    @property
    def success(self) -> bool:
        return self.failed == 0

    def summary(self) -> str:
        return f"{self.completed} translations created, {self.failed} failed"
