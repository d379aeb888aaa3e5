"""Single-item translation manager with tiered locale selection and status polling."""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional

import structlog

from ..clients.cms_client import CMSClient
from ..exceptions import CMSApiError
from ..locales import TIER_NAMES, get_locale, locales_for_tiers
from ..models.content import TranslateAllResponse, TranslationRecord, TranslationStatusReport
from .cache import QueryCache, content_translations_key, status_key

logger = structlog.get_logger(__name__)


class ManagerState(str, Enum):
    """Lifecycle of one content item's translation."""
    IDLE = "idle"
    DISPATCHING = "dispatching"
    POLLING = "polling"
    CANCELLING = "cancelling"


class JobStatus(str, Enum):
    """Outcome of the most recent translation job."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class Notice:
    """A user-facing message."""
    title: str
    description: str = ""
    variant: str = "default"  # "default" or "destructive"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


NoticeCallback = Callable[[Notice], None]


class TranslationManager:
    """
    Manages the translation of one content item across all locale tiers.

    Transitions:
        idle -> dispatching -> polling -> idle (percentage reaches 100)
        polling -> cancelling -> idle

    Network failures never escape; they become destructive notices and the
    manager returns to idle.
    """

    def __init__(
        self,
        client: CMSClient,
        content_id: str,
        cache: Optional[QueryCache] = None,
        *,
        initial_delay: float = 3.0,
        poll_interval: float = 5.0,
        selected_tiers: Iterable[int] = (1, 2),
        notify: Optional[NoticeCallback] = None,
    ):
        """
        Initialize the manager.

        Args:
            client: CMS API client
            content_id: The content item being translated
            cache: Shared status cache (a private one is created if omitted)
            initial_delay: Seconds before the first status refetch after dispatch
            poll_interval: Seconds between subsequent refetches
            selected_tiers: Tiers selected initially
            notify: Callback receiving every Notice
        """
        self.client = client
        self.content_id = content_id
        self.cache = cache if cache is not None else QueryCache()
        self.initial_delay = initial_delay
        self.poll_interval = poll_interval
        self.selected_tiers: List[int] = []
        for tier in dict.fromkeys(selected_tiers):
            self.toggle_tier(tier)
        self._notify = notify

        self.state = ManagerState.IDLE
        self.job_status: Optional[JobStatus] = None
        self.error: Optional[str] = None
        self.notices: List[Notice] = []
        self._poll_task: Optional[asyncio.Task] = None
        self._log = logger.bind(content_id=content_id)

    # Tier selection

    def toggle_tier(self, tier: int) -> None:
        if tier not in TIER_NAMES:
            raise ValueError(f"Invalid tier: {tier} (expected 1-{len(TIER_NAMES)})")
        if tier in self.selected_tiers:
            self.selected_tiers.remove(tier)
        else:
            self.selected_tiers.append(tier)

    @property
    def selected_locales(self) -> List[str]:
        return [locale.code for locale in locales_for_tiers(self.selected_tiers)]

    @property
    def selected_language_count(self) -> int:
        return len(self.selected_locales)

    # Status

    @property
    def status(self) -> Optional[TranslationStatusReport]:
        return self.cache.get(status_key(self.content_id))

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def refresh_status(self) -> TranslationStatusReport:
        """Fetch the server status and store it in the shared cache."""
        status = await self.client.get_translation_status(self.content_id)
        self.cache.set(status_key(self.content_id), status)
        return status

    # Translate / cancel

    async def start_translation(
        self, tiers: Optional[Iterable[int]] = None
    ) -> Optional[TranslateAllResponse]:
        """
        Start translating into the given tiers (the selected tiers by default).

        An empty tier list asks the server for every supported locale.

        Returns:
            The server's acknowledgement, or None if dispatch failed
        """
        if self.state is not ManagerState.IDLE:
            self._emit(Notice("Translation already in progress", f"Current state: {self.state.value}"))
            return None

        tier_list = sorted(self.selected_tiers if tiers is None else set(tiers))
        self.state = ManagerState.DISPATCHING
        self.job_status = JobStatus.PENDING
        self.error = None
        self._log.info("translation_dispatching", tiers=tier_list or "all")

        try:
            response = await self.client.translate_all(self.content_id, tier_list)
        except CMSApiError as e:
            self.state = ManagerState.IDLE
            self.job_status = JobStatus.FAILED
            self.error = str(e)
            self._log.warning("translation_dispatch_failed", error=str(e))
            self._emit(Notice("Translation failed", str(e), variant="destructive"))
            return None

        self.state = ManagerState.POLLING
        self.job_status = JobStatus.RUNNING
        self._emit(Notice(
            "Translation started",
            f"Translating to {response.target_languages} languages. This may take a few minutes.",
        ))
        self._poll_task = asyncio.create_task(self._poll())
        return response

    async def cancel_translation(self) -> bool:
        """
        Ask the server to stop pending translations.

        Polling stops before the request is sent and is never resumed. The
        server may still finish work already in flight.

        Returns:
            True if the server accepted the cancellation
        """
        if self.state is not ManagerState.POLLING:
            return False

        self.state = ManagerState.CANCELLING
        await self._stop_polling()

        try:
            response = await self.client.cancel_translation(self.content_id)
        except CMSApiError as e:
            self.state = ManagerState.IDLE
            self.job_status = JobStatus.FAILED
            self.error = str(e)
            self._log.warning("translation_cancel_failed", error=str(e))
            self._emit(Notice("Failed to cancel", str(e), variant="destructive"))
            return False
        finally:
            self.cache.invalidate(status_key(self.content_id))

        self.state = ManagerState.IDLE
        self.job_status = JobStatus.CANCELLED
        self._log.info("translation_cancelled", cancelled=response.cancelled_count)
        self._emit(Notice("Translation cancelled", "The translation process has been stopped."))
        return True

    async def wait(self) -> Optional[JobStatus]:
        """Wait until polling ends (completion or cancellation)."""
        task = self._poll_task
        if task is not None:
            await asyncio.wait({task})
        return self.job_status

    async def close(self) -> None:
        """Stop any scheduled polling."""
        await self._stop_polling()
        if self.state is ManagerState.POLLING:
            self.state = ManagerState.IDLE

    # Preview

    async def preview_translation(self, locale: str) -> Optional[TranslationRecord]:
        """Read one locale's translated fields; None if not translated yet."""
        get_locale(locale)
        try:
            records = await self.cache.fetch(
                content_translations_key(self.content_id),
                lambda: self.client.get_translations(self.content_id),
            )
        except CMSApiError as e:
            self._emit(Notice("Failed to load translations", str(e), variant="destructive"))
            return None
        for record in records:
            if record.locale == locale:
                return record
        return None

    # Internals

    async def _poll(self) -> None:
        try:
            await self._poll_until_complete()
        except Exception as e:
            self.state = ManagerState.IDLE
            self.job_status = JobStatus.FAILED
            self.error = str(e)
            self._log.exception("translation_polling_crashed")

    async def _poll_until_complete(self) -> None:
        await asyncio.sleep(self.initial_delay)
        while True:
            try:
                status = await self.refresh_status()
            except CMSApiError as e:
                self._log.warning("translation_status_failed", error=str(e))
            else:
                self._log.debug(
                    "translation_progress",
                    completed=status.completed_count,
                    total=status.total_locales,
                    percentage=status.percentage,
                )
                if status.is_complete:
                    self.state = ManagerState.IDLE
                    self.job_status = JobStatus.COMPLETED
                    self.cache.invalidate(content_translations_key(self.content_id))
                    self._log.info("translation_completed")
                    self._emit(Notice(
                        "Translation complete",
                        f"{status.completed_count}/{status.total_locales} languages translated.",
                    ))
                    return
            await asyncio.sleep(self.poll_interval)

    async def _stop_polling(self) -> None:
        task, self._poll_task = self._poll_task, None
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.wait({task})

    def _emit(self, notice: Notice) -> None:
        self.notices.append(notice)
        if self._notify:
            self._notify(notice)
        else:
            self._log.info("notice", title=notice.title, description=notice.description)
