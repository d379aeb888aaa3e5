"""Bulk dispatcher: sequential fan-out of translate requests."""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from ..clients.cms_client import CMSClient
from ..exceptions import CMSApiError, DispatchInProgressError
from ..models.translation_unit import BulkResult, DispatchProgress, TranslationJob
from .cache import TRANSLATIONS_KEY, QueryCache
from .selection import SelectionMatrix

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[DispatchProgress], Awaitable[None]]


class BulkDispatcher:
    """
    Executes a selection's work list against the CMS.

    One request per content item carries all of that item's remaining
    locales. Requests are awaited one at a time; a failed item is counted
    and the run moves on. A running dispatch cannot be cancelled.
    """

    def __init__(
        self,
        client: CMSClient,
        cache: Optional[QueryCache] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.client = client
        self.cache = cache if cache is not None else QueryCache()
        self.progress_callback = progress_callback
        self.job: Optional[TranslationJob] = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run(self, selection: SelectionMatrix) -> BulkResult:
        """
        Translate every selected, not yet completed (content, locale) pair.

        Args:
            selection: The matrix whose selection defines the work list.
                Its selection is cleared once the run finishes.

        Returns:
            BulkResult with completed/failed unit counts
        """
        if self._lock.locked():
            raise DispatchInProgressError("A bulk translation is already running")

        async with self._lock:
            work_list = selection.compute_work_list()
            job = TranslationJob(total=len(work_list))
            self.job = job
            requests = 0
            log = logger.bind(total=job.total)
            log.info("bulk_dispatch_started", contents=len(selection.selected_content_ids))

            for content_id in selection.selected_content_ids:
                locales = selection.locales_to_translate(content_id)
                if not locales:
                    continue

                requests += 1
                try:
                    await self.client.translate_content(content_id, locales)
                except CMSApiError as e:
                    job.record_failure(len(locales))
                    message = f"Failed {content_id}"
                    log.warning(
                        "bulk_item_failed",
                        content_id=content_id,
                        locales=locales,
                        error=str(e),
                    )
                else:
                    job.record_success(len(locales))
                    message = f"Translated {content_id}"
                    log.debug("bulk_item_dispatched", content_id=content_id, locales=locales)

                await self._report(job.progress(message=message, content_id=content_id))

            self.cache.invalidate(TRANSLATIONS_KEY)
            self.cache.invalidate(("translation-status",))
            selection.clear_selection()

            result = BulkResult(
                completed=job.completed,
                failed=job.failed,
                total=job.total,
                requests=requests,
            )
            log.info(
                "bulk_dispatch_finished",
                completed=result.completed,
                failed=result.failed,
                requests=requests,
            )
            return result

    async def _report(self, progress: DispatchProgress) -> None:
        if self.progress_callback:
            await self.progress_callback(progress)
