"""
Persistence Worker
==================

Background asyncio task that writes catalog snapshots to the store.

Commands never wait for a save: the catalog listener only enqueues the
snapshot, and the worker writes it later. Save failures are retried and
then reported through ``on_error``; they never reach the command that
triggered them.
"""

import asyncio
import logging
from typing import Optional, Tuple, Callable, Any

from ..core.config import PersistenceConfig
from ..series.series import Series
from ..utils.storage import KeyValueStore

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, Exception], None]

_SERIES = "series"
_THEME = "theme"


class PersistenceWorker:
    """
    Serializes saves to a ``KeyValueStore``.

    Usage:
        worker = PersistenceWorker(store)
        await worker.start()
        catalog.subscribe(worker.submit_series)
        ...
        await worker.stop()  # drains pending saves
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[PersistenceConfig] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.store = store
        self.config = config or PersistenceConfig()
        self.on_error = on_error

        self._queue: Optional[asyncio.Queue] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None

        # Statistics
        self.saves_completed = 0
        self.saves_failed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the worker task on the running loop."""
        if self.running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue()
        self._task = self._loop.create_task(self._run())
        logger.debug("Persistence worker started")

    async def stop(self) -> None:
        """Write everything still queued, then stop."""
        if not self.running:
            return
        await self._queue.join()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug(
            f"Persistence worker stopped ({self.saves_completed} saved, {self.saves_failed} failed)"
        )

    async def flush(self) -> None:
        """Wait until every queued save has been attempted."""
        if self.running:
            await self._queue.join()

    def submit_series(self, snapshot: Tuple[Series, ...], next_id: Optional[int] = None) -> None:
        """
        Queue a catalog snapshot. Safe to call from any thread.

        Args:
            snapshot: The full ordered list of series
            next_id: The catalog id counter, saved with the snapshot when given
        """
        self._submit(_SERIES, (tuple(snapshot), next_id))

    def submit_theme(self, is_dark: bool) -> None:
        """Queue a theme preference change. Safe to call from any thread."""
        self._submit(_THEME, bool(is_dark))

    def _submit(self, kind: str, payload: Any) -> None:
        if self._loop is None or self._queue is None:
            raise RuntimeError("Persistence worker is not started")

        try:
            current = asyncio.get_running_loop()
        except RuntimeError:
            current = None

        if current is self._loop:
            self._queue.put_nowait((kind, payload))
        else:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, (kind, payload))

    async def _run(self) -> None:
        while True:
            kind, payload = await self._queue.get()
            drained = 0

            # Only the newest snapshot of each kind needs writing
            latest = {kind: payload}
            while not self._queue.empty():
                next_kind, next_payload = self._queue.get_nowait()
                latest[next_kind] = next_payload
                drained += 1

            try:
                for item_kind, item_payload in latest.items():
                    await self._save_with_retry(item_kind, item_payload)
            finally:
                for _ in range(drained + 1):
                    self._queue.task_done()

    async def _save_with_retry(self, kind: str, payload: Any) -> None:
        attempts = self.config.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                if kind == _SERIES:
                    await asyncio.to_thread(self.store.save_series, *payload)
                else:
                    await asyncio.to_thread(self.store.save_theme, payload)
                self.saves_completed += 1
                return
            except Exception as e:
                if attempt < attempts:
                    logger.warning(f"Saving {kind} failed (attempt {attempt}/{attempts}): {e}")
                    await asyncio.sleep(self.config.retry_delay)
                    continue

                self.saves_failed += 1
                logger.error(f"Saving {kind} failed after {attempts} attempts: {e}")
                if self.on_error:
                    try:
                        self.on_error(kind, e)
                    except Exception:
                        logger.exception("Persistence error callback failed")
