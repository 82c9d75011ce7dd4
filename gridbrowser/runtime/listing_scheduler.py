"""Background worker for directory listings.

Slow filesystems (network mounts, huge directories) are listed off the
event loop. Results come back as controller events; the controller's
generation check drops any listing that arrives after a newer directory
change.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import Empty, Queue

from ..listing import DirectoryListingError, Entry
from .controller import ListingFailed, ListingLoaded, ListingRequest

logger = logging.getLogger(__name__)

ListingResult = ListingLoaded | ListingFailed


class ListingScheduler:
    """Single-threaded latest-request-wins listing scheduler."""

    def __init__(self, list_entries: Callable[[str], list[Entry]]) -> None:
        self._list_entries = list_entries
        self._lock = threading.Lock()
        self._pending: ListingRequest | None = None
        self._running = False
        self._results: Queue[ListingResult] = Queue()

    def _run_request(self, request: ListingRequest) -> ListingResult:
        try:
            entries = self._list_entries(request.path)
        except DirectoryListingError as exc:
            return ListingFailed(request=request, message=str(exc))
        return ListingLoaded(request=request, entries=tuple(entries))

    def _worker(self) -> None:
        while True:
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    return
            self._results.put(self._run_request(request))

    def schedule(self, request: ListingRequest) -> None:
        """Queue ``request``, replacing any request not yet started."""
        with self._lock:
            if self._pending is not None:
                logger.debug("Superseding pending listing of %s", self._pending.path)
            self._pending = request
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="gridbrowser-listing",
            daemon=True,
        )
        worker.start()

    def drain_results(self) -> list[ListingResult]:
        """Drain all completed listing results."""
        out: list[ListingResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["ListingResult", "ListingScheduler"]
