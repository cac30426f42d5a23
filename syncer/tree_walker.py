"""Recursive directory walk feeding owned files to the sync engine."""

import os
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import AbstractSet, Callable, Iterator, Optional, Set

from common.constants import HIDDEN_PREFIX, PATH_SEPARATOR
from common.logging_config import get_logger
from common.types import SyncEvent, SyncReport
from syncer.exceptions import SourceDirectoryError
from syncer.path_router import is_owned
from syncer.sync_decision import SyncEngine

logger = get_logger(__name__)

EventCallback = Callable[[SyncEvent], None]


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


class TreeWalker:
    """
    Walks a directory tree and syncs the files routed to this node.

    Hidden entries are skipped together with their subtrees. Entries are
    visited in name order. With workers == 1 every file is fully synced
    before the next one is visited; with more workers, enumeration stays on
    the calling thread and owned files are synced by a bounded pool.
    """

    def __init__(
        self,
        engine: SyncEngine,
        owned_buckets: AbstractSet[str],
        on_event: Optional[EventCallback] = None,
        workers: int = 1
    ):
        """
        Args:
            engine: Per-file sync engine
            owned_buckets: Buckets assigned to this node (read-only)
            on_event: Called on the walking thread with each SyncEvent
            workers: Upload parallelism (1 = sequential)
        """
        self.engine = engine
        self.owned_buckets = frozenset(owned_buckets)
        self.on_event = on_event
        self.workers = max(1, workers)

    def iter_files(self, root: str) -> Iterator[str]:
        """
        Yield every non-hidden regular file path under root, depth-first.

        Raises:
            SourceDirectoryError: If root itself cannot be listed
        """
        base = os.path.abspath(root).rstrip(PATH_SEPARATOR)
        try:
            entries = self._list(base or PATH_SEPARATOR)
        except OSError as e:
            raise SourceDirectoryError(f"Unable to access filesystem, {e}") from e
        yield from self._iter_entries(base, entries)

    def walk(self, root: str) -> SyncReport:
        """
        Sync every owned file under root.

        Args:
            root: Sync root directory

        Returns:
            SyncReport tallying the run

        Raises:
            SourceDirectoryError: If root itself cannot be listed
        """
        report = SyncReport()
        owned = (path for path in self.iter_files(root) if is_owned(path, self.owned_buckets))

        if self.workers == 1:
            for path in owned:
                self._emit(report, self.engine.sync_file(path))
        else:
            self._walk_parallel(owned, report)

        logger.info(
            f"Walk finished: {report.processed} owned file(s), {report.new} new, "
            f"{report.modified} modified, {report.skipped} skipped, {report.failed} failed"
        )
        return report

    def _walk_parallel(self, paths: Iterator[str], report: SyncReport) -> None:
        max_pending = self.workers * 4
        pending: Set[Future] = set()

        with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="sync") as pool:
            try:
                for path in paths:
                    pending.add(pool.submit(self.engine.sync_file, path))
                    if len(pending) >= max_pending:
                        done, pending = wait(pending, return_when=FIRST_COMPLETED)
                        for future in done:
                            self._emit(report, future.result())

                for future in wait(pending).done:
                    self._emit(report, future.result())
            except KeyboardInterrupt:
                logger.warning("Interrupted; cancelling pending uploads")
                for future in pending:
                    future.cancel()
                raise

    def _emit(self, report: SyncReport, event: SyncEvent) -> None:
        report.add(event)
        if self.on_event is not None:
            self.on_event(event)

    def _list(self, directory: str) -> list:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)

    def _iter_entries(self, directory: str, entries: list) -> Iterator[str]:
        for entry in entries:
            if is_hidden(entry.name):
                continue

            path = f"{directory}{PATH_SEPARATOR}{entry.name}"

            try:
                if entry.is_dir(follow_symlinks=False):
                    yield from self._iter_subdirectory(path)
                elif entry.is_file():
                    yield path
                else:
                    logger.debug(f"Skipping non-regular entry: {path}")
            except OSError as e:
                logger.error(f"Cannot inspect: {path} ({e})")

    def _iter_subdirectory(self, path: str) -> Iterator[str]:
        try:
            entries = self._list(path)
        except OSError as e:
            logger.error(f"Cannot read directory: {path} ({e})")
            return
        yield from self._iter_entries(path, entries)
