"""Incremental sync decision (SKIP / NEW / MODIFIED) and per-file upload."""

import os
from typing import Optional

from common.logging_config import get_logger
from common.types import LocalFile, RemoteObject, SyncEvent, SyncOutcome
from syncer.exceptions import ObjectStoreError
from syncer.object_store import ObjectStore
from syncer.path_router import object_key
from syncer.transfer_stats import TransferStats

logger = get_logger(__name__)


def decide(local: LocalFile, remote: Optional[RemoteObject]) -> SyncOutcome:
    """
    Decide whether a local file must be uploaded.

    The remote copy is only trusted when it is strictly newer than the
    local file and has the same size. Contents are never hashed.

    Args:
        local: Local file metadata
        remote: Remote object metadata, or None when absent

    Returns:
        SyncOutcome for the file
    """
    if remote is None:
        return SyncOutcome.NEW
    if local.mtime < remote.mtime and local.size == remote.size:
        return SyncOutcome.SKIP
    return SyncOutcome.MODIFIED


def stat_local(path: str) -> LocalFile:
    """
    Read local metadata with one-second mtime resolution.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    st = os.stat(path)
    return LocalFile(path=path, size=st.st_size, mtime=int(st.st_mtime))


class SyncEngine:
    """
    Drives one owned file through probe, decision and upload.

    Failures on a single file are logged and reported in the returned
    event; they are never raised to the caller.
    """

    def __init__(self, store: ObjectStore, stats: TransferStats):
        self.store = store
        self.stats = stats

    def sync_file(self, path: str) -> SyncEvent:
        """
        Sync a single file that this node owns.

        Args:
            path: Local path as produced by the tree walker

        Returns:
            SyncEvent describing what happened
        """
        try:
            local = stat_local(path)
        except OSError as e:
            logger.error(f"Cannot stat: {path} ({e})")
            return self._failed(path, f"cannot stat: {e}")

        key = object_key(path)
        try:
            key.encode("utf-8")
        except UnicodeError as e:
            logger.error(f"Object key is not valid UTF-8: {path!r} ({e})")
            return self._failed(path, f"invalid key: {e}", size=local.size)

        try:
            remote = self.store.head(key)
        except ObjectStoreError as e:
            logger.error(f"Metadata probe failed for {path}: {e}")
            return self._failed(path, str(e), size=local.size)

        outcome = decide(local, remote)
        logger.debug(f"{outcome.label} {path} local={local} remote={remote}")

        if outcome is SyncOutcome.SKIP:
            return SyncEvent(
                path=path,
                outcome=outcome,
                size=local.size,
                total_bytes=self.stats.total_bytes,
            )

        try:
            with open(path, "rb") as body:
                self.store.put(key, body)
        except OSError as e:
            logger.error(f"failed to open file {path!r}, {e}")
            return self._failed(path, f"cannot open: {e}", outcome=outcome, size=local.size)
        except ObjectStoreError as e:
            logger.error(f"S3 upload failed, {e}")
            return self._failed(path, str(e), outcome=outcome, size=local.size)

        total, avg_kbps = self.stats.record(local.size)
        logger.info(f"Uploaded {path} as {outcome.label} ({local.size} bytes)")

        return SyncEvent(
            path=path,
            outcome=outcome,
            size=local.size,
            total_bytes=total,
            avg_kbps=avg_kbps,
        )

    def _failed(
        self,
        path: str,
        message: str,
        outcome: Optional[SyncOutcome] = None,
        size: int = 0
    ) -> SyncEvent:
        return SyncEvent(
            path=path,
            outcome=outcome,
            size=size,
            total_bytes=self.stats.total_bytes,
            error=message,
        )
