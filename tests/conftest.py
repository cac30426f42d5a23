"""Shared pytest fixtures for all tests."""

import pytest

from common.constants import BUCKETS
from syncer.object_store import ObjectStore
from syncer.sync_decision import SyncEngine
from syncer.transfer_stats import TransferStats

from tests.helpers import FakeS3Client, TARGET_BUCKET, write_file


@pytest.fixture
def fake_s3():
    """
    Create an in-memory S3 client.

    Returns:
        FakeS3Client with TARGET_BUCKET present and empty
    """
    return FakeS3Client()


@pytest.fixture
def store(fake_s3):
    """ObjectStore bound to the fake client and TARGET_BUCKET."""
    return ObjectStore(fake_s3, TARGET_BUCKET)


@pytest.fixture
def engine(store):
    """SyncEngine with a fresh TransferStats."""
    return SyncEngine(store, TransferStats())


@pytest.fixture
def all_buckets():
    """Ownership of the entire bucket space (single-node cluster)."""
    return frozenset(BUCKETS)


@pytest.fixture
def sync_tree(tmp_path):
    """
    Create a directory tree with regular, nested and hidden entries.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the sync root
    """
    root = tmp_path / "export"
    write_file(root / "report.txt", b"quarterly numbers")
    write_file(root / "image.png", b"\x89PNG" + b"\x00" * 64)
    write_file(root / "docs" / "readme.md", b"# readme")
    write_file(root / "docs" / "deep" / "notes.txt", b"nested notes")
    write_file(root / ".hidden_file", b"secret")
    write_file(root / ".git" / "config", b"[core]")
    write_file(root / "docs" / ".cache" / "blob", b"cached")
    return root
