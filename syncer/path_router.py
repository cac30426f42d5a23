"""Routes a file path to its bucket via the SHA-1 digest of the path string."""

import hashlib
import os
from typing import AbstractSet

from common.constants import KEY_PREFIX_LENGTH


def route(path: str) -> str:
    """
    Map a path to one of the 16 bucket labels.

    The raw path bytes are hashed, not the file contents, so a file keeps
    its owner when its contents change. Names that are not valid UTF-8
    hash the same bytes the filesystem holds.

    Args:
        path: Path exactly as produced by the tree walker

    Returns:
        First hex character of the SHA-1 digest of the path
    """
    return hashlib.sha1(os.fsencode(path)).hexdigest()[0]


def is_owned(path: str, owned_buckets: AbstractSet[str]) -> bool:
    """Check whether the path routes to one of this node's buckets."""
    return route(path) in owned_buckets


def object_key(path: str) -> str:
    """Object key for a local path: the path minus its leading separator."""
    return path[KEY_PREFIX_LENGTH:]
