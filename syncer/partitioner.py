"""Bucket ownership: splits the 16-bucket hash space across roster positions."""

from typing import Dict, FrozenSet, Sequence

from common.constants import BUCKETS, BUCKET_COUNT
from common.logging_config import get_logger
from common.types import Node
from syncer.exceptions import ConfigurationError

logger = get_logger(__name__)


def locate_node(roster: Sequence[str], name: str, strict: bool = False) -> Node:
    """
    Find this node's ordinal index in the roster.

    The whole roster is scanned and the last matching position wins. A name
    that is absent falls back to ordinal 0, which duplicates node 0's work;
    pass strict=True to make that a configuration error instead.

    Args:
        roster: Ordered node names as returned by the roster resolver
        name: This node's identity
        strict: Raise instead of falling back to ordinal 0

    Returns:
        Node with the resolved ordinal index

    Raises:
        ConfigurationError: If the roster is empty, or name is absent in strict mode
    """
    if not roster:
        raise ConfigurationError("Cluster roster is empty; cannot assign buckets")

    ordinal = None
    for index, member in enumerate(roster):
        if member == name:
            ordinal = index

    if ordinal is None:
        if strict:
            raise ConfigurationError(f"Node '{name}' is not present in the cluster roster")
        logger.warning(
            f"Node '{name}' not found in roster of {len(roster)} node(s); "
            f"defaulting to ordinal 0"
        )
        ordinal = 0

    return Node(name=name, ordinal=ordinal)


def buckets_for_ordinal(ordinal: int, roster_size: int) -> FrozenSet[str]:
    """
    Compute the buckets owned by one roster position.

    Round-robin with remainder: position i owns x*N + i for every full
    round x, plus q*N + i when i < r.

    Args:
        ordinal: Zero-based roster position
        roster_size: Number of nodes in the roster (N)

    Returns:
        Frozen set of bucket labels, empty when the position owns nothing

    Raises:
        ConfigurationError: If roster_size is not positive
    """
    if roster_size <= 0:
        raise ConfigurationError("Cluster roster is empty; cannot assign buckets")

    quotient, remainder = divmod(BUCKET_COUNT, roster_size)

    positions = [x * roster_size + ordinal for x in range(quotient)]
    if ordinal < remainder:
        positions.append(quotient * roster_size + ordinal)

    return frozenset(BUCKETS[p] for p in positions)


def assign(roster: Sequence[str], name: str, strict: bool = False) -> FrozenSet[str]:
    """
    Compute the bucket set owned by `name` within `roster`.

    Every node must observe the same roster in the same order for the
    per-node results to be disjoint and to cover the whole bucket space.
    """
    node = locate_node(roster, name, strict=strict)
    owned = buckets_for_ordinal(node.ordinal, len(roster))

    logger.info(
        f"Buckets: {BUCKET_COUNT}, nodes: {len(roster)}, "
        f"ordinal: {node.ordinal}, owned: {sorted(owned)}"
    )
    return owned


def ownership_table(roster_size: int) -> Dict[int, FrozenSet[str]]:
    """Full ordinal -> bucket set mapping for a roster of the given size."""
    return {
        ordinal: buckets_for_ordinal(ordinal, roster_size)
        for ordinal in range(roster_size)
    }
