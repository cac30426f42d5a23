"""Cluster roster resolution (qq nodes_list or a static list) and local identity."""

import socket
import subprocess
from typing import List, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from common.constants import DEFAULT_QQ_PATH
from common.logging_config import get_logger
from syncer.exceptions import RosterUnavailableError

logger = get_logger(__name__)

QQ_TIMEOUT_SECONDS = 60


class RosterEntry(BaseModel):
    """One record of `qq nodes_list` output."""
    id: Optional[int] = None
    node_name: str
    label: Optional[str] = None
    mac_address: Optional[str] = None
    model_number: Optional[str] = None
    node_status: Optional[str] = None
    serial_number: Optional[str] = None
    uuid: Optional[str] = None


_ROSTER_ADAPTER = TypeAdapter(List[RosterEntry])


def parse_nodes_list(raw: str) -> List[str]:
    """
    Parse `qq nodes_list` JSON into node names, preserving order.

    Args:
        raw: JSON array emitted by qq

    Returns:
        Node names in the order qq returned them

    Raises:
        RosterUnavailableError: If the JSON is malformed
    """
    try:
        entries = _ROSTER_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise RosterUnavailableError(f"Unable to unmarshal json, {e}") from e

    return [entry.node_name for entry in entries]


def fetch_qq_roster(qq_path: str = DEFAULT_QQ_PATH) -> List[str]:
    """
    Run `qq nodes_list` and return the ordered node names.

    Raises:
        RosterUnavailableError: If qq is missing, fails, times out or emits bad JSON
    """
    try:
        result = subprocess.run(
            [qq_path, "nodes_list"],
            capture_output=True,
            text=True,
            check=True,
            timeout=QQ_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        raise RosterUnavailableError(
            f"Unable to access qq. Verify that you are authenticated., {e}"
        ) from e

    return parse_nodes_list(result.stdout)


def parse_static_roster(value: str) -> List[str]:
    """Split a comma-separated roster, dropping blanks but keeping order."""
    return [name.strip() for name in value.split(",") if name.strip()]


def resolve_roster(static_roster: Optional[str] = None, qq_path: str = DEFAULT_QQ_PATH) -> List[str]:
    """
    Resolve the cluster roster once for this run.

    A static roster takes precedence over qq. Every node must see the same
    names in the same order. An empty roster is returned as-is; the
    partitioner rejects it.

    Raises:
        RosterUnavailableError: If qq cannot be queried
    """
    if static_roster:
        nodes = parse_static_roster(static_roster)
        source = "static"
    else:
        nodes = fetch_qq_roster(qq_path)
        source = qq_path

    logger.info(f"Cluster nodes: {len(nodes)} (source={source}) {nodes}")
    return nodes


def local_node_name(override: Optional[str] = None) -> str:
    """This node's identity as it appears in the roster."""
    if override:
        return override
    return socket.gethostname()
