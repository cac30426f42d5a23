"""Live status line for sync events, sized to the terminal."""

import sys
from typing import Optional, TextIO

from prompt_toolkit.data_structures import Size
from prompt_toolkit.output import Output, create_output

from cli.utils import scale_transfer, truncate
from common.constants import DEFAULT_TERMINAL_WIDTH
from common.types import SyncEvent, SyncOutcome

SKIP_MARGIN = 10
XFER_MARGIN = 50


def terminal_size(stream: Optional[TextIO] = None) -> Optional[Size]:
    """
    Detect the terminal attached to a stream.

    Returns:
        Size(rows, columns), or None when the stream is not a terminal
    """
    stream = stream or sys.stdout
    try:
        if not stream.isatty():
            return None
        return create_output(stdout=stream).get_size()
    except (OSError, ValueError):
        return None


def format_status(event: SyncEvent, width: int) -> Optional[str]:
    """
    Render one sync event as a status line.

    Failed files are not rendered; they go to the log only.

    Args:
        event: Event emitted by the tree walker
        width: Terminal width in columns

    Returns:
        Status text, or None if the event is not displayed
    """
    if event.error is not None or event.outcome is None:
        return None

    if event.outcome is SyncOutcome.SKIP:
        return f"[SKIP: {truncate(event.path, width - SKIP_MARGIN)}]"

    value, unit = scale_transfer(event.total_bytes)
    return (
        f"[XFER: {value:.2f} {unit} AVG: {event.avg_kbps:.2f} KB/s] "
        f"{event.outcome.label}: {truncate(event.path, width - XFER_MARGIN)}"
    )


class ProgressDisplay:
    """
    Overwrites a single terminal line with the latest sync status.
    """

    def __init__(self, output: Optional[Output] = None, width: int = DEFAULT_TERMINAL_WIDTH):
        """
        Args:
            output: prompt_toolkit Output to draw on (default: stdout)
            width: Terminal width for status lines
        """
        self.output = output or create_output(stdout=sys.stdout)
        self.width = width
        self.shown = 0

    def show(self, event: SyncEvent) -> None:
        """Replace the current status line with this event."""
        text = format_status(event, self.width)
        if text is None:
            return

        self.output.write_raw("\r")
        self.output.erase_end_of_line()
        self.output.write(text)
        self.output.flush()
        self.shown += 1

    def finish(self) -> None:
        """Move past the status line."""
        if self.shown:
            self.output.write("\n")
            self.output.flush()
