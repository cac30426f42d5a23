"""CLI entry point: startup checks, direction dispatch and exit codes."""

import sys
import time
from typing import Callable, List, Optional, TextIO

from cli.constants import (
    DONE,
    DOWNLOAD_DISABLED,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_OK,
    LOGFILE_ERROR,
    LOGGER_NAMES,
    NO_BUCKETS,
    NO_TERMINAL,
)
from cli.parser import build_parser, missing_required, parse_args
from cli.progress import ProgressDisplay, terminal_size
from cli.utils import format_file_size
from common.constants import ACTION_DOWNLOAD, ACTION_UPLOAD, ACTIONS, DEFAULT_TERMINAL_WIDTH
from common.logging_config import setup_logging, shutdown_logging
from syncer.config import SyncSettings, load_settings
from syncer.exceptions import LogSetupError, SyncError, UnsupportedDirectionError
from syncer.object_store import ObjectStore, create_s3_client
from syncer.partitioner import assign
from syncer.roster import local_node_name, resolve_roster
from syncer.sync_decision import SyncEngine
from syncer.transfer_stats import TransferStats
from syncer.tree_walker import TreeWalker


def _say(out: TextIO, message: str = "") -> None:
    out.write(f"{message}\n")
    out.flush()


def configure_logging(settings: SyncSettings, debug: bool = False):
    """
    Attach the persistent log to the cli, syncer and common loggers.

    Raises:
        LogSetupError: If the log file cannot be opened
    """
    level = "DEBUG" if debug else None
    try:
        return setup_logging(
            LOGGER_NAMES[0],
            log_level=level,
            log_file=settings.log_file,
            include=LOGGER_NAMES[1:],
        )
    except OSError as e:
        raise LogSetupError(LOGFILE_ERROR.format(error=e)) from e


def run_upload(
    settings: SyncSettings,
    display: ProgressDisplay,
    client_factory: Callable = create_s3_client,
    sleep: Callable[[float], None] = time.sleep,
    out: Optional[TextIO] = None
) -> int:
    """
    Resolve ownership, confirm the bucket and sync this node's files.

    Raises:
        SyncError: On any fatal startup failure
    """
    out = out or sys.stdout

    roster = resolve_roster(settings.roster, settings.qq_path)
    _say(out, f"Cluster nodes: {len(roster)}")

    name = local_node_name(settings.node_name)
    owned = assign(roster, name, strict=settings.strict_roster)
    if not owned:
        _say(out, NO_BUCKETS)
        return EXIT_OK

    for position, bucket in enumerate(sorted(owned), start=1):
        _say(out, f"Bucket {position} {bucket}")

    client = client_factory(
        settings.region,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        max_attempts=settings.max_attempts,
    )
    store = ObjectStore(client, settings.s3bucket)
    created = store.confirm_bucket()
    _say(out, f"* {settings.s3bucket} created on {created}")

    _say(out, f"Uploading {settings.basedir} to {settings.s3bucket} on {name}")
    if settings.start_delay:
        sleep(settings.start_delay)

    stats = TransferStats()
    walker = TreeWalker(
        SyncEngine(store, stats),
        owned,
        on_event=display.show,
        workers=settings.workers,
    )
    try:
        report = walker.walk(settings.basedir)
    finally:
        display.finish()

    _say(out, DONE)
    _say(out, f"Processed {stats.total_bytes} bytes ({format_file_size(stats.total_bytes)})")
    if report.failed:
        _say(out, f"{report.failed} file(s) failed; see log for details")
    return EXIT_OK


def dispatch(settings: SyncSettings, display: ProgressDisplay, out: Optional[TextIO] = None, **kwargs) -> int:
    """
    Run the requested direction.

    Raises:
        UnsupportedDirectionError: For the download direction
    """
    out = out or sys.stdout
    if settings.action == ACTION_UPLOAD:
        return run_upload(settings, display, out=out, **kwargs)
    if settings.action == ACTION_DOWNLOAD:
        _say(out, f"Downloading {settings.s3bucket} to {settings.basedir}")
        raise UnsupportedDirectionError(DOWNLOAD_DISABLED)
    raise UnsupportedDirectionError(f"Unknown action: {settings.action}")


def run(
    argv: Optional[List[str]] = None,
    client_factory: Callable = create_s3_client,
    sleep: Callable[[float], None] = time.sleep,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    display: Optional[ProgressDisplay] = None
) -> int:
    """
    Execute one invocation and return the process exit code.
    """
    out = out or sys.stdout
    err = err or sys.stderr

    size = terminal_size(out)
    if size is None:
        _say(out, NO_TERMINAL)
        width = DEFAULT_TERMINAL_WIDTH
    else:
        _say(out, f"Found terminal: {size.columns} {size.rows}")
        width = size.columns

    args = parse_args(argv)
    if missing_required(args) or args.action not in ACTIONS:
        build_parser().print_help(err)
        return EXIT_FAILURE

    try:
        settings = load_settings(
            basedir=args.basedir,
            s3bucket=args.s3bucket,
            region=args.region,
            action=args.action,
            node_name=args.node_name,
            roster=args.roster,
            strict_roster=args.strict_roster,
            workers=args.workers,
            log_file=args.log_file,
        )
        logger = configure_logging(settings, debug=args.debug)
    except SyncError as e:
        _say(err, str(e))
        return EXIT_FAILURE

    logger.info("Starting up...")

    try:
        display = display or ProgressDisplay(width=width)
        return dispatch(
            settings,
            display,
            client_factory=client_factory,
            sleep=sleep,
            out=out,
        )
    except SyncError as e:
        _say(err, str(e))
        logger.error(f"Fatal: {e}")
        return EXIT_FAILURE
    except KeyboardInterrupt:
        _say(err, "\nInterrupted")
        logger.warning("Interrupted by user")
        return EXIT_INTERRUPTED
    finally:
        logger.info("Exiting")
        shutdown_logging(*LOGGER_NAMES)


def main() -> None:
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
