"""Command-line flag parsing."""

import argparse
from typing import List, Optional

from common.constants import ACTIONS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the q2s3 command."""
    parser = argparse.ArgumentParser(
        prog="q2s3",
        description="Sync this node's share of a cluster directory tree to S3.",
    )
    parser.add_argument("--basedir", default="",
                        help="the locally-available directory to source for the upload/download process")
    parser.add_argument("--s3bucket", default="", help="source or destination S3 bucket")
    parser.add_argument("--region", default="", help="AWS region")
    parser.add_argument("--action", default="", help=f"specify {' or '.join(repr(a) for a in ACTIONS)}")
    parser.add_argument("--node-name", default=None,
                        help="identity of this node in the roster (default: hostname)")
    parser.add_argument("--roster", default=None,
                        help="comma-separated node names; skips qq nodes_list")
    parser.add_argument("--strict-roster", action="store_true", default=None,
                        help="fail when this node is not in the roster instead of acting as node 0")
    parser.add_argument("--workers", type=int, default=None, help="parallel uploads (default 1)")
    parser.add_argument("--log-file", default=None, help="append log records to this file")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line flags (defaults to sys.argv)."""
    return build_parser().parse_args(argv)


def missing_required(args: argparse.Namespace) -> List[str]:
    """Names of required flags left empty."""
    return [name for name in ("basedir", "s3bucket", "region") if not getattr(args, name)]
