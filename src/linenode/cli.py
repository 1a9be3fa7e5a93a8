# SPDX-FileCopyrightText: 2026 Linenode authors
#
# SPDX-License-Identifier: Apache-2.0

"""Process entry point. Replies go to stdout, diagnostics to stderr."""

import argparse
import contextlib
import logging
import sys
from pathlib import Path

from linenode.logging import EventLog
from linenode.node import ProtocolError
from linenode.protocol import DecodeError
from linenode.server import NodeServer

_log = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linenode",
        description="Answer line-delimited JSON protocol messages on stdin.",
    )
    parser.add_argument(
        "--trace",
        type=Path,
        default=None,
        help="Append a JSONL trace of handled messages to this file.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Threshold for diagnostics written to stderr.",
    )
    return parser


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    """Serve stdin until it is exhausted. Returns the process exit status."""
    args = _parser().parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        with contextlib.ExitStack() as stack:
            trace = None
            if args.trace is not None:
                trace = stack.enter_context(EventLog(args.trace))
            server = NodeServer(_write_stdout, trace=trace)
            server.serve(sys.stdin)
    except (DecodeError, ProtocolError, OSError) as exc:
        _log.error("fatal: %s: %s", type(exc).__name__, exc)
        if isinstance(exc, DecodeError) and exc.line is not None:
            _log.error("offending line: %.200r", exc.line)
        return 1
    return 0
