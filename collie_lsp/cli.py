"""Command line entry point for the grammar language server."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import LOG_ENV_VAR, log_destination

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"


def configure_logging(log_file: Optional[Path], *, verbose: bool = False) -> logging.Logger:
    """Attach a single handler to the package logger.

    Nothing may be written to stdout, which carries the protocol stream.
    Without a destination every record is dropped.
    """

    logger = logging.getLogger("collie_lsp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="collie-lsp",
        description="Language server for yacc/bison grammar files.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help=f"Append log records to this file (default: ${LOG_ENV_VAR}, otherwise no logging)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--tcp", action="store_true", help="Serve over TCP instead of stdio")
    parser.add_argument("--host", default="127.0.0.1", help="TCP host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=2087, help="TCP port (default: 2087)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_file = args.log_file if args.log_file is not None else log_destination()
    try:
        configure_logging(log_file, verbose=args.verbose)
    except OSError as exc:
        print(f"collie-lsp: cannot open log file {log_file}: {exc}", file=sys.stderr)
        return 1

    from .server import create_server, serve

    serve(create_server(), tcp=args.tcp, host=args.host, port=args.port)
    return 0


__all__ = ["LOG_FORMAT", "build_parser", "configure_logging", "main"]
