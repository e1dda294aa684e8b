"""initialize / initialized / shutdown / exit."""

from __future__ import annotations

import logging
from typing import Any, Optional

from lsprotocol.types import InitializeResult

from ..protocol import initialize_result
from ..session import SessionContext

logger = logging.getLogger(__name__)


def initialize(session: SessionContext, params: Any) -> InitializeResult:
    client = getattr(params, "client_info", None)
    if client is not None:
        logger.info("Client: %s %s", client.name, client.version or "")
    return initialize_result()


def initialized(session: SessionContext, params: Any) -> None:
    logger.info("Client finished initialisation")


def shutdown(session: SessionContext, params: Any) -> None:
    session.shutdown_requested = True
    logger.info("Shutdown requested")
    return None


def exit_server(session: Optional[SessionContext], params: Any) -> None:
    """Terminate the process; the status is 0 only after ``shutdown``."""

    status = 0 if session is not None and session.shutdown_requested else 1
    logger.info("Exiting with status %d", status)
    raise SystemExit(status)


__all__ = ["initialize", "initialized", "shutdown", "exit_server"]
