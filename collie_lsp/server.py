"""pygls based Language Server entrypoint."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from lsprotocol.types import (
    EXIT,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    CompletionOptions,
    ServerCapabilities,
)
from pygls.protocol import LanguageServerProtocol
from pygls.server import LanguageServer

from . import __version__
from .dispatcher import Dispatcher
from .handlers import register_all
from .protocol import SEMANTIC_TOKENS_LEGEND, SERVER_NAME, TRIGGER_CHARACTERS, build_capabilities
from .session import EngineFactory

logger = logging.getLogger(__name__)

FEATURE_OPTIONS = {
    TEXT_DOCUMENT_COMPLETION: CompletionOptions(trigger_characters=list(TRIGGER_CHARACTERS)),
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL: SEMANTIC_TOKENS_LEGEND,
}


class CollieLanguageServerProtocol(LanguageServerProtocol):
    """Reports the fixed capability set regardless of what pygls derives."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self._server_capabilities = build_capabilities()
        super().__init__(*args, **kwargs)

    @property
    def server_capabilities(self) -> ServerCapabilities:
        return self._server_capabilities

    @server_capabilities.setter
    def server_capabilities(self, value: ServerCapabilities) -> None:
        self._server_capabilities = build_capabilities()


class CollieLanguageServer(LanguageServer):
    """Concrete LanguageServer that forwards every message to a :class:`Dispatcher`.

    pygls handles framing and its own lifecycle bookkeeping; the dispatcher
    owns the session and the method table.  ``exit`` stays with pygls, which
    terminates the process with the status the protocol requires.
    """

    def __init__(self, engine_factory: Optional[EngineFactory] = None) -> None:
        super().__init__(name=SERVER_NAME, version=__version__, protocol_cls=CollieLanguageServerProtocol)
        self.dispatcher = Dispatcher(self, engine_factory=engine_factory)
        register_all(self.dispatcher)
        for method in self.dispatcher.methods():
            if method != EXIT:
                self._bind(method)

    def _bind(self, method: str) -> None:
        def forward(ls: "CollieLanguageServer", params: Any) -> Any:
            return ls.dispatcher.dispatch(method, params)

        forward.__name__ = f"forward_{method.replace('/', '_')}"
        self.feature(method, FEATURE_OPTIONS.get(method))(forward)


def create_server(engine_factory: Optional[EngineFactory] = None) -> CollieLanguageServer:
    return CollieLanguageServer(engine_factory=engine_factory)


def serve(server: CollieLanguageServer, *, tcp: bool = False, host: str = "127.0.0.1", port: int = 2087) -> None:
    if tcp:
        logger.info("Starting collie-lsp on %s:%s (pid=%s)", host, port, os.getpid())
        server.start_tcp(host, port)
    else:
        logger.info("Starting collie-lsp on stdio (pid=%s)", os.getpid())
        server.start_io()


__all__ = ["CollieLanguageServer", "CollieLanguageServerProtocol", "FEATURE_OPTIONS", "create_server", "serve"]
