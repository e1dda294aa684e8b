"""Session context created by ``initialize`` and threaded into every handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Protocol, Sequence

from lsprotocol.types import Diagnostic
from pygls.uris import to_fs_path

from .engine import EngineWrapper
from .state import DocumentStore

logger = logging.getLogger(__name__)

EngineFactory = Callable[[Optional[Path]], EngineWrapper]


class DiagnosticsNotifier(Protocol):
    """Anything able to push ``textDocument/publishDiagnostics`` to the client."""

    def publish_diagnostics(
        self,
        uri: str,
        diagnostics: List[Diagnostic],
        version: Optional[int] = None,
    ) -> None: ...


@dataclass
class SessionContext:
    """Process wide state: established once at ``initialize``."""

    workspace_root: Optional[Path]
    engine: EngineWrapper
    notifier: DiagnosticsNotifier
    documents: DocumentStore = field(default_factory=DocumentStore)
    shutdown_requested: bool = False

    def publish(self, uri: str, diagnostics: Sequence[Diagnostic], version: Optional[int] = None) -> None:
        self.notifier.publish_diagnostics(uri, list(diagnostics), version)


def resolve_workspace_root(params: Any) -> Optional[Path]:
    """Pick the workspace root out of ``initialize`` parameters.

    ``rootUri`` wins over the deprecated ``rootPath``; the first workspace
    folder is used when neither is sent.
    """

    root_uri = getattr(params, "root_uri", None)
    if root_uri:
        path = _uri_to_path(root_uri)
        if path is not None:
            return path
    root_path = getattr(params, "root_path", None)
    if root_path:
        return Path(root_path)
    for folder in getattr(params, "workspace_folders", None) or []:
        path = _uri_to_path(folder.uri)
        if path is not None:
            return path
    return None


def _uri_to_path(uri: str) -> Optional[Path]:
    try:
        path = to_fs_path(uri)
    except ValueError:
        return None
    return Path(path) if path else None


def create_session(
    params: Any,
    notifier: DiagnosticsNotifier,
    engine_factory: Optional[EngineFactory] = None,
) -> SessionContext:
    root = resolve_workspace_root(params)
    factory = engine_factory or EngineWrapper
    engine = factory(root)
    logger.info("Session initialised (workspace root: %s)", root or "<none>")
    return SessionContext(workspace_root=root, engine=engine, notifier=notifier)


__all__ = [
    "DiagnosticsNotifier",
    "EngineFactory",
    "SessionContext",
    "create_session",
    "resolve_workspace_root",
]
