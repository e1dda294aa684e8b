"""Method table and failure boundary for inbound protocol messages."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from lsprotocol.types import EXIT, INITIALIZE

from .session import DiagnosticsNotifier, EngineFactory, SessionContext, create_session

logger = logging.getLogger(__name__)

Handler = Callable[[SessionContext, Any], Any]


class Dispatcher:
    """Routes one message at a time to its handler.

    The dispatcher owns the session.  ``initialize`` creates it, every other
    handler receives it as its first argument.  Each message runs to
    completion before the caller hands over the next one.

    Failure rules:

    * unknown methods are ignored and answered with ``None``;
    * messages arriving before ``initialize`` are ignored;
    * any exception raised by a handler is logged and swallowed, and a
      request then answers ``None``;
    * ``exit`` never goes through the boundary, so the ``SystemExit`` it
      raises always reaches the caller.
    """

    def __init__(
        self,
        notifier: DiagnosticsNotifier,
        *,
        engine_factory: Optional[EngineFactory] = None,
    ) -> None:
        self.notifier = notifier
        self.engine_factory = engine_factory
        self.session: Optional[SessionContext] = None
        self._handlers: Dict[str, Handler] = {}

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------
    def register(self, method: str, handler: Handler) -> None:
        if method in self._handlers:
            raise ValueError(f"Handler already registered for '{method}'")
        self._handlers[method] = handler

    def methods(self) -> List[str]:
        return list(self._handlers)

    def handles(self, method: str) -> bool:
        return method in self._handlers

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(self, method: str, params: Any = None) -> Any:
        handler = self._handlers.get(method)
        if handler is None:
            logger.debug("Ignoring unknown method %s", method)
            return None

        if method == EXIT:
            return handler(self.session, params)

        if method == INITIALIZE:
            return self._guarded(method, self._initialize, handler, params)

        if self.session is None:
            logger.warning("Ignoring %s received before initialize", method)
            return None
        return self._guarded(method, handler, self.session, params)

    def _initialize(self, handler: Handler, params: Any) -> Any:
        if self.session is not None:
            logger.warning("Received a second initialize; keeping the existing session")
        else:
            self.session = create_session(params, self.notifier, self.engine_factory)
        return handler(self.session, params)

    def _guarded(self, method: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return func(*args)
        except Exception:
            logger.exception("Error handling %s", method)
            return None


__all__ = ["Dispatcher", "Handler"]
