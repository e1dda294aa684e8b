"""Guarded access to the configured Grammar Engine backend."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from ..config import WorkspaceConfig, load_workspace_config
from ..errors import ConfigError, EngineError, SchemaError
from .ast import GrammarAst, Offense
from .base import NullEngine

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "grammar.y"


def resolve_factory(reference: str) -> Callable[..., Any]:
    """Import ``"package.module:attribute"`` and return the attribute."""

    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigError(
            f"Invalid engine reference '{reference}'",
            hint="Use the form 'package.module:Factory'.",
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import engine module '{module_name}': {exc}") from exc
    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ConfigError(f"Engine module '{module_name}' has no attribute '{attribute}'") from exc
    if not callable(target):
        raise ConfigError(f"Engine reference '{reference}' is not callable")
    return target


def load_backend(config: WorkspaceConfig) -> Any:
    """Build the backend named in *config*, or a :class:`NullEngine`."""

    if not config.engine:
        return NullEngine(config.raw)
    try:
        factory = resolve_factory(config.engine)
        backend = factory(config.raw)
    except ConfigError as exc:
        logger.warning("Falling back to the null grammar engine: %s", exc.format())
        return NullEngine(config.raw)
    except Exception:
        logger.exception("Grammar engine factory %s failed; using the null grammar engine", config.engine)
        return NullEngine(config.raw)
    logger.info("Using grammar engine %s", config.engine)
    return backend


class EngineWrapper:
    """Calls into a Grammar Engine backend without ever letting it fail.

    Every backend error, and every result that does not validate against the
    engine schemas, is logged and the operation degrades to its empty result.
    ``autocorrect`` hands back the source unchanged.
    """

    def __init__(
        self,
        workspace_root: Optional[Path] = None,
        *,
        backend: Any = None,
        config: Optional[WorkspaceConfig] = None,
    ) -> None:
        self.workspace_root = workspace_root
        self.config = config if config is not None else load_workspace_config(workspace_root)
        self.backend = backend if backend is not None else load_backend(self.config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def parse(self, source: str, filename: str = DEFAULT_FILENAME) -> Optional[GrammarAst]:
        try:
            raw = self.backend.parse(source, filename)
            if raw is None:
                return None
            return self._validate_ast(raw)
        except Exception as exc:
            self._report("parse", filename, exc)
            return None

    def lint(self, source: str, filename: str = DEFAULT_FILENAME) -> List[Offense]:
        try:
            raw_offenses = list(self.backend.lint(source, filename) or [])
        except Exception as exc:
            self._report("lint", filename, exc)
            return []
        offenses: List[Offense] = []
        for raw in raw_offenses:
            try:
                offenses.append(self._validate_offense(raw))
            except SchemaError as exc:
                self._report("lint", filename, exc)
        return offenses

    def format(self, source: str, filename: str = DEFAULT_FILENAME) -> Optional[str]:
        try:
            formatted = self.backend.format(source, filename)
        except Exception as exc:
            self._report("format", filename, exc)
            return None
        if formatted is None:
            return None
        if not isinstance(formatted, str):
            self._report("format", filename, SchemaError("format must return a string", operation="format"))
            return None
        return formatted

    def autocorrect(self, source: str, filename: str = DEFAULT_FILENAME) -> str:
        try:
            corrected = self.backend.autocorrect(source, filename)
        except Exception as exc:
            self._report("autocorrect", filename, exc)
            return source
        if not isinstance(corrected, str):
            self._report(
                "autocorrect", filename, SchemaError("autocorrect must return a string", operation="autocorrect")
            )
            return source
        return corrected

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _validate_ast(self, raw: Any) -> GrammarAst:
        if isinstance(raw, GrammarAst):
            return raw
        try:
            return GrammarAst.model_validate(raw)
        except ValidationError as exc:
            raise SchemaError(f"Invalid grammar AST: {exc}", operation="parse") from exc

    def _validate_offense(self, raw: Any) -> Offense:
        if isinstance(raw, Offense):
            return raw
        try:
            return Offense.model_validate(raw)
        except ValidationError as exc:
            raise SchemaError(f"Invalid offense: {exc}", operation="lint") from exc

    def _report(self, operation: str, filename: str, exc: Exception) -> None:
        if isinstance(exc, EngineError):
            logger.warning("Grammar engine %s failed for %s: %s", operation, filename, exc.format())
        else:
            logger.warning("Grammar engine %s failed for %s", operation, filename, exc_info=exc)


__all__ = ["EngineWrapper", "DEFAULT_FILENAME", "load_backend", "resolve_factory"]
