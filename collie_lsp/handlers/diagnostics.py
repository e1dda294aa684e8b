"""Grammar Engine offenses to protocol diagnostics."""

from __future__ import annotations

from typing import Any, Iterable, List

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position, Range

from ..engine.ast import Offense
from ..protocol import to_position
from ..session import SessionContext

DIAGNOSTIC_SOURCE = "collie"

# Offenses carry no end position.
APPROXIMATE_WIDTH = 10

_SEVERITIES = {
    "error": DiagnosticSeverity.Error,
    "warning": DiagnosticSeverity.Warning,
    "convention": DiagnosticSeverity.Information,
    "info": DiagnosticSeverity.Hint,
}


def severity_to_lsp(severity: Any) -> DiagnosticSeverity:
    """Map an engine severity tag onto the protocol scale; unknown tags are informational."""

    key = str(getattr(severity, "value", severity)).lower() if severity is not None else ""
    return _SEVERITIES.get(key, DiagnosticSeverity.Information)


def offense_to_diagnostic(offense: Offense) -> Diagnostic:
    start = to_position(offense.location)
    end = Position(line=start.line, character=start.character + APPROXIMATE_WIDTH)
    return Diagnostic(
        range=Range(start=start, end=end),
        severity=severity_to_lsp(offense.severity),
        code=offense.rule_name,
        source=DIAGNOSTIC_SOURCE,
        message=offense.message,
    )


def publish(session: SessionContext, uri: str, offenses: Iterable[Offense]) -> List[Diagnostic]:
    """Store the diagnostics for *uri* and push the full list to the client."""

    diagnostics = [offense_to_diagnostic(offense) for offense in offenses]
    session.documents.update_diagnostics(uri, diagnostics)
    record = session.documents.get(uri)
    session.publish(uri, diagnostics, record.version if record is not None else None)
    return diagnostics


__all__ = [
    "APPROXIMATE_WIDTH",
    "DIAGNOSTIC_SOURCE",
    "severity_to_lsp",
    "offense_to_diagnostic",
    "publish",
]
