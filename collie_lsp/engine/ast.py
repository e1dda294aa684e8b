"""Validated schemas for data produced by the Grammar Engine.

Backends may hand back either these models or plain mappings with the same
shape; :mod:`collie_lsp.engine.wrapper` validates the latter with
``model_validate`` before anything else in the server sees them.

Locations use the engine's 1-based ``line``/``column`` numbering.  Conversion
to editor coordinates happens in :mod:`collie_lsp.protocol` and nowhere else.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EngineModel(BaseModel):
    """Base class for engine schemas: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class SourceLocation(EngineModel):
    line: int = Field(1, ge=1)
    column: int = Field(1, ge=1)


class TokenDeclaration(EngineModel):
    """``%token [<tag>] NAME ...``"""

    kind: Literal["token"] = "token"
    names: List[str] = Field(default_factory=list)
    type_tag: Optional[str] = None
    location: Optional[SourceLocation] = None


class TypeDeclaration(EngineModel):
    """``%type <tag> name ...``"""

    kind: Literal["type"] = "type"
    names: List[str] = Field(default_factory=list)
    type_tag: Optional[str] = None
    location: Optional[SourceLocation] = None


class PrecedenceDeclaration(EngineModel):
    """``%left``, ``%right`` and ``%nonassoc`` lines."""

    kind: Literal["left", "right", "nonassoc"]
    tokens: List[str] = Field(default_factory=list)
    location: Optional[SourceLocation] = None

    @property
    def names(self) -> List[str]:
        return self.tokens

    @property
    def associativity(self) -> str:
        return self.kind.capitalize()


Declaration = Annotated[
    Union[TokenDeclaration, TypeDeclaration, PrecedenceDeclaration],
    Field(discriminator="kind"),
]


class GrammarSymbol(EngineModel):
    name: str
    location: Optional[SourceLocation] = None


class Alternative(EngineModel):
    """One right-hand side of a rule."""

    symbols: List[GrammarSymbol] = Field(default_factory=list)
    location: Optional[SourceLocation] = None

    def describe(self) -> str:
        if not self.symbols:
            return "ε"
        return " ".join(symbol.name for symbol in self.symbols)


class Rule(EngineModel):
    """A nonterminal and its alternatives."""

    name: str
    location: Optional[SourceLocation] = None
    alternatives: List[Alternative] = Field(default_factory=list)


class GrammarAst(EngineModel):
    declarations: List[Declaration] = Field(default_factory=list)
    rules: List[Rule] = Field(default_factory=list)
    prologue: Optional[str] = None
    epilogue: Optional[str] = None

    def token_declarations(self) -> List[TokenDeclaration]:
        return [decl for decl in self.declarations if isinstance(decl, TokenDeclaration)]

    def type_declarations(self) -> List[TypeDeclaration]:
        return [decl for decl in self.declarations if isinstance(decl, TypeDeclaration)]

    def precedence_declarations(self) -> List[PrecedenceDeclaration]:
        return [decl for decl in self.declarations if isinstance(decl, PrecedenceDeclaration)]


class Offense(EngineModel):
    """A single lint finding."""

    message: str = "Unknown error"
    severity: str = "convention"
    rule_name: str = Field("unknown", alias="rule")
    location: SourceLocation = Field(default_factory=SourceLocation)

    @field_validator("severity", mode="before")
    @classmethod
    def _normalise_severity(cls, value: Any) -> str:
        value = getattr(value, "value", value)
        return str(value).lower() if value is not None else "convention"

    @field_validator("message", "rule_name", mode="before")
    @classmethod
    def _fill_missing_text(cls, value: Any, info: Any) -> Any:
        if value is None:
            return "Unknown error" if info.field_name == "message" else "unknown"
        return value

    @field_validator("location", mode="before")
    @classmethod
    def _default_location(cls, value: Any) -> Any:
        return SourceLocation() if value is None else value


__all__ = [
    "SourceLocation",
    "TokenDeclaration",
    "TypeDeclaration",
    "PrecedenceDeclaration",
    "Declaration",
    "GrammarSymbol",
    "Alternative",
    "Rule",
    "GrammarAst",
    "Offense",
]
