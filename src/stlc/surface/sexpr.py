"""S-expression trees produced by the reader."""

from __future__ import annotations

from dataclasses import dataclass

from stlc.common.span import Span


@dataclass(frozen=True)
class Datum:
    span: Span


@dataclass(frozen=True)
class SSymbol(Datum):
    name: str


@dataclass(frozen=True)
class SInt(Datum):
    value: int


@dataclass(frozen=True)
class SQuoted(Datum):
    """A quoted symbol ``'name``."""

    name: str


@dataclass(frozen=True)
class SList(Datum):
    """A parenthesized list ``( ... )``."""

    items: tuple[Datum, ...]


@dataclass(frozen=True)
class SBracket(Datum):
    """A bracketed list literal ``[ ... ]``."""

    items: tuple[Datum, ...]


__all__ = ["Datum", "SSymbol", "SInt", "SQuoted", "SList", "SBracket"]
