"""Surface AST: types, expressions and top-level declarations."""

from __future__ import annotations

from dataclasses import dataclass

from stlc.common.span import Span


@dataclass(frozen=True)
class SurfaceType:
    span: Span


@dataclass(frozen=True)
class STNat(SurfaceType):
    pass


@dataclass(frozen=True)
class STAtom(SurfaceType):
    pass


@dataclass(frozen=True)
class STArrow(SurfaceType):
    """``(-> A B ... R)``, right-nested."""

    args: tuple[SurfaceType, ...]
    result: SurfaceType


@dataclass(frozen=True)
class STPair(SurfaceType):
    fst: SurfaceType
    snd: SurfaceType


@dataclass(frozen=True)
class STList(SurfaceType):
    elem: SurfaceType


@dataclass(frozen=True)
class SurfaceTerm:
    span: Span


@dataclass(frozen=True)
class SBinder:
    name: str
    span: Span


@dataclass(frozen=True)
class SVar(SurfaceTerm):
    name: str


@dataclass(frozen=True)
class SLam(SurfaceTerm):
    binders: tuple[SBinder, ...]
    body: SurfaceTerm


@dataclass(frozen=True)
class SApp(SurfaceTerm):
    fn: SurfaceTerm
    args: tuple[SurfaceTerm, ...]


@dataclass(frozen=True)
class SQuote(SurfaceTerm):
    name: str


@dataclass(frozen=True)
class SZero(SurfaceTerm):
    pass


@dataclass(frozen=True)
class SAdd1(SurfaceTerm):
    n: SurfaceTerm


@dataclass(frozen=True)
class SNum(SurfaceTerm):
    """A decimal numeral, shorthand for an ``add1`` chain."""

    value: int


@dataclass(frozen=True)
class SRecNat(SurfaceTerm):
    target: SurfaceTerm
    base: SurfaceTerm
    step: SurfaceTerm


@dataclass(frozen=True)
class SCons(SurfaceTerm):
    fst: SurfaceTerm
    snd: SurfaceTerm


@dataclass(frozen=True)
class SCar(SurfaceTerm):
    pair: SurfaceTerm


@dataclass(frozen=True)
class SCdr(SurfaceTerm):
    pair: SurfaceTerm


@dataclass(frozen=True)
class SNil(SurfaceTerm):
    pass


@dataclass(frozen=True)
class SListCons(SurfaceTerm):
    head: SurfaceTerm
    tail: SurfaceTerm


@dataclass(frozen=True)
class SRecList(SurfaceTerm):
    target: SurfaceTerm
    base: SurfaceTerm
    step: SurfaceTerm


@dataclass(frozen=True)
class SThe(SurfaceTerm):
    ty: SurfaceType
    term: SurfaceTerm


@dataclass(frozen=True)
class STuple(SurfaceTerm):
    """``(, a b c)``: nested pairs."""

    items: tuple[SurfaceTerm, ...]


@dataclass(frozen=True)
class SListLit(SurfaceTerm):
    """``[a b c]``: a list literal."""

    items: tuple[SurfaceTerm, ...]


@dataclass(frozen=True)
class SDecl:
    span: Span


@dataclass(frozen=True)
class SClaim(SDecl):
    name: str
    ty: SurfaceType


@dataclass(frozen=True)
class SDefine(SDecl):
    name: str
    term: SurfaceTerm


@dataclass(frozen=True)
class SEval(SDecl):
    """A bare top-level expression to normalize."""

    term: SurfaceTerm


@dataclass(frozen=True)
class SProgram:
    decls: tuple[SDecl, ...]


__all__ = [
    "SurfaceType",
    "STNat",
    "STAtom",
    "STArrow",
    "STPair",
    "STList",
    "SurfaceTerm",
    "SBinder",
    "SVar",
    "SLam",
    "SApp",
    "SQuote",
    "SZero",
    "SAdd1",
    "SNum",
    "SRecNat",
    "SCons",
    "SCar",
    "SCdr",
    "SNil",
    "SListCons",
    "SRecList",
    "SThe",
    "STuple",
    "SListLit",
    "SDecl",
    "SClaim",
    "SDefine",
    "SEval",
    "SProgram",
]
