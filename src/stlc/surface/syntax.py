"""Turn reader output into the surface AST.

Keyword forms are recognized by their head symbol; anything else in head
position is an application. Shape errors raise :class:`MalformedSyntax`.
"""

from __future__ import annotations

from typing import Callable

from stlc.common.errors import MalformedSyntax
from stlc.common.span import Span
from stlc.surface.parse import read_datum, read_program
from stlc.surface.sast import (
    SAdd1,
    SApp,
    SBinder,
    SCar,
    SCdr,
    SClaim,
    SCons,
    SDecl,
    SDefine,
    SEval,
    SLam,
    SListCons,
    SListLit,
    SNil,
    SNum,
    SProgram,
    SQuote,
    SRecList,
    SRecNat,
    STArrow,
    STAtom,
    STList,
    STNat,
    STPair,
    STuple,
    SThe,
    SurfaceTerm,
    SurfaceType,
    SVar,
    SZero,
)
from stlc.surface.sexpr import Datum, SBracket, SInt, SList, SQuoted, SSymbol

KEYWORDS = frozenset(
    {
        "lambda",
        "the",
        "zero",
        "add1",
        "rec-nat",
        "cons",
        "car",
        "cdr",
        "nil",
        "::",
        "rec-list",
        ",",
        "claim",
        "define",
        "Nat",
        "Atom",
        "->",
        "Pair",
        "List",
    }
)


def _head(datum: Datum) -> str | None:
    if isinstance(datum, SList) and datum.items:
        first = datum.items[0]
        if isinstance(first, SSymbol):
            return first.name
    return None


def _expect_args(datum: SList, count: int, form: str) -> tuple[Datum, ...]:
    args = datum.items[1:]
    if len(args) != count:
        plural = "s" if count != 1 else ""
        raise MalformedSyntax(
            f"({form} ...) takes {count} argument{plural}, got {len(args)}",
            datum.span,
            rule=form,
        )
    return args


def _ident(datum: Datum, what: str) -> str:
    if not isinstance(datum, SSymbol):
        raise MalformedSyntax(f"Expected {what}", datum.span)
    if datum.name in KEYWORDS:
        raise MalformedSyntax(
            f"Keyword {datum.name!r} cannot be used as {what}", datum.span
        )
    return datum.name


def to_type(datum: Datum) -> SurfaceType:
    span = datum.span
    match datum:
        case SSymbol(name="Nat"):
            return STNat(span)
        case SSymbol(name="Atom"):
            return STAtom(span)
        case SList():
            match _head(datum):
                case "->":
                    parts = datum.items[1:]
                    if len(parts) < 2:
                        raise MalformedSyntax(
                            "(-> ...) needs an argument and a result type",
                            span,
                            rule="->",
                        )
                    tys = tuple(to_type(part) for part in parts)
                    return STArrow(span, tys[:-1], tys[-1])
                case "Pair":
                    fst, snd = _expect_args(datum, 2, "Pair")
                    return STPair(span, to_type(fst), to_type(snd))
                case "List":
                    (elem,) = _expect_args(datum, 1, "List")
                    return STList(span, to_type(elem))
    raise MalformedSyntax("Expected a type", span)


def _to_lambda(datum: SList) -> SurfaceTerm:
    params, body = _expect_args(datum, 2, "lambda")
    if not isinstance(params, SList) or not params.items:
        raise MalformedSyntax(
            "(lambda ...) needs a non-empty parameter list", params.span, rule="lambda"
        )
    binders = tuple(
        SBinder(_ident(param, "a parameter name"), param.span) for param in params.items
    )
    return SLam(datum.span, binders, to_term(body))


def _unary(
    build: Callable[[Span, SurfaceTerm], SurfaceTerm], form: str
) -> Callable[[SList], SurfaceTerm]:
    def convert(datum: SList) -> SurfaceTerm:
        (arg,) = _expect_args(datum, 1, form)
        return build(datum.span, to_term(arg))

    return convert


def _binary(
    build: Callable[[Span, SurfaceTerm, SurfaceTerm], SurfaceTerm], form: str
) -> Callable[[SList], SurfaceTerm]:
    def convert(datum: SList) -> SurfaceTerm:
        left, right = _expect_args(datum, 2, form)
        return build(datum.span, to_term(left), to_term(right))

    return convert


def _recursor(
    build: Callable[[Span, SurfaceTerm, SurfaceTerm, SurfaceTerm], SurfaceTerm],
    form: str,
) -> Callable[[SList], SurfaceTerm]:
    def convert(datum: SList) -> SurfaceTerm:
        target, base, step = _expect_args(datum, 3, form)
        return build(datum.span, to_term(target), to_term(base), to_term(step))

    return convert


def _to_the(datum: SList) -> SurfaceTerm:
    ty, term = _expect_args(datum, 2, "the")
    return SThe(datum.span, to_type(ty), to_term(term))


def _to_tuple(datum: SList) -> SurfaceTerm:
    items = datum.items[1:]
    if len(items) < 2:
        raise MalformedSyntax(
            "(, ...) needs at least two components", datum.span, rule=","
        )
    return STuple(datum.span, tuple(to_term(item) for item in items))


_FORMS: dict[str, Callable[[SList], SurfaceTerm]] = {
    "lambda": _to_lambda,
    "the": _to_the,
    "add1": _unary(SAdd1, "add1"),
    "car": _unary(SCar, "car"),
    "cdr": _unary(SCdr, "cdr"),
    "cons": _binary(SCons, "cons"),
    "::": _binary(SListCons, "::"),
    "rec-nat": _recursor(SRecNat, "rec-nat"),
    "rec-list": _recursor(SRecList, "rec-list"),
    ",": _to_tuple,
}


def to_term(datum: Datum) -> SurfaceTerm:
    span = datum.span
    match datum:
        case SSymbol(name="zero"):
            return SZero(span)
        case SSymbol(name="nil"):
            return SNil(span)
        case SSymbol():
            return SVar(span, _ident(datum, "a variable"))
        case SInt(value=value):
            return SNum(span, value)
        case SQuoted(name=name):
            return SQuote(span, name)
        case SBracket(items=items):
            return SListLit(span, tuple(to_term(item) for item in items))
        case SList(items=items):
            if not items:
                raise MalformedSyntax("Empty application", span)
            head = _head(datum)
            if head is not None and head in _FORMS:
                return _FORMS[head](datum)
            if head is not None and head in KEYWORDS:
                raise MalformedSyntax(f"{head!r} cannot be used here", span, rule=head)
            if len(items) < 2:
                raise MalformedSyntax("Application needs at least one argument", span)
            args = tuple(to_term(arg) for arg in items[1:])
            return SApp(span, to_term(items[0]), args)
    raise MalformedSyntax("Expected an expression", span)


def to_decl(datum: Datum) -> SDecl:
    match _head(datum):
        case "claim":
            assert isinstance(datum, SList)
            name, ty = _expect_args(datum, 2, "claim")
            return SClaim(datum.span, _ident(name, "a name"), to_type(ty))
        case "define":
            assert isinstance(datum, SList)
            name, term = _expect_args(datum, 2, "define")
            return SDefine(datum.span, _ident(name, "a name"), to_term(term))
    return SEval(datum.span, to_term(datum))


def parse_program(source: str) -> SProgram:
    """Read and convert a whole program, attaching ``source`` to errors."""

    try:
        return SProgram(tuple(to_decl(datum) for datum in read_program(source)))
    except MalformedSyntax as err:
        raise err.with_source(source)


def parse_term(source: str) -> SurfaceTerm:
    """Parse a single expression."""

    program = parse_program(source)
    if len(program.decls) != 1 or not isinstance(program.decls[0], SEval):
        raise MalformedSyntax(
            "Expected a single expression", Span(0, len(source)), source
        )
    return program.decls[0].term


def parse_type(source: str) -> SurfaceType:
    try:
        return to_type(read_datum(source))
    except MalformedSyntax as err:
        raise err.with_source(source)


__all__ = [
    "KEYWORDS",
    "to_type",
    "to_term",
    "to_decl",
    "parse_program",
    "parse_term",
    "parse_type",
]
