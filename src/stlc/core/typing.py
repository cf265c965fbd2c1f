"""Type inference and checking for core terms.

This is the single validation pass that every term goes through before it is
evaluated. Each judgment raises on the first operand it cannot accept; the
``rule`` on the error names the judgment that failed.
"""

from __future__ import annotations

from dataclasses import dataclass

from stlc.common.errors import TypeMismatch
from stlc.core.ast import (
    Ann,
    App,
    Car,
    Cdr,
    Cons,
    ConsList,
    Lam,
    Nil,
    Quote,
    RecList,
    RecNat,
    Succ,
    Term,
    Var,
    Zero,
)
from stlc.core.ctx import Ctx
from stlc.core.pretty import pretty_type
from stlc.core.types import AtomType, FunType, ListType, NatType, PairType, Ty, arrow


@dataclass(frozen=True)
class CheckedTerm:
    """A term together with the context and type it was validated at."""

    term: Term
    ty: Ty
    ctx: Ctx = Ctx()


def _mismatch(rule: str, what: str, expected: Ty | str, actual: Ty) -> TypeMismatch:
    exp = expected if isinstance(expected, str) else pretty_type(expected)
    return TypeMismatch(
        f"{what}: expected {exp}, got {pretty_type(actual)}", rule=rule
    )


def check_type(term: Term, ctx: Ctx, expected: Ty, rule: str = "check") -> None:
    """Raise unless ``term`` has type ``expected`` in ``ctx``."""

    actual = infer_type(term, ctx)
    if actual != expected:
        raise _mismatch(rule, "Type mismatch", expected, actual)


def infer_type(term: Term, ctx: Ctx | None = None) -> Ty:
    """Infer the type of ``term`` under the optional de Bruijn context ``ctx``."""

    ctx = ctx if ctx is not None else Ctx.empty()

    match term:
        case Var(k):
            return ctx.lookup(k)

        case Lam(ty, body):
            return FunType(ty, infer_type(body, ctx.extend(ty)))

        case App(fn, arg):
            fn_ty = infer_type(fn, ctx)
            if not isinstance(fn_ty, FunType):
                raise _mismatch(
                    "app", "Applied term is not a function", "a function type", fn_ty
                )
            check_type(arg, ctx, fn_ty.dom, rule="app")
            return fn_ty.cod

        case Quote(_):
            return AtomType()

        case Zero():
            return NatType()

        case Succ():
            inner: Term = term
            while isinstance(inner, Succ):
                inner = inner.n
            check_type(inner, ctx, NatType(), rule="add1")
            return NatType()

        case RecNat(ty, target, base, step):
            check_type(target, ctx, NatType(), rule="rec-nat")
            check_type(base, ctx, ty, rule="rec-nat")
            check_type(step, ctx, arrow(NatType(), ty, ty), rule="rec-nat")
            return ty

        case Cons(fst, snd):
            return PairType(infer_type(fst, ctx), infer_type(snd, ctx))

        case Car(pair):
            pair_ty = infer_type(pair, ctx)
            if not isinstance(pair_ty, PairType):
                raise _mismatch("car", "Operand is not a pair", "a Pair type", pair_ty)
            return pair_ty.fst

        case Cdr(pair):
            pair_ty = infer_type(pair, ctx)
            if not isinstance(pair_ty, PairType):
                raise _mismatch("cdr", "Operand is not a pair", "a Pair type", pair_ty)
            return pair_ty.snd

        case Nil(elem):
            return ListType(elem)

        case ConsList():
            heads: list[Term] = []
            node: Term = term
            while isinstance(node, ConsList):
                heads.append(node.head)
                node = node.tail
            tail_ty = infer_type(node, ctx)
            if not isinstance(tail_ty, ListType):
                raise _mismatch("::", "Tail is not a list", "a List type", tail_ty)
            for head in heads:
                check_type(head, ctx, tail_ty.elem, rule="::")
            return tail_ty

        case RecList(ty, target, base, step):
            target_ty = infer_type(target, ctx)
            if not isinstance(target_ty, ListType):
                raise _mismatch(
                    "rec-list", "Target is not a list", "a List type", target_ty
                )
            check_type(base, ctx, ty, rule="rec-list")
            check_type(
                step, ctx, arrow(target_ty.elem, target_ty, ty, ty), rule="rec-list"
            )
            return ty

        case Ann(ty, inner):
            check_type(inner, ctx, ty, rule="the")
            return ty

    raise TypeError(f"Unexpected term in infer_type: {term!r}")


def check_term(term: Term, ctx: Ctx | None = None) -> CheckedTerm:
    """Validate ``term`` once and wrap it with its type."""

    ctx = ctx if ctx is not None else Ctx.empty()
    return CheckedTerm(term, infer_type(term, ctx), ctx)


__all__ = ["CheckedTerm", "infer_type", "check_type", "check_term"]
