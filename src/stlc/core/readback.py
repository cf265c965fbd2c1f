"""Normalization by evaluation: read semantic values back into terms.

Readback is type-directed. Every function-typed value, closure or neutral, is
read back by applying it to a fresh variable, so normal forms are eta-long
and beta-normal: extensionally equal functions read back to identical terms.
Pairs and lists are not eta-expanded, so a stuck ``car`` reads back as itself.
"""

from __future__ import annotations

from stlc.common.errors import EvaluationBug
from stlc.core.ast import (
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
from stlc.core.ctx import Ctx, Weakening
from stlc.core.eval import apply_value, evaluate
from stlc.core.typing import CheckedTerm, check_term
from stlc.core.types import AtomType, FunType, ListType, NatType, PairType, Ty, arrow
from stlc.core.values import (
    Env,
    NApp,
    NCar,
    NCdr,
    NRec,
    NRecList,
    NVar,
    Neutral,
    VAtom,
    VCons,
    VNeutral,
    VNil,
    VPair,
    VSucc,
    VZero,
    Value,
)
from stlc.core.weaken import weaken_value


def read_back(ctx: Ctx, ty: Ty, value: Value) -> Term:
    """Read ``value`` of type ``ty`` back into a normal term valid in ``ctx``."""

    if isinstance(ty, FunType):
        # Open the function under one fresh binder: move it into the extended
        # context, then apply it to the new variable at index 0.
        fn = weaken_value(Weakening.identity().skip(), value)
        body = apply_value(fn, VNeutral(NVar(0)))
        return Lam(ty.dom, read_back(ctx.extend(ty.dom), ty.cod, body))

    if isinstance(value, VNeutral):
        term, _ = read_back_neutral(ctx, value.neutral)
        return term

    match ty, value:
        case NatType(), VZero():
            return Zero()
        case NatType(), VSucc():
            depth = 0
            inner: Value = value
            while isinstance(inner, VSucc):
                depth += 1
                inner = inner.pred
            result = read_back(ctx, ty, inner)
            for _ in range(depth):
                result = Succ(result)
            return result
        case AtomType(), VAtom(name):
            return Quote(name)
        case PairType(fst_ty, snd_ty), VPair(fst, snd):
            return Cons(read_back(ctx, fst_ty, fst), read_back(ctx, snd_ty, snd))
        case ListType(elem), VNil():
            return Nil(elem)
        case ListType(elem), VCons():
            heads: list[Value] = []
            node: Value = value
            while isinstance(node, VCons):
                heads.append(node.head)
                node = node.tail
            tail = read_back(ctx, ty, node)
            for head in reversed(heads):
                tail = ConsList(read_back(ctx, elem, head), tail)
            return tail

    raise EvaluationBug(f"Value {value!r} does not inhabit {ty!r}")


def read_back_neutral(ctx: Ctx, neutral: Neutral) -> tuple[Term, Ty]:
    """Read a stuck computation back, returning the term and its type."""

    match neutral:
        case NVar(k):
            return Var(k), ctx.lookup(k)
        case NApp(fn, arg):
            fn_term, fn_ty = read_back_neutral(ctx, fn)
            if not isinstance(fn_ty, FunType):
                raise EvaluationBug(f"Neutral application of non-function {fn_ty!r}")
            return App(fn_term, read_back(ctx, fn_ty.dom, arg)), fn_ty.cod
        case NRec(ty, target, base, step):
            target_term, _ = read_back_neutral(ctx, target)
            return (
                RecNat(
                    ty,
                    target_term,
                    read_back(ctx, ty, base),
                    read_back(ctx, arrow(NatType(), ty, ty), step),
                ),
                ty,
            )
        case NCar(pair):
            pair_term, pair_ty = read_back_neutral(ctx, pair)
            if not isinstance(pair_ty, PairType):
                raise EvaluationBug(f"Neutral car of non-pair {pair_ty!r}")
            return Car(pair_term), pair_ty.fst
        case NCdr(pair):
            pair_term, pair_ty = read_back_neutral(ctx, pair)
            if not isinstance(pair_ty, PairType):
                raise EvaluationBug(f"Neutral cdr of non-pair {pair_ty!r}")
            return Cdr(pair_term), pair_ty.snd
        case NRecList(ty, target, base, step):
            target_term, target_ty = read_back_neutral(ctx, target)
            if not isinstance(target_ty, ListType):
                raise EvaluationBug(f"Neutral rec-list on non-list {target_ty!r}")
            step_ty = arrow(target_ty.elem, target_ty, ty, ty)
            return (
                RecList(
                    ty,
                    target_term,
                    read_back(ctx, ty, base),
                    read_back(ctx, step_ty, step),
                ),
                ty,
            )

    raise EvaluationBug(f"Unexpected neutral in read_back_neutral: {neutral!r}")


def normalize_checked(checked: CheckedTerm) -> Term:
    """Normalize an already validated term under its own context."""

    env = Env.identity(len(checked.ctx))
    return read_back(checked.ctx, checked.ty, evaluate(env, checked.term))


def normalize(term: Term, ctx: Ctx | None = None) -> Term:
    """Validate ``term`` in ``ctx`` and return its eta-long beta-normal form."""

    return normalize_checked(check_term(term, ctx))


__all__ = ["read_back", "read_back_neutral", "normalize_checked", "normalize"]
