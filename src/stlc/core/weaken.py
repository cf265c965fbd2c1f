"""Transport terms and values into a larger context.

Given a :class:`~stlc.core.ctx.Weakening` from a context to a larger one,
these functions rebuild a structure so that each variable points at the same
binding in the larger context. Closures are weakened through their captured
environment; their bodies refer to that environment, not to the context.
"""

from __future__ import annotations

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
from stlc.core.ctx import Weakening
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
    VClosure,
    VCons,
    VNeutral,
    VNil,
    VPair,
    VSucc,
    VZero,
    Value,
)


def weaken_env(w: Weakening, env: Env) -> Env:
    if w.is_identity:
        return env
    return Env(tuple(weaken_value(w, value) for value in env))


def weaken_value(w: Weakening, value: Value) -> Value:
    if w.is_identity:
        return value

    match value:
        case VClosure(env, body):
            return VClosure(weaken_env(w, env), body)
        case VZero() | VNil() | VAtom():
            return value
        case VSucc():
            depth = 0
            inner: Value = value
            while isinstance(inner, VSucc):
                depth += 1
                inner = inner.pred
            result = weaken_value(w, inner)
            for _ in range(depth):
                result = VSucc(result)
            return result
        case VPair(fst, snd):
            return VPair(weaken_value(w, fst), weaken_value(w, snd))
        case VCons():
            heads: list[Value] = []
            node: Value = value
            while isinstance(node, VCons):
                heads.append(node.head)
                node = node.tail
            result = weaken_value(w, node)
            for head in reversed(heads):
                result = VCons(weaken_value(w, head), result)
            return result
        case VNeutral(neutral):
            return VNeutral(weaken_neutral(w, neutral))

    raise TypeError(f"Unexpected value in weaken_value: {value!r}")


def weaken_neutral(w: Weakening, neutral: Neutral) -> Neutral:
    match neutral:
        case NVar(k):
            return NVar(w.embed(k))
        case NApp(fn, arg):
            return NApp(weaken_neutral(w, fn), weaken_value(w, arg))
        case NRec(ty, target, base, step):
            return NRec(
                ty,
                weaken_neutral(w, target),
                weaken_value(w, base),
                weaken_value(w, step),
            )
        case NCar(pair):
            return NCar(weaken_neutral(w, pair))
        case NCdr(pair):
            return NCdr(weaken_neutral(w, pair))
        case NRecList(ty, target, base, step):
            return NRecList(
                ty,
                weaken_neutral(w, target),
                weaken_value(w, base),
                weaken_value(w, step),
            )

    raise TypeError(f"Unexpected neutral in weaken_neutral: {neutral!r}")


def weaken_term(w: Weakening, term: Term) -> Term:
    """Shift the free variables of ``term``; bound ones stay put."""

    match term:
        case Var(k):
            return Var(w.embed(k))
        case Lam(ty, body):
            return Lam(ty, weaken_term(w.lift(), body))
        case App(fn, arg):
            return App(weaken_term(w, fn), weaken_term(w, arg))
        case Quote() | Zero() | Nil():
            return term
        case Succ(n):
            return Succ(weaken_term(w, n))
        case RecNat(ty, target, base, step):
            return RecNat(
                ty, weaken_term(w, target), weaken_term(w, base), weaken_term(w, step)
            )
        case Cons(fst, snd):
            return Cons(weaken_term(w, fst), weaken_term(w, snd))
        case Car(pair):
            return Car(weaken_term(w, pair))
        case Cdr(pair):
            return Cdr(weaken_term(w, pair))
        case ConsList(head, tail):
            return ConsList(weaken_term(w, head), weaken_term(w, tail))
        case RecList(ty, target, base, step):
            return RecList(
                ty, weaken_term(w, target), weaken_term(w, base), weaken_term(w, step)
            )
        case Ann(ty, inner):
            return Ann(ty, weaken_term(w, inner))

    raise TypeError(f"Unexpected term in weaken_term: {term!r}")


__all__ = ["weaken_env", "weaken_value", "weaken_neutral", "weaken_term"]
