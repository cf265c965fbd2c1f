"""Evaluation of core terms to semantic values."""

from __future__ import annotations

from stlc.common.errors import EvaluationBug
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
from stlc.core.types import Ty
from stlc.core.values import (
    Env,
    NApp,
    NCar,
    NCdr,
    NRec,
    NRecList,
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


def apply_value(fn: Value, arg: Value) -> Value:
    """Apply a function value, beta-reducing closures."""

    match fn:
        case VClosure(env, body):
            return evaluate(env.extend(arg), body)
        case VNeutral(neutral):
            return VNeutral(NApp(neutral, arg))
    raise EvaluationBug(f"Cannot apply non-function value {fn!r}")


def car_value(pair: Value) -> Value:
    match pair:
        case VPair(fst, _):
            return fst
        case VNeutral(neutral):
            return VNeutral(NCar(neutral))
    raise EvaluationBug(f"car of non-pair value {pair!r}")


def cdr_value(pair: Value) -> Value:
    match pair:
        case VPair(_, snd):
            return snd
        case VNeutral(neutral):
            return VNeutral(NCdr(neutral))
    raise EvaluationBug(f"cdr of non-pair value {pair!r}")


def rec_nat_value(ty: Ty, target: Value, base: Value, step: Value) -> Value:
    """Eliminate a natural number value.

    The ``add1`` spine is collected first and ``step`` is folded from the
    innermost predecessor outward, so deep numerals do not grow the stack.
    """

    preds: list[Value] = []
    while isinstance(target, VSucc):
        preds.append(target.pred)
        target = target.pred

    match target:
        case VZero():
            acc = base
        case VNeutral(neutral):
            acc = VNeutral(NRec(ty, neutral, base, step))
        case _:
            raise EvaluationBug(f"rec-nat on non-number value {target!r}")

    for pred in reversed(preds):
        acc = apply_value(apply_value(step, pred), acc)
    return acc


def rec_list_value(ty: Ty, target: Value, base: Value, step: Value) -> Value:
    """Eliminate a list value, folding ``step`` from the last cell backward."""

    cells: list[VCons] = []
    while isinstance(target, VCons):
        cells.append(target)
        target = target.tail

    match target:
        case VNil():
            acc = base
        case VNeutral(neutral):
            acc = VNeutral(NRecList(ty, neutral, base, step))
        case _:
            raise EvaluationBug(f"rec-list on non-list value {target!r}")

    for cell in reversed(cells):
        acc = apply_value(apply_value(apply_value(step, cell.head), cell.tail), acc)
    return acc


def evaluate(env: Env, term: Term) -> Value:
    """Evaluate a well-typed ``term`` whose free variables are bound by ``env``."""

    match term:
        case Var(k):
            return env.lookup(k)
        case Lam(_, body):
            return VClosure(env, body)
        case App(fn, arg):
            return apply_value(evaluate(env, fn), evaluate(env, arg))
        case Quote(name):
            return VAtom(name)
        case Zero():
            return VZero()
        case Succ():
            depth = 0
            inner: Term = term
            while isinstance(inner, Succ):
                depth += 1
                inner = inner.n
            value = evaluate(env, inner)
            for _ in range(depth):
                value = VSucc(value)
            return value
        case RecNat(ty, target, base, step):
            return rec_nat_value(
                ty, evaluate(env, target), evaluate(env, base), evaluate(env, step)
            )
        case Cons(fst, snd):
            return VPair(evaluate(env, fst), evaluate(env, snd))
        case Car(pair):
            return car_value(evaluate(env, pair))
        case Cdr(pair):
            return cdr_value(evaluate(env, pair))
        case Nil(_):
            return VNil()
        case ConsList():
            heads: list[Term] = []
            node: Term = term
            while isinstance(node, ConsList):
                heads.append(node.head)
                node = node.tail
            value = evaluate(env, node)
            for head in reversed(heads):
                value = VCons(evaluate(env, head), value)
            return value
        case RecList(ty, target, base, step):
            return rec_list_value(
                ty, evaluate(env, target), evaluate(env, base), evaluate(env, step)
            )
        case Ann(_, inner):
            return evaluate(env, inner)

    raise EvaluationBug(f"Unexpected term in evaluate: {term!r}")


__all__ = [
    "evaluate",
    "apply_value",
    "car_value",
    "cdr_value",
    "rec_nat_value",
    "rec_list_value",
]
