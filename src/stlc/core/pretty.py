"""Pretty-printing of core types and terms in the parenthesized surface syntax."""

from __future__ import annotations

from typing import Sequence

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
from stlc.core.types import AtomType, FunType, ListType, NatType, PairType, Ty


def pretty_type(ty: Ty) -> str:
    match ty:
        case NatType():
            return "Nat"
        case AtomType():
            return "Atom"
        case FunType():
            parts: list[str] = []
            cur: Ty = ty
            while isinstance(cur, FunType):
                parts.append(pretty_type(cur.dom))
                cur = cur.cod
            parts.append(pretty_type(cur))
            return f"(-> {' '.join(parts)})"
        case PairType(fst, snd):
            return f"(Pair {pretty_type(fst)} {pretty_type(snd)})"
        case ListType(elem):
            return f"(List {pretty_type(elem)})"
    raise TypeError(f"Unexpected type in pretty_type: {ty!r}")


def _fresh_name(env: list[str], base: str = "x") -> str:
    """Return a name not already present in ``env``."""

    candidate = base
    suffix = 0
    while candidate in env:
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def _numeral(term: Succ) -> int | None:
    count = 0
    cur: Term = term
    while isinstance(cur, Succ):
        count += 1
        cur = cur.n
    return count if isinstance(cur, Zero) else None


def pretty(term: Term, names: Sequence[str] = ()) -> str:
    """Return a human-friendly string for ``term``.

    Args:
        term: The term to render.
        names: Names for the free variables, innermost first. Variables
            without a name print as ``#k``.
    """

    def fmt(t: Term, env: list[str]) -> str:
        match t:
            case Var(k):
                return env[k] if k < len(env) else f"#{k}"

            case Lam():
                binders: list[str] = []
                inner: Term = t
                while isinstance(inner, Lam):
                    name = _fresh_name(env)
                    binders.append(name)
                    env = [name, *env]
                    inner = inner.body
                return f"(lambda ({' '.join(binders)}) {fmt(inner, env)})"

            case App():
                args: list[Term] = []
                head: Term = t
                while isinstance(head, App):
                    args.append(head.arg)
                    head = head.fn
                rendered = [fmt(head, env), *(fmt(a, env) for a in reversed(args))]
                return f"({' '.join(rendered)})"

            case Quote(name):
                return f"'{name}"

            case Zero():
                return "zero"

            case Succ(n):
                value = _numeral(t)
                if value is not None:
                    return str(value)
                return f"(add1 {fmt(n, env)})"

            case RecNat(_, target, base, step):
                parts = " ".join(fmt(part, env) for part in (target, base, step))
                return f"(rec-nat {parts})"

            case Cons(fst, snd):
                return f"(cons {fmt(fst, env)} {fmt(snd, env)})"

            case Car(pair):
                return f"(car {fmt(pair, env)})"

            case Cdr(pair):
                return f"(cdr {fmt(pair, env)})"

            case Nil(_):
                return "nil"

            case ConsList(head, tail):
                return f"(:: {fmt(head, env)} {fmt(tail, env)})"

            case RecList(_, target, base, step):
                parts = " ".join(fmt(part, env) for part in (target, base, step))
                return f"(rec-list {parts})"

            case Ann(ty, inner):
                return f"(the {pretty_type(ty)} {fmt(inner, env)})"

        raise TypeError(f"Unexpected term in pretty: {t!r}")

    return fmt(term, list(names))


__all__ = ["pretty", "pretty_type"]
