"""Core terms of the simply typed lambda calculus.

Terms use de Bruijn indices. Binders and recursors carry the handful of type
annotations the readback needs to rebuild eta-long normal forms; everything
else is inferred from the subterms.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from stlc.core.types import Ty


@dataclass(frozen=True)
class Var:
    """De Bruijn variable pointing to the binder at ``k``.

    Args:
        k: Zero-based index counting binders outward from the binding site.
           ``0`` refers to the innermost binder, ``1`` to the next, etc.
    """

    k: int

    def __post_init__(self) -> None:
        if self.k < 0:
            raise ValueError("De Bruijn indices must be non-negative")


@dataclass(frozen=True)
class Lam:
    """Lambda abstraction.

    Args:
        ty: Type of the bound argument.
        body: Term evaluated with the bound argument in scope (index 0).
    """

    ty: Ty
    body: Term


@dataclass(frozen=True)
class App:
    """Function application."""

    fn: Term
    arg: Term


@dataclass(frozen=True)
class Quote:
    """An atom literal ``'name``."""

    name: str


@dataclass(frozen=True)
class Zero:
    pass


@dataclass(frozen=True)
class Succ:
    n: Term


@dataclass(frozen=True)
class RecNat:
    """Structural recursion on a natural number.

    Args:
        ty: Result type of the recursion.
        target: The number being eliminated.
        base: Result for ``zero``.
        step: ``Nat -> ty -> ty``, given the predecessor and the recursive result.
    """

    ty: Ty
    target: Term
    base: Term
    step: Term


@dataclass(frozen=True)
class Cons:
    """Pair introduction."""

    fst: Term
    snd: Term


@dataclass(frozen=True)
class Car:
    pair: Term


@dataclass(frozen=True)
class Cdr:
    pair: Term


@dataclass(frozen=True)
class Nil:
    """The empty list of ``elem``."""

    elem: Ty


@dataclass(frozen=True)
class ConsList:
    head: Term
    tail: Term


@dataclass(frozen=True)
class RecList:
    """Structural recursion on a list.

    Args:
        ty: Result type of the recursion.
        target: The list being eliminated.
        base: Result for ``nil``.
        step: ``elem -> List elem -> ty -> ty``.
    """

    ty: Ty
    target: Term
    base: Term
    step: Term


@dataclass(frozen=True)
class Ann:
    """Type annotation ``(the ty term)``; erased by evaluation."""

    ty: Ty
    term: Term


Term: TypeAlias = (
    Var
    | Lam
    | App
    | Quote
    | Zero
    | Succ
    | RecNat
    | Cons
    | Car
    | Cdr
    | Nil
    | ConsList
    | RecList
    | Ann
)


def nat_literal(n: int) -> Term:
    """Return the numeral ``n`` as a ``Succ`` chain."""

    if n < 0:
        raise ValueError("Natural number literals must be non-negative")
    term: Term = Zero()
    for _ in range(n):
        term = Succ(term)
    return term


def apps(fn: Term, *args: Term) -> Term:
    """Apply ``args`` to ``fn`` left-associatively."""

    result = fn
    for arg in args:
        result = App(result, arg)
    return result


def list_literal(elem: Ty, *items: Term) -> Term:
    result: Term = Nil(elem)
    for item in reversed(items):
        result = ConsList(item, result)
    return result


__all__ = [
    "Term",
    "Var",
    "Lam",
    "App",
    "Quote",
    "Zero",
    "Succ",
    "RecNat",
    "Cons",
    "Car",
    "Cdr",
    "Nil",
    "ConsList",
    "RecList",
    "Ann",
    "nat_literal",
    "apps",
    "list_literal",
]
