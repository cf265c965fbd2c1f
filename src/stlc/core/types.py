"""Simple types of the calculus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class NatType:
    """Natural numbers built from ``zero`` and ``add1``."""


@dataclass(frozen=True)
class AtomType:
    """Quoted symbols such as ``'apple``."""


@dataclass(frozen=True)
class FunType:
    """Function type ``dom -> cod``.

    Args:
        dom: Type of the argument.
        cod: Type of the result.
    """

    dom: Ty
    cod: Ty


@dataclass(frozen=True)
class PairType:
    fst: Ty
    snd: Ty


@dataclass(frozen=True)
class ListType:
    elem: Ty


Ty: TypeAlias = NatType | AtomType | FunType | PairType | ListType


def arrow(*tys: Ty) -> Ty:
    """Build the right-nested function type ``t0 -> t1 -> ... -> tn``."""

    if not tys:
        raise ValueError("arrow needs at least one type")
    result = tys[-1]
    for ty in reversed(tys[:-1]):
        result = FunType(ty, result)
    return result


def arity(ty: Ty) -> int:
    """Count the leading arrows of ``ty``."""

    count = 0
    while isinstance(ty, FunType):
        count += 1
        ty = ty.cod
    return count


__all__ = [
    "Ty",
    "NatType",
    "AtomType",
    "FunType",
    "PairType",
    "ListType",
    "arrow",
    "arity",
]
