"""Semantic values produced by evaluation.

Values are either introduction forms or neutrals: eliminations stuck on a
variable. Closures keep the environment they were created in; environments
are immutable and grow by prepending, so a closure's captured environment is
shared by reference with its creator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, TypeAlias

from stlc.core.ast import Term
from stlc.core.types import Ty


@dataclass(frozen=True)
class Env:
    """Values for the variables of a context, index 0 innermost."""

    values: tuple[Value, ...] = ()

    @staticmethod
    def empty() -> Env:
        return Env()

    @staticmethod
    def identity(length: int) -> Env:
        """Bind every variable of a context of ``length`` to itself."""
        return Env(tuple(VNeutral(NVar(k)) for k in range(length)))

    def extend(self, value: Value) -> Env:
        return Env((value, *self.values))

    def lookup(self, k: int) -> Value:
        return self.values[k]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.values)


@dataclass(frozen=True)
class VClosure:
    """A function value: ``body`` waiting for its argument at index 0 of ``env``."""

    env: Env
    body: Term


@dataclass(frozen=True)
class VZero:
    pass


@dataclass(frozen=True)
class VSucc:
    pred: Value


@dataclass(frozen=True)
class VPair:
    fst: Value
    snd: Value


@dataclass(frozen=True)
class VNil:
    pass


@dataclass(frozen=True)
class VCons:
    head: Value
    tail: Value


@dataclass(frozen=True)
class VAtom:
    name: str


@dataclass(frozen=True)
class VNeutral:
    """A computation stuck on a variable."""

    neutral: Neutral


@dataclass(frozen=True)
class NVar:
    k: int


@dataclass(frozen=True)
class NApp:
    fn: Neutral
    arg: Value


@dataclass(frozen=True)
class NRec:
    ty: Ty
    target: Neutral
    base: Value
    step: Value


@dataclass(frozen=True)
class NCar:
    pair: Neutral


@dataclass(frozen=True)
class NCdr:
    pair: Neutral


@dataclass(frozen=True)
class NRecList:
    ty: Ty
    target: Neutral
    base: Value
    step: Value


Value: TypeAlias = VClosure | VZero | VSucc | VPair | VNil | VCons | VAtom | VNeutral

Neutral: TypeAlias = NVar | NApp | NRec | NCar | NCdr | NRecList


__all__ = [
    "Env",
    "Value",
    "Neutral",
    "VClosure",
    "VZero",
    "VSucc",
    "VPair",
    "VNil",
    "VCons",
    "VAtom",
    "VNeutral",
    "NVar",
    "NApp",
    "NRec",
    "NCar",
    "NCdr",
    "NRecList",
]
