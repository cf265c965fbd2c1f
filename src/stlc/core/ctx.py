"""Typing contexts and the weakening relation between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, overload

from stlc.common.errors import UnboundVariable
from stlc.core.pretty import pretty_type
from stlc.core.types import Ty


@dataclass(frozen=True)
class Ctx(Sequence[Ty]):
    """
    Typing context for de Bruijn-indexed terms.

    Representation:
        The context is stored as a tuple of types, where index 0 refers to the
        *innermost (most recently introduced) binder*, index 1 to the next
        outer binder, and so on.

    Extension discipline:
        ``extend(t)`` returns a new context with ``t`` at index 0. Contexts are
        never mutated; since types are simple, no entry is rewritten when the
        context grows.
    """

    entries: tuple[Ty, ...] = ()

    @staticmethod
    def empty() -> Ctx:
        return Ctx()

    @staticmethod
    def of(*tys: Ty) -> Ctx:
        """Build a context from types ordered innermost first."""
        return Ctx(tuple(tys))

    def __len__(self) -> int:
        return len(self.entries)

    @overload
    def __getitem__(self, i: int, /) -> Ty: ...
    @overload
    def __getitem__(self, s: slice, /) -> Ctx: ...
    def __getitem__(self, key: int | slice) -> Ty | Ctx:
        if isinstance(key, slice):
            return Ctx(self.entries[key])
        return self.entries[key]

    def extend(self, ty: Ty) -> Ctx:
        return Ctx((ty, *self.entries))

    def lookup(self, k: int) -> Ty:
        if not 0 <= k < len(self.entries):
            raise UnboundVariable(
                f"Index {k} is not bound in a context of length {len(self.entries)}",
                rule="var",
            )
        return self.entries[k]

    def __str__(self) -> str:
        inner = ", ".join(f"#{i}: {pretty_type(ty)}" for i, ty in enumerate(self))
        return f"Ctx({inner})"


@dataclass(frozen=True)
class Weakening:
    """Witness that a context embeds into a larger one.

    The larger context is the smaller one with ``by`` bindings inserted in
    front of the ``cutoff`` innermost bindings. The three ways of building a
    witness map onto index arithmetic:

    * ``identity()`` -- both contexts are equal (``by == 0``);
    * ``skip()`` -- the larger context has one more binding in front;
    * ``lift()`` -- both contexts share their front binding, so indices below
      the cutoff are left alone.
    """

    by: int = 1
    cutoff: int = 0

    def __post_init__(self) -> None:
        if self.by < 0 or self.cutoff < 0:
            raise ValueError("Weakening offsets must be non-negative")

    @staticmethod
    def identity() -> Weakening:
        return Weakening(0, 0)

    def skip(self) -> Weakening:
        return Weakening(self.by + 1, self.cutoff)

    def lift(self) -> Weakening:
        return Weakening(self.by, self.cutoff + 1)

    @property
    def is_identity(self) -> bool:
        return self.by == 0

    def embed(self, k: int) -> int:
        """Re-index ``Var(k)`` of the smaller context into the larger one."""
        return k + self.by if k >= self.cutoff else k

    def apply(self, ctx: Ctx, *inserted: Ty) -> Ctx:
        """Build the larger context from ``ctx`` and the ``by`` new bindings."""

        if len(inserted) != self.by:
            raise ValueError(f"Expected {self.by} inserted types, got {len(inserted)}")
        if self.cutoff > len(ctx):
            raise ValueError("Weakening cutoff exceeds context length")
        return Ctx(
            ctx.entries[: self.cutoff] + tuple(inserted) + ctx.entries[self.cutoff :]
        )


__all__ = ["Ctx", "Weakening"]
