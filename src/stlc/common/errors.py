"""Error types reported before evaluation.

Every user-facing failure is detected while reading or elaborating a program.
Once a term has been elaborated, evaluation and normalization cannot fail; if
they do, :class:`EvaluationBug` is raised to flag the elaborator defect.
"""

from __future__ import annotations

from dataclasses import dataclass

from stlc.common.span import Span


@dataclass
class StlcError(Exception):
    message: str
    span: Span | None = None
    source: str | None = None
    rule: str | None = None

    def __str__(self) -> str:
        head = f"[{self.rule}] {self.message}" if self.rule else self.message
        if self.span is None:
            return head
        if self.source is None:
            return f"{head} @ {self.span.start}:{self.span.end}"
        snippet = self.span.extract(self.source)
        return f"{head} @ {self.span.start}:{self.span.end}: {snippet!r}"

    def with_source(self, source: str) -> StlcError:
        if self.source is None:
            self.source = source
        return self


class MalformedSyntax(StlcError):
    """The text could not be read as a program."""


class UnboundVariable(StlcError):
    """An identifier or index is not in scope."""


class TypeMismatch(StlcError):
    """A typing judgment received an operand of the wrong type."""


class ArityMismatch(StlcError):
    """A multi-argument lambda or application has too many arguments."""


class EvaluationBug(RuntimeError):
    """Evaluation reached a state that well-typed terms cannot produce."""


__all__ = [
    "StlcError",
    "MalformedSyntax",
    "UnboundVariable",
    "TypeMismatch",
    "ArityMismatch",
    "EvaluationBug",
]
