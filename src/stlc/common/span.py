"""Source span type shared across layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def extract(self, source: str) -> str:
        return source[self.start : self.end]

    def join(self, other: Span) -> Span:
        return Span(min(self.start, other.start), max(self.end, other.end))

    def line_col(self, source: str) -> tuple[int, int]:
        """Return the 1-based line and column of ``start`` within ``source``."""

        line = source.count("\n", 0, self.start) + 1
        col = self.start - (source.rfind("\n", 0, self.start) + 1) + 1
        return line, col
