"""Runtime configuration for the command-line driver.

Values come from command-line flags, falling back to the environment:

    STLC_LOG_LEVEL   logging level name (default ``WARNING``)
    NO_COLOR         disable coloured error output when set to anything
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_RECURSION_LIMIT = 10_000


@dataclass(frozen=True)
class Config:
    color: bool = True
    show_types: bool = True
    log_level: str = "WARNING"
    recursion_limit: int = DEFAULT_RECURSION_LIMIT

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")
        if self.recursion_limit < 100:
            raise ValueError("Recursion limit must be at least 100")

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @staticmethod
    def from_args(
        args: argparse.Namespace, environ: Mapping[str, str] | None = None
    ) -> Config:
        environ = os.environ if environ is None else environ
        log_level = args.log_level or environ.get("STLC_LOG_LEVEL", "WARNING")
        color = not args.no_color and "NO_COLOR" not in environ
        return Config(
            color=color,
            show_types=not args.no_types,
            log_level=log_level,
            recursion_limit=args.recursion_limit,
        )


__all__ = ["Config", "DEFAULT_RECURSION_LIMIT"]
