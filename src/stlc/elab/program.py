"""Elaborate and run whole programs of claims, definitions and expressions.

All declarations are elaborated before anything is evaluated, so a program
with an error produces no results at all. Each definition is elaborated in a
context holding the types of the definitions before it, and evaluated in an
environment holding their values. Definitions are closed, so their normal
forms are read back in the empty context.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stlc.common.errors import StlcError, TypeMismatch
from stlc.common.span import Span
from stlc.core.ast import Term
from stlc.core.ctx import Ctx
from stlc.core.eval import evaluate
from stlc.core.pretty import pretty_type
from stlc.core.readback import read_back
from stlc.core.types import Ty
from stlc.core.values import Env, Value
from stlc.elab.elaborate import ElabEnv, check, elab_type, infer
from stlc.surface.desugar import desugar_program
from stlc.surface.sast import SClaim, SDefine, SEval, SProgram
from stlc.surface.syntax import parse_program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Elaborated:
    """A declaration that passed elaboration.

    Args:
        name: Defined name, or ``None`` for a bare expression.
        ty: Type of the term.
        term: Core term, scoped over the definitions before it.
        span: Where the declaration was written.
    """

    name: str | None
    ty: Ty
    term: Term
    span: Span


@dataclass(frozen=True)
class Result:
    name: str | None
    ty: Ty
    normal: Term


def elaborate_program(program: SProgram) -> list[Elaborated]:
    """Elaborate every declaration, raising on the first failure."""

    claims: dict[str, Ty] = {}
    env = ElabEnv.empty()
    elaborated: list[Elaborated] = []

    for decl in program.decls:
        match decl:
            case SClaim(span=span, name=name, ty=sty):
                if name in claims:
                    raise TypeMismatch(
                        f"{name!r} is already claimed", span, rule="claim"
                    )
                if env.lookup(name) is not None:
                    raise TypeMismatch(
                        f"{name!r} is already defined", span, rule="claim"
                    )
                claims[name] = elab_type(sty)

            case SDefine(span=span, name=name, term=sterm):
                if env.lookup(name) is not None:
                    raise TypeMismatch(
                        f"{name!r} is already defined", span, rule="define"
                    )
                if name in claims:
                    ty = claims[name]
                    term = check(env, sterm, ty, rule="define")
                else:
                    term, ty = infer(env, sterm)
                logger.debug("elaborated %s : %s", name, pretty_type(ty))
                elaborated.append(Elaborated(name, ty, term, span))
                env = env.push(name, ty)

            case SEval(span=span, term=sterm):
                term, ty = infer(env, sterm)
                logger.debug("elaborated expression : %s", pretty_type(ty))
                elaborated.append(Elaborated(None, ty, term, span))

            case _:
                raise TypeError(f"Unexpected declaration: {decl!r}")

    return elaborated


def evaluate_program(elaborated: list[Elaborated]) -> list[Result]:
    """Evaluate elaborated declarations in order and normalize each one."""

    env = Env.empty()
    results: list[Result] = []
    for decl in elaborated:
        value: Value = evaluate(env, decl.term)
        normal = read_back(Ctx.empty(), decl.ty, value)
        results.append(Result(decl.name, decl.ty, normal))
        if decl.name is not None:
            env = env.extend(value)
    logger.debug("normalized %d declarations", len(results))
    return results


def run_program(source: str) -> list[Result]:
    """Parse, elaborate and normalize ``source``."""

    try:
        program = desugar_program(parse_program(source))
        elaborated = elaborate_program(program)
    except StlcError as err:
        raise err.with_source(source)
    return evaluate_program(elaborated)


__all__ = [
    "Elaborated",
    "Result",
    "elaborate_program",
    "evaluate_program",
    "run_program",
]
