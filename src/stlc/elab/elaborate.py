"""Bidirectional elaboration of surface terms into core terms.

``infer`` synthesizes a type for forms that carry enough information;
``check`` pushes an expected type into lambdas, ``nil`` and the other
introduction forms. Names are resolved to de Bruijn indices along the way.
The first judgment that fails raises, with the failing rule and the span of
the offending subterm.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stlc.common.errors import ArityMismatch, TypeMismatch, UnboundVariable
from stlc.common.span import Span
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
    nat_literal,
)
from stlc.core.ctx import Ctx
from stlc.core.pretty import pretty_type
from stlc.core.types import (
    AtomType,
    FunType,
    ListType,
    NatType,
    PairType,
    Ty,
    arity,
    arrow,
)
from stlc.surface.sast import (
    SAdd1,
    SApp,
    SCar,
    SCdr,
    SCons,
    SLam,
    SListCons,
    SNil,
    SNum,
    SQuote,
    SRecList,
    SRecNat,
    STArrow,
    STAtom,
    STList,
    STNat,
    STPair,
    SThe,
    SurfaceTerm,
    SurfaceType,
    SVar,
    SZero,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElabEnv:
    """Names in scope and their types, innermost first."""

    names: tuple[str, ...] = ()
    ctx: Ctx = Ctx()

    @staticmethod
    def empty() -> ElabEnv:
        return ElabEnv()

    def push(self, name: str, ty: Ty) -> ElabEnv:
        return ElabEnv((name, *self.names), self.ctx.extend(ty))

    def lookup(self, name: str) -> int | None:
        try:
            return self.names.index(name)
        except ValueError:
            return None


def elab_type(ty: SurfaceType) -> Ty:
    match ty:
        case STNat():
            return NatType()
        case STAtom():
            return AtomType()
        case STArrow(args=args, result=result):
            return arrow(*(elab_type(arg) for arg in args), elab_type(result))
        case STPair(fst=fst, snd=snd):
            return PairType(elab_type(fst), elab_type(snd))
        case STList(elem=elem):
            return ListType(elab_type(elem))
    raise TypeError(f"Unexpected surface type: {ty!r}")


def _mismatch(
    rule: str, span: Span, expected: Ty | str, actual: Ty | str
) -> TypeMismatch:
    exp = expected if isinstance(expected, str) else pretty_type(expected)
    act = actual if isinstance(actual, str) else pretty_type(actual)
    return TypeMismatch(f"Expected {exp}, got {act}", span, rule=rule)


def _expect_pair(rule: str, span: Span, ty: Ty) -> PairType:
    if not isinstance(ty, PairType):
        raise _mismatch(rule, span, "a Pair", ty)
    return ty


def _expect_list(rule: str, span: Span, ty: Ty) -> ListType:
    if not isinstance(ty, ListType):
        raise _mismatch(rule, span, "a List", ty)
    return ty


def infer(env: ElabEnv, term: SurfaceTerm) -> tuple[Term, Ty]:
    """Elaborate ``term`` and synthesize its type."""

    match term:
        case SVar(span=span, name=name):
            idx = env.lookup(name)
            if idx is None:
                raise UnboundVariable(f"Unknown name {name!r}", span, rule="var")
            return Var(idx), env.ctx[idx]

        case SApp(span=span, fn=fn, args=args):
            fn_term, fn_ty = infer(env, fn)
            accepts = arity(fn_ty)
            if accepts == 0:
                raise _mismatch("app", fn.span, "a function", fn_ty)
            if len(args) > accepts:
                raise ArityMismatch(
                    f"Applied to {len(args)} arguments, but "
                    f"{pretty_type(fn_ty)} takes {accepts}",
                    span,
                    rule="app",
                )
            result, ty = fn_term, fn_ty
            for arg in args:
                assert isinstance(ty, FunType)
                result = App(result, check(env, arg, ty.dom, rule="app"))
                ty = ty.cod
            return result, ty

        case SThe(ty=sty, term=inner):
            ty = elab_type(sty)
            return Ann(ty, check(env, inner, ty, rule="the")), ty

        case SQuote(name=name):
            return Quote(name), AtomType()

        case SZero():
            return Zero(), NatType()

        case SNum(value=value):
            return nat_literal(value), NatType()

        case SAdd1(n=n):
            return Succ(check(env, n, NatType(), rule="add1")), NatType()

        case SRecNat(target=target, base=base, step=step):
            target_term = check(env, target, NatType(), rule="rec-nat")
            base_term, ty = infer(env, base)
            step_term = check(env, step, arrow(NatType(), ty, ty), rule="rec-nat")
            return RecNat(ty, target_term, base_term, step_term), ty

        case SCons(fst=fst, snd=snd):
            fst_term, fst_ty = infer(env, fst)
            snd_term, snd_ty = infer(env, snd)
            return Cons(fst_term, snd_term), PairType(fst_ty, snd_ty)

        case SCar(pair=pair):
            pair_term, pair_ty = infer(env, pair)
            return Car(pair_term), _expect_pair("car", pair.span, pair_ty).fst

        case SCdr(pair=pair):
            pair_term, pair_ty = infer(env, pair)
            return Cdr(pair_term), _expect_pair("cdr", pair.span, pair_ty).snd

        case SListCons(head=head, tail=tail):
            head_term, elem = infer(env, head)
            tail_term = check(env, tail, ListType(elem), rule="::")
            return ConsList(head_term, tail_term), ListType(elem)

        case SRecList(target=target, base=base, step=step):
            target_term, target_ty = infer(env, target)
            list_ty = _expect_list("rec-list", target.span, target_ty)
            base_term, ty = infer(env, base)
            step_ty = arrow(list_ty.elem, list_ty, ty, ty)
            step_term = check(env, step, step_ty, rule="rec-list")
            return RecList(ty, target_term, base_term, step_term), ty

        case SLam(span=span):
            raise TypeMismatch(
                "Cannot infer the type of a lambda; annotate it with (the ...)",
                span,
                rule="lambda",
            )

        case SNil(span=span):
            raise TypeMismatch(
                "Cannot infer the element type of nil; annotate it with (the ...)",
                span,
                rule="nil",
            )

    raise TypeError(f"Unexpected surface term in infer: {term!r}")


def check(env: ElabEnv, term: SurfaceTerm, expected: Ty, rule: str = "the") -> Term:
    """Elaborate ``term`` against ``expected``.

    ``rule`` names the judgment that asked for the check; it is reported when
    the term turns out to have some other type.
    """

    match term:
        case SLam(span=span, binders=binders, body=body):
            accepts = arity(expected)
            if accepts == 0:
                raise _mismatch(rule, span, expected, "a lambda")
            if len(binders) > accepts:
                raise ArityMismatch(
                    f"Lambda binds {len(binders)} arguments, but "
                    f"{pretty_type(expected)} takes {accepts}",
                    span,
                    rule="lambda",
                )
            doms: list[Ty] = []
            ty = expected
            for binder in binders:
                assert isinstance(ty, FunType)
                doms.append(ty.dom)
                env = env.push(binder.name, ty.dom)
                ty = ty.cod
            result = check(env, body, ty, rule="lambda")
            for dom in reversed(doms):
                result = Lam(dom, result)
            return result

        case SNil(span=span):
            if not isinstance(expected, ListType):
                raise _mismatch(rule, span, expected, "nil")
            return Nil(expected.elem)

        case SCons(span=span, fst=fst, snd=snd):
            if not isinstance(expected, PairType):
                raise _mismatch(rule, span, expected, "a pair")
            return Cons(
                check(env, fst, expected.fst, rule="cons"),
                check(env, snd, expected.snd, rule="cons"),
            )

        case SListCons(span=span, head=head, tail=tail):
            if not isinstance(expected, ListType):
                raise _mismatch(rule, span, expected, "a list")
            return ConsList(
                check(env, head, expected.elem, rule="::"),
                check(env, tail, expected, rule="::"),
            )

        case SRecNat(target=target, base=base, step=step):
            return RecNat(
                expected,
                check(env, target, NatType(), rule="rec-nat"),
                check(env, base, expected, rule="rec-nat"),
                check(env, step, arrow(NatType(), expected, expected), rule="rec-nat"),
            )

        case SRecList(target=target, base=base, step=step):
            target_term, target_ty = infer(env, target)
            list_ty = _expect_list("rec-list", target.span, target_ty)
            step_ty = arrow(list_ty.elem, list_ty, expected, expected)
            return RecList(
                expected,
                target_term,
                check(env, base, expected, rule="rec-list"),
                check(env, step, step_ty, rule="rec-list"),
            )

    elaborated, actual = infer(env, term)
    if actual != expected:
        raise _mismatch(rule, term.span, expected, actual)
    return elaborated


def elaborate(term: SurfaceTerm, env: ElabEnv | None = None) -> tuple[Term, Ty]:
    """Elaborate a closed (or ``env``-scoped) surface term."""

    env = env if env is not None else ElabEnv.empty()
    core, ty = infer(env, term)
    logger.debug("elaborated term of type %s", pretty_type(ty))
    return core, ty


__all__ = ["ElabEnv", "elab_type", "infer", "check", "elaborate"]
