from stlc.core.ast import App, Lam, RecNat, Succ, Var, Zero
from stlc.core.ctx import Weakening
from stlc.core.types import NatType
from stlc.core.values import (
    Env,
    NApp,
    NCar,
    NRec,
    NVar,
    VClosure,
    VCons,
    VNeutral,
    VNil,
    VPair,
    VSucc,
    VZero,
)
from stlc.core.weaken import weaken_env, weaken_neutral, weaken_term, weaken_value

N = NatType()
SKIP = Weakening.identity().skip()


def test_weaken_term_shifts_free_variables_only() -> None:
    term = Lam(N, App(Var(1), Var(0)))

    assert weaken_term(SKIP, term) == Lam(N, App(Var(2), Var(0)))


def test_weaken_term_respects_cutoff() -> None:
    w = SKIP.lift()
    term = App(Var(0), Var(1))

    assert weaken_term(w, term) == App(Var(0), Var(2))


def test_weaken_term_leaves_closed_terms_unchanged() -> None:
    term = RecNat(N, Succ(Zero()), Zero(), Lam(N, Lam(N, Succ(Var(0)))))

    assert weaken_term(SKIP, term) == term


def test_weaken_neutral_shifts_variables() -> None:
    neutral = NApp(NCar(NVar(0)), VNeutral(NVar(2)))

    assert weaken_neutral(SKIP, neutral) == NApp(NCar(NVar(1)), VNeutral(NVar(3)))


def test_weaken_value_recurses_into_data() -> None:
    value = VPair(VSucc(VNeutral(NVar(0))), VCons(VNeutral(NVar(1)), VNil()))

    assert weaken_value(SKIP, value) == VPair(
        VSucc(VNeutral(NVar(1))), VCons(VNeutral(NVar(2)), VNil())
    )


def test_weaken_closure_weakens_captured_environment() -> None:
    body = Succ(Var(1))
    closure = VClosure(Env.identity(2), body)

    weakened = weaken_value(SKIP, closure)

    assert weakened == VClosure(
        Env((VNeutral(NVar(1)), VNeutral(NVar(2)))), body
    )


def test_weaken_rec_neutral() -> None:
    step = VClosure(Env.identity(1), Lam(N, Var(0)))
    neutral = NRec(N, NVar(0), VZero(), step)

    assert weaken_neutral(SKIP, neutral) == NRec(
        N, NVar(1), VZero(), VClosure(Env((VNeutral(NVar(1)),)), Lam(N, Var(0)))
    )


def test_identity_weakening_returns_same_objects() -> None:
    env = Env.identity(3)
    value = VNeutral(NVar(0))

    assert weaken_env(Weakening.identity(), env) is env
    assert weaken_value(Weakening.identity(), value) is value
