import pytest

from stlc.common.errors import TypeMismatch, UnboundVariable
from stlc.core.ast import App, Cons, Lam, Quote, RecNat, Succ, Var, nat_literal
from stlc.core.types import AtomType, FunType, NatType, PairType, arrow
from stlc.elab import program as program_mod
from stlc.elab.program import elaborate_program, run_program
from stlc.surface.desugar import desugar_program
from stlc.surface.syntax import parse_program

N = NatType()
NN = FunType(N, N)

PLUS = """
(claim plus (-> Nat Nat Nat))
(define plus
  (lambda (n m)
    (rec-nat n m (lambda (k acc) (add1 acc)))))
(plus 2 3)
"""

LENGTH = """
(claim length (-> (List Atom) Nat))
(define length
  (lambda (xs) (rec-list xs zero (lambda (h t acc) (add1 acc)))))
(length ['a 'b])
"""


def test_plus_program() -> None:
    plus, expr = run_program(PLUS)

    assert plus.name == "plus"
    assert plus.ty == arrow(N, N, N)
    assert plus.normal == Lam(
        N, Lam(N, RecNat(N, Var(1), Var(0), Lam(N, Lam(N, Succ(Var(0))))))
    )
    assert expr.name is None
    assert expr.ty == N
    assert expr.normal == nat_literal(5)


def test_length_program() -> None:
    _, expr = run_program(LENGTH)

    assert expr.normal == nat_literal(2)


def test_tuple_projection() -> None:
    (result,) = run_program("(car (cdr (, 'a 'b 'c)))")

    assert result.ty == AtomType()
    assert result.normal == Quote("b")


def test_later_definitions_see_earlier_ones() -> None:
    source = "(define two 2)\n(define four (add1 (add1 two)))\nfour\n"
    two, four, expr = run_program(source)

    assert four.normal == nat_literal(4)
    assert expr.normal == nat_literal(4)


def test_definitions_are_eta_expanded() -> None:
    source = "(define apply (the (-> (-> Nat Nat) Nat Nat) (lambda (f) f)))"
    (result,) = run_program(source)

    assert result.normal == Lam(NN, Lam(N, App(Var(1), Var(0))))


def test_unclaimed_definition_is_inferred() -> None:
    (result,) = run_program("(define p (, 1 'a))")

    assert result.name == "p"
    assert result.ty == PairType(N, AtomType())
    assert result.normal == Cons(nat_literal(1), Quote("a"))


def test_redefinition_is_rejected() -> None:
    with pytest.raises(TypeMismatch, match="already defined") as err:
        run_program("(define x zero)\n(define x 1)")
    assert err.value.rule == "define"


def test_claim_after_definition_is_rejected() -> None:
    with pytest.raises(TypeMismatch, match="already defined") as err:
        run_program("(define x zero)\n(claim x Nat)")
    assert err.value.rule == "claim"


def test_duplicate_claim_is_rejected() -> None:
    with pytest.raises(TypeMismatch, match="already claimed") as err:
        run_program("(claim x Nat)\n(claim x Atom)")
    assert err.value.rule == "claim"


def test_definition_must_match_claim() -> None:
    with pytest.raises(TypeMismatch, match="Expected Atom, got Nat") as err:
        run_program("(claim x Atom)\n(define x zero)")
    assert err.value.rule == "define"


def test_definitions_cannot_refer_to_themselves() -> None:
    with pytest.raises(UnboundVariable, match="'f'"):
        run_program("(claim f (-> Nat Nat))\n(define f (lambda (n) (f n)))")


def test_expressions_are_not_bound() -> None:
    with pytest.raises(UnboundVariable):
        run_program("zero\n(define y it)")


def test_nothing_is_evaluated_when_elaboration_fails(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def boom(elaborated: object) -> object:
        raise AssertionError("evaluated a program that failed to elaborate")

    monkeypatch.setattr(program_mod, "evaluate_program", boom)
    with pytest.raises(TypeMismatch):
        run_program("(define x 1)\n(add1 x)\n(add1 'a)")


def test_errors_carry_source() -> None:
    source = "(define x 1)\n(add1 'a)\n"
    with pytest.raises(TypeMismatch) as err:
        run_program(source)
    assert err.value.source == source
    assert err.value.span is not None
    assert err.value.span.line_col(source) == (2, 7)


def test_elaborate_program_records_types() -> None:
    decls = elaborate_program(desugar_program(parse_program(PLUS)))

    assert [decl.name for decl in decls] == ["plus", None]
    assert decls[1].ty == N
    assert decls[1].term == App(App(Var(0), nat_literal(2)), nat_literal(3))


def test_empty_program() -> None:
    assert run_program("; nothing here\n") == []
