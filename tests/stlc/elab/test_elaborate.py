import pytest

from stlc.common.errors import ArityMismatch, TypeMismatch, UnboundVariable
from stlc.common.span import Span
from stlc.core.ast import (
    Ann,
    App,
    Car,
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
from stlc.core.typing import infer_type
from stlc.core.types import AtomType, FunType, ListType, NatType, PairType, Ty
from stlc.elab.elaborate import ElabEnv, elab_type, elaborate
from stlc.surface.desugar import desugar
from stlc.surface.syntax import parse_term, parse_type

N = NatType()
A = AtomType()
NN = FunType(N, N)


def _elab(source: str, env: ElabEnv | None = None) -> tuple[Term, Ty]:
    return elaborate(desugar(parse_term(source)), env)


def test_numerals_and_atoms() -> None:
    assert _elab("3") == (nat_literal(3), N)
    assert _elab("'pear") == (Quote("pear"), A)
    assert _elab("(add1 zero)") == (Succ(Zero()), N)


def test_annotated_lambda() -> None:
    term, ty = _elab("(the (-> Nat Nat) (lambda (x) (add1 x)))")

    assert ty == NN
    assert term == Ann(NN, Lam(N, Succ(Var(0))))


def test_multi_binder_lambda_curries() -> None:
    term, ty = _elab("(the (-> Nat Atom Nat) (lambda (n a) n))")

    assert ty == FunType(N, FunType(A, N))
    assert term == Ann(ty, Lam(N, Lam(A, Var(1))))


def test_lambda_may_bind_fewer_arguments_than_arity() -> None:
    term, _ = _elab("(the (-> Nat Nat Nat) (lambda (n) (lambda (m) n)))")

    assert term == Ann(FunType(N, NN), Lam(N, Lam(N, Var(1))))


def test_shadowing_resolves_innermost() -> None:
    term, _ = _elab("(the (-> Nat Nat Nat) (lambda (x x) x))")

    assert term == Ann(FunType(N, NN), Lam(N, Lam(N, Var(0))))


def test_multi_argument_application_curries() -> None:
    env = ElabEnv.empty().push("f", FunType(N, FunType(A, N)))

    assert _elab("(f 1 'a)", env) == (App(App(Var(0), nat_literal(1)), Quote("a")), N)
    assert _elab("(f 1)", env) == (App(Var(0), nat_literal(1)), FunType(A, N))


def test_names_resolve_to_indices() -> None:
    env = ElabEnv.empty().push("n", N).push("p", PairType(N, A))

    assert _elab("(add1 n)", env) == (Succ(Var(1)), N)
    assert _elab("(car p)", env) == (Car(Var(0)), N)


def test_pairs_and_tuples() -> None:
    term, ty = _elab("(, 1 'a)")

    assert ty == PairType(N, A)
    assert term == Cons(nat_literal(1), Quote("a"))


def test_list_literal_infers_from_head() -> None:
    term, ty = _elab("['a 'b]")

    assert ty == ListType(A)
    assert term == ConsList(Quote("a"), ConsList(Quote("b"), Nil(A)))


def test_annotated_nil() -> None:
    assert _elab("(the (List Nat) nil)") == (Ann(ListType(N), Nil(N)), ListType(N))


def test_rec_nat_infers_from_base() -> None:
    term, ty = _elab("(rec-nat 2 zero (lambda (k acc) (add1 acc)))")

    assert ty == N
    assert term == RecNat(
        N, nat_literal(2), Zero(), Lam(N, Lam(N, Succ(Var(0))))
    )


def test_rec_nat_checks_function_base() -> None:
    source = (
        "(the (-> Nat Nat)"
        " (rec-nat 2 (lambda (x) x) (lambda (k f x) (add1 (f x)))))"
    )
    term, ty = _elab(source)

    assert ty == NN
    step = Lam(N, Lam(NN, Lam(N, Succ(App(Var(1), Var(0))))))
    assert term == Ann(NN, RecNat(NN, nat_literal(2), Lam(N, Var(0)), step))


def test_rec_list() -> None:
    env = ElabEnv.empty().push("xs", ListType(A))
    term, ty = _elab("(rec-list xs zero (lambda (h t acc) (add1 acc)))", env)

    assert ty == N
    step = Lam(A, Lam(ListType(A), Lam(N, Succ(Var(0)))))
    assert term == RecList(N, Var(0), Zero(), step)


def test_elaborated_terms_typecheck() -> None:
    sources = [
        "(the (-> Nat Nat Nat) (lambda (n m) (rec-nat n m (lambda (k a) (add1 a)))))",
        "(car (cdr (, 'a 'b 'c)))",
        "(rec-list [1 2 3] zero (lambda (h t acc) (add1 acc)))",
        "(the (Pair (List Nat) (-> Atom Atom)) (cons nil (lambda (a) a)))",
    ]
    for source in sources:
        term, ty = _elab(source)
        assert infer_type(term, Ctx.empty()) == ty


def test_elab_type() -> None:
    ty = elab_type(parse_type("(-> (Pair Nat Atom) (List Nat) Nat)"))

    assert ty == FunType(PairType(N, A), FunType(ListType(N), N))


def test_unbound_variable() -> None:
    with pytest.raises(UnboundVariable, match="Unknown name 'y'") as err:
        _elab("(add1 y)")
    assert err.value.rule == "var"
    assert err.value.span == Span(6, 7)


def test_add1_of_lambda() -> None:
    with pytest.raises(TypeMismatch) as err:
        _elab("(add1 (lambda (x) x))")
    assert err.value.rule == "add1"


def test_add1_of_atom() -> None:
    with pytest.raises(TypeMismatch, match="Expected Nat, got Atom") as err:
        _elab("(add1 'a)")
    assert err.value.rule == "add1"
    assert err.value.span == Span(6, 8)


def test_lambda_with_too_many_binders() -> None:
    with pytest.raises(ArityMismatch) as err:
        _elab("(the (-> Nat Nat) (lambda (x y) x))")
    assert err.value.rule == "lambda"


def test_application_with_too_many_arguments() -> None:
    with pytest.raises(ArityMismatch) as err:
        _elab("((the (-> Nat Nat) (lambda (x) x)) 1 2)")
    assert err.value.rule == "app"


def test_applying_a_non_function() -> None:
    with pytest.raises(TypeMismatch, match="Expected a function") as err:
        _elab("((the Nat 1) 2)")
    assert err.value.rule == "app"


def test_wrong_argument_type() -> None:
    env = ElabEnv.empty().push("f", NN)
    with pytest.raises(TypeMismatch) as err:
        _elab("(f 'a)", env)
    assert err.value.rule == "app"


def test_lambda_needs_annotation() -> None:
    with pytest.raises(TypeMismatch, match="Cannot infer") as err:
        _elab("(lambda (x) x)")
    assert err.value.rule == "lambda"


def test_nil_needs_annotation() -> None:
    with pytest.raises(TypeMismatch, match="Cannot infer") as err:
        _elab("nil")
    assert err.value.rule == "nil"


def test_car_of_atom() -> None:
    with pytest.raises(TypeMismatch, match="Expected a Pair") as err:
        _elab("(car 'a)")
    assert err.value.rule == "car"


def test_heterogeneous_list() -> None:
    with pytest.raises(TypeMismatch) as err:
        _elab("[1 'a]")
    assert err.value.rule == "::"


def test_rec_list_of_non_list() -> None:
    with pytest.raises(TypeMismatch, match="Expected a List") as err:
        _elab("(rec-list 3 zero (lambda (h t acc) acc))")
    assert err.value.rule == "rec-list"


def test_rec_nat_step_type() -> None:
    with pytest.raises(TypeMismatch) as err:
        _elab("(rec-nat 2 zero (lambda (k acc) 'a))")
    assert err.value.rule == "lambda"


def test_annotation_mismatch() -> None:
    with pytest.raises(TypeMismatch) as err:
        _elab("(the Atom 1)")
    assert err.value.rule == "the"
