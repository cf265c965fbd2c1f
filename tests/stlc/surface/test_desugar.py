from dataclasses import fields, is_dataclass

from stlc.common.span import Span
from stlc.surface.desugar import desugar, desugar_program
from stlc.surface.sast import SCons, SDefine, SListCons, SNil
from stlc.surface.syntax import parse_program, parse_term


def _strip_spans(node: object) -> object:
    if isinstance(node, Span):
        return None
    if is_dataclass(node):
        data: dict[str, object] = {}
        for field in fields(node):
            value = getattr(node, field.name)
            if field.name == "span":
                data[field.name] = None
            else:
                data[field.name] = _strip_spans(value)
        return (type(node).__name__, data)
    if isinstance(node, tuple):
        return tuple(_strip_spans(item) for item in node)
    return node


def _assert_desugars(sugared: str, desugared: str) -> None:
    expected = _strip_spans(parse_term(desugared))
    assert _strip_spans(desugar(parse_term(sugared))) == expected


def test_tuple_nests_to_the_right() -> None:
    _assert_desugars("(, a b c)", "(cons a (cons b c))")


def test_pair_tuple() -> None:
    _assert_desugars("(, 'x 1)", "(cons 'x 1)")


def test_list_literal() -> None:
    _assert_desugars("[a b]", "(:: a (:: b nil))")


def test_empty_list_literal() -> None:
    term = desugar(parse_term("[]"))

    assert isinstance(term, SNil)
    assert term.span == Span(1, 2)


def test_sugar_inside_other_forms() -> None:
    _assert_desugars(
        "(lambda (x) [(, x x) (car (, x 'a))])",
        "(lambda (x) (:: (cons x x) (:: (car (cons x 'a)) nil)))",
    )


def test_multi_binder_lambda_is_kept() -> None:
    _assert_desugars("(lambda (x y) (f x y))", "(lambda (x y) (f x y))")


def test_desugared_spans_cover_the_literal() -> None:
    source = "[a b]"
    term = desugar(parse_term(source))

    assert isinstance(term, SListCons)
    assert term.span == Span(1, 5)
    assert isinstance(term.tail, SListCons)
    assert term.tail.span == Span(3, 5)


def test_tuple_spans() -> None:
    term = desugar(parse_term("(, a b c)"))

    assert isinstance(term, SCons)
    assert term.span == Span(3, 9)
    assert isinstance(term.snd, SCons)
    assert term.snd.span == Span(5, 9)


def test_desugar_program() -> None:
    program = desugar_program(parse_program("(claim p (List Nat)) (define p [1])"))

    claim, define = program.decls
    assert isinstance(define, SDefine)
    assert isinstance(define.term, SListCons)
    assert claim == parse_program("(claim p (List Nat)) (define p [1])").decls[0]
