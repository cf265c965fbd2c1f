"""Reader for the parenthesized surface syntax."""

from __future__ import annotations

from typing import cast

import ply.lex as lex  # type: ignore[import-untyped]
import ply.yacc as yacc  # type: ignore[import-untyped]

from stlc.common.errors import MalformedSyntax
from stlc.common.span import Span
from stlc.surface.sexpr import Datum, SBracket, SInt, SList, SQuoted, SSymbol

_SOURCE: str = ""

tokens = (
    "SYMBOL",
    "INT",
    "QUOTE",
    "COMMA",
    "LPAREN",
    "RPAREN",
    "LBRACKET",
    "RBRACKET",
)

t_QUOTE = r"'"
t_COMMA = r","
t_LPAREN = r"\("
t_RPAREN = r"\)"
t_LBRACKET = r"\["
t_RBRACKET = r"\]"

t_ignore = " \t\r"
t_ignore_COMMENT = r";[^\n]*"


def t_newline(t: lex.LexToken) -> None:
    r"\n+"
    t.lexer.lineno += len(t.value)


def t_INT(t: lex.LexToken) -> lex.LexToken:
    r"\d+(?![A-Za-z0-9_\-+*/<>=!?:])"
    t.end = t.lexpos + len(t.value)
    t.value = int(t.value)
    return t


def t_SYMBOL(t: lex.LexToken) -> lex.LexToken:
    r"[A-Za-z0-9_\-+*/<>=!?:]+"
    t.end = t.lexpos + len(t.value)
    return t


def t_error(t: lex.LexToken) -> None:
    span = Span(t.lexpos, t.lexpos + 1)
    raise MalformedSyntax(f"Unexpected character {t.value[0]!r}", span, _SOURCE)


def _tok_span(tok: lex.LexToken) -> Span:
    end = getattr(tok, "end", tok.lexpos + len(str(tok.value)))
    return Span(tok.lexpos, end)


def _slice_span(p: yacc.YaccProduction, start: int, end: int) -> Span:
    first = cast(lex.LexToken, p.slice[start])
    last = cast(lex.LexToken, p.slice[end])
    return Span(first.lexpos, last.lexpos + len(str(last.value)))


def p_program(p: yacc.YaccProduction) -> None:
    "program : data"
    p[0] = p[1]


def p_data_multi(p: yacc.YaccProduction) -> None:
    "data : data datum"
    p[0] = p[1] + (p[2],)


def p_data_empty(p: yacc.YaccProduction) -> None:
    "data :"
    p[0] = ()


def p_datum_symbol(p: yacc.YaccProduction) -> None:
    "datum : SYMBOL"
    p[0] = SSymbol(_tok_span(p.slice[1]), p[1])


def p_datum_comma(p: yacc.YaccProduction) -> None:
    "datum : COMMA"
    p[0] = SSymbol(_tok_span(p.slice[1]), ",")


def p_datum_int(p: yacc.YaccProduction) -> None:
    "datum : INT"
    p[0] = SInt(_tok_span(p.slice[1]), p[1])


def p_datum_quote(p: yacc.YaccProduction) -> None:
    "datum : QUOTE SYMBOL"
    p[0] = SQuoted(_slice_span(p, 1, 2), p[2])


def p_datum_list(p: yacc.YaccProduction) -> None:
    "datum : LPAREN data RPAREN"
    p[0] = SList(_slice_span(p, 1, 3), p[2])


def p_datum_bracket(p: yacc.YaccProduction) -> None:
    "datum : LBRACKET data RBRACKET"
    p[0] = SBracket(_slice_span(p, 1, 3), p[2])


def p_error(p: lex.LexToken | None) -> None:
    if p is None:
        span = Span(len(_SOURCE), len(_SOURCE))
        raise MalformedSyntax("Unexpected end of input", span, _SOURCE)
    span = _tok_span(cast(lex.LexToken, p))
    raise MalformedSyntax("Unexpected token", span, _SOURCE)


_PARSER = None


def read_program(source: str) -> tuple[Datum, ...]:
    """Read every top-level datum in ``source``."""

    global _SOURCE, _PARSER
    _SOURCE = source
    lexer = lex.lex()
    if _PARSER is None:
        _PARSER = yacc.yacc(start="program", debug=False, write_tables=False)
    data = _PARSER.parse(source, lexer=lexer)
    if data is None:
        return ()
    return cast(tuple[Datum, ...], data)


def read_datum(source: str) -> Datum:
    """Read exactly one datum from ``source``."""

    data = read_program(source)
    if len(data) != 1:
        span = Span(0, len(source))
        raise MalformedSyntax(
            f"Expected a single expression, found {len(data)}", span, source
        )
    return data[0]


__all__ = ["read_program", "read_datum"]
