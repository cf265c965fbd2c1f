"""Remove tuple and list-literal sugar from surface terms.

``(, a b c)`` becomes ``(cons a (cons b c))`` and ``[a b c]`` becomes
``(:: a (:: b (:: c nil)))``. Multi-binder lambdas and multi-argument
applications are left intact: the elaborator curries them, which lets it
report arity errors against the form the user wrote.
"""

from __future__ import annotations

from stlc.common.span import Span
from stlc.surface.sast import (
    SAdd1,
    SApp,
    SCar,
    SCdr,
    SClaim,
    SCons,
    SDecl,
    SDefine,
    SEval,
    SLam,
    SListCons,
    SListLit,
    SNil,
    SNum,
    SProgram,
    SQuote,
    SRecList,
    SRecNat,
    STuple,
    SThe,
    SurfaceTerm,
    SVar,
    SZero,
)


def desugar(term: SurfaceTerm) -> SurfaceTerm:
    match term:
        case SVar() | SQuote() | SZero() | SNum() | SNil():
            return term
        case SLam(span=span, binders=binders, body=body):
            return SLam(span, binders, desugar(body))
        case SApp(span=span, fn=fn, args=args):
            return SApp(span, desugar(fn), tuple(desugar(arg) for arg in args))
        case SAdd1(span=span, n=n):
            return SAdd1(span, desugar(n))
        case SRecNat(span=span, target=target, base=base, step=step):
            return SRecNat(span, desugar(target), desugar(base), desugar(step))
        case SCons(span=span, fst=fst, snd=snd):
            return SCons(span, desugar(fst), desugar(snd))
        case SCar(span=span, pair=pair):
            return SCar(span, desugar(pair))
        case SCdr(span=span, pair=pair):
            return SCdr(span, desugar(pair))
        case SListCons(span=span, head=head, tail=tail):
            return SListCons(span, desugar(head), desugar(tail))
        case SRecList(span=span, target=target, base=base, step=step):
            return SRecList(span, desugar(target), desugar(base), desugar(step))
        case SThe(span=span, ty=ty, term=inner):
            return SThe(span, ty, desugar(inner))
        case STuple(span=span, items=items):
            parts = [desugar(item) for item in items]
            nested = parts[-1]
            for part in reversed(parts[:-1]):
                nested = SCons(Span(part.span.start, span.end), part, nested)
            return nested
        case SListLit(span=span, items=items):
            end = Span(span.end - 1, span.end)
            result: SurfaceTerm = SNil(end)
            for item in reversed(items):
                cell_span = Span(item.span.start, span.end)
                result = SListCons(cell_span, desugar(item), result)
            return result

    raise TypeError(f"Unexpected surface term in desugar: {term!r}")


def desugar_decl(decl: SDecl) -> SDecl:
    match decl:
        case SDefine(span=span, name=name, term=term):
            return SDefine(span, name, desugar(term))
        case SEval(span=span, term=term):
            return SEval(span, desugar(term))
        case SClaim():
            return decl
    raise TypeError(f"Unexpected declaration in desugar_decl: {decl!r}")


def desugar_program(program: SProgram) -> SProgram:
    return SProgram(tuple(desugar_decl(decl) for decl in program.decls))


__all__ = ["desugar", "desugar_decl", "desugar_program"]
