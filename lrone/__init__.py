# lrone/__init__.py
"""lrone — 단일 문자 문맥자유문법용 LR 자동자 생성기 + 테이블 기반 멤버십 판정기.

파이프라인
----------
규칙 문자열 → RuleDecl(parse_rules) → Grammar(to_grammar) → SymbolTable
→ 정준 자동자(build_automaton) → ACTION/GOTO(build_lr_tables) → recognize

API
---
- `build_tables(rules, *, strict=False, debug=False) -> Tables`
    형식이 틀린 규칙이면 GrammarFormatError. strict면 충돌 시 TableConflictError.
- `recognize(tables, text, *, trace=None) -> bool`
    테이블을 수정하지 않으며 어떤 입력에도 예외를 던지지 않음.
- `accepts(rules, text) -> bool`
    build_tables 후 recognize.
- `load_rules(path) -> list[str]`
    규칙 파일 읽기.
"""

from __future__ import annotations
from typing import Callable, Optional, Sequence

from .grammar.parser import parse_rules, GrammarFormatError
from .grammar.transform import to_grammar
from .grammar.loader import load_rules
from .lalr.symbols import SymbolTable, AUG_START, EOF, START
from .lalr.items import Item, Automaton, build_automaton, closure, goto
from .lalr.table import (
    Tables, Shift, Reduce, Accept, Error, Conflict, TableConflictError, build_lr_tables,
)
from .lalr.runtime import Step, recognize as _recognize

__all__ = [
    "build_tables", "recognize", "accepts", "load_rules",
    "GrammarFormatError", "TableConflictError",
    "Tables", "Automaton", "Item", "Shift", "Reduce", "Accept", "Error", "Conflict", "Step",
    "SymbolTable", "AUG_START", "EOF", "START",
    "closure", "goto",
]


def build_tables(rules: Sequence[str], *, strict: bool = False, debug: bool = False) -> Tables:
    """규칙 목록으로 자동자와 ACTION/GOTO 테이블을 만듭니다."""
    decls = parse_rules(rules)
    g = to_grammar(decls)
    sym = SymbolTable.from_grammar(g)
    automaton = build_automaton(g, sym, debug=debug)
    return build_lr_tables(g, sym, automaton, strict=strict, debug=debug)


def recognize(tables: Tables, text: str, *,
              trace: Optional[Callable[[Step], None]] = None) -> bool:
    return _recognize(tables, text, trace)


def accepts(rules: Sequence[str], text: str) -> bool:
    return recognize(build_tables(rules), text)
