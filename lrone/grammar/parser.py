"""lrone 규칙 파서
- 규칙 한 줄: `LHS->RHS`
- LHS: 대문자 한 글자 (비단말)
- RHS: 0개 이상의 대/소문자 (대문자=비단말, 소문자=단말). 비어 있으면 ε-프로덕션
- 규칙 앞뒤와 '->' 주변의 공백은 무시
- 형식이 틀린 규칙은 GrammarFormatError(SyntaxError)로 보고
"""

from __future__ import annotations
import regex as re
from typing import List, Sequence
from .ast import RuleDecl

SEP = "->"

RULE_RE     = re.compile(r"[ \t]*(?P<lhs>[^ \t]*?)[ \t]*->[ \t]*(?P<rhs>.*?)[ \t]*")
LHS_RE      = re.compile(r"[A-Z]")
RHS_RE      = re.compile(r"[A-Za-z]*")
BAD_RHS_RE  = re.compile(r"[^A-Za-z]")


class GrammarFormatError(SyntaxError):
    """규칙 문자열을 LHS/RHS로 나눌 수 없을 때 발생합니다."""

    def __init__(self, message: str, rule_index: int, rule: str):
        super().__init__(message)
        self.rule_index = rule_index
        self.rule = rule


# ---------- error handling utils ----------
def _snippet_caret_at_pos(src: str, pos: int) -> str:
    """규칙 원문에서 pos(0-based) 위치에 캐럿"""
    caret = " " * pos + "^"
    return f"{src}\n{caret}"

def _fail(idx: int, rule: str, what: str, pos: int) -> GrammarFormatError:
    msg = (
        f"Rule #{idx}: {what}\n"
        f"- Expected: LHS->RHS (e.g. S->aSb)\n\n"
        f"{_snippet_caret_at_pos(rule, pos)}"
    )
    return GrammarFormatError(msg, idx, rule)


def parse_rule(rule: str, idx: int = 0) -> RuleDecl:
    """규칙 한 줄을 RuleDecl로 파싱합니다."""
    if SEP not in rule:
        raise _fail(idx, rule, f"missing '{SEP}' separator", len(rule))

    m = RULE_RE.fullmatch(rule)
    if not m:
        raise _fail(idx, rule, "malformed rule", 0)

    lhs, rhs = m.group("lhs"), m.group("rhs")
    if not LHS_RE.fullmatch(lhs):
        raise _fail(idx, rule, f"left-hand side must be one uppercase letter, got {lhs!r}", m.start("lhs"))

    if not RHS_RE.fullmatch(rhs):
        bad = BAD_RHS_RE.search(rhs)
        raise _fail(idx, rule, f"unexpected symbol {bad.group(0)!r} on the right-hand side",
                    m.start("rhs") + bad.start())

    return RuleDecl(lhs=lhs, rhs=rhs, index=idx, text=rule)


def parse_rules(rules: Sequence[str]) -> List[RuleDecl]:
    """
    규칙 문자열 목록을 순서대로 파싱합니다.
    하나라도 형식이 틀리면 즉시 GrammarFormatError를 던집니다(부분 결과 없음).
    """
    if isinstance(rules, str):
        raise TypeError("rules must be a sequence of rule strings, not a single string")
    return [parse_rule(r, i) for i, r in enumerate(rules)]
