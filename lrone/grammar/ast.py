# lrone/grammar/ast.py
"""규칙 AST
- RuleDecl: `LHS->RHS` 한 줄
- Grammar : 좌변 → 우변 목록 맵 + 단말/비단말 알파벳 (transform 결과, 불변)
"""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import Mapping, Tuple, FrozenSet

@dataclass(frozen=True)
class RuleDecl:
    """
    규칙 선언 한 줄.
    - lhs  : 좌변 비단말 (대문자 한 글자)
    - rhs  : 우변 심볼 문자열 (ε는 빈 문자열 "")
    - index: 입력 규칙 목록에서의 위치 (0-based)
    - text : 원문 그대로
    """
    lhs: str
    rhs: str
    index: int
    text: str


@dataclass(frozen=True)
class Grammar:
    """
    Grammar
    =======
    단일 문자 심볼로 이루어진 문맥자유문법.

    필드
    ----
    - productions: 비단말 → 우변 튜플 (입력 순서 유지, 이 순서가 곧 reduce 규칙 번호)
    - terms      : 단말 알파벳 (소문자)
    - nonterms   : 비단말 알파벳 (대문자, 좌변 포함)
    - rules      : 파싱된 원본 규칙 선언들 (디버그/출력용)

    한 번 만들어지면 수정하지 않습니다.
    """
    productions: Mapping[str, Tuple[str, ...]]
    terms: FrozenSet[str]
    nonterms: FrozenSet[str]
    rules: Tuple[RuleDecl, ...] = ()

    def productions_of(self, lhs: str) -> Tuple[str, ...]:
        """lhs의 우변 목록. 프로덕션이 없는 비단말이면 빈 튜플."""
        return self.productions.get(lhs, ())

    def rhs_of(self, lhs: str, rule: int) -> str:
        return self.productions[lhs][rule]

    def rule_number(self, lhs: str, rhs: str) -> int:
        """lhs의 프로덕션 중 rhs와 정확히 같은 첫 번째 규칙의 번호. 없으면 KeyError."""
        for i, cand in enumerate(self.productions_of(lhs)):
            if cand == rhs:
                return i
        raise KeyError(f"{lhs}->{rhs}")

    @property
    def n_rules(self) -> int:
        return sum(len(v) for v in self.productions.values())

    def __repr__(self) -> str:
        rules = [f"{d.lhs}->{d.rhs}" for d in self.rules]
        return (f"Grammar(rules={rules}, terms={sorted(self.terms)}, "
                f"nonterms={sorted(self.nonterms)})")
