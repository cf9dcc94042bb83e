# lrone/grammar/transform.py
"""RuleDecl 리스트를 불변 Grammar(프로덕션 맵 + 알파벳)로 변환"""

from __future__     import annotations
from types          import MappingProxyType
from typing         import Dict, List, Sequence, Set, Tuple
from .ast           import Grammar, RuleDecl


def is_nonterminal(ch: str) -> bool:
    return "A" <= ch <= "Z"

def is_terminal(ch: str) -> bool:
    return "a" <= ch <= "z"


def to_grammar(decls: Sequence[RuleDecl]) -> Grammar:
    """
    규칙 선언들로 Grammar를 만듭니다.
    - 같은 좌변의 우변은 **입력 순서대로** 이어 붙입니다(reduce 규칙 번호가 됨).
    - 알파벳 분류는 문자 종류로만 결정합니다: 대문자=비단말, 소문자=단말.
      좌변 문자도 비단말 알파벳에 들어갑니다.
    """
    prods: Dict[str, List[str]] = {}
    terms: Set[str] = set()
    nonterms: Set[str] = set()

    for d in decls:
        prods.setdefault(d.lhs, []).append(d.rhs)
        for ch in d.lhs + d.rhs:
            if is_nonterminal(ch):
                nonterms.add(ch)
            elif is_terminal(ch):
                terms.add(ch)

    frozen: Dict[str, Tuple[str, ...]] = {lhs: tuple(rhss) for lhs, rhss in prods.items()}
    return Grammar(
        productions=MappingProxyType(frozen),
        terms=frozenset(terms),
        nonterms=frozenset(nonterms),
        rules=tuple(decls),
    )
