"""예약 심볼과 단말/비단말 알파벳 테이블."""
from __future__     import annotations
from dataclasses    import dataclass
from typing         import FrozenSet, Iterable, Tuple

AUG_START = "#"   # 증강 시작기호 (알파벳 밖)
EOF = "$"         # 입력 끝 표시 (알파벳 밖)
START = "S"       # 관례상 고정된 시작 비단말


@dataclass
class SymbolTable:
    """
    SymbolTable
    ===========
    단말/비단말 알파벳을 **고정(freeze)** 해 두고, 자동자 구성과 테이블 생성,
    런타임이 모두 같은 순서/같은 분류를 쓰도록 하는 테이블입니다.

    설계 원칙
    --------
    - 단말/비단말 모두 알파벳 정렬 순서로 고정합니다(상태 번호가 결정적이 됨).
    - 자동자 구성 시 심볼 순회 순서(sweep_order)는 **비단말 먼저, 그다음 단말**입니다.
    - EOF('$')는 단말 알파벳에 넣지 않고, 입력 열(input_terms)의 **마지막**에만 붙입니다.
    - freeze() 이후에는 변경되지 않습니다.
    """

    _terms: Tuple[str, ...] = None
    _nonterms: Tuple[str, ...] = None
    _term_set: FrozenSet[str] = None
    _nonterm_set: FrozenSet[str] = None
    _frozen: bool = False

    def freeze(self, terms: Iterable[str], nonterms: Iterable[str]) -> None:
        if self._frozen:
            return
        self._terms = tuple(sorted(set(terms)))
        self._nonterms = tuple(sorted(set(nonterms)))
        self._term_set = frozenset(self._terms)
        self._nonterm_set = frozenset(self._nonterms)
        self._frozen = True

    @classmethod
    def from_grammar(cls, g) -> "SymbolTable":
        sym = cls()
        sym.freeze(g.terms, g.nonterms)
        return sym

    # ----- 조회 / 유틸 -----
    def is_term(self, name: str) -> bool:
        """문법 단말인지 여부. EOF는 단말 알파벳이 아닙니다."""
        return name in self._term_set

    def is_nonterm(self, name: str) -> bool:
        return name in self._nonterm_set

    @property
    def terms(self) -> Tuple[str, ...]:
        return self._terms

    @property
    def nonterms(self) -> Tuple[str, ...]:
        return self._nonterms

    @property
    def input_terms(self) -> Tuple[str, ...]:
        """ACTION 테이블 열: 단말 + EOF."""
        return self._terms + (EOF,)

    @property
    def sweep_order(self) -> Tuple[str, ...]:
        """자동자 구성 시 GoTo를 시도하는 심볼 순서."""
        return self._nonterms + self._terms

    def __repr__(self) -> str:
        return f"SymbolTable(terms={list(self._terms)}, nonterms={list(self._nonterms)})"
