# table.py
"""
ACTION/GOTO 테이블 (lookahead 없는 LR 테이블)

정준 자동자의 각 상태를 훑어 상태 × 입력 심볼마다
Shift / Reduce / Accept / Error 중 하나를, 상태 × 비단말마다 GOTO 대상을 적는다.
완료 아이템은 lookahead 집합 없이 **모든 단말과 EOF에서 무조건 reduce** 한다.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Tuple, List, Mapping, Optional, Union, ClassVar

from ..grammar.ast import Grammar
from .items import Automaton, build_automaton
from .symbols import SymbolTable, AUG_START, EOF


# ---------- 액션 (tagged variant) ----------
@dataclass(frozen=True)
class Shift:
    target: int
    kind: ClassVar[str] = "shift"
    def __str__(self) -> str:
        return f"s{self.target}"

@dataclass(frozen=True)
class Reduce:
    lhs: str
    rule: int
    kind: ClassVar[str] = "reduce"
    def __str__(self) -> str:
        return f"r{self.lhs}{self.rule}"

@dataclass(frozen=True)
class Accept:
    kind: ClassVar[str] = "accept"
    def __str__(self) -> str:
        return "acc"

@dataclass(frozen=True)
class Error:
    kind: ClassVar[str] = "error"
    def __str__(self) -> str:
        return ""

Action = Union[Shift, Reduce, Accept, Error]
ACCEPT = Accept()
ERROR = Error()


@dataclass(frozen=True)
class Conflict:
    """같은 칸에 서로 다른 액션이 덮어써진 기록. chosen(나중 것)이 테이블에 남는다."""
    state: int
    symbol: str
    previous: Action
    chosen: Action

    @property
    def kinds(self) -> Tuple[str, str]:
        return (self.previous.kind, self.chosen.kind)


class TableConflictError(ValueError):
    """strict 모드에서 테이블 충돌이 있을 때 발생합니다."""

    def __init__(self, message: str, conflicts: Tuple[Conflict, ...]):
        super().__init__(message)
        self.conflicts = conflicts


@dataclass(frozen=True)
class Tables:
    """
    Tables
    ======
    ACTION/GOTO 테이블과 디버그 정보를 담는 불변 컨테이너.

    필드
    ----
    - grammar    : 원 문법 (reduce 시 우변 길이 조회용)
    - symbols    : 고정된 알파벳 테이블
    - automaton  : 정준 상태 모음 + 전이 함수
    - action     : 상태별 행. term(또는 '$') -> Shift | Reduce | Accept | Error
    - goto       : 상태별 행. nonterm -> 다음 상태 | None(정의 안 됨)
    - conflicts  : 덮어쓰기 충돌 기록 (마지막 쓰기가 이김, 보고용)
    - state_items: 디버깅용. 상태별 아이템 문자열

    사용
    ----
    - 런타임은 action_at/goto_at만 조회하며 테이블을 절대 수정하지 않는다.
    - pretty_conflicts(), format_table()은 CLI 출력용.
    """
    grammar: Grammar
    symbols: SymbolTable
    automaton: Automaton
    action: Tuple[Mapping[str, Action], ...]
    goto: Tuple[Mapping[str, Optional[int]], ...]
    conflicts: Tuple[Conflict, ...]
    state_items: Tuple[Tuple[str, ...], ...]

    @property
    def n_states(self) -> int:
        return len(self.action)

    @property
    def start_state(self) -> int:
        return self.automaton.start_state

    def action_at(self, s: int, a: str) -> Action:
        """알파벳 밖 심볼이면 ERROR."""
        return self.action[s].get(a, ERROR)

    def goto_at(self, s: int, A: str) -> Optional[int]:
        return self.goto[s].get(A)

    def rhs_len(self, act: Reduce) -> int:
        return len(self.grammar.rhs_of(act.lhs, act.rule))

    def pretty_conflicts(self) -> str:
        """
        충돌 목록을 사람이 읽기 좋은 문자열로 변환합니다.
        충돌이 없으면 '(no conflicts)' 반환.
        """
        if not self.conflicts:
            return "(no conflicts)"
        lines: List[str] = []
        for c in self.conflicts:
            lines.append(f"state {c.state}, on {c.symbol}: {c.kinds[0]} / {c.kinds[1]}"
                         f" ({c.previous} -> {c.chosen})")
        return "\n".join(lines)

    def format_table(self) -> str:
        """ACTION | GOTO 격자 문자열."""
        terms = list(self.symbols.input_terms)
        nonterms = list(self.symbols.nonterms)
        header = ["state"] + terms + ["|"] + nonterms
        rows: List[List[str]] = [header]
        for s in range(self.n_states):
            row = [str(s)]
            row += [str(self.action_at(s, t)) for t in terms]
            row.append("|")
            row += ["" if self.goto_at(s, A) is None else str(self.goto_at(s, A)) for A in nonterms]
            rows.append(row)
        widths = [max(len(r[i]) for r in rows) for i in range(len(header))]
        return "\n".join(
            "  ".join(cell.rjust(w) for cell, w in zip(r, widths)).rstrip() for r in rows
        )


def build_lr_tables(g: Grammar,
                    sym: SymbolTable,
                    automaton: Optional[Automaton] = None,
                    *,
                    strict: bool = False,
                    debug: bool = False) -> Tables:
    """
    자동자를 훑어 ACTION/GOTO 테이블을 만든다.

    절차
    ----
    1) 기본값: 모든 (상태, 단말|$) = Error, 모든 (상태, 비단말) = None
    2) 상태마다 아이템을 (lhs, rhs, dot) 정렬 순서로 순회
       - [# -> S ·]      : (i, $) = Accept
       - [A -> α ·]      : 모든 단말과 $ 에 대해 (i, t) = Reduce(A, 규칙번호)
       - [A -> α · X β]  : X가 단말이면 (i, X) = Shift(goto), 비단말이면 GOTO(i, X) = goto
         goto는 완성된 자동자에서 **조회만** 한다(새 상태를 만들지 않음)
    3) 우선순위 없음: 같은 칸은 마지막 쓰기가 이긴다. 덮어쓰기는 conflicts에 기록
    4) strict=True 면 충돌이 있을 때 TableConflictError
    """
    if automaton is None:
        automaton = build_automaton(g, sym, debug=debug)

    action: List[Dict[str, Action]] = []
    goto: List[Dict[str, Optional[int]]] = []
    conflicts: List[Conflict] = []

    for _ in range(automaton.n_states):
        action.append({t: ERROR for t in sym.input_terms})
        goto.append({A: None for A in sym.nonterms})

    def write(s: int, a: str, act: Action) -> None:
        prev = action[s][a]
        if prev != ERROR and prev != act:
            conflicts.append(Conflict(s, a, prev, act))
            if debug:
                print(f"[conflict] state {s}, on {a}: {prev.kind} {prev} -> {act.kind} {act} (last write wins)")
        action[s][a] = act

    for s in range(automaton.n_states):
        for it in automaton.sorted_items(s):
            if it.complete:
                if it.lhs == AUG_START:
                    write(s, EOF, ACCEPT)
                else:
                    red = Reduce(it.lhs, g.rule_number(it.lhs, it.rhs))
                    for t in sym.input_terms:
                        write(s, t, red)
                continue

            X = it.next_symbol
            j = automaton.target(s, X)
            if j is None:
                # 알파벳에 없는 시작기호 등: 전이 없음
                continue
            if sym.is_term(X):
                write(s, X, Shift(j))
            elif sym.is_nonterm(X):
                goto[s][X] = j

    state_items = tuple(
        tuple(str(it) for it in automaton.sorted_items(s)) for s in range(automaton.n_states)
    )

    tables = Tables(
        grammar=g,
        symbols=sym,
        automaton=automaton,
        action=tuple(MappingProxyType(row) for row in action),
        goto=tuple(MappingProxyType(row) for row in goto),
        conflicts=tuple(conflicts),
        state_items=state_items,
    )

    if strict and tables.conflicts:
        raise TableConflictError(
            f"{len(tables.conflicts)} table conflict(s):\n" + tables.pretty_conflicts(),
            tables.conflicts,
        )
    return tables
