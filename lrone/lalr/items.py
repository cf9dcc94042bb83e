# lrone/lalr/items.py
"""LR 아이템 / 클로저 / 고토 + 정준(canonical) 상태 모음(자동자) 구성.

이 모듈은 Grammar를 입력으로 받아
- 점(dot) 찍힌 프로덕션(아이템)
- 클로저 고정점
- 고토(전진 + 클로저)
- 상태 DFA(정준 모음 + 전이 함수)
을 만든다.

주의:
- 증강 시작 아이템은 [# -> · S] 이다. 시작 비단말은 관례상 항상 'S'.
- 상태 동일성은 아이템 **집합의 구조적 동일성**(frozenset 비교)으로만 판단한다.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..grammar.ast import Grammar
from .symbols import SymbolTable, AUG_START, START


# ---------- LR 아이템 ----------
@dataclass(frozen=True, order=True)
class Item:
    """LR 아이템: [A -> α · β]. 정렬은 (lhs, rhs, dot) 순."""
    lhs: str
    rhs: str
    dot: int

    @property
    def complete(self) -> bool:
        return self.dot == len(self.rhs)

    @property
    def next_symbol(self) -> Optional[str]:
        """점 바로 뒤 심볼. 점이 끝에 있으면 None."""
        if self.dot < len(self.rhs):
            return self.rhs[self.dot]
        return None

    def advance(self) -> "Item":
        return Item(self.lhs, self.rhs, self.dot + 1)

    def __str__(self) -> str:
        rhs = list(self.rhs)
        rhs.insert(self.dot, "·")
        return f"[{self.lhs} -> {' '.join(rhs)}]"


State = FrozenSet[Item]

def start_item() -> Item:
    return Item(AUG_START, START, 0)


def closure(items: Iterable[Item], g: Grammar) -> State:
    """
    점 뒤가 비단말 N인 아이템마다 N의 모든 프로덕션을 dot=0으로 추가,
    더 이상 추가되는 아이템이 없을 때까지 반복한다. 입력은 건드리지 않는다.
    """
    I = set(items)
    changed = True
    while changed:
        changed = False
        for it in list(I):
            X = it.next_symbol
            if X is None or X not in g.nonterms:
                continue
            for rhs in g.productions_of(X):
                new_item = Item(X, rhs, 0)
                if new_item not in I:
                    I.add(new_item)
                    changed = True
    return frozenset(I)


def goto(state: Iterable[Item], X: str, g: Grammar) -> State:
    """점 뒤가 X인 아이템들을 전진시킨 뒤 closure. 전진할 아이템이 없으면 빈 집합."""
    J = {it.advance() for it in state if it.next_symbol == X}
    if not J:
        return frozenset()
    return closure(J, g)


# ---------- 자동자 ----------
@dataclass(frozen=True)
class Automaton:
    """
    Automaton
    =========
    정준 상태 모음과 부분 전이 함수(goto 그래프).

    - states     : 상태 튜플. 0번이 closure({[# -> · S]})
    - transitions: (state, symbol) -> state. 단말/비단말 모두 포함.
                   키가 없으면 "전이 없음"(정의된 부정 결과)
    """
    states: Tuple[State, ...]
    transitions: Mapping[Tuple[int, str], int]

    @property
    def n_states(self) -> int:
        return len(self.states)

    @property
    def start_state(self) -> int:
        return 0

    def target(self, s: int, X: str) -> Optional[int]:
        """s에서 X로의 전이 대상. 없으면 None."""
        return self.transitions.get((s, X))

    def index_of(self, state: Iterable[Item]) -> Optional[int]:
        key = frozenset(state)
        for i, st in enumerate(self.states):
            if st == key:
                return i
        return None

    def sorted_items(self, s: int) -> List[Item]:
        return sorted(self.states[s])


def build_automaton(g: Grammar, sym: SymbolTable, *, debug: bool = False) -> Automaton:
    """
    build_automaton
    ===============
    상태 0에서 시작해 **스윕** 단위로 모든 (상태, 심볼) 쌍의 goto를 계산한다.
    한 스윕이 새 상태를 하나도 만들지 못하면 종료(고정점).

    - 심볼 순서: sym.sweep_order (비단말 정렬 → 단말 정렬)
    - 새 상태는 발견 순서대로 번호를 받는다.
    - 같은 스윕에서 이미 만들어진 상태와도 중복을 제거한다.
    """
    states: List[State] = []
    state_index: Dict[State, int] = {}

    def add_state(items: State) -> int:
        if items in state_index:
            return state_index[items]
        idx = len(states)
        states.append(items)
        state_index[items] = idx
        return idx

    add_state(closure({start_item()}, g))  # 상태 0
    transitions: Dict[Tuple[int, str], int] = {}

    swept = 0
    n_sweep = 0
    while True:
        frontier = range(swept, len(states))
        before = len(states)
        for s in frontier:
            for X in sym.sweep_order:
                J = goto(states[s], X, g)
                if not J:
                    continue
                transitions[(s, X)] = add_state(J)
        swept = before
        n_sweep += 1
        if debug:
            print(f"[automaton] sweep {n_sweep}: states={len(states)} (+{len(states) - before})")
        if len(states) == before:
            break

    return Automaton(states=tuple(states), transitions=MappingProxyType(transitions))
