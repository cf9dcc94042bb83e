# lrone/lalr/runtime.py
"""LR 파서 런타임(스택 머신) — 멤버십 판정 전용.

- `Tables`(ACTION/GOTO)를 받아 입력 문자열이 문법의 언어에 속하는지
  **accept/reject(True/False)** 로만 답합니다.
- 어떤 입력에도 예외를 던지지 않습니다. 알파벳 밖 문자, 정의 안 된 GOTO,
  스택 언더플로, 끝나지 않는 reduce 순환은 모두 reject 입니다.
- 테이블은 읽기만 하므로 여러 호출이 같은 Tables를 공유해도 안전합니다.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Set, Tuple
from dataclasses import dataclass

from .table import Tables, Action, Shift, Reduce, Accept
from .symbols import EOF


@dataclass(frozen=True)
class Step:
    """trace 콜백에 넘기는 한 단계 기록."""
    stack: Tuple[int, ...]
    pos: int
    symbol: str
    action: Action

    def __str__(self) -> str:
        stack = " ".join(map(str, self.stack))
        return f"[{stack}] @{self.pos} {self.symbol!r}: {self.action.kind} {self.action}".rstrip()


def _diverges(history: List[List[int]], q: int, depth: int) -> bool:
    """
    shift 없이 (q, depth)에 다시 도달했는지 검사.
    이전 기록 (q, d)가 있고 d <= depth 이며 그 사이 스택이 d 아래로 내려간 적이 없다면
    같은 reduce 구간이 영원히 반복된다.
    """
    for st, d, low in history:
        if st == q and d <= depth and low >= d:
            return True
    return False


def recognize(tables: Tables, text: str,
              trace: Optional[Callable[[Step], None]] = None) -> bool:
    """Tables로 입력 문자열을 판정합니다.

    Parameters
    ----------
    tables : Tables
        ACTION/GOTO 테이블 묶음 (수정하지 않음).
    text : str
        판정할 문자열. 문자 하나가 단말 하나.
    trace : Callable[[Step], None], optional
        매 단계 호출되는 디버그 콜백.

    Returns
    -------
    bool
        문법이 text를 유도하면 True, 아니면 False.

    Notes
    -----
    - 입력 끝에 '$'를 붙여 읽습니다. 사용자 문자열 안의 '$'는 알파벳 밖 문자입니다.
    - Accept는 커서가 마지막('$')에 있을 때만 True.
    """
    sym = tables.symbols
    stream = text + EOF
    last = len(stream) - 1

    # 내부 상태 스택(정수): 시작 상태에서 시작
    stack: List[int] = [tables.start_state]

    # 마지막 shift 이후의 reduce 구간 기록: [state, depth, 그 이후 최저 깊이]
    history: List[List[int]] = [[stack[-1], len(stack), len(stack)]]
    seen: Set[Tuple[int, ...]] = set()

    index = 0
    while index < len(stream):
        s = stack[-1]
        a = stream[index]
        if index < last and not sym.is_term(a):
            return False

        act = tables.action_at(s, a)
        if trace is not None:
            trace(Step(tuple(stack), index, a, act))

        if isinstance(act, Shift):
            stack.append(act.target)
            index += 1
            history = [[act.target, len(stack), len(stack)]]
            seen.clear()
            continue

        if isinstance(act, Reduce):
            n = tables.rhs_len(act)
            if n >= len(stack):
                return False
            if n:
                del stack[-n:]
            for h in history:
                h[2] = min(h[2], len(stack))
            t = tables.goto_at(stack[-1], act.lhs)
            if t is None:
                return False
            stack.append(t)

            key = tuple(stack)
            if key in seen or _diverges(history, t, len(stack)):
                return False
            seen.add(key)
            history.append([t, len(stack), len(stack)])
            continue

        if isinstance(act, Accept):
            return index == last

        # Error
        return False

    return False
