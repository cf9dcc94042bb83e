"""(MVP) 간단한 규칙 파일 로더
- 한 줄에 규칙 하나 (`S->aSb`)
- 빈 줄과 `//` 주석 줄은 건너뜀
- `S->` 처럼 우변이 빈 줄은 ε-프로덕션으로 그대로 유지
"""

from __future__ import annotations
from pathlib    import Path
from typing     import List


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_rules(text: str) -> List[str]:
    """규칙 파일 원문을 규칙 문자열 리스트로 나눕니다."""
    rules: List[str] = []
    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("//"):
            continue
        rules.append(line)
    return rules


def load_rules(path: str) -> List[str]:
    return split_rules(load_grammar_text(path))
