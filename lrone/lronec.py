# lrone/lronec.py
"""lronec – lrone CLI

사용 예)
    $ python -m lrone.lronec check lrone/tests/grammars/ab.g -D
    $ python -m lrone.lronec table lrone/tests/grammars/ab.g
    $ python -m lrone.lronec run lrone/tests/grammars/ab.g --text ab -D

기능
----
- check : 규칙 파일을 읽어 파이프라인(규칙→Grammar→자동자→ACTION/GOTO) 검증 및 요약 출력
- table : ACTION/GOTO 표 출력
- run   : 입력 문자열의 멤버십 판정 (ACCEPT 시 종료코드 0, REJECT 시 1)

디버그 모드(-D/--debug)를 켜면 문법/상태 아이템/충돌 리포트, run에서는 스택 추적을 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(rules_path: str, debug: bool, strict: bool = False):
    """
    규칙 파일을 읽어 Grammar→SymbolTable→자동자→테이블까지 생성.
    """
    from .grammar.loader import load_rules
    from .grammar.parser import parse_rules
    from .grammar.transform import to_grammar
    from .lalr.symbols import SymbolTable
    from .lalr.items import build_automaton
    from .lalr.table import build_lr_tables

    rules = load_rules(rules_path)
    decls = parse_rules(rules)
    if debug: _eprint("[DEBUG] rules parsed | count=%d" % len(decls))

    g = to_grammar(decls)
    if debug: _eprint("[DEBUG] Grammar ready | terms=%d nonterms=%d rules=%d" %
                      (len(g.terms), len(g.nonterms), g.n_rules))

    sym = SymbolTable.from_grammar(g)
    automaton = build_automaton(g, sym, debug=debug)
    if debug: _eprint("[DEBUG] automaton built | states=%d transitions=%d" %
                      (automaton.n_states, len(automaton.transitions)))

    tbl = build_lr_tables(g, sym, automaton, strict=strict, debug=debug)
    if debug: _eprint("[DEBUG] tables built | states=%d conflicts=%d" %
                      (tbl.n_states, len(tbl.conflicts)))
    return g, tbl

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_grammar_summary(g) -> None:
    _eprint("\n[Grammar]")
    for lhs, rhss in g.productions.items():
        for i, rhs in enumerate(rhss):
            _eprint(f"  {lhs}{i}: {lhs} -> {rhs or 'ε'}")
    _eprint("Terminals:")
    _eprint("  " + ", ".join(sorted(g.terms)))
    _eprint("Nonterminals:")
    _eprint("  " + ", ".join(sorted(g.nonterms)))


def _print_tables_summary(tbl) -> None:
    _eprint("\n[Parsing Tables]")
    _eprint(f"States: {tbl.n_states}")
    _eprint(f"Conflicts: {len(tbl.conflicts)}")
    if tbl.conflicts:
        _eprint("\n[Conflicts Detail]")
        _eprint(tbl.pretty_conflicts())
    for s, items in enumerate(tbl.state_items):
        _eprint(f"\n[State {s} items]")
        for line in items:
            _eprint("  " + line)

# ------------------------------
# 커맨드 구현
# ------------------------------

def _guarded_load(args, strict: bool = False):
    from .lalr.table import TableConflictError
    try:
        return _load_pipeline(args.file, debug=args.debug, strict=strict)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
    except TableConflictError as e:
        _eprint("[CONFLICT]")
        _eprint(str(e))
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
    return None


def cmd_check(args) -> int:
    loaded = _guarded_load(args, strict=args.strict)
    if loaded is None:
        return 2
    g, tbl = loaded

    if args.debug:
        _print_grammar_summary(g)
        _print_tables_summary(tbl)

    print(f"[CHECK OK] states={tbl.n_states} rules={g.n_rules} conflicts={len(tbl.conflicts)}")
    return 0


def cmd_table(args) -> int:
    loaded = _guarded_load(args)
    if loaded is None:
        return 2
    g, tbl = loaded
    print(tbl.format_table())
    if tbl.conflicts:
        _eprint("[WARN] Conflicts present; last write wins.")
        _eprint(tbl.pretty_conflicts())
    return 0


def cmd_run(args) -> int:
    from .lalr.runtime import recognize

    loaded = _guarded_load(args)
    if loaded is None:
        return 2
    g, tbl = loaded

    if args.text is not None:
        text = args.text
    else:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read().rstrip("\r\n")
        except OSError as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2

    trace = (lambda step: _eprint("[TRACE] " + str(step))) if args.debug else None
    ok = recognize(tbl, text, trace)
    print("ACCEPT" if ok else "REJECT")
    return 0 if ok else 1

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="lronec", description="lrone LR automaton / recognizer CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="규칙을 검사하고 테이블을 생성해 충돌 유무를 확인합니다")
    p_check.add_argument("file", help="규칙 파일 (한 줄에 LHS->RHS 하나)")
    p_check.add_argument("--strict", action="store_true", help="테이블 충돌이 있으면 실패로 처리")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_table = sub.add_parser("table", help="ACTION/GOTO 표를 출력합니다")
    p_table.add_argument("file", help="규칙 파일")
    p_table.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_table.set_defaults(func=cmd_table)

    p_run = sub.add_parser("run", help="입력 문자열이 문법의 언어에 속하는지 판정합니다")
    p_run.add_argument("file", help="규칙 파일")
    src_group = p_run.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 문자열")
    src_group.add_argument("--input", help="입력 문자열 파일 경로")
    p_run.add_argument("-D", "--debug", action="store_true", help="스택 추적을 상세 출력")
    p_run.set_defaults(func=cmd_run)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
