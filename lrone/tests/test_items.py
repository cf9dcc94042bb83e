import unittest

from lrone.grammar.parser import parse_rules
from lrone.grammar.transform import to_grammar
from lrone.lalr.symbols import SymbolTable, AUG_START
from lrone.lalr.items import Item, closure, goto, build_automaton, start_item


def _grammar(rules):
    g = to_grammar(parse_rules(rules))
    return g, SymbolTable.from_grammar(g)


class TestItem(unittest.TestCase):
    def test_structural_order(self):
        items = [Item("S", "AB", 1), Item("A", "a", 0), Item(AUG_START, "S", 0), Item("S", "", 0),
                 Item("S", "AB", 0)]
        self.assertEqual(sorted(items), [Item("#", "S", 0), Item("A", "a", 0), Item("S", "", 0),
                                         Item("S", "AB", 0), Item("S", "AB", 1)])

    def test_next_symbol_and_advance(self):
        it = Item("S", "AB", 0)
        self.assertEqual(it.next_symbol, "A")
        self.assertFalse(it.complete)
        done = it.advance().advance()
        self.assertIsNone(done.next_symbol)
        self.assertTrue(done.complete)
        self.assertTrue(Item("S", "", 0).complete)

    def test_str(self):
        self.assertEqual(str(Item("S", "AB", 1)), "[S -> A · B]")


class TestClosure(unittest.TestCase):
    def test_closure_of_start_item(self):
        g, _ = _grammar(["S->AB", "A->a", "B->b"])
        self.assertEqual(closure({start_item()}, g),
                         frozenset({Item("#", "S", 0), Item("S", "AB", 0), Item("A", "a", 0)}))

    def test_closure_reaches_fixpoint_through_chains(self):
        # A is expanded only after it was added itself
        g, _ = _grammar(["S->A", "A->Bc", "B->Cd", "C->e"])
        got = closure({start_item()}, g)
        self.assertIn(Item("C", "e", 0), got)
        self.assertEqual(len(got), 5)

    def test_closure_does_not_mutate_input(self):
        g, _ = _grammar(["S->AB", "A->a", "B->b"])
        seed = {start_item()}
        closure(seed, g)
        self.assertEqual(seed, {start_item()})

    def test_left_recursion_terminates(self):
        g, _ = _grammar(["S->Sa", "S->a"])
        got = closure({start_item()}, g)
        self.assertEqual(got, frozenset({Item("#", "S", 0), Item("S", "Sa", 0), Item("S", "a", 0)}))


class TestGoto(unittest.TestCase):
    def test_goto_advances_and_closes(self):
        g, _ = _grammar(["S->AB", "A->a", "B->b"])
        I0 = closure({start_item()}, g)
        self.assertEqual(goto(I0, "A", g), frozenset({Item("S", "AB", 1), Item("B", "b", 0)}))

    def test_goto_without_transition_is_empty(self):
        g, _ = _grammar(["S->AB", "A->a", "B->b"])
        I0 = closure({start_item()}, g)
        self.assertEqual(goto(I0, "b", g), frozenset())


class TestAutomaton(unittest.TestCase):
    def test_states_and_transitions(self):
        g, sym = _grammar(["S->AB", "A->a", "B->b"])
        auto = build_automaton(g, sym)
        self.assertEqual(auto.n_states, 6)
        self.assertEqual(auto.states[2], frozenset({Item("#", "S", 1)}))
        self.assertEqual(dict(auto.transitions),
                         {(0, "A"): 1, (0, "S"): 2, (0, "a"): 3, (1, "B"): 4, (1, "b"): 5})
        self.assertIsNone(auto.target(0, "b"))

    def test_states_are_unique(self):
        g, sym = _grammar(["S->aSb", "S->ab", "S->SS"])
        auto = build_automaton(g, sym)
        self.assertEqual(len(set(auto.states)), auto.n_states)

    def test_shared_targets_deduplicated_within_a_sweep(self):
        # states 2 (after a) and 3 (after b) both reach {C -> c ·} in the same sweep
        g, sym = _grammar(["S->aC", "S->bC", "C->c"])
        auto = build_automaton(g, sym)
        self.assertEqual(auto.n_states, 7)
        target = frozenset({Item("C", "c", 1)})
        self.assertEqual(sum(1 for st in auto.states if st == target), 1)
        idx = auto.index_of(target)
        self.assertEqual(idx, 5)
        self.assertEqual(auto.target(2, "c"), idx)
        self.assertEqual(auto.target(3, "c"), idx)

    def test_grammar_without_start_rules(self):
        g, sym = _grammar([])
        auto = build_automaton(g, sym)
        self.assertEqual(auto.n_states, 1)
        self.assertEqual(auto.states[0], frozenset({start_item()}))

    def test_build_is_deterministic(self):
        rules = ["S->AB", "S->", "A->a", "B->b", "B->AA"]
        g1, s1 = _grammar(rules)
        g2, s2 = _grammar(rules)
        self.assertEqual(build_automaton(g1, s1), build_automaton(g2, s2))


if __name__ == '__main__':
    unittest.main()
