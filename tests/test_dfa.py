# tests/test_dfa.py

import unittest

import numpy as np
import pandas as pd

from re2dfa import re2dfa
from re2dfa.automata.dfa import Alphabet, DFA, FAIL_STATE


class TestAlphabet(unittest.TestCase):
    def test_distinct_sorted_symbols(self):
        alphabet = Alphabet("(b|a)*ab0")
        self.assertEqual(list(alphabet), ["0", "a", "b"])
        self.assertEqual(len(alphabet), 3)
        self.assertIn("a", alphabet)
        self.assertNotIn("(", alphabet)

    def test_unsupported_characters_excluded(self):
        self.assertEqual(list(Alphabet("a.b c#")), ["a", "b", "c"])

    def test_empty(self):
        self.assertEqual(len(Alphabet("()*|")), 0)


class TestDFAContainer(unittest.TestCase):
    def setUp(self):
        self.dfa = DFA(Alphabet("ab"))
        self.dfa.create_state("S", is_initial=True)
        self.dfa.create_state("T")

    def test_initial_state(self):
        self.assertEqual(self.dfa.initial_state, "S")
        self.assertTrue(self.dfa.get_state("S").is_initial)

    def test_set_initial_moves_the_flag(self):
        self.dfa.set_initial("T")
        self.assertEqual(self.dfa.initial_state, "T")
        self.assertFalse(self.dfa.get_state("S").is_initial)
        self.assertTrue(self.dfa.validate())

    def test_transitions(self):
        self.dfa.set_trans("S", "a", "T")
        self.dfa.set_trans("S", "a", "T")  # same target twice is fine
        self.assertEqual(self.dfa.get_trans("S", "a"), "T")
        self.assertIsNone(self.dfa.get_trans("S", "b"))
        self.assertEqual(self.dfa.transition_count, 1)

    def test_final_states(self):
        self.dfa.make_final("T")
        self.assertEqual(self.dfa.final_states, ["T"])
        self.assertTrue(self.dfa.is_final("T"))
        self.assertFalse(self.dfa.is_final("S"))

    def test_duplicate_state(self):
        with self.assertRaises(ValueError):
            self.dfa.create_state("S")

    def test_unknown_state(self):
        with self.assertRaises(ValueError):
            self.dfa.set_trans("S", "a", "X")
        with self.assertRaises(ValueError):
            self.dfa.make_final("X")
        with self.assertRaises(ValueError):
            self.dfa.set_initial("X")

    def test_symbol_outside_alphabet(self):
        with self.assertRaises(ValueError):
            self.dfa.set_trans("S", "c", "T")

    def test_conflicting_transition(self):
        self.dfa.set_trans("S", "a", "T")
        with self.assertRaises(ValueError):
            self.dfa.set_trans("S", "a", "S")

    def test_reachable_states(self):
        self.dfa.create_state("U")
        self.dfa.set_trans("S", "a", "T")
        self.assertEqual(self.dfa.get_reachable_states(), {"S", "T"})
        self.assertEqual(self.dfa.get_reachable_states("U"), {"U"})

    def test_validate_requires_initial_state(self):
        dfa = DFA(Alphabet("a"))
        dfa.create_state("S")
        self.assertFalse(dfa.validate())


class TestExports(unittest.TestCase):
    def test_dataframe(self):
        df = re2dfa("ab").to_dataframe()
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(list(df.index), ["{1}", "{2}", "{3}"])
        self.assertEqual(list(df.columns), ["a", "b", "initial", "final"])
        self.assertEqual(df.loc["{1}", "a"], "{2}")
        self.assertTrue(pd.isna(df.loc["{1}", "b"]))
        self.assertEqual(df.loc["{2}", "b"], "{3}")
        self.assertEqual(df["initial"].tolist(), [True, False, False])
        self.assertEqual(df["final"].tolist(), [False, False, True])

    def test_transition_matrix(self):
        matrix = re2dfa("(a|b)*abb").transition_matrix()
        np.testing.assert_array_equal(matrix, np.array([[1, 0], [1, 2], [1, 3], [1, 0]]))

    def test_transition_matrix_marks_missing_transitions(self):
        matrix = re2dfa("ab").transition_matrix()
        self.assertEqual(matrix.shape, (3, 2))
        self.assertEqual(matrix[0, 1], FAIL_STATE)
        self.assertEqual(matrix[0, 0], 1)
        self.assertTrue((matrix[2] == FAIL_STATE).all())

    def test_debug_info(self):
        info = re2dfa("a").get_debug_info()
        self.assertEqual(info["alphabet"], ["a"])
        self.assertEqual(info["state_count"], 2)
        self.assertEqual(info["states"], {"{1}": {"a": "{2}"}, "{2}": {}})
        self.assertEqual(info["final_states"], ["{2}"])

    def test_produced_dfa_is_valid(self):
        dfa = re2dfa("(a|b)*(ab|ba)a*")
        self.assertTrue(dfa.validate())
        self.assertEqual(dfa.get_reachable_states(), set(dfa.states))


if __name__ == '__main__':
    unittest.main()
