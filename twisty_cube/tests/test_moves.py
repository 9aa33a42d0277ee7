import unittest

from twisty_cube.core import CLOCKWISE, COUNTERCLOCKWISE, initialize, rotate
from twisty_cube.logic.catalog import THEMES
from twisty_cube.logic.moves import (
    Move,
    format_sequence,
    inverse_sequence,
    normalize_token,
    parse_sequence,
    parse_token,
    to_notation,
)


class TestNotation(unittest.TestCase):
    def test_to_notation(self):
        self.assertEqual(to_notation("R", CLOCKWISE), "R")
        self.assertEqual(to_notation("R", COUNTERCLOCKWISE), "R'")
        self.assertEqual(Move("U", COUNTERCLOCKWISE).notation, "U'")

    def test_normalize_token(self):
        self.assertEqual(normalize_token(" R "), "R")
        self.assertEqual(normalize_token("U’"), "U'")
        self.assertEqual(normalize_token("D2'"), "D2")
        self.assertEqual(normalize_token(""), "")

    def test_invalid_tokens(self):
        for tok in ("X", "R3", "r", "U''"):
            with self.assertRaises(ValueError):
                normalize_token(tok)

    def test_parse_token(self):
        self.assertEqual(parse_token("F"), [Move("F", CLOCKWISE)])
        self.assertEqual(parse_token("F'"), [Move("F", COUNTERCLOCKWISE)])
        self.assertEqual(parse_token("F2"), [Move("F", CLOCKWISE), Move("F", CLOCKWISE)])

    def test_parse_sequence(self):
        moves = parse_sequence("R U R' U'")
        self.assertEqual(format_sequence(moves), "R U R' U'")
        self.assertEqual(format_sequence(parse_sequence("  F2  B ")), "F F B")

    def test_parse_sequence_strict_and_lenient(self):
        with self.assertRaises(ValueError):
            parse_sequence("R Q U")
        self.assertEqual(format_sequence(parse_sequence("R Q U", strict=False)), "R U")

    def test_inverse_sequence(self):
        self.assertEqual(inverse_sequence("R U R' U'"), "U R U' R'")
        self.assertEqual(inverse_sequence("F R U R' U' F'"), "F U R U' R' F'")
        self.assertEqual(inverse_sequence(""), "")

    def test_sequence_then_inverse_is_identity(self):
        store = initialize(3, THEMES["classic"])
        before = store.to_hashable()
        seq = "R U R' U'"
        for m in parse_sequence(seq) + parse_sequence(inverse_sequence(seq)):
            rotate(store, m.face, m.direction)
        self.assertEqual(before, store.to_hashable())


if __name__ == "__main__":
    unittest.main()
