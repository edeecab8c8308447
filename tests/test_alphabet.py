import unittest

from alphabet import (
    DEFAULT_ALPHABET,
    AlphabetConfig,
    clean_text,
    is_printable,
    to_index,
    to_symbol,
)


class AlphabetTests(unittest.TestCase):
    def test_every_printable_symbol_round_trips(self):
        for code in range(0x20, 0x7F):
            ch = chr(code)
            self.assertEqual(to_symbol(to_index(ch)), ch)

    def test_space_and_tilde_are_the_ends_of_the_range(self):
        self.assertEqual(to_index(" "), 0)
        self.assertEqual(to_index("~"), 94)

    def test_line_feed_takes_the_last_index(self):
        self.assertEqual(to_index("\n"), 95)
        self.assertEqual(to_symbol(95), "\r\n")

    def test_out_of_range_symbols_become_space(self):
        for ch in ("\t", "\x00", "\x7f", "é", "€"):
            self.assertEqual(to_index(ch), 0, ch)

    def test_out_of_range_indexes_become_space(self):
        self.assertEqual(to_symbol(-1), " ")
        self.assertEqual(to_symbol(96), " ")

    def test_clean_text_skips_carriage_returns(self):
        self.assertEqual(list(clean_text("A\r\nB")), [33, 95, 34])

    def test_is_printable(self):
        self.assertTrue(is_printable("a"))
        self.assertFalse(is_printable("\n"))
        self.assertFalse(is_printable("\x7f"))


class AlphabetConfigTests(unittest.TestCase):
    def test_default_bounds(self):
        self.assertEqual(DEFAULT_ALPHABET.size, 96)
        self.assertEqual(DEFAULT_ALPHABET.max_index, 95)
        self.assertEqual(DEFAULT_ALPHABET.line_break_index, 95)
        self.assertEqual(DEFAULT_ALPHABET.max_char, 0x7F)
        self.assertEqual(DEFAULT_ALPHABET.min_seed_length, 10)

    def test_config_is_immutable(self):
        with self.assertRaises(AttributeError):
            DEFAULT_ALPHABET.size = 10

    def test_odd_size_is_rejected(self):
        with self.assertRaises(ValueError):
            AlphabetConfig(size=95)

    def test_custom_line_break(self):
        unix = AlphabetConfig(line_break="\n")
        self.assertEqual(to_symbol(95, unix), "\n")


if __name__ == "__main__":
    unittest.main()
