import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from configuration import build_machine, load_config
from settings_generator import (
    SEED_SYMBOLS,
    build_rng,
    main,
    random_configuration,
    random_seed_text,
)


class SettingsGeneratorTests(unittest.TestCase):
    def test_seed_symbols_are_the_printable_range(self):
        self.assertEqual(len(SEED_SYMBOLS), 95)
        self.assertEqual(SEED_SYMBOLS[0], " ")
        self.assertEqual(SEED_SYMBOLS[-1], "~")

    def test_deterministic_with_rng_seed(self):
        a = random_configuration(5, 20, build_rng(42))
        b = random_configuration(5, 20, build_rng(42))
        self.assertEqual(a, b)

    def test_configuration_shape(self):
        cfg = random_configuration(4, 16, build_rng(7))
        self.assertEqual(cfg.rotor_count, 4)
        self.assertEqual(len(cfg.seed), 16)
        self.assertTrue(set(cfg.seed) <= set(SEED_SYMBOLS))
        self.assertEqual(len(cfg.indexes()), 5)
        self.assertTrue(all(0 <= i < 96 for i in cfg.indexes()))
        self.assertTrue(build_machine(cfg).is_initialized)

    def test_rotor_count_is_clamped(self):
        self.assertEqual(random_configuration(30, 12, build_rng(1)).rotor_count, 8)

    def test_seed_length_bounds(self):
        for bad in (9, 95):
            with self.assertRaises(ValueError):
                random_seed_text(bad, build_rng(1))

    def test_main_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "cfg.json"
            with redirect_stdout(io.StringIO()):
                main(["--rotors", "6", "--seed", "3", "--outfile", str(out)])
            cfg = load_config(out)
            self.assertEqual(cfg.rotor_count, 6)
            self.assertEqual(len(cfg.seed), 32)

    def test_main_bad_seed_length(self):
        with self.assertRaises(SystemExit):
            main(["--seed-length", "3", "--outfile", "unused.json"])


if __name__ == "__main__":
    unittest.main()
