# settings_generator.py
from __future__ import annotations

import argparse
from pathlib import Path
from random import Random, SystemRandom
from typing import List

from alphabet import DEFAULT_ALPHABET
from configuration import (
    DEFAULT_ROTORS,
    MAX_SEED_LENGTH,
    EnigmaConfiguration,
    clamp_rotor_count,
    save_config,
)

# every printable symbol; the line-break slot is not a seed character
SEED_SYMBOLS = "".join(
    chr(c) for c in range(DEFAULT_ALPHABET.min_char, DEFAULT_ALPHABET.max_char)
)
DEFAULT_SEED_LENGTH = 32

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def random_seed_text(length: int, rng: Random | SystemRandom) -> str:
    lo, hi = DEFAULT_ALPHABET.min_seed_length, MAX_SEED_LENGTH
    if not (lo <= length <= hi):
        raise ValueError(f"Seed length must be in {lo}–{hi}, got {length}")
    return "".join(rng.choice(SEED_SYMBOLS) for _ in range(length))


def random_indexes(count: int, rng: Random | SystemRandom) -> List[int]:
    return [rng.randrange(DEFAULT_ALPHABET.size) for _ in range(count)]


def random_configuration(
    rotors: int = DEFAULT_ROTORS,
    seed_length: int = DEFAULT_SEED_LENGTH,
    rng: Random | SystemRandom | None = None,
) -> EnigmaConfiguration:
    rng = rng if rng is not None else build_rng(None)
    rotors = clamp_rotor_count(rotors)
    return EnigmaConfiguration(
        rotor_count=rotors,
        seed=random_seed_text(seed_length, rng),
        rotor_indexes=random_indexes(rotors, rng),
        reflector_index=rng.randrange(DEFAULT_ALPHABET.size),
    )


def parse_cli(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate an Enigma-96 settings file")
    p.add_argument("--rotors", type=int, default=DEFAULT_ROTORS, help="How many rotors, 1–8 (default 3)")
    p.add_argument(
        "--seed-length",
        type=int,
        default=DEFAULT_SEED_LENGTH,
        help=f"Length of the generated seed string (default {DEFAULT_SEED_LENGTH})",
    )
    p.add_argument("--seed", type=int, help="Deterministic RNG seed (omit for random)")
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_config.json"),
        help="Destination JSON file (default: enigma_config.json)",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_cli(argv)
    rng = build_rng(args.seed)

    try:
        cfg = random_configuration(args.rotors, args.seed_length, rng)
    except ValueError as e:
        raise SystemExit(f"❌  {e}")

    save_config(cfg, args.outfile)
    print(f"✅  Wrote {args.outfile}\n"
        f"   rotors      : {cfg.rotor_count}\n"
        f"   indexes     : {list(cfg.indexes())}\n"
        f"   seed length : {len(cfg.seed)}")


if __name__ == "__main__":
    main()
