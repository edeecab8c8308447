# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

from configuration import (
    DEFAULT_ROTORS,
    EnigmaConfiguration,
    build_machine,
    load_config,
    save_config,
)
from debug import COMPONENTS, Debug
from enigma_machine import EnigmaMachine

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

DEFAULT_CONFIG = Path("enigma_config.json")


@dataclass(slots=True)
class Config:
    """Runtime switches for the front end."""

    block: int = 0                  # group output in blocks of N symbols (0 = off)
    rewind_each_line: bool = True   # REPL: rewind before every line


def parse_indexes(raw: str) -> List[int]:
    """Turn "5 10 15" or "5,10,15" into [5, 10, 15]."""
    try:
        return [int(tok) for tok in raw.replace(",", " ").split()]
    except ValueError:
        raise ValueError(f"Indexes must be whole numbers, got {raw!r}")


def config_from_args(args: argparse.Namespace) -> EnigmaConfiguration:
    """Settings from --seed/--rotors/--indexes, else from a JSON file."""
    if args.seed is not None:
        values = parse_indexes(args.indexes) if args.indexes else []
        rotors = args.rotors if args.rotors is not None else (len(values) - 1 if values else DEFAULT_ROTORS)
        return EnigmaConfiguration(
            rotor_count=rotors,
            seed=args.seed,
            rotor_indexes=values[:-1],
            reflector_index=values[-1] if values else 0,
        )

    cfg_path = Path(args.config) if args.config else DEFAULT_CONFIG
    if not cfg_path.exists():
        raise ValueError(f"No seed given and no config file at '{cfg_path}'")
    cfg = load_config(cfg_path)
    if args.rotors is not None:
        cfg.rotor_count = args.rotors
    values = parse_indexes(args.indexes) if args.indexes else []
    if values:
        cfg.rotor_indexes, cfg.reflector_index = values[:-1], values[-1]
    return cfg


# ────────────────────────────────────────────────────────────────────────
#  1. MachineContext – wraps a machine & rewind logic
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """A thin wrapper so we do not pass the settings around separately."""

    def __init__(self, cfg: EnigmaConfiguration) -> None:
        self.cfg = cfg
        self.machine: EnigmaMachine = build_machine(cfg)
        if not self.machine.is_initialized:
            raise ValueError("A seed of at least 10 characters is required.")

    def rewind(self) -> None:
        """Back to the configured starting indexes."""
        self.machine.reset_indexes()

    def transform_block(self, text: str) -> str:
        """Transform *text* from the starting indexes."""
        self.rewind()
        return self.machine.transform(text)


def group_blocks(text: str, block: int) -> str:
    if block <= 0:
        return text
    return "  ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Encrypt or decrypt with the 96-symbol Enigma. "
        "The machine is self-reciprocal: transforming the output again with "
        "the same settings gives back the input."
    )
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to transform. If omitted (and no --infile), an interactive REPL starts.")
    p.add_argument("--infile", type=Path, help="Transform the contents of this file.")
    p.add_argument("--outfile", type=Path, help="Write the result here instead of stdout.")
    p.add_argument("--config", metavar="FILE", help=f"Load machine settings from JSON (default {DEFAULT_CONFIG} when no --seed).")
    p.add_argument("--seed", metavar="TEXT", help="Seed string, at least 10 characters.")
    p.add_argument("--rotors", type=int, help="Number of rotors, 1–8.")
    p.add_argument("--indexes", metavar="LIST", help='Starting indexes "r1 … rN reflector", each 0–95.')
    p.add_argument("--save", type=Path, metavar="FILE", help="Save the settings used to this JSON file.")
    p.add_argument("--block", type=int, default=0, help="Group output in blocks of N symbols (display only).")
    p.add_argument("--no-rewind", action="store_true", help="REPL: keep stepping across lines instead of rewinding before each one.")
    p.add_argument("--debug", action="append", choices=COMPONENTS, default=[], help="Enable component logging (repeatable).")
    return p.parse_args(argv)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    if args.debug:
        debug.enable(*args.debug)

    try:
        cfg = config_from_args(args)
        ctx = MachineContext(cfg)
    except (ValueError, TypeError, RuntimeError) as e:
        raise SystemExit(f"❌  Configuration error: {e}")

    if args.save:
        save_config(cfg, args.save)

    run = Config(block=args.block, rewind_each_line=not args.no_rewind)

    # one‑shot mode ------------------------------------------------------
    if args.message is not None or args.infile is not None:
        text = args.message if args.message is not None else args.infile.read_text(encoding="utf-8")
        result = ctx.transform_block(text)
        if args.outfile:
            args.outfile.write_text(result, encoding="utf-8", newline="")
            print(f"Wrote {args.outfile} ({len(result)} chars)")
        else:
            sys.stdout.write(group_blocks(result, run.block) + "\n")
        return

    # interactive REPL ---------------------------------------------------
    print(f"\nMachine ready: {ctx.machine.rotor_count} rotors, indexes {list(cfg.indexes())}.")
    print("Type blank line to quit.\n")
    while True:
        txt = input("\nText > ")
        if not txt.strip():
            break
        if run.rewind_each_line:
            ctx.rewind()
        result = ctx.machine.transform(txt)
        print("\nTransformed >", group_blocks(result, run.block))


if __name__ == "__main__":
    main()
