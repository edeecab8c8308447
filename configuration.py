# configuration.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from debug import Debug
from enigma_machine import EnigmaMachine, MAX_ROTORS, MIN_ROTORS

debug = Debug()
debug.disable("config")

DEFAULT_ROTORS = 3
MAX_SEED_LENGTH = 94  # one below the largest index value


@dataclass(slots=True)
class EnigmaConfiguration:
    """Everything needed to rebuild a machine at a known starting point."""

    rotor_count: int = DEFAULT_ROTORS
    seed: str = ""
    rotor_indexes: List[int] = field(default_factory=list)
    reflector_index: int = 0

    def indexes(self) -> Tuple[int, ...]:
        """Rotor indexes padded/truncated to rotor_count, reflector last."""
        rotors = list(self.rotor_indexes[: self.rotor_count])
        rotors += [0] * (self.rotor_count - len(rotors))
        return (*rotors, self.reflector_index)

    def to_dict(self) -> dict:
        return {
            "rotors": self.rotor_count,
            "seed": self.seed,
            "indexes": list(self.indexes()),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EnigmaConfiguration":
        required = {"rotors", "seed", "indexes"}
        missing = required - data.keys()
        if missing:
            raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
        indexes = [int(i) for i in data["indexes"]]
        if not indexes:
            raise ValueError("Config 'indexes' must end with the reflector index")
        return cls(
            rotor_count=int(data["rotors"]),
            seed=str(data["seed"]),
            rotor_indexes=indexes[:-1],
            reflector_index=indexes[-1],
        )


def load_config(path: str | Path) -> EnigmaConfiguration:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    cfg = EnigmaConfiguration.from_dict(data)
    debug.log("config", "loaded %s (%d rotors)", path, cfg.rotor_count)
    return cfg


def save_config(cfg: EnigmaConfiguration, path: str | Path) -> None:
    Path(path).write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")
    debug.log("config", "wrote %s", path)


def clamp_rotor_count(count: int) -> int:
    clamped = min(max(count, MIN_ROTORS), MAX_ROTORS)
    if clamped != count:
        debug.warn("config", "rotor count %d out of range, using %d", count, clamped)
    return clamped


def build_machine(cfg: EnigmaConfiguration) -> EnigmaMachine:
    """Return a machine for *cfg*; unkeyed when the seed is blank."""
    machine = EnigmaMachine(clamp_rotor_count(cfg.rotor_count))

    if not cfg.seed or not cfg.seed.strip():
        debug.log("config", "blank seed, machine left unkeyed")
        return machine
    if len(cfg.seed) > MAX_SEED_LENGTH:
        raise ValueError(
            f"The seed must be at most {MAX_SEED_LENGTH} characters long, but it was {len(cfg.seed)}."
        )

    machine.initialize(cfg.seed)

    wanted = EnigmaConfiguration(
        machine.rotor_count, cfg.seed, cfg.rotor_indexes, cfg.reflector_index
    ).indexes()
    if any(wanted):
        machine.set_indexes(*wanted)
    return machine
