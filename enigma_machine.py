# enigma_machine.py  ─────────────────────────────────────────────────
from __future__ import annotations

from typing import List, Sequence, Tuple

from alphabet import AlphabetConfig, DEFAULT_ALPHABET, clean_text, to_symbol
from debug import Debug
from rotor_and_reflector import Reflector, Rotor
from wiring import derive_seed

debug = Debug()
debug.disable("transform")

MIN_ROTORS = 1
MAX_ROTORS = 8

# step cadences handed out round-robin: rotor i, then the reflector
CYCLE_SIZES: Tuple[int, ...] = (1, 11, 7, 17, 13, 23, 29, 37, 41, 47)


class EnigmaMachine:
    """N rotors and a reflector keyed from one seed string.

    Rotor 1 is the units wheel and attempts to step on every symbol; every
    other wheel steps only when its left neighbour wraps to 0. Rewinding to
    the same indexes and transforming the output again gives back the input.

    Not thread safe: one instance per caller.
    """

    def __init__(self, rotor_count: int = 3, config: AlphabetConfig = DEFAULT_ALPHABET) -> None:
        if not (MIN_ROTORS <= rotor_count <= MAX_ROTORS):
            raise ValueError(
                f"rotor_count must be in {MIN_ROTORS}–{MAX_ROTORS}, but it was {rotor_count}."
            )
        rotors = [
            Rotor(CYCLE_SIZES[i % len(CYCLE_SIZES)], config) for i in range(rotor_count)
        ]
        reflector = Reflector(CYCLE_SIZES[rotor_count % len(CYCLE_SIZES)], config)
        self._build(reflector, rotors, config)

    @classmethod
    def from_wheels(cls, reflector: Reflector, rotors: Sequence[Rotor]) -> "EnigmaMachine":
        """Wire pre-built wheels into a machine (rotor 1 first)."""
        if reflector is None:
            raise TypeError("reflector must not be None")
        if rotors is None:
            raise TypeError("rotors must not be None")
        if len(rotors) == 0:
            raise ValueError("At least one rotor is required.")
        if any(r is None for r in rotors):
            raise TypeError("rotors must not contain None")
        # all wheels must be free before the first connection is made
        connected = any(r._left is not None or r._right is not None for r in rotors)
        if connected or reflector._outgoing is not None:
            raise RuntimeError("Wheels passed to from_wheels must not be connected yet.")

        inst = object.__new__(cls)          # bypass __init__
        inst._build(reflector, list(rotors), reflector.config)

        # wheels carrying loaded wiring are ready to use as they are
        if all(w.is_initialized for w in inst.wheels):
            inst._indexes = [w.cipher_index for w in inst.wheels]
            inst.is_initialized = True
        return inst

    def _build(self, reflector: Reflector, rotors: List[Rotor], config: AlphabetConfig) -> None:
        self.config = config
        self.reflector = reflector
        self.rotors = rotors
        self.wheels = [*rotors, reflector]

        for left, right in zip(rotors, rotors[1:]):
            left.connect_right(right)
            right.connect_left(left)
        rotors[-1].connect_right(reflector)
        reflector.connect_outgoing(rotors[-1])

        self._indexes: List[int] = [0] * len(self.wheels)
        self.is_initialized = False

    # ── read-only views ─────────────────────────────────────────
    @property
    def rotor_count(self) -> int:
        return len(self.rotors)

    @property
    def indexes(self) -> Tuple[int, ...]:
        """Stored starting indexes, reflector last."""
        return tuple(self._indexes)

    @property
    def cipher_indexes(self) -> Tuple[int, ...]:
        """Current wheel positions, reflector last."""
        return tuple(w.cipher_index for w in self.wheels)

    # ── keying ──────────────────────────────────────────────────
    def initialize(self, seed: str) -> None:
        """Key every wheel from *seed*; rotors get re-ordered copies of it."""
        if seed is None:
            raise TypeError("seed must not be None")
        self.reflector.initialize(seed)
        for i, rotor in enumerate(self.rotors):
            rotor.initialize(derive_seed(seed, i + 2))
        self._indexes = [0] * len(self.wheels)
        self.is_initialized = True
        debug.log("transform", "keyed %d rotors from %d-char seed", self.rotor_count, len(seed))

    # ── index helpers ───────────────────────────────────────────
    def set_indexes(self, *indexes: int) -> None:
        """Store and apply starting indexes: rotor 1 … rotor N, reflector."""
        if len(indexes) == 1 and isinstance(indexes[0], (list, tuple)):
            indexes = tuple(indexes[0])
        if any(i is None for i in indexes):
            raise TypeError("index values must not be None")
        expected = len(self.wheels)
        if len(indexes) != expected:
            word = "was" if len(indexes) == 1 else "were"
            raise ValueError(
                f"Exactly {expected} index values are required, "
                f"but there {word} {len(indexes)}."
            )
        if not self.is_initialized:
            raise RuntimeError("The Enigma machine must be initialized before setting the indexes.")
        for value in indexes:
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Index values must be integers, but one was {value!r}.")
            if not (0 <= value <= self.config.max_index):
                raise ValueError(
                    f"Index values must be ≥ 0 and < {self.config.size}, but one was {value}."
                )

        self._indexes = list(indexes)
        self.reset_indexes()

    def reset_indexes(self) -> None:
        """Rewind every wheel to the stored starting indexes."""
        if not self.is_initialized:
            return
        for wheel, value in zip(self.wheels, self._indexes):
            wheel.set_index(value)
        debug.log("transform", "rewound to %s", self._indexes)

    # ── transform text ──────────────────────────────────────────
    def transform(self, text: str) -> str:
        if text is None:
            raise TypeError("text must not be None")
        if not self.is_initialized:
            raise RuntimeError("The Enigma machine must be initialized before calling transform.")

        first = self.rotors[0]
        out: List[str] = []
        for index in clean_text(text, self.config):
            result = first.transform_forward(index, True)
            out.append(to_symbol(result, self.config))
        debug.log("transform", "%d symbols, positions now %s", len(out), self.cipher_indexes)
        return "".join(out)

    def __repr__(self) -> str:
        state = "keyed" if self.is_initialized else "unkeyed"
        return f"<EnigmaMachine rotors={self.rotor_count} {state} pos={list(self.cipher_indexes)}>"
