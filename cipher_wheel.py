# cipher_wheel.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from alphabet import AlphabetConfig, DEFAULT_ALPHABET
from debug import Debug
from wiring import validate_seed

debug = Debug()
debug.disable("stepping")


class CipherWheel(ABC):
    """Position and stepping cadence shared by rotors and the reflector.

    ``cycle_size`` 0 never moves, 1 moves on every step, k > 1 moves once
    every k steps. ``cipher_index`` is the wheel's offset from its zero
    position and shifts every lookup made through :meth:`transform_value`.
    """

    def __init__(self, cycle_size: int = 0, config: AlphabetConfig = DEFAULT_ALPHABET) -> None:
        self.config = config
        self.size = config.size
        self.cycle_size = min(max(cycle_size, 0), config.max_index)
        self.cipher_index = 0
        self.cycle_count = 0
        self.is_initialized = False

    # ── keying ────────────────────────────────────────────────────
    def initialize(self, seed: str) -> None:
        """Generate fresh wiring from *seed* and return to position 0."""
        validate_seed(seed, self.config)
        self._build_wiring(seed)
        self.cipher_index = 0
        self.cycle_count = 0
        self.is_initialized = True

    @abstractmethod
    def _build_wiring(self, seed: str) -> None: ...

    # ── positioning ───────────────────────────────────────────────
    def set_index(self, value: int) -> None:
        if not self.is_initialized:
            raise RuntimeError(
                f"The {type(self).__name__} must be initialized before the index can be set."
            )
        if not (0 <= value <= self.config.max_index):
            raise ValueError(
                f"Index must be ≥ 0 and < {self.size}, but it was {value}."
            )
        self.cipher_index = value
        # resuming mid-cycle must be reproducible from the index alone
        self.cycle_count = 0 if self.cycle_size < 2 or value < 2 else value % self.cycle_size

    # ── stepping ──────────────────────────────────────────────────
    def step(self) -> bool:
        """Advance according to the cadence; True when the index wraps to 0."""
        if self.cycle_size == 0:
            return False
        if self.cycle_size > 1:
            self.cycle_count += 1
            if self.cycle_count < self.cycle_size:
                return False
            self.cycle_count = 0
        self.cipher_index = (self.cipher_index + 1) % self.size
        carry = self.cipher_index == 0
        debug.log(
            "stepping", "%s index=%d carry=%s", type(self).__name__, self.cipher_index, carry
        )
        return carry

    # ── lookups ───────────────────────────────────────────────────
    def transform_value(self, table: Sequence[int], value: int) -> int:
        """Look *value* up in *table* as seen through the current position."""
        shifted = (value - self.cipher_index) % self.size
        return (table[shifted] + self.cipher_index) % self.size

    def _require_initialized(self, action: str) -> None:
        if not self.is_initialized:
            raise RuntimeError(
                f"The {type(self).__name__} must be initialized before calling {action}."
            )
