# rotor_and_reflector.py
from __future__ import annotations

import weakref
from typing import List, Optional

from alphabet import AlphabetConfig, DEFAULT_ALPHABET
from cipher_wheel import CipherWheel
from debug import Debug
from wiring import build_reflector_wiring, build_rotor_wiring, is_involution, is_permutation

debug = Debug()
debug.disable("rotor", "reflector")


class Rotor(CipherWheel):
    """A keyed bijection traversed twice per symbol.

    The signal goes out through ``_fwd`` towards the right neighbour and
    comes back through ``_rev``. The left link is a weak reference; whoever
    built the chain owns the wheels.
    """

    def __init__(self, cycle_size: int = 1, config: AlphabetConfig = DEFAULT_ALPHABET) -> None:
        super().__init__(cycle_size, config)

        # integer lookup tables
        self._fwd: List[int] = list(range(self.size))
        self._rev: List[int] = list(range(self.size))

        self._left: Optional[weakref.ReferenceType[Rotor]] = None
        self._right: Optional[CipherWheel] = None
        self.awaiting_return = False

    def _build_wiring(self, seed: str) -> None:
        self._fwd, self._rev = build_rotor_wiring(seed, self.config)

    def load_wiring(self, forward: List[int]) -> "Rotor":
        """Install an externally supplied permutation instead of a seeded one."""
        if len(forward) != self.size:
            raise ValueError(f"Rotor wiring must have {self.size} entries, got {len(forward)}")
        inverse = [0] * self.size
        for i, j in enumerate(forward):
            if 0 <= j < self.size:
                inverse[j] = i
        if not is_permutation(forward, inverse):
            raise ValueError("Rotor wiring must be a permutation of the alphabet indexes")
        self._fwd, self._rev = list(forward), inverse
        self.cipher_index = 0
        self.cycle_count = 0
        self.is_initialized = True
        return self

    @property
    def forward_table(self) -> List[int]:
        return list(self._fwd)

    @property
    def inverse_table(self) -> List[int]:
        return list(self._rev)

    # ── chain links ───────────────────────────────────────────────
    @property
    def left(self) -> Optional["Rotor"]:
        return self._left() if self._left is not None else None

    @property
    def right(self) -> Optional[CipherWheel]:
        return self._right

    def connect_left(self, rotor: "Rotor") -> None:
        if rotor is None:
            raise TypeError("rotor must not be None")
        if self._left is not None:
            raise RuntimeError("This rotor already has a left neighbour.")
        self._left = weakref.ref(rotor)

    def connect_right(self, wheel: CipherWheel) -> None:
        if wheel is None:
            raise TypeError("wheel must not be None")
        if self._right is not None:
            raise RuntimeError("This rotor already has a right neighbour.")
        self._right = wheel

    # ── signal paths ──────────────────────────────────────────────
    def transform_forward(self, index: int, should_step: bool) -> int:
        self._require_initialized("transform_forward")
        if self.awaiting_return:
            raise RuntimeError("transform_return was not called after the last forward pass.")
        if self._right is None:
            raise RuntimeError("No right neighbour is connected to this rotor.")

        carry = self.step() if should_step else False
        mapped = self.transform_value(self._fwd, index)
        debug.log("rotor", "fwd %d->%d pos=%d carry=%s", index, mapped, self.cipher_index, carry)

        self.awaiting_return = True
        try:
            return self._right.transform_forward(mapped, carry)
        finally:
            # normally already cleared by transform_return
            self.awaiting_return = False

    def transform_return(self, index: int) -> int:
        if not self.awaiting_return:
            raise RuntimeError("transform_return called without a pending forward pass.")
        self.awaiting_return = False

        mapped = self.transform_value(self._rev, index)
        debug.log("rotor", "ret %d->%d pos=%d", index, mapped, self.cipher_index)

        left = self.left
        return left.transform_return(mapped) if left is not None else mapped

    # ── niceties ──────────────────────────────────────────────────
    def __repr__(self) -> str:
        return f"<Rotor pos={self.cipher_index} cycle={self.cycle_count}/{self.cycle_size}>"


class Reflector(CipherWheel):
    """Turns the signal around through a fixed-point-free involution."""

    def __init__(self, cycle_size: int = 0, config: AlphabetConfig = DEFAULT_ALPHABET) -> None:
        super().__init__(cycle_size, config)
        self._map: List[int] = [self.size - 1 - i for i in range(self.size)]
        self._outgoing: Optional[weakref.ReferenceType[Rotor]] = None

    def _build_wiring(self, seed: str) -> None:
        self._map = build_reflector_wiring(seed, self.config)

    def load_wiring(self, table: List[int]) -> "Reflector":
        """Install an externally supplied involution instead of a seeded one."""
        if len(table) != self.size or not is_involution(table):
            raise ValueError("Reflector wiring must be an involution with no fixed points")
        self._map = list(table)
        self.cipher_index = 0
        self.cycle_count = 0
        self.is_initialized = True
        return self

    @property
    def table(self) -> List[int]:
        return list(self._map)

    @property
    def outgoing(self) -> Optional[Rotor]:
        return self._outgoing() if self._outgoing is not None else None

    def connect_outgoing(self, rotor: Rotor) -> None:
        if rotor is None:
            raise TypeError("rotor must not be None")
        if self._outgoing is not None:
            raise RuntimeError("This reflector already has an outgoing rotor.")
        self._outgoing = weakref.ref(rotor)

    def transform_forward(self, index: int, should_step: bool) -> int:
        self._require_initialized("transform_forward")
        rotor = self.outgoing
        if rotor is None:
            raise RuntimeError("No outgoing rotor is connected to this reflector.")

        if should_step:
            self.step()
        reflected = self.transform_value(self._map, index)
        debug.log("reflector", "%d->%d pos=%d", index, reflected, self.cipher_index)
        return rotor.transform_return(reflected)

    def __repr__(self) -> str:
        return f"<Reflector pos={self.cipher_index} cycle={self.cycle_count}/{self.cycle_size}>"
