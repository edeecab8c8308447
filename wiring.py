# wiring.py
"""Seed-driven wiring for rotors and reflectors.

Every table is built by walking a cursor around the ring of slots: each seed
character pushes the cursor forward by its alphabet index, and the cursor then
settles on the first slot nobody has claimed yet. The same seed always gives
the same tables.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from alphabet import AlphabetConfig, DEFAULT_ALPHABET
from debug import Debug

debug = Debug()
debug.disable("wiring")


class WiringError(RuntimeError):
    """The slot bookkeeping ran out of free slots; the table is unusable."""


# ─── seed helpers ───────────────────────────────────────────────────────


def validate_seed(seed: str, config: AlphabetConfig = DEFAULT_ALPHABET) -> None:
    if seed is None:
        raise TypeError("seed must not be None")
    if len(seed) < config.min_seed_length:
        raise ValueError(
            f"The seed must be at least {config.min_seed_length} characters long, "
            f"but it was {len(seed)}."
        )


def derive_seed(seed: str, stride: int) -> str:
    """Re-order *seed* by striding through it, one pass per starting offset.

    With stride 3 the characters come out as 0, 3, 6, … then 1, 4, 7, …
    then 2, 5, 8, … until every character has been used once.
    """
    if stride < 1:
        raise ValueError(f"stride must be ≥ 1, got {stride}")
    out: List[str] = []
    start = 0
    while len(out) < len(seed):
        for i in range(start, len(seed), stride):
            out.append(seed[i])
            if len(out) == len(seed):
                break
        start += 1
    return "".join(out)


# ─── cursor mechanics ───────────────────────────────────────────────────


def displace(index: int, seed_char: str, config: AlphabetConfig = DEFAULT_ALPHABET) -> int:
    """Move the cursor forward by the alphabet value of *seed_char*."""
    if not (0 <= index <= config.max_index):
        raise ValueError(f"Cursor index must be in 0–{config.max_index}, got {index}")
    value = ord(seed_char) - config.min_char
    offset = value if 1 <= value <= config.max_index else 1
    return (index + offset) % config.size


def find_available_slot(start: int, slot_is_taken: List[bool]) -> int:
    """Claim the first free slot at or after *start*, wrapping around."""
    size = len(slot_is_taken)
    index = start
    while slot_is_taken[index]:
        index = (index + 1) % size
        if index == start:
            raise WiringError(f"No free slot left in a table of {size}")
    slot_is_taken[index] = True
    return index


# ─── table builders ─────────────────────────────────────────────────────


def build_rotor_wiring(
    seed: str, config: AlphabetConfig = DEFAULT_ALPHABET
) -> Tuple[List[int], List[int]]:
    """Return ``(forward, inverse)`` permutation tables for *seed*."""
    validate_seed(seed, config)
    size = config.size
    slot_is_taken = [False] * size
    forward = [0] * size
    inverse = [0] * size

    seed_index = 0
    index = 0
    for i in range(size):
        index = displace(index, seed[seed_index], config)
        index = find_available_slot(index, slot_is_taken)
        forward[i] = index
        inverse[index] = i
        seed_index = (seed_index + 1) % len(seed)

    debug.log("wiring", "rotor wiring built from %d-char seed", len(seed))
    return forward, inverse


def build_reflector_wiring(seed: str, config: AlphabetConfig = DEFAULT_ALPHABET) -> List[int]:
    """Return an involution with no fixed points for *seed*.

    Two cursors run half a ring apart; each iteration wires the slots they
    settle on to each other.
    """
    validate_seed(seed, config)
    size = config.size
    slot_is_taken = [False] * size
    table = [0] * size

    seed_index = 0
    index1 = 0
    index2 = size // 2
    for _ in range(size // 2):
        index1 = displace(index1, seed[seed_index], config)
        index1 = find_available_slot(index1, slot_is_taken)
        seed_index = (seed_index + 1) % len(seed)

        index2 = displace(index2, seed[seed_index], config)
        index2 = find_available_slot(index2, slot_is_taken)
        seed_index = (seed_index + 1) % len(seed)

        table[index1] = index2
        table[index2] = index1

    debug.log("wiring", "reflector wiring built from %d-char seed", len(seed))
    return table


# ─── validation ─────────────────────────────────────────────────────────


def is_permutation(forward: Sequence[int], inverse: Sequence[int]) -> bool:
    """True if *inverse* undoes *forward* in both directions."""
    size = len(forward)
    if len(inverse) != size:
        return False
    if sorted(forward) != list(range(size)) or sorted(inverse) != list(range(size)):
        return False
    return all(inverse[forward[i]] == i and forward[inverse[i]] == i for i in range(size))


def is_involution(table: Sequence[int]) -> bool:
    """True if table[table[i]] == i and table[i] != i for all i."""
    size = len(table)
    for i, j in enumerate(table):
        if not (0 <= j < size) or j == i or table[j] != i:
            return False
    return True
