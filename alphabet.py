# alphabet.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from debug import Debug

debug = Debug()
debug.disable("alphabet")

CARRIAGE_RETURN = "\r"
LINE_FEED = "\n"


@dataclass(frozen=True, slots=True)
class AlphabetConfig:
    """Bounds of the symbol space shared by the alphabet, wiring and wheels.

    The printable symbols ``min_char`` .. ``min_char + size - 2`` take the
    indexes 0 .. size-2; the last index stands for a line break.
    """

    min_char: int = 0x20
    size: int = 96
    line_break: str = "\r\n"
    min_seed_length: int = 10

    def __post_init__(self) -> None:
        if self.size < 2 or self.size % 2:
            raise ValueError(f"Alphabet size must be an even number ≥ 2, got {self.size}")

    @property
    def max_index(self) -> int:
        return self.size - 1

    @property
    def line_break_index(self) -> int:
        return self.size - 1

    @property
    def max_char(self) -> int:
        """Code point that stands in for a line break (DEL for the default)."""
        return self.min_char + self.max_index

    def __repr__(self) -> str:
        return f"<AlphabetConfig {self.min_char:#04x}+{self.size} line_break={self.line_break!r}>"


DEFAULT_ALPHABET = AlphabetConfig()


# symbol → integer signal
def to_index(symbol: str, config: AlphabetConfig = DEFAULT_ALPHABET) -> int:
    """Map one symbol into [0, size-1].

    Line feeds take the last index, anything outside the printable range
    falls back to 0 (space). Carriage returns are not special here; callers
    drop them before mapping.
    """
    if symbol == LINE_FEED:
        return config.line_break_index
    code = ord(symbol)
    if not is_printable(symbol, config):
        debug.log("alphabet", "%r outside alphabet, using space", symbol)
        return 0
    return code - config.min_char


# integer signal → symbol
def to_symbol(index: int, config: AlphabetConfig = DEFAULT_ALPHABET) -> str:
    if not (0 <= index <= config.max_index):
        debug.log("alphabet", "index %d out of range 0–%d, using space", index, config.max_index)
        return chr(config.min_char)
    if index == config.line_break_index:
        return config.line_break
    return chr(index + config.min_char)


def clean_text(text: str, config: AlphabetConfig = DEFAULT_ALPHABET) -> Iterator[int]:
    """Yield the index of every symbol in *text*, skipping carriage returns."""
    for ch in text:
        if ch == CARRIAGE_RETURN:
            continue
        yield to_index(ch, config)


def is_printable(symbol: str, config: AlphabetConfig = DEFAULT_ALPHABET) -> bool:
    """True if *symbol* survives a round trip through the alphabet unchanged."""
    return config.min_char <= ord(symbol) < config.max_char
