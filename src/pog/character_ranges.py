"""Catalog of named ASCII character ranges used for random string generation.

Each range is an inclusive pair of byte values:

  upper_alphas   0x41..0x5a  A..Z
  lower_alphas   0x61..0x7a  a..z
  numerals       0x30..0x39  0..9
  symbols_1      0x21..0x21  !
  symbols_2      0x23..0x26  #..&
  symbols_3      0x28..0x2f  (../
  symbols_4      0x3a..0x40  :..@
  symbols_5      0x5b..0x5f  [.._
  symbols_6      0x7b..0x7e  {..~
  single_quotes  0x27..0x27  '
  double_quotes  0x22..0x22  "
  backtick       0x60..0x60  `
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List

from .errors import UnknownRangeName


@dataclass(frozen=True)
class CharacterRange:
    low: int
    high: int

    def __post_init__(self):
        if not (0 <= self.low <= self.high <= 0xFF):
            raise ValueError(f"invalid byte range {self.low:#x}..{self.high:#x}")

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.low, self.high + 1))

    def __len__(self) -> int:
        return self.high - self.low + 1

    def __contains__(self, value) -> bool:
        if isinstance(value, str):
            if len(value) != 1:
                return False
            value = ord(value)
        return self.low <= value <= self.high

    def chars(self) -> str:
        return "".join(chr(c) for c in self)


_RANGES: Dict[str, CharacterRange] = {
    "upper_alphas": CharacterRange(0x41, 0x5A),
    "lower_alphas": CharacterRange(0x61, 0x7A),
    "numerals": CharacterRange(0x30, 0x39),
    "symbols_1": CharacterRange(0x21, 0x21),
    "symbols_2": CharacterRange(0x23, 0x26),
    "symbols_3": CharacterRange(0x28, 0x2F),
    "symbols_4": CharacterRange(0x3A, 0x40),
    "symbols_5": CharacterRange(0x5B, 0x5F),
    "symbols_6": CharacterRange(0x7B, 0x7E),
    "single_quotes": CharacterRange(0x27, 0x27),
    "double_quotes": CharacterRange(0x22, 0x22),
    "backtick": CharacterRange(0x60, 0x60),
}

SYMBOL_RANGE_NAMES = (
    "symbols_1",
    "symbols_2",
    "symbols_3",
    "symbols_4",
    "symbols_5",
    "symbols_6",
)

FULL_BYTE_RANGE = CharacterRange(0x00, 0xFF)
PRINTABLE_RANGE = CharacterRange(0x20, 0x7E)


def range_names() -> List[str]:
    return list(_RANGES)


def get_range(name: str) -> CharacterRange:
    """Return the catalog range called ``name``.

    Raises UnknownRangeName for anything not in the catalog.
    """
    try:
        return _RANGES[str(name)]
    except KeyError:
        raise UnknownRangeName(f"{name} is an invalid range.") from None


def upper_alphas() -> List[CharacterRange]:
    return [get_range("upper_alphas")]


def lower_alphas() -> List[CharacterRange]:
    return [get_range("lower_alphas")]


def numerals() -> List[CharacterRange]:
    return [get_range("numerals")]


def symbols() -> List[CharacterRange]:
    return [get_range(n) for n in SYMBOL_RANGE_NAMES]


def single_quotes() -> List[CharacterRange]:
    return [get_range("single_quotes")]


def double_quotes() -> List[CharacterRange]:
    return [get_range("double_quotes")]


def backtick() -> List[CharacterRange]:
    return [get_range("backtick")]


def all_except_quotes() -> List[CharacterRange]:
    """Alphas, numerals and symbols; no quote or backtick ranges."""
    return upper_alphas() + lower_alphas() + numerals() + symbols()


def all_ranges() -> List[CharacterRange]:
    return all_except_quotes() + single_quotes() + double_quotes() + backtick()


# option name -> accessor, in the order pools are assembled
CLASS_ACCESSORS = {
    "lower_alphas": lower_alphas,
    "upper_alphas": upper_alphas,
    "numerals": numerals,
    "symbols": symbols,
    "single_quotes": single_quotes,
    "double_quotes": double_quotes,
    "backtick": backtick,
}
