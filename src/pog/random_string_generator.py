"""Random string generation over configurable character pools.

Typical use::

    rsg = RandomStringGenerator(10, GeneratorOptions(no_duplicates=True, upper_alphas=False))
    text = rsg.generate()

    key = generate_wep(128, "ascii")
    mixed = shuffle_string("foobar")

Generators are immutable; ``with_length`` and ``with_options`` return new
instances. The mutable draw state lives in a ``CharacterPool`` built per
``generate`` call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, MutableSequence, Optional, Sequence, Union

from . import character_ranges
from .character_ranges import FULL_BYTE_RANGE, PRINTABLE_RANGE, CharacterRange
from .errors import (
    InsufficientCharacterPool,
    InvalidOutputType,
    InvalidSpecialSpec,
    InvalidWepBits,
    NoCharactersRemaining,
)
from .random_source import RandomSource, resolve

logger = logging.getLogger(__name__)

WEP_BITS = (64, 128, 152, 256)
WEP_IV_BITS = 24

Special = Union[str, Sequence[CharacterRange]]


@dataclass(frozen=True)
class GeneratorOptions:
    """Which characters a generator may draw from.

    ``special`` (a literal string, or a list of CharacterRange) overrides
    every class flag when set.
    """

    lower_alphas: bool = True
    upper_alphas: bool = True
    numerals: bool = True
    symbols: bool = False
    single_quotes: bool = False
    double_quotes: bool = False
    backtick: bool = False
    no_duplicates: bool = False
    special: Optional[Special] = None

    def __post_init__(self):
        if isinstance(self.special, list):
            object.__setattr__(self, "special", tuple(self.special))

    def with_changes(self, **changes) -> "GeneratorOptions":
        return replace(self, **changes)

    def class_ranges(self) -> List[CharacterRange]:
        ranges: List[CharacterRange] = []
        for name, accessor in character_ranges.CLASS_ACCESSORS.items():
            if getattr(self, name):
                ranges.extend(accessor())
        return ranges


def shuffle_in_place(seq: MutableSequence, rng: Optional[RandomSource] = None) -> MutableSequence:
    """Scramble ``seq`` in place and return it.

    Runs ``len // 2`` rounds. Each round draws two 32-bit values and splits
    them into eight byte-sized indices; the second four are offset by
    ``0xff % len`` so short inputs do not favour low positions. The eight
    positions are then rotated by one through a chain of swaps, which keeps
    the result a permutation even when indices repeat.
    """
    rng = resolve(rng)
    n = len(seq)
    if n < 2:
        return seq
    offset = 0xFF % n
    for _ in range(n // 2):
        first = rng.getrandbits(32)
        second = rng.getrandbits(32)
        idx = [((first >> (8 * j)) & 0xFF) % n for j in range(4)]
        idx += [((((second >> (8 * j)) & 0xFF) % n) + offset) % n for j in range(4)]
        for a, b in zip(idx, idx[1:]):
            seq[a], seq[b] = seq[b], seq[a]
    return seq


def shuffle_string(text: Union[str, bytes], rng: Optional[RandomSource] = None) -> Union[str, bytes]:
    """Return a shuffled copy of ``text``; the input is left untouched."""
    if isinstance(text, (bytes, bytearray)):
        return bytes(shuffle_in_place(bytearray(text), rng))
    return "".join(shuffle_in_place(list(text), rng))


class CharacterPool:
    """Ordered, possibly repeating sequence of candidate code points.

    Slots can be marked consumed by ``rand_char(delete_after_get=True)``;
    consumed slots are skipped by later draws.
    """

    def __init__(self, codes: Sequence[int]):
        self._codes = list(codes)
        self._consumed = [False] * len(self._codes)

    @classmethod
    def from_ranges(cls, ranges: Sequence[CharacterRange]) -> "CharacterPool":
        codes: List[int] = []
        for r in ranges:
            codes.extend(r)
        return cls(codes)

    @classmethod
    def from_string(cls, text: str) -> "CharacterPool":
        return cls([ord(c) for c in text])

    @classmethod
    def from_special(cls, special) -> "CharacterPool":
        if isinstance(special, str):
            return cls.from_string(special)
        if isinstance(special, (list, tuple)):
            for r in special:
                if not isinstance(r, CharacterRange):
                    raise InvalidSpecialSpec(
                        "special must either be a string or a list of CharacterRange"
                    )
            return cls.from_ranges(special)
        raise InvalidSpecialSpec("special must either be a string or a list of CharacterRange")

    def __len__(self) -> int:
        return len(self._codes)

    @property
    def codes(self) -> tuple:
        return tuple(self._codes)

    def distinct(self) -> "CharacterPool":
        return CharacterPool(list(dict.fromkeys(self._codes)))

    def remaining(self) -> int:
        return self._consumed.count(False)

    def shuffle(self, rng: Optional[RandomSource] = None) -> None:
        # only meaningful before any slot is consumed
        shuffle_in_place(self._codes, rng)

    def rand_index(self, rng: Optional[RandomSource] = None) -> int:
        n = len(self._codes)
        if n == 0:
            raise NoCharactersRemaining("character pool is empty")
        j = resolve(rng).randrange(n ** 4)
        i = 0
        for k in range(4):
            i += (j >> (8 * k)) & 0xFF
        return i % n

    def rand_code(self, rng: Optional[RandomSource] = None, delete_after_get: bool = False) -> int:
        n = len(self._codes)
        i = self.rand_index(rng)
        end = i + n
        while self._consumed[i % n]:
            i += 1
            if i == end:
                raise NoCharactersRemaining("No more characters.")
        slot = i % n
        if delete_after_get:
            self._consumed[slot] = True
        return self._codes[slot]

    def rand_char(self, rng: Optional[RandomSource] = None, delete_after_get: bool = False) -> str:
        return chr(self.rand_code(rng, delete_after_get))


class RandomStringGenerator:
    """Generates random strings of a fixed length from a character pool."""

    def __init__(
        self,
        length: int = 8,
        options: Optional[GeneratorOptions] = None,
        rng: Optional[RandomSource] = None,
        **option_flags,
    ):
        if length < 0:
            raise ValueError("length must be non-negative")
        if options is None:
            options = GeneratorOptions(**option_flags)
        elif option_flags:
            options = options.with_changes(**option_flags)
        self._length = int(length)
        self._options = options
        self._rng = rng

    @property
    def length(self) -> int:
        return self._length

    @property
    def options(self) -> GeneratorOptions:
        return self._options

    def with_length(self, length: int) -> "RandomStringGenerator":
        return RandomStringGenerator(length, self._options, self._rng)

    def with_options(self, **changes) -> "RandomStringGenerator":
        return RandomStringGenerator(self._length, self._options.with_changes(**changes), self._rng)

    def character_pool(self) -> CharacterPool:
        """Build a fresh pool from ``special`` or from the class flags.

        With ``no_duplicates`` repeated codes collapse to their first occurrence.
        """
        if self._options.special is not None:
            pool = CharacterPool.from_special(self._options.special)
        else:
            pool = CharacterPool.from_ranges(self._options.class_ranges())
        if self._options.no_duplicates:
            pool = pool.distinct()
        return pool

    def _draw(self) -> List[int]:
        rng = resolve(self._rng)
        pool = self.character_pool()
        no_dups = self._options.no_duplicates
        if no_dups and len(pool) < self._length:
            raise InsufficientCharacterPool(
                f"Too few characters ({len(pool)}) to draw {self._length} without duplicates."
            )
        logger.debug("drawing %d characters from a pool of %d", self._length, len(pool))
        pool.shuffle(rng)
        codes = [pool.rand_code(rng, no_dups) for _ in range(self._length)]
        return shuffle_in_place(codes, rng)

    def generate(self) -> str:
        return "".join(chr(c) for c in self._draw())

    def generate_bytes(self) -> bytes:
        """Like ``generate`` but returns raw bytes; the pool must be byte-valued."""
        return bytes(self._draw())

    @staticmethod
    def shuffle_string(text, rng: Optional[RandomSource] = None):
        return shuffle_string(text, rng)

    @staticmethod
    def generate_wep(bits: int, output: str = "hex", rng: Optional[RandomSource] = None) -> str:
        return generate_wep(bits, output, rng)

    def __repr__(self) -> str:
        return f"RandomStringGenerator(length={self._length}, options={self._options!r})"


def wep_key_length(bits: int) -> int:
    if bits not in WEP_BITS:
        raise InvalidWepBits(f"{bits} is not a valid number of bits for a WEP key.")
    return (bits - WEP_IV_BITS) // 8


def generate_wep(bits: int, output: str = "hex", rng: Optional[RandomSource] = None) -> str:
    """Generate a WEP key of ``bits`` (64, 128, 152 or 256).

    ``hex`` draws from the full byte range and returns the key hex-encoded;
    ``ascii`` draws printable characters and returns them as-is.
    """
    size = wep_key_length(bits)
    kind = str(output).lower()
    if kind == "hex":
        rsg = RandomStringGenerator(size, GeneratorOptions(special=[FULL_BYTE_RANGE]), rng)
        return rsg.generate_bytes().hex()
    if kind == "ascii":
        rsg = RandomStringGenerator(size, GeneratorOptions(special=[PRINTABLE_RANGE]), rng)
        return rsg.generate()
    raise InvalidOutputType(f"{output} is an invalid output type.")
