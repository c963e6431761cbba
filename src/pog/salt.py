"""Password salts and their placement around the password.

A salt is combined with a password before hashing so identical passwords
produce different hashes. Placement decides where it goes::

    Salt("foobar", SaltPlacement.PREFIX).apply("X")  -> "foobarX"
    Salt("foobar", SaltPlacement.SUFFIX).apply("X")  -> "Xfoobar"
    Salt("foobar", SaltPlacement.SPLIT).apply("X")   -> "fooXbar"
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

from .errors import InvalidSaltPlacement
from .random_source import RandomSource
from .random_string_generator import GeneratorOptions, RandomStringGenerator

DEFAULT_SALT_LENGTH = 8

SALT_OPTIONS = GeneratorOptions(
    lower_alphas=True, upper_alphas=True, numerals=True, symbols=True
)


class SaltPlacement(enum.Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"
    SPLIT = "split"

    @classmethod
    def parse(cls, value: Union["SaltPlacement", str]) -> "SaltPlacement":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _PLACEMENT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidSaltPlacement(f"{value} is an invalid salt placement.") from None


_PLACEMENT_ALIASES = {"beginning": "prefix", "end": "suffix"}


def generate_salt_value(length: int = DEFAULT_SALT_LENGTH, rng: Optional[RandomSource] = None) -> str:
    """Random salt string drawn from alphas, numerals and symbols."""
    return RandomStringGenerator(length, SALT_OPTIONS, rng).generate()


@dataclass(frozen=True)
class Salt:
    value: str = ""
    placement: SaltPlacement = SaltPlacement.SUFFIX

    def __post_init__(self):
        object.__setattr__(self, "placement", SaltPlacement.parse(self.placement))

    @classmethod
    def generate(
        cls,
        length: int = DEFAULT_SALT_LENGTH,
        placement: Union[SaltPlacement, str] = SaltPlacement.SUFFIX,
        rng: Optional[RandomSource] = None,
    ) -> "Salt":
        return cls(generate_salt_value(length, rng), placement)

    def apply(self, password: str) -> str:
        """Return ``password`` salted according to the placement."""
        password = str(password)
        if self.placement is SaltPlacement.PREFIX:
            return self.value + password
        if self.placement is SaltPlacement.SUFFIX:
            return password + self.value
        if self.placement is SaltPlacement.SPLIT:
            half = len(self.value) // 2
            return self.value[:half] + password + self.value[half:]
        raise InvalidSaltPlacement(f"{self.placement} is an invalid salt placement.")

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Salt(length={len(self.value)}, placement={self.placement.value})"
