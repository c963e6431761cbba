"""pog: random password generation, salted hashing and strength checks.

Modules:
- character_ranges: named ASCII ranges for building character pools
- random_string_generator: random strings, shuffling and WEP keys
- salt / password: salting, hashing and hash-detecting authentication
- password_tests: strength rules and heuristics
"""

__version__ = "0.5.0"

from .character_ranges import CharacterRange, get_range
from .digests import Digest, HashFormat
from .errors import PogError
from .password import Password, StoredCredential, authenticate, hash_password
from .password_tests import PasswordTests, entropy, qualitative_strength, repetitions
from .random_string_generator import (
    CharacterPool,
    GeneratorOptions,
    RandomStringGenerator,
    generate_wep,
    shuffle_string,
)
from .salt import Salt, SaltPlacement

__all__ = [
    "CharacterPool",
    "CharacterRange",
    "Digest",
    "GeneratorOptions",
    "HashFormat",
    "Password",
    "PasswordTests",
    "PogError",
    "RandomStringGenerator",
    "Salt",
    "SaltPlacement",
    "StoredCredential",
    "authenticate",
    "entropy",
    "generate_wep",
    "get_range",
    "hash_password",
    "qualitative_strength",
    "repetitions",
    "shuffle_string",
]
