"""Password hashing and hash-based authentication.

A ``Password`` is an immutable value holding a plaintext, an optional
``Salt`` and a ``Digest``; its hash is computed once at construction::

    p = Password("foobar", Salt.generate(), Digest.SHA512)
    stored = p.hash("hex")
    Password("foobar", p.salt).authenticate(stored)  -> True

``authenticate`` works out the encoding and digest of the stored hash on
its own, so the salt is the only thing that must match.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Union

from .digests import Digest, HashData, HashFormat, detect_type, encode_hash
from .errors import InvalidFormat
from .random_source import RandomSource
from .random_string_generator import GeneratorOptions, RandomStringGenerator
from .salt import DEFAULT_SALT_LENGTH, Salt, SaltPlacement

logger = logging.getLogger(__name__)

DEFAULT_DIGEST = Digest.SHA256
DEFAULT_PASSWORD_LENGTH = 8


def salted(plaintext: str, salt: Optional[Salt] = None) -> str:
    return salt.apply(plaintext) if salt is not None else str(plaintext)


def hash_password(
    plaintext: str,
    salt: Optional[Salt] = None,
    digest: Union[Digest, str] = DEFAULT_DIGEST,
) -> bytes:
    """Raw digest bytes of the salted plaintext (UTF-8 encoded)."""
    digest = Digest.parse(digest)
    return digest.compute(salted(plaintext, salt).encode("utf-8"))


def _same_kind(encoded: HashData, like: HashData) -> HashData:
    # compare text with text and bytes with bytes
    if isinstance(like, str) and isinstance(encoded, bytes):
        return encoded.decode("latin-1")
    if not isinstance(like, str) and isinstance(encoded, str):
        return encoded.encode("ascii")
    return encoded


def authenticate(plaintext: str, salt: Optional[Salt], candidate: HashData) -> bool:
    """Check ``plaintext`` against a stored, encoded hash.

    The candidate's encoding and digest are detected from the candidate
    itself; the fresh hash is re-encoded the same way and compared exactly.
    Raises UnknownDigestLength when no digest matches the decoded length.
    """
    fmt, digest = detect_type(candidate)
    fresh = encode_hash(hash_password(plaintext, salt, digest), fmt)
    fresh = _same_kind(fresh, candidate)
    if isinstance(candidate, str):
        return hmac.compare_digest(fresh.encode("latin-1"), candidate.encode("latin-1"))
    return hmac.compare_digest(fresh, bytes(candidate))


@dataclass(frozen=True)
class Password:
    plaintext: str = field(repr=False)
    salt: Optional[Salt] = None
    digest: Digest = DEFAULT_DIGEST
    cached_hash: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "plaintext", str(self.plaintext))
        if isinstance(self.salt, str):
            object.__setattr__(self, "salt", Salt(self.salt))
        object.__setattr__(self, "digest", Digest.parse(self.digest))
        object.__setattr__(self, "cached_hash", hash_password(self.plaintext, self.salt, self.digest))

    @classmethod
    def generate(
        cls,
        salt: Optional[Salt] = None,
        digest: Union[Digest, str] = DEFAULT_DIGEST,
        length: int = DEFAULT_PASSWORD_LENGTH,
        options: Optional[GeneratorOptions] = None,
        rng: Optional[RandomSource] = None,
        **option_flags,
    ) -> "Password":
        """A new random password; generation flags as for RandomStringGenerator."""
        plaintext = RandomStringGenerator(length, options, rng, **option_flags).generate()
        return cls(plaintext, salt, digest)

    def hash(self, format: Union[HashFormat, str] = HashFormat.BINARY) -> HashData:
        return encode_hash(self.cached_hash, format)

    def authenticate(self, candidate: HashData) -> bool:
        """See ``authenticate``; this Password's own digest is not consulted."""
        return authenticate(self.plaintext, self.salt, candidate)

    def with_plaintext(self, plaintext: str) -> "Password":
        return replace(self, plaintext=plaintext)

    def with_salt(self, salt: Union[Salt, str, None]) -> "Password":
        return replace(self, salt=salt)

    def with_digest(self, digest: Union[Digest, str]) -> "Password":
        return replace(self, digest=digest)

    def __str__(self) -> str:
        return self.plaintext


@dataclass(frozen=True)
class StoredCredential:
    """The per-account record a user store keeps for later logins."""

    digest_name: str
    salt_value: str
    salt_placement: str
    encoded_hash: str

    @classmethod
    def create(
        cls,
        plaintext: str,
        digest: Union[Digest, str] = DEFAULT_DIGEST,
        hash_format: Union[HashFormat, str] = HashFormat.HEX,
        salt_length: int = DEFAULT_SALT_LENGTH,
        placement: Union[SaltPlacement, str] = SaltPlacement.SUFFIX,
        rng: Optional[RandomSource] = None,
    ) -> "StoredCredential":
        hash_format = HashFormat.parse(hash_format)
        if hash_format is HashFormat.BINARY:
            # records are text; binary would not survive a round trip
            raise InvalidFormat("stored credentials need a text hash format")
        salt = Salt.generate(salt_length, placement, rng)
        password = Password(plaintext, salt, digest)
        return cls(
            digest_name=password.digest.value,
            salt_value=salt.value,
            salt_placement=salt.placement.value,
            encoded_hash=password.hash(hash_format),
        )

    @property
    def salt(self) -> Salt:
        return Salt(self.salt_value, self.salt_placement)

    def verify(self, plaintext: str) -> bool:
        ok = authenticate(plaintext, self.salt, self.encoded_hash)
        logger.debug("credential verification %s", "succeeded" if ok else "failed")
        return ok

    def to_dict(self) -> Dict[str, str]:
        return {
            "digest_name": self.digest_name,
            "salt_value": self.salt_value,
            "salt_placement": self.salt_placement,
            "encoded_hash": self.encoded_hash,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredCredential":
        return cls(
            digest_name=Digest.parse(data["digest_name"]).value,
            salt_value=str(data.get("salt_value", "")),
            salt_placement=SaltPlacement.parse(data.get("salt_placement", "suffix")).value,
            encoded_hash=str(data["encoded_hash"]),
        )
