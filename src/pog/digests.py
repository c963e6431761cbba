"""Digest algorithms and hash output encodings."""

from __future__ import annotations

import base64
import binascii
import enum
import hashlib
import logging
import re
from typing import Tuple, Union

from .errors import InvalidDigest, InvalidFormat, UnknownDigestLength

logger = logging.getLogger(__name__)

HashData = Union[bytes, str]


class Digest(enum.Enum):
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @property
    def size(self) -> int:
        return _DIGEST_SIZES[self]

    def compute(self, data: bytes) -> bytes:
        return hashlib.new(self.value, data).digest()

    @classmethod
    def parse(cls, value: Union["Digest", str]) -> "Digest":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "")
        try:
            return cls(key)
        except ValueError:
            raise InvalidDigest(f"{value} is an invalid digest.") from None

    @classmethod
    def from_length(cls, length: int) -> "Digest":
        """Infer the digest from a raw hash length in bytes."""
        for digest, size in _DIGEST_SIZES.items():
            if size == length:
                return digest
        raise UnknownDigestLength(f"Invalid hash, no digest produces {length} bytes.")


_DIGEST_SIZES = {
    Digest.MD5: 16,
    Digest.SHA1: 20,
    Digest.SHA256: 32,
    Digest.SHA384: 48,
    Digest.SHA512: 64,
}


class HashFormat(enum.Enum):
    BINARY = "binary"
    HEX = "hex"
    BASE64 = "base64"

    @classmethod
    def parse(cls, value: Union["HashFormat", str]) -> "HashFormat":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _FORMAT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidFormat(f"{value} is an invalid format.") from None


_FORMAT_ALIASES = {
    "bin": "binary",
    "hexadecimal": "hex",
    "hexidecimal": "hex",
    "b64": "base64",
}

_HEX_RE = re.compile(r"[a-f0-9]*")
_BASE64_RE = re.compile(r"[A-Za-z0-9+/=]*")
_WHITESPACE_RE = re.compile(r"\s+")


def encode_hash(raw: bytes, fmt: Union[HashFormat, str]) -> HashData:
    """Encode raw digest bytes: bytes for BINARY, text for HEX and BASE64."""
    fmt = HashFormat.parse(fmt)
    if fmt is HashFormat.BINARY:
        return bytes(raw)
    if fmt is HashFormat.HEX:
        return raw.hex()
    if fmt is HashFormat.BASE64:
        return base64.b64encode(raw).decode("ascii")
    raise InvalidFormat(f"{fmt} is an invalid format.")


def _as_text(data: HashData):
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("ascii")
    except UnicodeDecodeError:
        return None


def detect_format(data: HashData) -> HashFormat:
    """Guess the encoding of a stored hash.

    All lowercase hex digits means HEX; otherwise, ignoring whitespace, all
    base64 alphabet characters means BASE64; anything else is BINARY.
    """
    text = _as_text(data)
    if text is None:
        return HashFormat.BINARY
    if _HEX_RE.fullmatch(text):
        return HashFormat.HEX
    if _BASE64_RE.fullmatch(_WHITESPACE_RE.sub("", text)):
        return HashFormat.BASE64
    return HashFormat.BINARY


def decode_hash(data: HashData, fmt: Union[HashFormat, str]) -> bytes:
    fmt = HashFormat.parse(fmt)
    if fmt is HashFormat.BINARY:
        if isinstance(data, str):
            try:
                return data.encode("latin-1")
            except UnicodeEncodeError:
                raise UnknownDigestLength("binary hash text is not byte-valued") from None
        return bytes(data)
    text = _as_text(data)
    if text is None:
        raise UnknownDigestLength(f"cannot decode {fmt.value} hash")
    try:
        if fmt is HashFormat.HEX:
            return bytes.fromhex(text)
        return base64.b64decode(_WHITESPACE_RE.sub("", text), validate=True)
    except (ValueError, binascii.Error) as e:
        raise UnknownDigestLength(f"cannot decode {fmt.value} hash: {e}") from None


def detect_type(data: HashData) -> Tuple[HashFormat, Digest]:
    """Return the (format, digest) a stored hash was most likely produced with.

    The digest is inferred purely from the decoded length, so any 16-byte
    value reads as MD5, any 20-byte value as SHA1, and so on.
    """
    fmt = detect_format(data)
    raw = decode_hash(data, fmt)
    digest = Digest.from_length(len(raw))
    logger.debug("detected %s-encoded %s hash", fmt.value, digest.value)
    return fmt, digest
