"""Exception types raised by the pog toolkit.

Every error derives from ``PogError`` and from the closest builtin so
callers that only catch ``ValueError`` or ``TypeError`` keep working.
"""

from __future__ import annotations


class PogError(Exception):
    """Base class for all toolkit errors."""


class UnknownRangeName(PogError, ValueError):
    """Raised when a character range name is not in the catalog."""


class InvalidSpecialSpec(PogError, TypeError):
    """Raised when ``special`` is neither a string nor a list of ranges."""


class InsufficientCharacterPool(PogError, ValueError):
    """Raised when a no-duplicates draw asks for more characters than the pool holds."""


class NoCharactersRemaining(PogError, RuntimeError):
    """Raised when every slot of a character pool has been consumed."""


class InvalidWepBits(PogError, ValueError):
    pass


class InvalidOutputType(PogError, ValueError):
    pass


class InvalidSaltPlacement(PogError, ValueError):
    pass


class InvalidFormat(PogError, ValueError):
    """Raised for an unknown hash output format."""


class InvalidDigest(PogError, ValueError):
    """Raised for an unknown digest name."""


class UnknownDigestLength(PogError, ValueError):
    """Raised when a decoded hash length matches no supported digest."""


class InvalidLevel(PogError, ValueError):
    """Raised for an unknown strength preset level."""


class InvalidPolicy(PogError, ValueError):
    """Raised when a password policy document fails validation."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid policy")
