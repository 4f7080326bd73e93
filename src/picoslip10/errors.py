"""Exceptions raised by SLIP-0010 path parsing, derivation and node persistence."""

from __future__ import annotations


class Slip10Error(Exception):
    """Base class for all picoslip10 errors."""


class InvalidPathError(Slip10Error, ValueError):
    """Derivation path is malformed, non-hardened or has an overflowing segment."""

    def __init__(self, path: object, reason: str = "invalid derivation path") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path!r}")


class NoPublicDerivationError(Slip10Error, ValueError):
    """Ed25519 has no public (non-hardened) child derivation."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"no public derivation for ed25519 (index {index:#x})")


class InvalidIndexError(Slip10Error, ValueError):
    """Child index does not fit in an unsigned 32-bit integer."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"child index out of 32-bit range: {index}")


class InvalidNodeError(Slip10Error, ValueError):
    """Node fields or a persisted node record are malformed."""


class PrimitiveFailureError(Slip10Error, RuntimeError):
    """The HMAC-SHA512 or Ed25519 primitive failed on its input."""


__all__: tuple[str, ...] = (
    "InvalidIndexError",
    "InvalidNodeError",
    "InvalidPathError",
    "NoPublicDerivationError",
    "PrimitiveFailureError",
    "Slip10Error",
)
