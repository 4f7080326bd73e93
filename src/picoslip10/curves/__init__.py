"""Elliptic-curve crypto: Ed25519 keypairs, sign and verify."""

from .ed25519 import ed25519_keypair, ed25519_public_key, ed25519_sign, ed25519_verify

__all__: tuple[str, ...] = (
    "ed25519_keypair",
    "ed25519_public_key",
    "ed25519_sign",
    "ed25519_verify",
)
