"""
SLIP-0010 private key derivation for Ed25519.

A master node is HMAC-SHA512(key=b"ed25519 seed", msg=seed); each child is
HMAC-SHA512(key=parent.chain_code, msg=0x00 || parent.key || ser32(index)).
The 64-byte digest splits into key (left half) and chain code (right half).
Only hardened indices exist for Ed25519.

See https://github.com/satoshilabs/slips/blob/master/slip-0010.md
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from ..curves.ed25519 import ed25519_keypair, ed25519_sign
from ..errors import (
    InvalidIndexError,
    InvalidNodeError,
    NoPublicDerivationError,
    PrimitiveFailureError,
)
from ..serde import msgpack_pack, msgpack_unpack
from .path import FIRST_HARDENED_INDEX, parse_path

logger = logging.getLogger(__name__)

# HMAC key for the master node (SLIP-0010 curve modifier for Ed25519)
SEED_MODIFIER = b"ed25519 seed"
KEY_SIZE = 32
# Private-key derivation tag; the public-key branch of other curves has no 0x00
_PRIVATE_TAG = b"\x00"
_MAX_INDEX = 0xFFFFFFFF


def _hmac_sha512(key: bytes, message: bytes) -> bytes:
    try:
        return hmac.new(key, message, hashlib.sha512).digest()
    except (TypeError, ValueError) as exc:
        raise PrimitiveFailureError(f"HMAC-SHA512 failed: {exc}") from exc


def _as_bytes(value: Any, name: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes-like, got {type(value).__name__}")


class Keypair(NamedTuple):
    """Ed25519 keypair materialized from a node."""

    public_key: bytes
    # seed || public_key
    private_key: bytes

    @property
    def seed(self) -> bytes:
        """32-byte seed form of the private key."""
        return self.private_key[:KEY_SIZE]

    def sign(self, message: bytes) -> bytes:
        """64-byte Ed25519 signature of ``message``."""
        return ed25519_sign(message, self.private_key)


@dataclass(frozen=True)
class Node:
    """
    One position in a SLIP-0010 Ed25519 derivation chain.

    Immutable; derivation always returns a new Node. ``key`` doubles as the
    Ed25519 seed of the node's keypair, ``chain_code`` is only used as the
    HMAC key for children.
    """

    key: bytes = field(repr=False)
    chain_code: bytes = field(repr=False)

    def __post_init__(self) -> None:
        for name in ("key", "chain_code"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise InvalidNodeError(
                    f"{name} must be bytes, got {type(value).__name__}"
                )
            value = bytes(value)
            if len(value) != KEY_SIZE:
                raise InvalidNodeError(
                    f"{name} must be {KEY_SIZE} bytes, got {len(value)}"
                )
            object.__setattr__(self, name, value)

    @classmethod
    def _from_digest(cls, digest: bytes) -> Node:
        return cls(key=digest[:KEY_SIZE], chain_code=digest[KEY_SIZE:])

    def derive(self, index: int) -> Node:
        """
        Hardened child at ``index`` (already offset by 2^31).

        Raises:
            TypeError: index is not an int.
            NoPublicDerivationError: index < 0x80000000.
            InvalidIndexError: index does not fit in 32 bits.
        """
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"index must be an int, got {type(index).__name__}")
        if index < FIRST_HARDENED_INDEX:
            raise NoPublicDerivationError(index)
        if index > _MAX_INDEX:
            raise InvalidIndexError(index)
        data = _PRIVATE_TAG + self.key + index.to_bytes(4, "big")
        return Node._from_digest(_hmac_sha512(self.chain_code, data))

    def derive_path(self, path: str) -> Node:
        """Fold a ``m/<n>'/...`` path starting from this node."""
        return _derive_indices(self, parse_path(path))

    def keypair(self) -> Keypair:
        """Ed25519 keypair using this node's key as the seed."""
        try:
            public_key, private_key = ed25519_keypair(self.key)
        except ValueError as exc:
            raise PrimitiveFailureError(f"Ed25519 keygen failed: {exc}") from exc
        return Keypair(public_key, private_key)

    def private_key(self) -> bytes:
        return self.keypair().seed

    def public_key(self) -> bytes:
        return self.keypair().public_key

    def public_key_with_prefix(self) -> bytes:
        """Public key tagged with 0x00, the encoding used by SLIP-0010 test vectors."""
        return b"\x00" + self.public_key()

    def raw_seed(self) -> bytes:
        return self.key

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key.hex(), "chain_code": self.chain_code.hex()}

    @classmethod
    def from_dict(cls, record: Any) -> Node:
        """Node from a ``{"key": hex, "chain_code": hex}`` record."""
        _check_record(record)
        fields = {}
        for name, value in record.items():
            if not isinstance(value, str):
                raise InvalidNodeError(f"{name} must be a hex string")
            try:
                fields[name] = bytes.fromhex(value)
            except ValueError as exc:
                raise InvalidNodeError(f"{name} is not valid hex") from exc
        return cls(**fields)

    def to_msgpack(self) -> bytes:
        """msgpack map with ``key`` and ``chain_code`` as bin fields."""
        return msgpack_pack({"key": self.key, "chain_code": self.chain_code})

    @classmethod
    def from_msgpack(cls, data: bytes) -> Node:
        try:
            # a record is one flat map of str -> bin
            record = msgpack_unpack(data, max_depth=1)
        except (TypeError, ValueError) as exc:
            raise InvalidNodeError(f"malformed msgpack node record: {exc}") from exc
        _check_record(record)
        return cls(key=record["key"], chain_code=record["chain_code"])


def _derive_indices(node: Node, indices: tuple[int, ...]) -> Node:
    """Fold plain path indices over ``node``, hardening each one."""
    logger.debug("Deriving %d hardened level(s)", len(indices))
    for i in indices:
        node = node.derive(i + FIRST_HARDENED_INDEX)
    return node


def _check_record(record: Any) -> None:
    if not isinstance(record, dict) or set(record) != {"key", "chain_code"}:
        raise InvalidNodeError("node record must have exactly 'key' and 'chain_code'")


def node_to_json(node: Node) -> str:
    """JSON object with hex ``key`` and ``chain_code``."""
    return json.dumps(node.to_dict())


def node_from_json(text: str | bytes) -> Node:
    try:
        record = json.loads(text)
    except (RecursionError, ValueError) as exc:
        raise InvalidNodeError(f"malformed JSON node record: {exc}") from exc
    return Node.from_dict(record)


def new_master_node(seed: bytes) -> Node:
    """
    Master node from a root seed.

    Any seed length is accepted; SLIP-0010 test vectors use 16 to 64 bytes
    (BIP-39 seeds are 64).

    Raises:
        TypeError: seed is not bytes-like.
        PrimitiveFailureError: HMAC-SHA512 failed.
    """
    seed = _as_bytes(seed, "seed")
    logger.debug("Building master node from %d-byte seed", len(seed))
    return Node._from_digest(_hmac_sha512(SEED_MODIFIER, seed))


def derive_for_path(path: str, seed: bytes) -> Node:
    """
    Node at ``path`` (e.g. ``m/44'/501'/0'``) under the master node of ``seed``.

    The path is validated before any derivation; ``m`` returns the master node.

    Raises:
        InvalidPathError: path is malformed, non-hardened or overflows.
        TypeError: seed is not bytes-like.
        PrimitiveFailureError: HMAC-SHA512 failed.
    """
    indices = parse_path(path)
    return _derive_indices(new_master_node(seed), indices)


__all__: tuple[str, ...] = (
    "KEY_SIZE",
    "SEED_MODIFIER",
    "Keypair",
    "Node",
    "derive_for_path",
    "new_master_node",
    "node_from_json",
    "node_to_json",
)
