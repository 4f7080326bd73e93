"""
SLIP-0010 hierarchical key derivation for Ed25519. No third-party dependencies.
Hardened derivation only; pure Python over stdlib hmac/hashlib.
"""

from .__about__ import __version__
from .curves import ed25519_keypair, ed25519_public_key, ed25519_sign, ed25519_verify
from .derivation import (
    FIRST_HARDENED_INDEX,
    SEED_MODIFIER,
    Keypair,
    Node,
    derive_for_path,
    is_valid_path,
    new_master_node,
    node_from_json,
    node_to_json,
    parse_path,
)
from .errors import (
    InvalidIndexError,
    InvalidNodeError,
    InvalidPathError,
    NoPublicDerivationError,
    PrimitiveFailureError,
    Slip10Error,
)
from .serde import msgpack_pack, msgpack_unpack

__all__: tuple[str, ...] = (
    # About
    "__version__",
    # Derivation: paths
    "FIRST_HARDENED_INDEX",
    "is_valid_path",
    "parse_path",
    # Derivation: nodes
    "SEED_MODIFIER",
    "Keypair",
    "Node",
    "derive_for_path",
    "new_master_node",
    "node_from_json",
    "node_to_json",
    # Curves: Ed25519
    "ed25519_keypair",
    "ed25519_public_key",
    "ed25519_sign",
    "ed25519_verify",
    # Serde
    "msgpack_pack",
    "msgpack_unpack",
    # Errors
    "InvalidIndexError",
    "InvalidNodeError",
    "InvalidPathError",
    "NoPublicDerivationError",
    "PrimitiveFailureError",
    "Slip10Error",
)
