"""SLIP-0010 Ed25519 derivation: path parsing and hardened child derivation."""

from .node import (
    KEY_SIZE,
    SEED_MODIFIER,
    Keypair,
    Node,
    derive_for_path,
    new_master_node,
    node_from_json,
    node_to_json,
)
from .path import FIRST_HARDENED_INDEX, MAX_PLAIN_INDEX, is_valid_path, parse_path

__all__: tuple[str, ...] = (
    "FIRST_HARDENED_INDEX",
    "KEY_SIZE",
    "MAX_PLAIN_INDEX",
    "SEED_MODIFIER",
    "Keypair",
    "Node",
    "derive_for_path",
    "is_valid_path",
    "new_master_node",
    "node_from_json",
    "node_to_json",
    "parse_path",
)
