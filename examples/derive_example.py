#!/usr/bin/env python3
"""Example: Solana-style account keys via SLIP-0010 (m/44'/501'/<account>'/0')."""

from picoslip10 import derive_for_path, ed25519_verify

seed = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
for account in range(3):
    path = f"m/44'/501'/{account}'/0'"
    node = derive_for_path(path, seed)
    pair = node.keypair()
    print(f"{path:<20} public key: {pair.public_key.hex()}")

message = b"Hello, Solana"
signature = pair.sign(message)
print("Verify:", ed25519_verify(message, signature, pair.public_key))
