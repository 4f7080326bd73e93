"""Ed25519 primitive: RFC 8032 vectors and keypair layout.

Lock-in exact outputs for fixed inputs so that any change in the curve code
is detected.
"""

from __future__ import annotations

import pytest

from picoslip10 import ed25519_keypair, ed25519_public_key, ed25519_sign, ed25519_verify

# RFC 8032 7.1, TEST 1
ED25519_TEST1_SECRET = bytes.fromhex(
    "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
)
ED25519_TEST1_PUBLIC = bytes.fromhex(
    "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
)
ED25519_TEST1_MSG = b""
ED25519_TEST1_SIG = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e06522490155"
    "5fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


def test_ed25519_public_key() -> None:
    assert ed25519_public_key(ED25519_TEST1_SECRET) == ED25519_TEST1_PUBLIC


def test_ed25519_keypair() -> None:
    public_key, private_key = ed25519_keypair(ED25519_TEST1_SECRET)
    assert public_key == ED25519_TEST1_PUBLIC
    assert private_key == ED25519_TEST1_SECRET + ED25519_TEST1_PUBLIC


def test_ed25519_sign_verify() -> None:
    sig = ed25519_sign(ED25519_TEST1_MSG, ED25519_TEST1_SECRET)
    assert sig == ED25519_TEST1_SIG
    assert ed25519_verify(ED25519_TEST1_MSG, sig, ED25519_TEST1_PUBLIC) is True


def test_ed25519_sign_with_expanded_private_key() -> None:
    _, private_key = ed25519_keypair(ED25519_TEST1_SECRET)
    assert ed25519_sign(ED25519_TEST1_MSG, private_key) == ED25519_TEST1_SIG


def test_ed25519_verify_rejects_tampered() -> None:
    assert ed25519_verify(b"x", ED25519_TEST1_SIG, ED25519_TEST1_PUBLIC) is False
    assert (
        ed25519_verify(ED25519_TEST1_MSG, bytes(63) + b"\x00", ED25519_TEST1_PUBLIC)
        is False
    )
    assert ed25519_verify(ED25519_TEST1_MSG, ED25519_TEST1_SIG, bytes(31)) is False


@pytest.mark.parametrize("seed", [b"", bytes(31), bytes(33)])
def test_ed25519_rejects_bad_seed_length(seed: bytes) -> None:
    with pytest.raises(ValueError):
        ed25519_public_key(seed)
