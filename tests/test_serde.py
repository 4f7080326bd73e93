"""Node persistence (JSON record, msgpack) and the msgpack codec."""

from __future__ import annotations

import json

import pytest

from picoslip10 import (
    InvalidNodeError,
    Node,
    derive_for_path,
    msgpack_pack,
    msgpack_unpack,
    node_from_json,
    node_to_json,
)

SEED = bytes.fromhex(
    "fffcf9f6f3f0edeae7e4e1dedbd8d5d2cfccc9c6c3c0bdbab7b4b1aeaba8a5a2"
    "9f9c999693908d8a8784817e7b7875726f6c696663605d5a5754514e4b484542"
)


@pytest.fixture
def node() -> Node:
    return derive_for_path("m/0'/2147483647'", SEED)


def test_dict_record_fields(node: Node) -> None:
    record = node.to_dict()
    assert set(record) == {"key", "chain_code"}
    assert record["key"] == node.key.hex()
    assert record["chain_code"] == node.chain_code.hex()


def test_json_round_trip(node: Node) -> None:
    restored = node_from_json(node_to_json(node))
    assert restored == node
    assert restored.key == node.key
    assert restored.chain_code == node.chain_code


def test_msgpack_round_trip(node: Node) -> None:
    data = node.to_msgpack()
    # fixmap(2), fixstr "key", bin8 len 32
    assert data[:6] == b"\x82\xa3key\xc4"
    assert Node.from_msgpack(data) == node


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"key": "00" * 32}),
        json.dumps({"key": "00" * 32, "chain_code": "00" * 32, "depth": 0}),
        json.dumps({"key": "zz" * 32, "chain_code": "00" * 32}),
        json.dumps({"key": "00" * 31, "chain_code": "00" * 32}),
        json.dumps({"key": 0, "chain_code": "00" * 32}),
        "[" * 100000 + "]" * 100000,
    ],
)
def test_json_rejects_malformed(text: str) -> None:
    with pytest.raises(InvalidNodeError):
        node_from_json(text)


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\xc1",
        msgpack_pack([1, 2]),
        msgpack_pack({"key": bytes(32)}),
        msgpack_pack({"key": "00" * 32, "chain_code": bytes(32)}),
        msgpack_pack({"key": bytes(32), "chain_code": bytes(32)}) + b"\x00",
        msgpack_pack({"key": bytes(32), "chain_code": bytes(32)})[:-1],
        b"\x91" * 100000 + b"\xc0",
        msgpack_pack({"key": [bytes(32)], "chain_code": bytes(32)}),
    ],
)
def test_msgpack_rejects_malformed(data: bytes) -> None:
    with pytest.raises(InvalidNodeError):
        Node.from_msgpack(data)


def test_msgpack_pack_known_encodings() -> None:
    assert msgpack_pack(None) == b"\xc0"
    assert msgpack_pack(True) == b"\xc3"
    assert msgpack_pack(5) == b"\x05"
    assert msgpack_pack(-1) == b"\xff"
    assert msgpack_pack(200) == b"\xcc\xc8"
    assert msgpack_pack(-200) == b"\xd1\xff\x38"
    assert msgpack_pack(0xFFFFFFFF) == b"\xce\xff\xff\xff\xff"
    assert msgpack_pack("a") == b"\xa1a"
    assert msgpack_pack("x" * 40) == b"\xd9\x28" + b"x" * 40
    assert msgpack_pack(b"\x01\x02") == b"\xc4\x02\x01\x02"
    assert msgpack_pack({"a": [1]}) == b"\x81\xa1a\x91\x01"


def test_msgpack_unpack_nested() -> None:
    obj = {"n": -70000, "big": 1 << 40, "items": list(range(20)), "s": "é" * 20}
    assert msgpack_unpack(msgpack_pack(obj)) == obj


def test_msgpack_pack_unsupported_type() -> None:
    with pytest.raises(TypeError):
        msgpack_pack(1.5)


def test_msgpack_unpack_rejects_deep_nesting() -> None:
    with pytest.raises(ValueError):
        msgpack_unpack(b"\x91" * 100000 + b"\xc0")
    assert msgpack_unpack(b"\x91" * 3 + b"\xc0", max_depth=3) == [[[None]]]
    with pytest.raises(ValueError):
        msgpack_unpack(b"\x91" * 4 + b"\xc0", max_depth=3)
