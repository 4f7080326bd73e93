"""Serialization / deserialization (serde): msgpack pack and unpack."""

from .msgpack import msgpack_pack, msgpack_unpack

__all__: tuple[str, ...] = ("msgpack_pack", "msgpack_unpack")
