"""Minimal msgpack codec (nil, bool, int, bin, str, array, map). Preserves map order."""

from __future__ import annotations

from typing import Any


def _pack_len(
    buf: bytearray,
    n: int,
    fix_base: int | None,
    fix_max: int,
    codes: tuple[int, int, int],
) -> None:
    """Length header: fix form when allowed, else 8/16/32-bit length codes."""
    code8, code16, code32 = codes
    if fix_base is not None and n <= fix_max:
        buf.append(fix_base | n)
    elif n <= 0xFF and code8:
        buf.extend((code8, n))
    elif n <= 0xFFFF:
        buf.append(code16)
        buf.extend(n.to_bytes(2, "big"))
    elif n <= 0xFFFFFFFF:
        buf.append(code32)
        buf.extend(n.to_bytes(4, "big"))
    else:
        raise ValueError(f"msgpack pack: length {n} too large")


def _pack_int(obj: int, buf: bytearray) -> None:
    if 0 <= obj <= 0x7F:
        buf.append(obj)
    elif -32 <= obj < 0:
        buf.append(obj & 0xFF)
    elif 0 < obj <= 0xFF:
        buf.extend((0xCC, obj))
    elif 0 < obj <= 0xFFFF:
        buf.append(0xCD)
        buf.extend(obj.to_bytes(2, "big"))
    elif 0 < obj <= 0xFFFFFFFF:
        buf.append(0xCE)
        buf.extend(obj.to_bytes(4, "big"))
    elif 0 < obj <= 0xFFFFFFFFFFFFFFFF:
        buf.append(0xCF)
        buf.extend(obj.to_bytes(8, "big"))
    elif -0x80 <= obj < 0:
        buf.append(0xD0)
        buf.extend(obj.to_bytes(1, "big", signed=True))
    elif -0x8000 <= obj < 0:
        buf.append(0xD1)
        buf.extend(obj.to_bytes(2, "big", signed=True))
    elif -0x80000000 <= obj < 0:
        buf.append(0xD2)
        buf.extend(obj.to_bytes(4, "big", signed=True))
    elif -0x8000000000000000 <= obj < 0:
        buf.append(0xD3)
        buf.extend(obj.to_bytes(8, "big", signed=True))
    else:
        raise ValueError(f"msgpack pack: int {obj} out of 64-bit range")


def _msgpack_pack_obj(obj: Any, buf: bytearray) -> None:
    if obj is None:
        buf.append(0xC0)
    elif isinstance(obj, bool):
        buf.append(0xC3 if obj else 0xC2)
    elif isinstance(obj, int):
        _pack_int(obj, buf)
    elif isinstance(obj, (bytes, bytearray, memoryview)):
        data = bytes(obj)
        _pack_len(buf, len(data), None, 0, (0xC4, 0xC5, 0xC6))
        buf.extend(data)
    elif isinstance(obj, str):
        data = obj.encode("utf-8")
        _pack_len(buf, len(data), 0xA0, 31, (0xD9, 0xDA, 0xDB))
        buf.extend(data)
    elif isinstance(obj, (list, tuple)):
        _pack_len(buf, len(obj), 0x90, 15, (0, 0xDC, 0xDD))
        for x in obj:
            _msgpack_pack_obj(x, buf)
    elif isinstance(obj, dict):
        _pack_len(buf, len(obj), 0x80, 15, (0, 0xDE, 0xDF))
        for k, v in obj.items():
            _msgpack_pack_obj(k, buf)
            _msgpack_pack_obj(v, buf)
    else:
        raise TypeError(f"msgpack pack: unsupported type {type(obj)}")


def msgpack_pack(obj: Any) -> bytes:
    buf = bytearray()
    _msgpack_pack_obj(obj, buf)
    return bytes(buf)


class _Reader:
    def __init__(self, data: bytes, max_depth: int) -> None:
        self.data = data
        self.pos = 0
        self.max_depth = max_depth

    def take(self, n: int) -> bytes:
        end = self.pos + n
        if end > len(self.data):
            raise ValueError("msgpack unpack: truncated input")
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def uint(self, n: int) -> int:
        return int.from_bytes(self.take(n), "big")


def _unpack_obj(r: _Reader, depth: int = 0) -> Any:
    code = r.uint(1)
    if code <= 0x7F:
        return code
    if code >= 0xE0:
        return code - 0x100
    if 0x80 <= code <= 0x8F:
        return _unpack_map(r, code & 0x0F, depth)
    if 0x90 <= code <= 0x9F:
        return _unpack_array(r, code & 0x0F, depth)
    if 0xA0 <= code <= 0xBF:
        return _unpack_str(r, code & 0x1F)
    if code == 0xC0:
        return None
    if code in (0xC2, 0xC3):
        return code == 0xC3
    if code in (0xC4, 0xC5, 0xC6):
        return r.take(r.uint(1 << (code - 0xC4)))
    if 0xCC <= code <= 0xCF:
        return r.uint(1 << (code - 0xCC))
    if 0xD0 <= code <= 0xD3:
        return int.from_bytes(r.take(1 << (code - 0xD0)), "big", signed=True)
    if code in (0xD9, 0xDA, 0xDB):
        return _unpack_str(r, r.uint(1 << (code - 0xD9)))
    if code in (0xDC, 0xDD):
        return _unpack_array(r, r.uint(2 if code == 0xDC else 4), depth)
    if code in (0xDE, 0xDF):
        return _unpack_map(r, r.uint(2 if code == 0xDE else 4), depth)
    raise ValueError(f"msgpack unpack: unsupported type code {code:#04x}")


def _unpack_str(r: _Reader, n: int) -> str:
    try:
        return r.take(n).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("msgpack unpack: invalid utf-8 in str") from exc


def _check_depth(r: _Reader, depth: int) -> None:
    if depth >= r.max_depth:
        raise ValueError(f"msgpack unpack: nesting deeper than {r.max_depth}")


def _unpack_array(r: _Reader, n: int, depth: int) -> list:
    _check_depth(r, depth)
    return [_unpack_obj(r, depth + 1) for _ in range(n)]


def _unpack_map(r: _Reader, n: int, depth: int) -> dict:
    _check_depth(r, depth)
    out = {}
    for _ in range(n):
        k = _unpack_obj(r, depth + 1)
        if isinstance(k, (list, dict)):
            raise ValueError("msgpack unpack: unhashable map key")
        out[k] = _unpack_obj(r, depth + 1)
    return out


def msgpack_unpack(data: bytes, max_depth: int = 32) -> Any:
    """
    Decode a single msgpack object; the whole input must be consumed.

    Args:
        data: Encoded bytes.
        max_depth: Maximum number of nested arrays/maps.

    Raises:
        ValueError: truncated input, trailing bytes, nesting above ``max_depth``
            or an unsupported type code.
    """
    r = _Reader(bytes(data), max_depth)
    obj = _unpack_obj(r)
    if r.pos != len(r.data):
        raise ValueError("msgpack unpack: trailing bytes")
    return obj


__all__: tuple[str, ...] = ("msgpack_pack", "msgpack_unpack")
