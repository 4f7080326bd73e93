"""
SLIP-0010 Ed25519 derivation paths: ``m`` or ``m/<n>'/<n>'/...``.

Every segment must carry the hardened marker; the plain value must fit in
31 bits so that adding the hardened offset still fits in 32.
"""

from __future__ import annotations

import logging
import re

from ..errors import InvalidPathError

logger = logging.getLogger(__name__)

# First hardened child index (2^31)
FIRST_HARDENED_INDEX = 0x80000000
# Largest plain segment value accepted before the hardened offset is added
MAX_PLAIN_INDEX = FIRST_HARDENED_INDEX - 1

_PATH_RE = re.compile(r"m(/[0-9]+')*")


def _split_segments(path: str) -> list[str]:
    """Plain decimal segments of a shape-checked path (``m`` itself excluded)."""
    return [segment[:-1] for segment in path.split("/")[1:]]


def parse_path(path: str) -> tuple[int, ...]:
    """
    Parse a derivation path into plain (pre-hardening) indices.

    Args:
        path: Path string such as ``m/44'/501'/0'``.

    Returns:
        Tuple of indices in [0, 2^31 - 1], in path order. ``m`` gives ``()``.

    Raises:
        InvalidPathError: path is not a string, fails the ``m(/<n>')*`` shape,
            or has a segment above 2^31 - 1.
    """
    if not isinstance(path, str):
        raise InvalidPathError(path, "derivation path must be a string")
    if _PATH_RE.fullmatch(path) is None:
        logger.debug("Rejected derivation path %r: malformed", path)
        raise InvalidPathError(path)
    indices = []
    for segment in _split_segments(path):
        # length check first: int() refuses very long digit strings
        digits = segment.lstrip("0") or "0"
        if len(digits) > 10 or int(digits, 10) > MAX_PLAIN_INDEX:
            logger.debug(
                "Rejected derivation path %r: segment %s overflows", path, segment
            )
            raise InvalidPathError(path, f"segment {segment}' overflows 31 bits")
        indices.append(int(digits, 10))
    return tuple(indices)


def is_valid_path(path: str) -> bool:
    """Return True iff ``path`` is a well-formed, all-hardened derivation path."""
    try:
        parse_path(path)
    except InvalidPathError:
        return False
    return True


__all__: tuple[str, ...] = (
    "FIRST_HARDENED_INDEX",
    "MAX_PLAIN_INDEX",
    "is_valid_path",
    "parse_path",
)
