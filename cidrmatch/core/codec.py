# cidrmatch/core/codec.py

from __future__ import annotations
import re
from typing import Tuple

from cidrmatch.core.errors import InvalidAddress, InvalidCidr

ADDRESS_BITS = 32
OCTET_BITS = 8

_DECIMAL = re.compile(r"[0-9]+")


def _parse_octet(address: str, field: str) -> int:
    if not _DECIMAL.fullmatch(field):
        raise InvalidAddress(address, field)
    value = int(field)
    if value > 255:
        raise InvalidAddress(address, field)
    return value


def encode(ip: str) -> str:
    """
    Convert a dotted-quad address to its 32-character bit string.

    Bit 0 is the most significant bit of the first octet:

        >>> encode("1.11.128.0")
        '00000001000010111000000000000000'
    """
    fields = ip.split(".")
    if len(fields) != 4:
        raise InvalidAddress(ip)
    return "".join(
        format(_parse_octet(ip, field), "08b") for field in fields
    )


def decode(bits: str) -> str:
    """Inverse of encode() for a full 32-bit string."""
    if len(bits) != ADDRESS_BITS or set(bits) - {"0", "1"}:
        raise InvalidAddress(bits)
    return ".".join(
        str(int(bits[i:i + OCTET_BITS], 2))
        for i in range(0, ADDRESS_BITS, OCTET_BITS)
    )


def parse_cidr(cidr: str) -> Tuple[str, int]:
    """
    Validate CIDR notation and split it into (address, prefix length).

    Host bits past the prefix length are accepted as written.
    """
    parts = cidr.split("/")
    if len(parts) != 2:
        raise InvalidCidr(cidr, "expected <address>/<prefix length>")

    ip, prefix_str = parts
    if not _DECIMAL.fullmatch(prefix_str) or int(prefix_str) > ADDRESS_BITS:
        raise InvalidCidr(cidr, f"prefix length must be 0-{ADDRESS_BITS}, got {prefix_str!r}")

    try:
        encode(ip)
    except InvalidAddress as e:
        raise InvalidCidr(cidr, str(e)) from e

    return ip, int(prefix_str)
