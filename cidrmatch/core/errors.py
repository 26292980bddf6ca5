# cidrmatch/core/errors.py

from __future__ import annotations
from typing import Optional


class CidrMatchError(ValueError):
    """Base class for every error raised by cidrmatch."""


class InvalidAddress(CidrMatchError):
    """
    A dotted-quad IPv4 address could not be encoded.

    `octet` is the offending field, or None when the field count is wrong.
    """

    def __init__(self, address: str, octet: Optional[str] = None):
        self.address = address
        self.octet = octet
        if octet is None:
            message = f"Invalid IP address format: {address}"
        else:
            message = f"Invalid octet in IP address {address}: {octet!r}"
        super().__init__(message)


class InvalidCidr(CidrMatchError):
    """A CIDR string is malformed (field count, prefix length or address part)."""

    def __init__(self, cidr: str, reason: str):
        self.cidr = cidr
        self.reason = reason
        super().__init__(f"Invalid CIDR {cidr}: {reason}")


class RangeFileError(CidrMatchError):
    """A range file is missing, unreadable or lacks required columns."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
