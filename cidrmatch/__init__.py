"""All-prefix matching of IPv4 addresses against annotated CIDR ranges."""

from cidrmatch.core.errors import CidrMatchError, InvalidAddress, InvalidCidr
from cidrmatch.core.trie import PrefixTrie
from cidrmatch.models import CidrRecord

__version__ = "0.1.0"

__all__ = [
    "CidrMatchError",
    "CidrRecord",
    "InvalidAddress",
    "InvalidCidr",
    "PrefixTrie",
]
