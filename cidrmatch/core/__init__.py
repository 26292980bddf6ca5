from cidrmatch.core.codec import decode, encode, parse_cidr
from cidrmatch.core.errors import CidrMatchError, InvalidAddress, InvalidCidr
from cidrmatch.core.trie import PrefixTrie, TrieNode

__all__ = [
    "CidrMatchError",
    "InvalidAddress",
    "InvalidCidr",
    "PrefixTrie",
    "TrieNode",
    "decode",
    "encode",
    "parse_cidr",
]
