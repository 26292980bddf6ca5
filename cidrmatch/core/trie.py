# cidrmatch/core/trie.py

from __future__ import annotations
from typing import Iterator, List, Optional

from cidrmatch.core.codec import ADDRESS_BITS, encode, parse_cidr
from cidrmatch.models import CidrRecord


class TrieNode:
    """One bit of prefix. `children[b]` is the subtree for next bit `b`."""

    __slots__ = ("children", "records")

    def __init__(self) -> None:
        self.children: List[Optional[TrieNode]] = [None, None]
        self.records: List[CidrRecord] = []


class PrefixTrie:
    """
    Binary trie of CIDR blocks answering "every range containing this address".

    Each record is stored on the node reached after consuming the first
    `prefix length` bits of its network address; the root holds /0 ranges.
    A lookup walks the query's bits from the root and collects records on
    every node it visits, so results come out least specific first.

    Not internally synchronized: build it, then query it. Concurrent
    search_all() calls are fine once inserts have stopped.
    """

    def __init__(self) -> None:
        self.root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def insert(self, cidr: str, record: CidrRecord) -> None:
        """
        Attach `record` to the node for `cidr`, creating missing nodes.

        Raises InvalidCidr before touching the trie if `cidr` is malformed.
        Records are never deduplicated; inserting the same pair twice
        reports it twice.
        """
        ip, prefix_len = parse_cidr(cidr)
        bits = encode(ip)

        node = self.root
        for i in range(prefix_len):
            bit = int(bits[i])
            child = node.children[bit]
            if child is None:
                child = TrieNode()
                node.children[bit] = child
            node = child

        node.records.append(record)
        self._size += 1

    def search_all(self, ip: str) -> List[CidrRecord]:
        """
        Return every stored record whose prefix contains `ip`.

        Raises InvalidAddress for a malformed address; an address outside
        every range gives an empty list.
        """
        return list(self.iter_matches(ip))

    def iter_matches(self, ip: str) -> Iterator[CidrRecord]:
        bits = encode(ip)

        node = self.root
        yield from node.records
        for i in range(ADDRESS_BITS):
            node = node.children[int(bits[i])]
            if node is None:
                return
            yield from node.records
