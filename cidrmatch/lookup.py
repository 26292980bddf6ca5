# cidrmatch/lookup.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from cidrmatch.core.errors import InvalidCidr
from cidrmatch.core.trie import PrefixTrie
from cidrmatch.models import CidrRecord
from cidrmatch.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class BuildResult:
    trie: PrefixTrie
    inserted: int = 0
    rejected: List[Tuple[CidrRecord, InvalidCidr]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected


def build_trie(records: Iterable[CidrRecord], strict: bool = False) -> BuildResult:
    """
    Insert every record under its own ip_range.

    In strict mode the first malformed range aborts the build. Otherwise
    it is logged, kept in `rejected`, and the remaining records are still
    inserted.
    """
    result = BuildResult(trie=PrefixTrie())

    for record in records:
        try:
            result.trie.insert(record.ip_range, record)
        except InvalidCidr as e:
            if strict:
                raise
            log.error("Error inserting CIDR %s: %s", record.ip_range, e.reason)
            result.rejected.append((record, e))
            continue
        result.inserted += 1

    log.info(
        "Built trie with %d range(s), %d rejected",
        result.inserted,
        len(result.rejected),
    )
    return result


def find_all(records: Iterable[CidrRecord], ip: str, strict: bool = False) -> List[CidrRecord]:
    """Build a trie from `records` and return every range containing `ip`."""
    trie = build_trie(records, strict=strict).trie
    return trie.search_all(ip)


def lookup_many(trie: PrefixTrie, ips: Iterable[str]) -> List[Tuple[str, List[CidrRecord]]]:
    """
    Query several addresses against one trie.

    Returns (ip, matches) pairs in query order; a repeated address is
    reported once per occurrence.
    """
    results: List[Tuple[str, List[CidrRecord]]] = []
    for ip in ips:
        matches = trie.search_all(ip)
        log.debug("%s matched %d range(s)", ip, len(matches))
        results.append((ip, matches))
    return results
