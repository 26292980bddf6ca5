# tests/test_trie.py
"""
cidrmatch/core/trie.py unit tests

PrefixTrie insertion and all-prefix search.
"""

import pytest

from cidrmatch.core.errors import InvalidAddress, InvalidCidr
from cidrmatch.core.trie import PrefixTrie
from cidrmatch.models import CidrRecord


def _rec(cidr, description="x"):
    return CidrRecord(cidr, description)


def _descriptions(records):
    return [r.description for r in records]


# =============================================================================
# search_all
# =============================================================================


class TestSearchAll:
    """search_all() behaviour"""

    def test_nested_ranges_least_specific_first(self, isp_record, lg_record):
        trie = PrefixTrie()
        trie.insert(isp_record.ip_range, isp_record)
        trie.insert(lg_record.ip_range, lg_record)

        assert trie.search_all("1.11.40.5") == [isp_record, lg_record]

    def test_order_independent_of_insertion(self, isp_record, lg_record):
        trie = PrefixTrie()
        trie.insert(lg_record.ip_range, lg_record)
        trie.insert(isp_record.ip_range, isp_record)

        assert trie.search_all("1.11.40.5") == [isp_record, lg_record]

    def test_outside_every_range(self, isp_record, lg_record):
        trie = PrefixTrie()
        trie.insert(isp_record.ip_range, isp_record)
        trie.insert(lg_record.ip_range, lg_record)

        assert trie.search_all("1.12.0.0") == []

    def test_sibling_range_not_reported(self, isp_record, lg_record):
        trie = PrefixTrie()
        trie.insert(isp_record.ip_range, isp_record)
        trie.insert(lg_record.ip_range, lg_record)

        # inside the /16, outside 1.11.40.0/21 (1.11.40.0 - 1.11.47.255)
        assert trie.search_all("1.11.48.1") == [isp_record]

    def test_no_false_match(self):
        trie = PrefixTrie()
        trie.insert("10.0.0.0/8", _rec("10.0.0.0/8"))

        assert trie.search_all("11.0.0.0") == []
        assert len(trie.search_all("10.255.255.255")) == 1

    def test_default_route_first_for_any_address(self):
        trie = PrefixTrie()
        trie.insert("1.0.0.0/8", _rec("1.0.0.0/8", "one"))
        trie.insert("0.0.0.0/0", _rec("0.0.0.0/0", "default"))

        assert _descriptions(trie.search_all("1.2.3.4")) == ["default", "one"]
        assert _descriptions(trie.search_all("200.1.1.1")) == ["default"]
        assert _descriptions(trie.search_all("0.0.0.0")) == ["default"]

    def test_same_prefix_keeps_insertion_order(self):
        trie = PrefixTrie()
        trie.insert("1.2.3.0/24", _rec("1.2.3.0/24", "first"))
        trie.insert("1.2.3.0/24", _rec("1.2.3.0/24", "second"))

        assert _descriptions(trie.search_all("1.2.3.200")) == ["first", "second"]

    def test_duplicates_not_collapsed(self):
        trie = PrefixTrie()
        record = _rec("1.2.3.0/24")
        trie.insert("1.2.3.0/24", record)
        trie.insert("1.2.3.0/24", record)

        assert trie.search_all("1.2.3.4") == [record, record]
        assert len(trie) == 2

    def test_host_route(self):
        trie = PrefixTrie()
        trie.insert("8.8.8.8/32", _rec("8.8.8.8/32", "dns"))

        assert _descriptions(trie.search_all("8.8.8.8")) == ["dns"]
        assert trie.search_all("8.8.8.9") == []

    def test_host_bits_ignored_past_prefix(self):
        trie = PrefixTrie()
        trie.insert("10.1.2.3/8", _rec("10.1.2.3/8", "ten"))

        assert _descriptions(trie.search_all("10.200.0.1")) == ["ten"]

    def test_every_ancestor_reported(self):
        trie = PrefixTrie()
        for prefix_len in (0, 8, 16, 24, 32):
            cidr = f"10.20.30.40/{prefix_len}"
            trie.insert(cidr, _rec(cidr, str(prefix_len)))

        assert _descriptions(trie.search_all("10.20.30.40")) == ["0", "8", "16", "24", "32"]
        assert _descriptions(trie.search_all("10.20.31.1")) == ["0", "8", "16"]

    def test_empty_trie(self):
        assert PrefixTrie().search_all("1.2.3.4") == []

    def test_malformed_query_is_an_error(self):
        trie = PrefixTrie()
        trie.insert("0.0.0.0/0", _rec("0.0.0.0/0"))

        with pytest.raises(InvalidAddress):
            trie.search_all("1.2.3")

    def test_search_does_not_mutate(self, isp_record):
        trie = PrefixTrie()
        trie.insert(isp_record.ip_range, isp_record)

        first = trie.search_all("1.11.1.1")
        first.clear()
        assert trie.search_all("1.11.1.1") == [isp_record]


# =============================================================================
# insert
# =============================================================================


class TestInsert:
    """insert() behaviour"""

    def test_bad_prefix_length_rejected(self, isp_record):
        trie = PrefixTrie()
        trie.insert(isp_record.ip_range, isp_record)
        broken = _rec("1.11.0.0/33", "broken")

        with pytest.raises(InvalidCidr):
            trie.insert(broken.ip_range, broken)

        assert broken not in trie.search_all("1.11.0.0")
        assert len(trie) == 1

    def test_bad_address_rejected(self):
        trie = PrefixTrie()

        with pytest.raises(InvalidCidr):
            trie.insert("1.11.0/16", _rec("1.11.0/16"))
        assert len(trie) == 0

    def test_failed_insert_creates_no_nodes(self):
        trie = PrefixTrie()

        with pytest.raises(InvalidCidr):
            trie.insert("255.0.0.0/40", _rec("255.0.0.0/40"))
        assert trie.root.children == [None, None]

    def test_nodes_created_along_path(self):
        trie = PrefixTrie()
        trie.insert("128.0.0.0/2", _rec("128.0.0.0/2"))

        first = trie.root.children[1]
        assert trie.root.children[0] is None
        assert first is not None and first.records == []
        second = first.children[0]
        assert second is not None and len(second.records) == 1
        assert second.children == [None, None]
