import numpy as np
import pytest

from hash_index import (
    HashIndexerDivision,
    HashIndexerTabulation,
    hash_index,
    is_prime,
    next_prime,
)


class NegativeHashKey:
    def __init__(self, name):
        self.name = name

    def __hash__(self):
        return -abs(hash(self.name)) - 1

    def __eq__(self, other):
        return isinstance(other, NegativeHashKey) and other.name == self.name


class TestNextPrime:
    @pytest.mark.parametrize("n", [-5, 0, 1])
    def test_small_values_give_two(self, n):
        assert next_prime(n) == 2

    @pytest.mark.parametrize(
        "n, expected",
        [(2, 3), (3, 3), (7, 7), (8, 11), (9, 11), (14, 17), (34, 37), (10_000, 10_007)],
    )
    def test_rounds_up_to_next_odd_prime(self, n, expected):
        assert next_prime(n) == expected

    def test_results_are_prime(self):
        for n in range(3, 2000):
            p = next_prime(n)
            assert p >= n
            assert all(p % d for d in range(2, p)), p

    def test_is_prime_rejects_odd_composites(self):
        assert not is_prime(9)
        assert not is_prime(25)
        assert not is_prime(10_001)
        assert is_prime(10_007)


class TestHashIndex:
    def test_negative_hash_maps_in_range(self):
        for name in ("a", "b", "missing", "x" * 40):
            key = NegativeHashKey(name)
            assert hash(key) < 0
            for table_size in (2, 7, 17, 37):
                assert 0 <= hash_index(key, table_size) < table_size

    def test_equal_keys_get_equal_indices(self):
        assert hash_index(NegativeHashKey("k"), 17) == hash_index(NegativeHashKey("k"), 17)

    def test_division_indexer_matches_hash_index(self):
        indexer = HashIndexerDivision()
        indexer.gen()
        for key in (-12, 0, 5, "apple", (1, 2)):
            assert indexer(key, 11) == hash_index(key, 11)

    def test_tabulation_indexer_is_in_range_and_deterministic(self):
        indexer = HashIndexerTabulation()
        indexer.gen()
        keys = np.random.randint(-1_000_000, 1_000_000, 1000)
        for key in keys:
            index = indexer(key, 37)
            assert 0 <= index < 37
            assert indexer(int(key), 37) == index
        assert 0 <= indexer(NegativeHashKey("n"), 37) < 37
