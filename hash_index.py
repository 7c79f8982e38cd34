from abc import ABC, abstractmethod
from math import isqrt
from typing import Final, Hashable

import numpy as np

BYTE_MASK: Final[int] = 0xFF
# number of bytes of a key's hash fed into tabulation hashing
HASH_BYTES: Final[int] = 8


def hash_index(key: Hashable, table_size: int) -> int:
    """
    Map a key to a bucket index in ``[0, table_size)`` using the division method

    ``hash(key)`` can be negative. Python's modulo takes the sign of the divisor,
    so the result never needs a correction for negative hashes.
    """
    return hash(key) % table_size


def is_prime(n: int) -> bool:
    """
    Trial division by the odd integers in [3, sqrt(n)]

    Only meaningful for odd n >= 3, which are the only candidates ``next_prime`` tests
    """
    return all(n % divisor for divisor in range(3, isqrt(n) + 1, 2))


def next_prime(n: int) -> int:
    """
    Return the smallest prime >= n, or 2 if n <= 1

    Even numbers are skipped, so 2 is only ever returned for n <= 1
    """
    if n <= 1:
        return 2
    if not n & 1:
        n += 1
    while not is_prime(n):
        n += 2
    return n


class HashIndexer(ABC):
    """
    Maps keys to bucket indices of a table of a given size

    Subclasses must be deterministic between calls to ``gen``: equal keys have to map to
    the same index for as long as they are stored in a table.
    """

    @abstractmethod
    def gen(self):
        pass

    @abstractmethod
    def __call__(self, key: Hashable, table_size: int) -> int:
        pass


class HashIndexerDivision(HashIndexer):
    def gen(self):
        # nothing to draw, the division method has no parameters
        pass

    def __call__(self, key, table_size):
        return hash_index(key, table_size)


class HashIndexerTabulation(HashIndexer):
    """
    Simple tabulation hashing over the bytes of ``hash(key)``

    Each of the 8 bytes selects a random 64-bit word from its own table and the
    words are xor-ed together before being reduced modulo the table size
    """

    def __init__(self):
        self.tables = None

    def __call__(self, key: Hashable, table_size: int) -> int:
        x = hash(key)
        h = 0
        for byte_index, table in enumerate(self.tables):
            h ^= int(table[(x >> (8 * byte_index)) & BYTE_MASK])
        return h % table_size

    def gen(self):
        self.tables = np.random.randint(
            0, 0xFFFFFFFFFFFFFFFF, size=(HASH_BYTES, 256), dtype=np.uint64
        )
