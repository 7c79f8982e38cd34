import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Final, Hashable, Iterator, Optional

from dictionary_errors import (
    CapacityExceededError,
    IntegrityError,
    InvalidArgumentError,
)
from dictionary_interface import DictionaryInterface
from hash_index import HashIndexer, HashIndexerDivision, next_prime

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Entry:
    """
    An entry is a simple key-value pair

    Two entries are equal when their keys are equal, the values play no part in it
    """

    key: Hashable
    value: Any

    def key_matches(self, candidate_key: Hashable) -> bool:
        # referential equality first, keys can be objects with an expensive __eq__
        return candidate_key is self.key or candidate_key == self.key

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return self.key_matches(other.key)

    def __hash__(self):
        return hash(self.key)


Bucket = list[Entry]
Table = list[Optional[Bucket]]


class HashedDictionary(DictionaryInterface):
    """
    A dictionary which resolves collisions using separate chaining

    Notes
    -----
        * ``self._table`` is a list of ``self._table_size`` slots, each either ``None`` or a bucket.

        * A bucket is a list of the entries whose keys hashed to that slot, in insertion order.
          Buckets are created lazily and may be left empty after removals.

        * ``self._table_size`` is always prime (2 is only possible for an initial capacity <= 1).

        * When the load factor exceeds ``max_load_factor`` after an insertion, the table is enlarged
          to the next prime >= twice its size and every entry is rehashed into the new table.
    """

    DEFAULT_CAPACITY: Final[int] = 7
    # the largest initial capacity a caller may request
    MAX_CAPACITY: Final[int] = 10_000
    # the largest number of slots the table may ever hold
    MAX_TABLE_SIZE: Final[int] = 2 * MAX_CAPACITY
    MAX_LOAD_FACTOR: Final[float] = 0.75

    __slots__ = (
        "_table",
        "_table_size",
        "_num_entries",
        "_max_load_factor",
        "_hash_indexer",
        "_integrity_ok",
    )

    def __init__(
        self,
        initial_capacity: int = DEFAULT_CAPACITY,
        *,
        max_load_factor: float = MAX_LOAD_FACTOR,
        hash_indexer: Optional[HashIndexer] = None,
    ):
        """
        Parameters
        ----------
        initial_capacity : int, optional
            The number of slots to start with. It must be in the inclusive range [0, MAX_CAPACITY]
            and is rounded up to the next prime. The default is 7.
        max_load_factor : float, optional
            The largest ratio of entries to slots allowed before the table is enlarged.
            This value has to be in the range (0, 1]. The default is 0.75.
        hash_indexer : HashIndexer, optional
            Maps keys to slots. By default, ``hash(key) % table_size`` is used

        Raises
        ------
        InvalidArgumentError
            If any of the parameters is out of range
        CapacityExceededError
            If the table size computed from ``initial_capacity`` exceeds MAX_TABLE_SIZE
        """
        self._integrity_ok: bool = False
        self._max_load_factor: float = max_load_factor
        self._hash_indexer: HashIndexer = (
            HashIndexerDivision() if hash_indexer is None else hash_indexer
        )
        self._validate_attributes(initial_capacity)
        # indexers may be shared between dictionaries, each one draws into its own copy
        self._hash_indexer = deepcopy(self._hash_indexer)
        # the gen method must always be invoked before HashIndexer objects can be used
        self._hash_indexer.gen()
        self._num_entries: int = 0
        self._table_size: int = self._checked_table_size(
            next_prime(initial_capacity)
        )
        self._table: Table = self._gen_table(self._table_size)
        self._integrity_ok = True

    def _validate_attributes(self, initial_capacity: int):
        """
        A central location to validate the constructor arguments
        Overriding methods should always call this method
        """
        self._validate_initial_capacity(initial_capacity)
        self._validate_max_load_factor()
        self._validate_hash_indexer()

    def _validate_initial_capacity(self, initial_capacity: int):
        if not isinstance(initial_capacity, int):
            raise InvalidArgumentError(
                f"Expected initial_capacity to be an int: not {type(initial_capacity).__name__}"
            )
        if initial_capacity < 0 or initial_capacity > self.MAX_CAPACITY:
            raise InvalidArgumentError(
                f"Expected initial_capacity to be in the inclusive range [0, {self.MAX_CAPACITY}]: "
                f"not {initial_capacity}"
            )

    def _validate_max_load_factor(self):
        if self._max_load_factor <= 0 or self._max_load_factor > 1:
            raise InvalidArgumentError(
                f"The max load factor should be a value in the range (0, 1]: not {self._max_load_factor}"
            )

    def _validate_hash_indexer(self):
        if not isinstance(self._hash_indexer, HashIndexer):
            raise InvalidArgumentError(
                f"Expected a HashIndexer: not {type(self._hash_indexer).__name__}"
            )

    def _check_integrity(self):
        if not getattr(self, "_integrity_ok", False):
            raise IntegrityError()

    def _checked_table_size(self, table_size: int) -> int:
        if table_size > self.MAX_TABLE_SIZE:
            raise CapacityExceededError(
                f"A table of {table_size} slots exceeds the maximum of {self.MAX_TABLE_SIZE}"
            )
        return table_size

    @staticmethod
    def _gen_table(table_size: int) -> Table:
        return [None] * table_size

    @property
    def table_size(self) -> int:
        # the number of slots in our table
        return self._table_size

    def load_factor(self) -> float:
        return self._num_entries / self._table_size

    def _is_table_too_full(self) -> bool:
        return self.load_factor() > self._max_load_factor

    def _bucket_index(self, key: Hashable, table_size: int) -> int:
        return self._hash_indexer(key, table_size)

    def _get_bucket(self, key: Hashable) -> Optional[Bucket]:
        return self._table[self._bucket_index(key, self._table_size)]

    def add(self, key: Hashable, value: Any) -> Optional[Any]:
        self._check_integrity()
        if key is None or value is None:
            raise InvalidArgumentError(
                f"Keys and values must not be None: got key={key!r}, value={value!r}"
            )

        bucket_index = self._bucket_index(key, self._table_size)
        if (bucket := self._table[bucket_index]) is None:
            bucket = self._table[bucket_index] = []
        else:
            for entry in bucket:
                if entry.key_matches(key):
                    # overwrite old value
                    replaced_value, entry.value = entry.value, value
                    return replaced_value

        bucket.append(Entry(key, value))
        self._num_entries += 1

        if self._is_table_too_full():
            try:
                self._enlarge_table()
            except CapacityExceededError:
                # undo the insertion so a failed add leaves no trace
                bucket.pop()
                self._num_entries -= 1
                logger.warning(
                    "could not grow a table of %d slots holding %d entries",
                    self._table_size,
                    self._num_entries,
                )
                raise
        return None

    def remove(self, key: Hashable) -> Optional[Any]:
        self._check_integrity()
        if (bucket := self._get_bucket(key)) is None:
            return None
        for position, entry in enumerate(bucket):
            if entry.key_matches(key):
                del bucket[position]
                self._num_entries -= 1
                return entry.value
        return None

    def get_value(self, key: Hashable) -> Optional[Any]:
        self._check_integrity()
        if (bucket := self._get_bucket(key)) is not None:
            for entry in bucket:
                if entry.key_matches(key):
                    return entry.value
        return None

    def contains(self, key: Hashable) -> bool:
        # only keys are compared, values need not support equality
        self._check_integrity()
        return any(entry.key_matches(key) for entry in self._iter_entries())

    def is_empty(self) -> bool:
        return self._num_entries == 0

    def get_size(self) -> int:
        return self._num_entries

    def clear(self) -> None:
        self._check_integrity()
        self._table = self._gen_table(self._table_size)
        self._num_entries = 0
        logger.debug("cleared table of %d slots", self._table_size)

    def _enlarge_table(self):
        """
        Grow the table to the next prime >= twice its size and rehash every entry into it

        Raises
        ------
        CapacityExceededError
            If the new size would exceed MAX_TABLE_SIZE. Nothing is modified in that case.

        Notes
        -----
        Entries are moved, not copied, so an entry keeps its identity across rehashes.
        The old table is only replaced once every entry has been placed.
        """
        new_table_size = self._checked_table_size(next_prime(self._table_size * 2))
        new_table = self._gen_table(new_table_size)

        for entry in self._iter_entries():
            bucket_index = self._bucket_index(entry.key, new_table_size)
            if new_table[bucket_index] is None:
                new_table[bucket_index] = []
            new_table[bucket_index].append(entry)

        logger.debug(
            "enlarged table from %d to %d slots (%d entries)",
            self._table_size,
            new_table_size,
            self._num_entries,
        )
        self._table, self._table_size = new_table, new_table_size

    def _iter_entries(self) -> Iterator[Entry]:
        for bucket in filter(None, self._table):
            yield from bucket

    def get_key_iterator(self) -> Iterator[Hashable]:
        self._check_integrity()
        return (entry.key for entry in self._iter_entries())

    def get_value_iterator(self) -> Iterator[Any]:
        self._check_integrity()
        return (entry.value for entry in self._iter_entries())

    def table_structure(self) -> str:
        buckets = [bucket for bucket in self._table if bucket]
        ret = [
            "--Dictionary Attributes--:",
            f"  allocated       : {self._table_size}",
            f"  used            : {self._num_entries}",
            f"  load factor     : {self.load_factor():.3f}",
            f"  buckets in use  : {len(buckets)}",
            f"  longest chain   : {max(map(len, buckets), default=0)}",
        ]
        return "\n".join(ret)

    def __repr__(self):
        entries = ", ".join(
            f"{entry.key!r}: {entry.value!r}" for entry in self._iter_entries()
        )
        return f"{type(self).__name__}({{{entries}}})"
