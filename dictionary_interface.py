from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Any, Hashable, Iterator, Optional

from dictionary_errors import UnsupportedOperationError


class DictionaryInterface(MutableMapping, ABC):
    """
    A dictionary with distinct, non-None search keys and non-None values

    Notes
    -----
        * ``None`` signals that a search key is absent, so it can never be stored as a value.

        * Duplicate keys are not allowed: adding an existing key replaces its value.

        * The mapping protocol (``d[k]``, ``d[k] = v``, ``del d[k]``, ``k in d``, ``len(d)``, ``iter(d)``)
          is written in terms of the operations below. Unlike the operations, ``d[k]`` and ``del d[k]``
          raise ``KeyError`` for absent keys.
    """

    __slots__ = ()

    @abstractmethod
    def add(self, key: Hashable, value: Any) -> Optional[Any]:
        """
        Adds a new entry, or replaces the value of an existing one

        Returns
        -------
        None
            If a new entry was added
        Any
            The value that was replaced
        """

    @abstractmethod
    def remove(self, key: Hashable) -> Optional[Any]:
        """Removes the entry for ``key`` and returns its value, or None if there was no such entry"""

    @abstractmethod
    def get_value(self, key: Hashable) -> Optional[Any]:
        """Returns the value associated with ``key``, or None if there is no such entry"""

    @abstractmethod
    def contains(self, key: Hashable) -> bool:
        pass

    def get_key_iterator(self) -> Iterator[Hashable]:
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support key iteration"
        )

    def get_value_iterator(self) -> Iterator[Any]:
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support value iteration"
        )

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def get_size(self) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    def __getitem__(self, key: Hashable) -> Any:
        if (value := self.get_value(key)) is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Hashable, value: Any):
        self.add(key, value)

    def __delitem__(self, key: Hashable):
        if self.remove(key) is None:
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[Hashable]:
        return self.get_key_iterator()

    def __len__(self) -> int:
        return self.get_size()
