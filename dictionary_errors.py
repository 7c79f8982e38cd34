class DictionaryError(Exception):
    """
    Base class for every error raised by the dictionaries in this package
    """


class InvalidArgumentError(DictionaryError, ValueError):
    """
    Raised when a dictionary is given a ``None`` key or value, or is configured with
    an out of range capacity or load factor
    """


class CapacityExceededError(DictionaryError):
    """
    Raised when a requested or computed table size is larger than the maximum table size
    """


class IntegrityError(DictionaryError, RuntimeError):
    """
    Raised when a dictionary is used before its construction has completed
    """

    def __init__(self, message: str = "integrity check failed"):
        super().__init__(message)


class UnsupportedOperationError(DictionaryError, NotImplementedError):
    pass
