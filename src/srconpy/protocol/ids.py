import itertools
import random
from typing import Iterator, Protocol

__all__ = (
    "RequestIdSupplier",
    "RandomRequestIds",
    "SequentialRequestIds",
)

MAX_REQUEST_ID = 2**31 - 1


class RequestIdSupplier(Protocol):
    """A callable object that returns the next request ID to send.

    IDs must be non-negative 32-bit integers, since a request ID of -1
    is how the server signals a failed login.

    """

    def __call__(self) -> int:
        raise NotImplementedError


class RandomRequestIds:
    """Generates pseudo-random request IDs between 0 and ``2**31 - 1``.

    Collisions are possible but rare. Since only one request is ever
    in flight, an ID only needs to differ from the sentinel.

    :param seed:
        An optional seed for the underlying generator,
        making the sequence of IDs reproducible.

    """

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def __call__(self) -> int:
        return self._random.getrandbits(31)


class SequentialRequestIds:
    """Generates incrementing request IDs, wrapping back to 0
    after ``2**31 - 1``.

    :param start: The first ID to return.

    """

    _counter: Iterator[int]

    def __init__(self, start: int = 1):
        if start not in range(MAX_REQUEST_ID + 1):
            raise ValueError(f"start must be within 0-{MAX_REQUEST_ID}, not {start!r}")
        self._counter = itertools.count(start)

    def __call__(self) -> int:
        return next(self._counter) % (MAX_REQUEST_ID + 1)
