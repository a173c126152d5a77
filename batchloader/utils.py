from __future__ import annotations

from typing import Iterable, Iterator, TypeVar

import numpy as np

from .errors import InvalidArgument


T = TypeVar("T")


def ncycle(iterable: Iterable[T], n: int) -> Iterator[T]:
    """Yield every item of `iterable`, `n` times over.

    Each cycle calls `iter(iterable)` again, so a shuffling loader reshuffles
    once per cycle. Handy for handing a fixed number of epochs to a training loop:

        for x, y in ncycle(loader, 10):
            ...
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise InvalidArgument(f"ncycle needs a non-negative integer count, got {n!r}")

    def _cycles() -> Iterator[T]:
        for _ in range(int(n)):
            yield from iterable

    return _cycles()
