from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple, Union

import numpy as np

from .errors import DimensionMismatch, InvalidArgument


Array = np.ndarray
SeedLike = Union[None, int, np.random.Generator]


def _as_indexable(x: Any) -> Any:
    # ndarrays and tensor-likes are indexed as-is; plain sequences go through numpy.
    if hasattr(x, "shape") and hasattr(x, "__getitem__"):
        return x
    return np.asarray(x)


def _nobs_of(x: Any) -> int:
    shape = tuple(x.shape)
    if not shape:
        raise InvalidArgument("data arrays need at least one dimension (the observation axis)")
    return int(shape[-1])


def _take(x: Any, ids: Array) -> Any:
    """Select `ids` along the trailing axis, keeping every other axis."""
    return x[..., ids]


@dataclass(frozen=True)
class _Single:
    array: Any

    def nobs(self) -> int:
        return _nobs_of(self.array)

    def getobs(self, ids: Array) -> Any:
        return _take(self.array, ids)


@dataclass(frozen=True)
class _Group:
    arrays: Tuple[Any, ...]

    def nobs(self) -> int:
        if not self.arrays:
            raise InvalidArgument("Need at least one data input")
        counts = [_nobs_of(x) for x in self.arrays]
        n = counts[0]
        if any(c != n for c in counts[1:]):
            raise DimensionMismatch(
                f"All data should contain same number of observations, got {counts}"
            )
        return n

    def getobs(self, ids: Array) -> Tuple[Any, ...]:
        return tuple(_take(x, ids) for x in self.arrays)


def _resolve(data: Any) -> Union[_Single, _Group]:
    if isinstance(data, tuple):
        return _Group(tuple(_as_indexable(x) for x in data))
    return _Single(_as_indexable(data))


def _check_batch_size(batch_size: Any) -> int:
    if isinstance(batch_size, bool) or not isinstance(batch_size, (int, np.integer)):
        raise InvalidArgument(f"batch_size must be an integer, got {type(batch_size).__name__}")
    if batch_size <= 0:
        raise InvalidArgument(f"Need positive batch_size, got {batch_size}")
    return int(batch_size)


class BatchIterator(Iterable):
    """Iterate over mini-batches of in-memory arrays.

    `data` is one array or a tuple of arrays. The last axis of every array is the
    observation axis; a batch keeps all other axes and takes `batch_size`
    observations (the last batch of a pass may be shorter).

    - `shuffle=True` reshuffles the observation order each time iteration restarts.
    - `partial=False` drops the last batch if it is smaller than `batch_size`.
    - `rng` is a seed or `np.random.Generator` used for shuffling.

    Example:
        X = np.random.rand(10, 100)
        Y = np.random.rand(100)
        loader = BatchIterator((X, Y), batch_size=2, shuffle=True)
        for epoch in range(100):
            for x, y in loader:
                assert x.shape == (10, 2) and y.shape == (2,)

    The original dataset stays available as `loader.data`.
    """

    def __init__(
        self,
        data: Any,
        batch_size: int = 1,
        shuffle: bool = False,
        partial: bool = True,
        *,
        rng: SeedLike = None,
    ) -> None:
        batch_size = _check_batch_size(batch_size)

        self._data = data
        self._source = _resolve(data)
        n = self._source.nobs()
        if n == 0:
            raise InvalidArgument("data contains no observations")
        if n < batch_size:
            warnings.warn(
                f"Number of observations less than batch_size, decreasing the batch_size to {n}",
                UserWarning,
                stacklevel=2,
            )
            batch_size = n

        self.batch_size = batch_size
        self.nobs = n
        self.partial = bool(partial)
        self.shuffle = bool(shuffle)
        self.index_bound = n if self.partial else n - batch_size + 1
        self.indices = np.arange(n, dtype=np.int64)
        self.rng = np.random.default_rng(rng)

    @property
    def data(self) -> Any:
        """The dataset passed at construction, unmodified."""
        return self._data

    def __iter__(self) -> Iterator:
        i = 0
        while i < self.index_bound:
            if self.shuffle and i == 0:
                self.rng.shuffle(self.indices)
            next_i = min(i + self.batch_size, self.nobs)
            yield self._source.getobs(self.indices[i:next_i].copy())
            i = next_i

    def __len__(self) -> int:
        full, rest = divmod(self.nobs, self.batch_size)
        if self.partial and rest:
            return full + 1
        return full

    def getobs(self, ids: Any) -> Any:
        """Project `ids` onto the dataset (a tuple of batches for tuple data).

        `ids` is a 1-d sequence of observation indices in `[0, nobs)`.
        """
        ids = np.asarray(ids)
        if ids.ndim != 1:
            raise InvalidArgument(f"ids must be 1-d, got shape {ids.shape}")
        if ids.size and not np.issubdtype(ids.dtype, np.integer):
            raise InvalidArgument(f"ids must be integers, got dtype {ids.dtype}")
        if ids.size and (ids.min() < 0 or ids.max() >= self.nobs):
            raise InvalidArgument(f"ids must lie in [0, {self.nobs}), got {ids.min()}..{ids.max()}")
        return self._source.getobs(ids.astype(np.int64))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(nobs={self.nobs}, batch_size={self.batch_size}, "
            f"shuffle={self.shuffle}, partial={self.partial})"
        )


DataLoader = BatchIterator
