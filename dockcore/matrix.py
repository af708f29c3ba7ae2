"""Dense, triangular and strictly triangular matrices stored in flat lists."""

from __future__ import annotations

import copy
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_IMMUTABLE = (int, float, complex, str, bytes, bool, type(None), tuple, frozenset)


def _filled(filler: Any, count: int) -> list:
    """Return ``count`` independent copies of ``filler``."""
    if isinstance(filler, _IMMUTABLE):
        return [filler] * count
    return [copy.deepcopy(filler) for _ in range(count)]


def triangular_matrix_index(n: int, i: int, j: int) -> int:
    """Flat index of element (i, j), i <= j < n, of an upper-triangular matrix."""
    if not 0 <= i <= j < n:
        raise IndexError(f"invalid triangular index ({i}, {j}) for dimension {n}")
    return i + j * (j + 1) // 2


def triangular_matrix_index_permissive(n: int, i: int, j: int) -> int:
    """Like :func:`triangular_matrix_index`, accepting the indices in either order."""
    if i <= j:
        return triangular_matrix_index(n, i, j)
    return triangular_matrix_index(n, j, i)


class Matrix(Generic[T]):
    """A rectangular matrix stored in column-major order."""

    def __init__(self, rows: int = 0, cols: int = 0, filler: Any = None) -> None:
        self._rows = rows
        self._cols = cols
        self._data: list = _filled(filler, rows * cols)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def index(self, i: int, j: int) -> int:
        if not (0 <= i < self._rows and 0 <= j < self._cols):
            raise IndexError(
                f"index ({i}, {j}) out of range for a {self._rows}x{self._cols} matrix"
            )
        return i + self._rows * j

    def resize(self, rows: int, cols: int, filler: Any) -> None:
        """Grow the matrix, keeping existing elements in place."""
        if rows == self._rows and cols == self._cols:
            return
        if rows < self._rows or cols < self._cols:
            raise ValueError("a matrix can only be resized to equal or larger dimensions")
        data = _filled(filler, rows * cols)
        old = self._rows
        for j in range(self._cols):
            data[rows * j : rows * j + old] = self._data[old * j : old * (j + 1)]
        self._data = data
        self._rows = rows
        self._cols = cols

    def append(self, other: Matrix, filler: Any) -> None:
        """Place ``other`` as a block diagonal to the current contents."""
        m, n = self._rows, self._cols
        self.resize(m + other.rows, n + other.cols, filler)
        rows = self._rows
        for j in range(other.cols):
            start = m + rows * (n + j)
            self._data[start : start + other.rows] = other._data[
                other.rows * j : other.rows * (j + 1)
            ]

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return self._data[self.index(*key)]
        return self._data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            self._data[self.index(*key)] = value
        else:
            self._data[key] = value


class TriangularMatrix(Generic[T]):
    """An upper-triangular square matrix including the diagonal."""

    def __init__(self, n: int = 0, filler: Any = None) -> None:
        self._dim = n
        self._data: list = _filled(filler, n * (n + 1) // 2)

    @property
    def dim(self) -> int:
        return self._dim

    def index(self, i: int, j: int) -> int:
        return triangular_matrix_index(self._dim, i, j)

    def index_permissive(self, i: int, j: int) -> int:
        return self.index(i, j) if i < j else self.index(j, i)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return self._data[self.index(*key)]
        return self._data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            self._data[self.index(*key)] = value
        else:
            self._data[key] = value


class StrictlyTriangularMatrix(Generic[T]):
    """An upper-triangular square matrix without the diagonal."""

    def __init__(self, n: int = 0, filler: Any = None) -> None:
        self._dim = n
        self._data: list = _filled(filler, n * (n - 1) // 2)

    @property
    def dim(self) -> int:
        return self._dim

    def index(self, i: int, j: int) -> int:
        if not 0 <= i < j < self._dim:
            raise IndexError(
                f"invalid strictly triangular index ({i}, {j}) for dimension {self._dim}"
            )
        return i + j * (j - 1) // 2

    def index_permissive(self, i: int, j: int) -> int:
        return self.index(i, j) if i < j else self.index(j, i)

    def resize(self, n: int, filler: Any) -> None:
        """Grow to dimension ``n``; existing elements keep their positions."""
        if n == self._dim:
            return
        if n < self._dim:
            raise ValueError("a strictly triangular matrix can only grow")
        self._data.extend(_filled(filler, n * (n - 1) // 2 - len(self._data)))
        self._dim = n

    def append(self, other: StrictlyTriangularMatrix, filler: Any) -> None:
        """Append ``other`` as a diagonal block."""
        n = self._dim
        self.resize(n + other.dim, filler)
        for j in range(other.dim):
            for i in range(j):
                self[i + n, j + n] = other[i, j]

    def append_blocks(self, rectangular: Matrix, triangular: StrictlyTriangularMatrix) -> None:
        """Extend with a rectangular off-diagonal block and a triangular diagonal block."""
        if self._dim != rectangular.rows:
            raise ValueError("rectangular block row count must equal the current dimension")
        if rectangular.cols != triangular.dim:
            raise ValueError("rectangular block column count must equal the triangular dimension")
        if rectangular.cols == 0:
            return
        if rectangular.rows == 0:
            self._dim = triangular.dim
            self._data = list(triangular._data)
            return
        filler = rectangular[0, 0]
        n = self._dim
        self.append(triangular, filler)
        for i in range(rectangular.rows):
            for j in range(rectangular.cols):
                self[i, n + j] = rectangular[i, j]

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return self._data[self.index(*key)]
        return self._data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            self._data[self.index(*key)] = value
        else:
            self._data[key] = value