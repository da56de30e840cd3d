"""
Element storage for the kernels.

A store exposes its elements through a single packed linear index that
follows the column-major convention: index `i` of an `R x C` matrix is
element `(i % R, i // R)`. The unrolled kernels hard-code this mapping.
"""
__all__ = ['Store', 'TensorStore', 'RationalStore',
           'read', 'write', 'lower_indices']
import torch
import sympy
from typing import Iterable, Sequence, Tuple


class Store:
    """Two-dimensional element access shared by all stores."""

    def __init__(self, data):
        self.data = data

    def count_rows(self) -> int:
        raise NotImplementedError

    def count_columns(self) -> int:
        raise NotImplementedError

    def count(self) -> int:
        return self.count_rows() * self.count_columns()

    def value_at(self, index: int, column: int = None):
        """Read an element.

        Parameters
        ----------
        index : `int`
            Linear (column-major) index, or row index if `column`
            is provided.
        column : `int`, optional
            Column index.

        Returns
        -------
        value : `scalar`

        """
        if column is None:
            rows = self.count_rows()
            index, column = index % rows, index // rows
        return self._get(index, column)

    def set(self, index: int, value) -> None:
        """Write an element at a linear (column-major) index."""
        rows = self.count_rows()
        self._set(index % rows, index // rows, value)

    def column(self, index: int):
        """Return a whole column."""
        raise NotImplementedError

    def copy_from(self, data) -> None:
        """Overwrite all elements with those of `data`."""
        raise NotImplementedError

    def _get(self, row: int, column: int):
        raise NotImplementedError

    def _set(self, row: int, column: int, value) -> None:
        raise NotImplementedError

    def __repr__(self):
        return '{}({}x{})'.format(type(self).__name__,
                                  self.count_rows(), self.count_columns())


class TensorStore(Store):
    """Store backed by a `(..., R, C)` tensor.

    Leading dimensions are batch dimensions: each element is a tensor
    with the batch shape, so a kernel processes all matrices of the
    batch at once.
    """

    def __init__(self, data: torch.Tensor):
        if data.dim() < 2:
            raise ValueError('Expected a tensor with at least two '
                             'dimensions but got shape {}.'
                             .format(list(data.shape)))
        super().__init__(data)

    @property
    def batch_shape(self) -> torch.Size:
        return self.data.shape[:-2]

    @property
    def dtype(self) -> torch.dtype:
        return self.data.dtype

    @property
    def device(self) -> torch.device:
        return self.data.device

    def count_rows(self):
        return self.data.shape[-2]

    def count_columns(self):
        return self.data.shape[-1]

    def column(self, index):
        return self.data[..., :, index]

    def copy_from(self, data):
        self.data.copy_(data)

    def _get(self, row, column):
        return self.data[..., row, column]

    def _set(self, row, column, value):
        self.data[..., row, column] = value


class RationalStore(Store):
    """Store backed by a mutable sympy matrix."""

    def __init__(self, data: sympy.MutableDenseMatrix):
        super().__init__(data)

    def count_rows(self):
        return self.data.rows

    def count_columns(self):
        return self.data.cols

    def column(self, index):
        return self.data[:, index]

    def copy_from(self, data):
        self.data[:, :] = data

    def _get(self, row, column):
        return self.data[row, column]

    def _set(self, row, column, value):
        self.data[row, column] = value


def read(store: Store, indices: Iterable[int]) -> Tuple:
    """Read several elements at once, by linear index."""
    return tuple(store.value_at(index) for index in indices)


def write(store: Store, values: Sequence) -> None:
    """Write elements at linear indices `0, 1, 2, ...`."""
    for index, value in enumerate(values):
        store.set(index, value)


def lower_indices(n: int) -> Tuple[int, ...]:
    """Linear indices of the lower triangle of an `n x n` matrix,
    in column-major order."""
    return tuple(row + column * n
                 for column in range(n) for row in range(column, n))
