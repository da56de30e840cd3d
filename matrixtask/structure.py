"""
Shape templates used to select kernels without looking at the data.
"""
__all__ = ['Structure2D', 'structure_of', 'is_symmetric']
import torch
import sympy
from collections import namedtuple
from ._impl.store import Store


class Structure2D(namedtuple('Structure2D', 'rows columns')):
    """Immutable `(rows, columns)` shape template."""

    __slots__ = ()

    def __new__(cls, rows: int, columns: int):
        if rows < 0 or columns < 0:
            raise ValueError('Shape template dimensions must be '
                             'non-negative, got ({}, {}).'
                             .format(rows, columns))
        return super().__new__(cls, int(rows), int(columns))

    def count_rows(self) -> int:
        return self.rows

    def count_columns(self) -> int:
        return self.columns

    def is_square(self) -> bool:
        return self.rows == self.columns

    def is_tall(self) -> bool:
        return self.rows > self.columns

    def is_wide(self) -> bool:
        return self.rows < self.columns


def structure_of(obj) -> Structure2D:
    """Shape template of a matrix-like object.

    Parameters
    ----------
    obj : `Structure2D or (int, int) or Store or tensor or sympy.Matrix`
        A shape template, a `(rows, columns)` pair, a store, a tensor
        (its last two dimensions) or a sympy matrix. Nested sequences
        of rows are accepted as well.

    Returns
    -------
    structure : `Structure2D`

    """
    if isinstance(obj, Structure2D):
        return obj
    if isinstance(obj, Store):
        return Structure2D(obj.count_rows(), obj.count_columns())
    if torch.is_tensor(obj) or isinstance(obj, sympy.MatrixBase):
        if len(obj.shape) < 2:
            raise TypeError('Expected a matrix but got shape {}.'
                            .format(list(obj.shape)))
        return Structure2D(*obj.shape[-2:])
    if isinstance(obj, (list, tuple)):
        if len(obj) == 2 and all(isinstance(n, int) for n in obj):
            return Structure2D(*obj)
        if obj and all(isinstance(row, (list, tuple)) for row in obj):
            return Structure2D(len(obj), len(obj[0]))
    raise TypeError('Cannot find the shape of a {}.'.format(type(obj)))


def is_symmetric(matrix) -> bool:
    """Whether a matrix (or every matrix of a batch) equals its
    transpose."""
    if isinstance(matrix, Store):
        matrix = matrix.data
    if isinstance(matrix, sympy.MatrixBase):
        return matrix.is_symmetric()
    matrix = torch.as_tensor(matrix)
    if matrix.shape[-1] != matrix.shape[-2]:
        return False
    return bool((matrix == matrix.transpose(-1, -2)).all())
