"""
Scalar operations used by the closed-form kernels on top of the four
arithmetic operators.

Each operation dispatches on the type of its (first) scalar argument,
so that the same unrolled kernels work with tensors (elementwise over a
batch), sympy numbers and python numbers.
"""
__all__ = ['norm', 'largest', 'conj', 'dot', 'is_complex', 'copy']
import torch
import sympy
from functools import singledispatch
from typing import Sequence


def norm(values: Sequence):
    """Euclidean norm of a set of scalars.

    A zero norm is replaced by one so that it can always be used as a
    divisor.
    """
    return _norm(values[0], values)


def largest(values: Sequence):
    """Largest absolute value in a set of scalars (zero replaced by one)."""
    return _largest(values[0], values)


@singledispatch
def _norm(first, values):
    scale = sum(abs(value) ** 2 for value in values) ** 0.5
    return scale or 1


@_norm.register(torch.Tensor)
def _(first, values):
    scale = torch.linalg.vector_norm(torch.stack(values), dim=0)
    return scale.masked_fill_(scale == 0, 1)


@_norm.register(sympy.Basic)
def _(first, values):
    # rationals have no square root: use the largest magnitude
    return _largest(first, values)


@singledispatch
def _largest(first, values):
    return max(abs(value) for value in values) or 1


@_largest.register(torch.Tensor)
def _(first, values):
    scale = torch.stack(values).abs().amax(0)
    return scale.masked_fill_(scale == 0, 1)


@singledispatch
def conj(value):
    """Complex conjugate."""
    return value.conjugate()


@conj.register(torch.Tensor)
def _(value):
    return value.conj()


@singledispatch
def dot(u, v):
    """Inner product of two columns, conjugating the first one."""
    return sum(conj(x) * y for x, y in zip(u, v))


@dot.register(torch.Tensor)
def _(u, v):
    return (u.conj() * v).sum(-1)


@singledispatch
def is_complex(value) -> bool:
    """Whether a scalar belongs to a complex domain."""
    return isinstance(value, complex)


@is_complex.register(torch.Tensor)
def _(value):
    return value.is_complex()


@is_complex.register(sympy.Basic)
def _(value):
    return value.is_real is False


@singledispatch
def copy(value):
    """Scalar detached from the storage it was read from."""
    return value


@copy.register(torch.Tensor)
def _(value):
    return value.clone()
