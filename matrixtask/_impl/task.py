"""
Task objects returned by the factories.

A task is a stateless strategy: the closed-form kernels are wrapped in
frozen dataclasses, and the decomposition fallbacks implement the same
methods. Inputs may be stores or anything the task's domain can wrap.
Shapes are not checked.
"""
__all__ = ['DeterminantTask', 'InverterTask', 'SolverTask',
           'DeterminantKernel', 'InverterKernel', 'SolverKernel']
from dataclasses import dataclass
from typing import Any, Callable, Optional
from ..structure import structure_of
from .store import Store


class DeterminantTask:

    def calculate_determinant(self, matrix):
        """Determinant of `matrix` (a scalar, or a batch of scalars)."""
        raise NotImplementedError


class InverterTask:

    def invert(self, original, preallocated=None) -> Store:
        """Inverse of `original`, written into `preallocated` (or into a
        new store) which is returned."""
        raise NotImplementedError

    def preallocate(self, template, *like) -> Store:
        """Zero-filled store with the transposed shape of `template`."""
        shape = structure_of(template)
        return self.domain.preallocate(shape.count_columns(),
                                       shape.count_rows(),
                                       template, *like)


class SolverTask:

    def solve(self, body, rhs, preallocated=None) -> Store:
        """Solution `x` of `body @ x = rhs`, written into `preallocated`
        (or into a new store) which is returned."""
        raise NotImplementedError

    def preallocate(self, body, rhs) -> Store:
        """Zero-filled store with shape `(body columns, rhs columns)`."""
        return self.domain.preallocate(structure_of(body).count_columns(),
                                       structure_of(rhs).count_columns(),
                                       body, rhs)


def destination(domain, preallocated: Optional[Any]) -> Store:
    """Wrap a preallocated output, which must already belong to `domain`."""
    store = domain.wrap(preallocated)
    if not isinstance(preallocated, Store) and store.data is not preallocated:
        raise TypeError('Preallocated output is not a {} matrix.'
                        .format(domain.name))
    return store


@dataclass(frozen=True)
class DeterminantKernel(DeterminantTask):
    name: str
    dim: int
    kernel: Callable
    domain: Any

    def calculate_determinant(self, matrix):
        return self.kernel(self.domain.wrap(matrix))


@dataclass(frozen=True)
class InverterKernel(InverterTask):
    name: str
    dim: int
    kernel: Callable
    domain: Any

    def invert(self, original, preallocated=None):
        original = self.domain.wrap(original)
        if preallocated is None:
            preallocated = self.preallocate(original)
        preallocated = destination(self.domain, preallocated)
        self.kernel(original, preallocated)
        return preallocated


@dataclass(frozen=True)
class SolverKernel(SolverTask):
    name: str
    dim: int
    kernel: Callable
    domain: Any

    def solve(self, body, rhs, preallocated=None):
        body = self.domain.wrap(body)
        rhs = self.domain.wrap(rhs)
        if preallocated is None:
            preallocated = self.preallocate(body, rhs)
        preallocated = destination(self.domain, preallocated)
        self.kernel(body, rhs, preallocated)
        return preallocated
