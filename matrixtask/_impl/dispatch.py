"""Shared machinery of the determinant, inverter and solver factories."""
__all__ = ['Factory']
from warnings import warn
from typing import Callable, Dict
from .domain import get_domain


class Factory:
    """Base class for factories bound to one numeric domain.

    All closed-form tasks are built once, when the factory is created.
    Decomposition fallbacks are created fresh on each request.

    Structural hints (`symmetric`, `positive_definite`) are trusted: a
    matrix declared symmetric is read from its lower triangle only, and
    nothing checks that it really is symmetric.
    """

    task_type: type = None
    full_kernels: Dict[int, Callable] = {}
    symmetric_kernels: Dict[int, Callable] = {}

    def __init__(self, domain=None):
        self.domain = get_domain(domain)
        self.full = self._build('full', self.full_kernels)
        self.symmetric = self._build('symmetric', self.symmetric_kernels)

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self.domain.name)

    def _build(self, kind, kernels):
        return {n: self.task_type('{0}_{1}x{1}'.format(kind, n), n,
                                  kernel, self.domain)
                for n, kernel in kernels.items()}

    def _square(self, n, symmetric, positive_definite, unrolled=True):
        # rows of the dispatch table that apply to square matrices
        if n == 1:
            return self.full[1]
        if symmetric:
            if unrolled and n in self.symmetric:
                return self.symmetric[n]
            if positive_definite:
                return self.domain.cholesky()
            return self.domain.lu()
        if unrolled and n in self.full:
            return self.full[n]
        return self.domain.lu()

    @staticmethod
    def _check_hints(symmetric, positive_definite):
        if positive_definite and not symmetric:
            warn('`positive_definite` is ignored when `symmetric` is '
                 'False', RuntimeWarning, stacklevel=3)
