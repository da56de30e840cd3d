"""
Inverses of small matrices with closed-form kernels.

Square matrices up to 5x5 use the adjugate formula. Larger ones fall
back on decompositions, and non-square ones get a pseudo-inverse.

!!! warning
    The closed-form inverters never raise on singular matrices: the
    output is filled with infinite or undefined values instead. Check
    the determinant, or use a decomposition, to detect singularity.
"""
__all__ = ['InverterFactory', 'FACTORIES', 'factory_for',
           'inverter_task_for']
from typing import Optional
from ._impl import inverter as kernels
from ._impl.dispatch import Factory
from ._impl.domain import DOMAINS, get_domain, domain_of
from ._impl.store import Store
from ._impl.task import InverterKernel, InverterTask
from .structure import Structure2D, structure_of, is_symmetric
from .typing import TemplateLike, DomainLike


class InverterFactory(Factory):
    """Selects inversion tasks.

    The dispatch table is that of `DeterminantFactory`: unrolled
    kernels for square matrices up to 5x5 (symmetric ones when so
    declared), Cholesky or LU above, QR for tall and SVD for wide
    matrices.
    """

    task_type = InverterKernel
    full_kernels = kernels.FULL
    symmetric_kernels = kernels.SYMMETRIC

    def make(self, template, symmetric=False,
             positive_definite=False) -> InverterTask:
        """Select a task for matrices shaped like `template`.

        Parameters
        ----------
        template : `Structure2D or (int, int) or matrix`
            Shape of the matrices.
        symmetric : `bool`, default=False
            Trust that the matrices are symmetric.
        positive_definite : `bool`, default=False
            Trust that the matrices are positive definite.
            Only used if `symmetric`.

        Returns
        -------
        task : `InverterTask`

        """
        self._check_hints(symmetric, positive_definite)
        shape = structure_of(template)
        if shape.is_square():
            return self._square(shape.count_rows(), symmetric,
                                positive_definite)
        if shape.is_tall():
            return self.domain.qr()
        return self.domain.svd()

    def make_for(self, matrix) -> InverterTask:
        """Select a task for `matrix`, detecting its symmetry."""
        return self.make(structure_of(matrix), is_symmetric(matrix))

    def make_square(self, dim: int, spd: bool = False) -> InverterTask:
        """Select a task for `dim x dim` matrices, symmetric positive
        definite if `spd`."""
        return self.make(Structure2D(dim, dim), spd, spd)

    def invert(self, original) -> Store:
        """Inverse (or pseudo-inverse) of `original`."""
        return self.make(structure_of(original)).invert(original)


FACTORIES = {domain.name: InverterFactory(domain) for domain in DOMAINS}


def factory_for(domain=None) -> InverterFactory:
    """Inverter factory of a domain (see `get_domain`)."""
    return FACTORIES[get_domain(domain).name]


def inverter_task_for(
    template: TemplateLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
) -> InverterTask:
    """Select an inversion task.

    Parameters
    ----------
    template : `Structure2D or (int, int) or matrix`
        Shape of the matrices.
    symmetric : `bool`, default=False
        Trust that the matrices are symmetric.
    positive_definite : `bool`, default=False
        Trust that the matrices are positive definite.
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `template`. A shape
        carries no dtype, so `Structure2D` and `(int, int)` templates
        bind to the domain of `torch.get_default_dtype()` (usually
        float32), and data of another dtype is converted to it. Pass
        `domain` explicitly when the template is a shape.

    Returns
    -------
    task : `InverterTask`

    """
    domain = domain_of(template) if domain is None else domain
    return factory_for(domain).make(template, symmetric, positive_definite)
