"""
Determinants of small matrices with closed-form kernels.

Square matrices up to 5x5 use unrolled cofactor expansions; larger
ones fall back on decompositions.

Example
-------
>>> task = determinant_task_for((3, 3))
>>> task.name
'full_3x3'
"""
__all__ = ['DeterminantFactory', 'FACTORIES', 'factory_for',
           'determinant_task_for']
from typing import Optional
from ._impl import determinant as kernels
from ._impl.dispatch import Factory
from ._impl.domain import DOMAINS, get_domain, domain_of
from ._impl.task import DeterminantKernel, DeterminantTask
from .structure import structure_of, is_symmetric
from .typing import TemplateLike, DomainLike


class DeterminantFactory(Factory):
    """Selects determinant tasks.

    | Template                      | Task                           |
    | ----------------------------- | ------------------------------ |
    | 1x1                           | `full_1x1`                     |
    | square, symmetric, 2 to 5     | `symmetric_NxN`                |
    | square, symmetric, otherwise  | Cholesky if positive definite, |
    |                               | else LU                        |
    | square, 2 to 5                | `full_NxN`                     |
    | square, otherwise             | LU                             |
    | tall                          | QR                             |
    | wide                          | SVD                            |

    Non-square matrices have no determinant: the QR and SVD tasks raise
    `ValueError` when asked for one.
    """

    task_type = DeterminantKernel
    full_kernels = kernels.FULL
    symmetric_kernels = kernels.SYMMETRIC

    def make(self, template, symmetric=False,
             positive_definite=False) -> DeterminantTask:
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
        task : `DeterminantTask`

        """
        self._check_hints(symmetric, positive_definite)
        shape = structure_of(template)
        if shape.is_square():
            return self._square(shape.count_rows(), symmetric,
                                positive_definite)
        if shape.is_tall():
            return self.domain.qr()
        return self.domain.svd()

    def make_for(self, matrix) -> DeterminantTask:
        """Select a task for `matrix`, detecting its symmetry."""
        return self.make(structure_of(matrix), is_symmetric(matrix))

    def calculate(self, matrix):
        """Determinant of `matrix`."""
        return self.make(structure_of(matrix)).calculate_determinant(matrix)


FACTORIES = {domain.name: DeterminantFactory(domain) for domain in DOMAINS}


def factory_for(domain=None) -> DeterminantFactory:
    """Determinant factory of a domain (see `get_domain`)."""
    return FACTORIES[get_domain(domain).name]


def determinant_task_for(
    template: TemplateLike,
    symmetric: bool = False,
    positive_definite: bool = False,
    domain: Optional[DomainLike] = None,
) -> DeterminantTask:
    """Select a determinant task.

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
    task : `DeterminantTask`

    """
    domain = domain_of(template) if domain is None else domain
    return factory_for(domain).make(template, symmetric, positive_definite)
