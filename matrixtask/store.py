"""
Matrix storage.

Stores give the kernels element access through a column-major linear
index (`i -> (i % rows, i // rows)`), on top of a torch tensor (whose
leading dimensions are batch dimensions) or a sympy matrix.
"""
__all__ = ['Store', 'TensorStore', 'RationalStore', 'preallocate']
from typing import Optional
from ._impl.store import Store, TensorStore, RationalStore
from ._impl.domain import get_domain, domain_of
from .structure import structure_of
from .typing import TemplateLike, DomainLike


def preallocate(
    template: TemplateLike,
    domain: Optional[DomainLike] = None,
    like=(),
) -> Store:
    """Zero-filled store shaped like `template`.

    Parameters
    ----------
    template : `Structure2D or (int, int) or matrix`
        Shape of the store.
    domain : `Domain or str or torch.dtype`, optional
        Numeric domain. Default: inferred from `template`.
    like : `tensor or sequence[tensor]`, optional
        Operands whose batch shapes (broadcast together) and device
        are given to the store. A tensor `template` is always one of
        them.

    Returns
    -------
    store : `Store`

    """
    shape = structure_of(template)
    domain = domain_of(template) if domain is None else get_domain(domain)
    if not isinstance(like, (list, tuple)):
        like = [like]
    return domain.preallocate(shape.count_rows(), shape.count_columns(),
                              template, *like)
