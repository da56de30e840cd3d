"""
Numeric domains.

A domain knows how to turn user data into stores of its scalar type,
how to allocate outputs, and which decompositions to fall back on.
"""
__all__ = ['Domain', 'TensorDomain', 'RationalDomain',
           'FLOAT32', 'FLOAT64', 'COMPLEX64', 'COMPLEX128', 'RATIONAL',
           'DOMAINS', 'get_domain', 'domain_of']
import torch
import sympy
from .store import Store, TensorStore, RationalStore
from . import decomposition, exact


class Domain:
    """Base class for numeric domains."""

    name: str = None

    def wrap(self, obj) -> Store:
        """Convert `obj` into a store of this domain.

        Stores are returned as is. Data that already has the domain's
        type is wrapped without copy; anything else is converted.
        """
        raise NotImplementedError

    def preallocate(self, rows: int, columns: int, *like) -> Store:
        """Zero-filled `(rows, columns)` store."""
        raise NotImplementedError

    def cholesky(self) -> decomposition.Decomposition:
        raise NotImplementedError

    def lu(self) -> decomposition.Decomposition:
        raise NotImplementedError

    def qr(self) -> decomposition.Decomposition:
        raise NotImplementedError

    def svd(self) -> decomposition.Decomposition:
        raise NotImplementedError

    def __repr__(self):
        return 'Domain({})'.format(self.name)


class TensorDomain(Domain):
    """Domain of torch tensors with a fixed floating point dtype.

    Outputs inherit their batch shape (broadcast) and device from the
    `like` operands passed to `preallocate`.
    """

    def __init__(self, name: str, dtype: torch.dtype):
        self.name = name
        self.dtype = dtype

    def wrap(self, obj):
        if isinstance(obj, Store):
            return obj
        if isinstance(obj, sympy.MatrixBase):
            obj = obj.tolist()
        return TensorStore(torch.as_tensor(obj, dtype=self.dtype))

    def preallocate(self, rows, columns, *like):
        batch, device = [], None
        for operand in like:
            if isinstance(operand, Store):
                operand = operand.data
            if torch.is_tensor(operand):
                batch.append(operand.shape[:-2])
                device = device or operand.device
        batch = torch.broadcast_shapes(*batch) if batch else torch.Size([])
        data = torch.zeros([*batch, rows, columns],
                           dtype=self.dtype, device=device)
        return TensorStore(data)

    def cholesky(self):
        return decomposition.Cholesky(self)

    def lu(self):
        return decomposition.LU(self)

    def qr(self):
        return decomposition.QR(self)

    def svd(self):
        return decomposition.SVD(self)


class RationalDomain(Domain):
    """Domain of exact rational numbers, stored in sympy matrices.

    Floating point inputs are converted to the rational number they
    represent exactly.
    """

    name = 'rational'

    def wrap(self, obj):
        if isinstance(obj, Store):
            return obj
        if isinstance(obj, sympy.MutableDenseMatrix):
            return RationalStore(obj)
        if torch.is_tensor(obj):
            obj = obj.tolist()
        return RationalStore(sympy.Matrix(obj).applyfunc(sympy.Rational))

    def preallocate(self, rows, columns, *like):
        return RationalStore(sympy.zeros(rows, columns))

    def cholesky(self):
        return exact.ExactCholesky(self)

    def lu(self):
        return exact.ExactLU(self)

    def qr(self):
        return exact.ExactQR(self)

    def svd(self):
        return exact.ExactSVD(self)


FLOAT32 = TensorDomain('float32', torch.float32)
FLOAT64 = TensorDomain('float64', torch.float64)
COMPLEX64 = TensorDomain('complex64', torch.complex64)
COMPLEX128 = TensorDomain('complex128', torch.complex128)
RATIONAL = RationalDomain()
DOMAINS = (FLOAT32, FLOAT64, COMPLEX64, COMPLEX128, RATIONAL)


def get_domain(key=None) -> Domain:
    """Find a domain.

    Parameters
    ----------
    key : `Domain or str or torch.dtype`, optional
        Domain, domain name (`'float64'`, `'rational'`, ...) or
        torch dtype. Default: domain of `torch.get_default_dtype()`.

    Returns
    -------
    domain : `Domain`

    """
    if isinstance(key, Domain):
        return key
    if key is None:
        key = torch.get_default_dtype()
    for domain in DOMAINS:
        if key == domain.name or key == getattr(domain, 'dtype', None):
            return domain
    raise ValueError('Unknown domain {}.'.format(key))


def domain_of(matrix) -> Domain:
    """Domain that naturally holds `matrix`.

    Tensors map to the domain of their dtype (half precision and
    integers are promoted), sympy matrices to the rational domain, and
    anything else to the default domain.
    """
    if isinstance(matrix, Store):
        matrix = matrix.data
    if isinstance(matrix, sympy.MatrixBase):
        return RATIONAL
    if torch.is_tensor(matrix):
        if matrix.is_complex():
            return get_domain(torch.promote_types(matrix.dtype,
                                                  torch.complex64))
        if matrix.is_floating_point():
            return get_domain(torch.promote_types(matrix.dtype,
                                                  torch.float32))
    return get_domain()
