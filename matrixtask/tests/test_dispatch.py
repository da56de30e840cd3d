from .utils import random_matrix, random_spd
from matrixtask import (
    determinant_task_for, inverter_task_for, solver_task_for,
    Structure2D, FLOAT32, FLOAT64, COMPLEX64, RATIONAL, get_domain)
from matrixtask import determinant, inverter
import warnings
import torch
import pytest


square_cases = [
    # (n, symmetric, positive_definite, expected)
    (1, False, False, 'full_1x1'),
    (1, True, True, 'full_1x1'),
    (3, True, False, 'symmetric_3x3'),
    (5, True, True, 'symmetric_5x5'),
    (6, True, True, 'cholesky'),
    (6, True, False, 'lu'),
    (2, False, False, 'full_2x2'),
    (7, False, False, 'lu'),
    (0, False, False, 'lu'),
]


@pytest.mark.parametrize("n,symmetric,pd,expected", square_cases)
def test_square_table(n, symmetric, pd, expected):
    template = Structure2D(n, n)
    assert determinant_task_for(template, symmetric, pd).name == expected
    assert inverter_task_for(template, symmetric, pd).name == expected


@pytest.mark.parametrize("factory", [determinant, inverter])
def test_non_square_table(factory):
    make = factory.factory_for().make
    assert make((4, 3)).name == 'qr'
    assert make((4, 3), True, True).name == 'qr'
    assert make((3, 4)).name == 'svd'


solve_cases = [
    # (body, rhs, symmetric, positive_definite, expected)
    ((1, 1), (1, 4), False, False, 'full_1x1'),
    ((3, 3), (3, 1), True, False, 'symmetric_3x3'),
    ((3, 3), (3, 2), True, False, 'lu'),
    ((3, 3), (3, 2), True, True, 'cholesky'),
    ((8, 8), (8, 1), True, True, 'cholesky'),
    ((8, 8), (8, 1), True, False, 'lu'),
    ((5, 5), (5, 1), False, False, 'full_5x5'),
    ((5, 5), (5, 3), False, False, 'lu'),
    ((6, 6), (6, 1), False, False, 'lu'),
    ((4, 3), (4, 1), False, False, 'least_squares'),
    ((9, 5), (9, 1), False, False, 'least_squares'),
    ((9, 6), (9, 1), False, False, 'qr'),
    ((4, 3), (4, 2), False, False, 'qr'),
    ((3, 4), (3, 1), False, False, 'svd'),
]


@pytest.mark.parametrize("body,rhs,symmetric,pd,expected", solve_cases)
def test_solve_table(body, rhs, symmetric, pd, expected):
    assert solver_task_for(body, rhs, symmetric, pd).name == expected


def test_fallback_scenarios():
    template = Structure2D(6, 6)
    task = inverter_task_for(template, symmetric=True, positive_definite=True)
    assert task.name == 'cholesky'
    task = solver_task_for(Structure2D(4, 3), Structure2D(4, 1))
    assert task.name == 'least_squares'


def test_positive_definite_without_symmetric_warns():
    with pytest.warns(RuntimeWarning):
        task = inverter_task_for((3, 3), positive_definite=True)
    assert task.name == 'full_3x3'
    with pytest.warns(RuntimeWarning):
        determinant_task_for((8, 8), positive_definite=True)
    with pytest.warns(RuntimeWarning):
        solver_task_for((8, 8), (8, 1), positive_definite=True)
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        inverter_task_for((3, 3), symmetric=True, positive_definite=True)


def test_kernels_are_shared():
    first = inverter_task_for((4, 4), domain=FLOAT64)
    second = inverter_task_for((4, 4), domain='float64')
    assert first is second
    with pytest.raises(Exception):
        first.name = 'other'


def test_decompositions_are_fresh():
    first = inverter_task_for((7, 7), domain=FLOAT64)
    second = inverter_task_for((7, 7), domain=FLOAT64)
    assert first.name == second.name == 'lu'
    assert first is not second


def test_domain_selection():
    assert inverter_task_for((3, 3), domain=torch.float32).domain is FLOAT32
    assert inverter_task_for((3, 3), domain=RATIONAL).domain is RATIONAL
    mat = torch.zeros([3, 3], dtype=torch.complex64)
    assert inverter_task_for(mat).domain is COMPLEX64
    with pytest.raises(ValueError):
        inverter_task_for((3, 3), domain='quaternion')


def test_negative_template():
    with pytest.raises(ValueError):
        Structure2D(-1, 3)


def test_compute():
    mat = random_spd(7, 7, generator=torch.Generator().manual_seed(0))
    for make in (FLOAT64.cholesky, FLOAT64.lu, FLOAT64.qr, FLOAT64.svd):
        decomposition = make()
        assert decomposition.compute(mat)
        assert decomposition.is_solvable()
        assert torch.allclose(decomposition.get_determinant(),
                              torch.linalg.det(mat))
        assert torch.allclose(decomposition.get_inverse().data,
                              torch.linalg.inv(mat))
        rhs = torch.randn([7, 2], dtype=torch.double)
        assert torch.allclose(decomposition.get_solution(rhs).data,
                              torch.linalg.solve(mat, rhs))


def test_compute_failures():
    indefinite = torch.as_tensor([[1., 2.], [2., 1.]], dtype=torch.double)
    cholesky = FLOAT64.cholesky()
    assert not cholesky.compute(indefinite)
    assert not cholesky.is_solvable()
    with pytest.raises(torch.linalg.LinAlgError):
        cholesky.get_inverse()
    with pytest.raises(torch.linalg.LinAlgError):
        cholesky.invert(indefinite)

    singular = torch.as_tensor([[1., 2.], [2., 4.]], dtype=torch.double)
    lu = FLOAT64.lu()
    assert not lu.compute(singular)
    assert lu.get_determinant().item() == 0
    with pytest.raises(torch.linalg.LinAlgError):
        lu.get_solution(torch.ones([2, 1], dtype=torch.double))
    with pytest.raises(torch.linalg.LinAlgError):
        lu.solve(singular, torch.ones([2, 1], dtype=torch.double))


def test_not_computed():
    with pytest.raises(torch.linalg.LinAlgError):
        FLOAT64.lu().get_determinant()


def test_decomposition_preallocate():
    lu = FLOAT64.lu()
    body = random_matrix(2, 6, 6)
    rhs = torch.ones([6, 3], dtype=torch.double)
    assert lu.preallocate(body).data.shape == (2, 6, 6)
    assert lu.preallocate(body, rhs).data.shape == (2, 6, 3)
    out = lu.solve(body, rhs, lu.preallocate(body, rhs))
    assert torch.allclose(out.data, torch.linalg.solve(body, rhs))


def test_shape_template_domain():
    default = get_domain(torch.get_default_dtype())
    assert inverter_task_for((2, 2)).domain is default
    assert solver_task_for(Structure2D(2, 2), (2, 1)).domain is default
    mat = torch.as_tensor([[4., 7.], [2., 6.]], dtype=torch.double)
    task = inverter_task_for((2, 2), domain=mat.dtype)
    assert task.domain is FLOAT64
    assert task.invert(mat).data.dtype == torch.double
