from .utils import get_test_devices, init_device, random_matrix, random_spd
from matrixtask import solver_task_for, FLOAT64, TensorStore
from matrixtask.solver import factory_for
import scipy.linalg
import numpy as np
import torch
import pytest

devices = get_test_devices()
sizes = [1, 2, 3, 4, 5]


@pytest.mark.parametrize("device", devices)
@pytest.mark.parametrize("n", sizes)
@pytest.mark.parametrize("scale", [1e-8, 1, 1e8])
def test_solve(device, n, scale):
    device = init_device(device)
    g = torch.Generator().manual_seed(n)
    mat = random_matrix(20, n, n, generator=g, device=device)
    x = torch.randn([20, n, 1], dtype=torch.double, generator=g)
    x = x.to(device) * scale
    task = solver_task_for(mat, x)
    assert task.name == 'full_{0}x{0}'.format(n)
    out = task.solve(mat, mat @ x).data
    assert out.shape == x.shape
    assert torch.allclose(out, x, rtol=1e-8, atol=1e-8 * scale)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
@pytest.mark.parametrize("scale", [1e-8, 1, 1e8])
def test_symmetric(n, scale):
    g = torch.Generator().manual_seed(n)
    mat = random_spd(20, n, n, generator=g)
    x = torch.randn([20, n, 1], dtype=torch.double, generator=g) * scale
    task = solver_task_for(mat, x, symmetric=True)
    assert task.name == 'symmetric_{0}x{0}'.format(n)
    out = task.solve(mat, mat @ x).data
    full = solver_task_for(mat, x).solve(mat, mat @ x).data
    assert torch.allclose(out, x, rtol=1e-8, atol=1e-8 * scale)
    assert torch.allclose(out, full, rtol=1e-9, atol=1e-9 * scale)


def test_zero_rhs():
    mat = random_matrix(3, 3, generator=torch.Generator().manual_seed(0))
    rhs = torch.zeros([3, 1], dtype=torch.double)
    out = solver_task_for(mat, rhs).solve(mat, rhs).data
    assert (out == 0).all()


def test_broadcast_batch():
    g = torch.Generator().manual_seed(0)
    mat = random_matrix(4, 1, 3, 3, generator=g)
    rhs = torch.randn([5, 3, 1], dtype=torch.double, generator=g)
    task = solver_task_for(mat, rhs)
    assert task.preallocate(mat, rhs).data.shape == (4, 5, 3, 1)
    out = task.solve(mat, rhs).data
    assert torch.allclose(out, torch.linalg.solve(mat, rhs))


def test_scenarios():
    eye = torch.eye(3, dtype=torch.double)
    rhs = torch.as_tensor([[1.], [2.], [3.]], dtype=torch.double)
    out = solver_task_for(eye, rhs).solve(eye, rhs).data
    assert torch.allclose(out, rhs)

    mat = torch.as_tensor([[2., 1.], [1., 2.]], dtype=torch.double)
    rhs = torch.as_tensor([[3.], [3.]], dtype=torch.double)
    out = solver_task_for(mat, rhs, symmetric=True).solve(mat, rhs).data
    assert torch.allclose(out, torch.ones([2, 1], dtype=torch.double))


def test_rhs_aliasing():
    mat = random_matrix(4, 4, generator=torch.Generator().manual_seed(0))
    rhs = TensorStore(torch.randn([4, 1], dtype=torch.double))
    ref = torch.linalg.solve(mat, rhs.data)
    out = solver_task_for(mat, rhs).solve(mat, rhs, rhs)
    assert out is rhs
    assert torch.allclose(rhs.data, ref)


def test_one_by_one_multiple_columns():
    mat = torch.as_tensor([[4.]], dtype=torch.double)
    rhs = torch.as_tensor([[2., 8., -1.]], dtype=torch.double)
    task = solver_task_for(mat, rhs)
    assert task.name == 'full_1x1'
    out = task.solve(mat, rhs).data
    assert torch.allclose(out, rhs / 4)


def test_multiple_columns_fallback():
    g = torch.Generator().manual_seed(0)
    mat = random_spd(3, 3, generator=g)
    rhs = torch.randn([3, 2], dtype=torch.double, generator=g)
    ref = torch.linalg.solve(mat, rhs)
    task = solver_task_for(mat, rhs)
    assert task.name == 'lu'
    assert torch.allclose(task.solve(mat, rhs).data, ref)
    task = solver_task_for(mat, rhs, symmetric=True, positive_definite=True)
    assert task.name == 'cholesky'
    assert torch.allclose(task.solve(mat, rhs).data, ref)


def test_least_squares_line():
    # fit y = a + b * t to (0, 0), (1, 1), (2, 3)
    body = torch.as_tensor([[1., 0.], [1., 1.], [1., 2.]], dtype=torch.double)
    rhs = torch.as_tensor([[0.], [1.], [3.]], dtype=torch.double)
    task = solver_task_for(body, rhs)
    assert task.name == 'least_squares'
    out = task.solve(body, rhs).data
    ref = torch.as_tensor([[-1 / 6], [3 / 2]], dtype=torch.double)
    assert torch.allclose(out, ref)
    ref, *_ = scipy.linalg.lstsq(body.numpy(), rhs.numpy())
    assert np.allclose(out.numpy(), ref)


@pytest.mark.parametrize("n", sizes)
def test_least_squares(n):
    g = torch.Generator().manual_seed(n)
    body = torch.randn([n + 4, n], dtype=torch.double, generator=g)
    rhs = torch.randn([n + 4, 1], dtype=torch.double, generator=g)
    out = solver_task_for(body, rhs).solve(body, rhs).data
    ref, *_ = scipy.linalg.lstsq(body.numpy(), rhs.numpy())
    assert np.allclose(out.numpy(), ref)


def test_least_squares_complex():
    g = torch.Generator().manual_seed(0)
    body = torch.randn([2, 7, 3], dtype=torch.complex128, generator=g)
    rhs = torch.randn([2, 7, 1], dtype=torch.complex128, generator=g)
    out = solver_task_for(body, rhs).solve(body, rhs).data
    ref = torch.linalg.lstsq(body, rhs).solution
    assert torch.allclose(out, ref)


def test_least_squares_too_many_columns():
    from matrixtask._impl.solver import least_squares
    body = TensorStore(torch.randn([8, 6], dtype=torch.double))
    rhs = TensorStore(torch.randn([8, 1], dtype=torch.double))
    solution = TensorStore(torch.zeros([6, 1], dtype=torch.double))
    with pytest.raises(ValueError):
        least_squares(body, rhs, solution)


def test_tall_fallback():
    g = torch.Generator().manual_seed(0)
    body = torch.randn([9, 6], dtype=torch.double, generator=g)
    rhs = torch.randn([9, 1], dtype=torch.double, generator=g)
    task = solver_task_for(body, rhs)
    assert task.name == 'qr'
    ref = torch.linalg.lstsq(body, rhs).solution
    assert torch.allclose(task.solve(body, rhs).data, ref)


def test_wide_fallback():
    g = torch.Generator().manual_seed(0)
    body = torch.randn([2, 4], dtype=torch.double, generator=g)
    rhs = torch.randn([2, 1], dtype=torch.double, generator=g)
    task = solver_task_for(body, rhs)
    assert task.name == 'svd'
    out = task.solve(body, rhs).data
    assert torch.allclose(out, torch.linalg.pinv(body) @ rhs)


def test_make_system():
    factory = factory_for(FLOAT64)
    assert factory.make_system(4, 3).name == 'least_squares'
    assert factory.make_system(4, 4).name == 'full_4x4'
    assert factory.make_system(4, 4, 2).name == 'lu'
    assert factory.make_system(4, 4, 1, True).name == 'symmetric_4x4'


def test_one_shot():
    mat = random_matrix(3, 3, generator=torch.Generator().manual_seed(0))
    rhs = torch.randn([3, 1], dtype=torch.double)
    out = factory_for(FLOAT64).solve(mat, rhs).data
    assert torch.allclose(out, torch.linalg.solve(mat, rhs))
