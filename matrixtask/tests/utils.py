import torch


def get_test_devices():
    devices = [('cpu', 1), ('cpu', 4)]
    if torch.cuda.is_available():
        print('cuda backend available')
        devices.append('cuda')
    return devices


def init_device(device):
    if isinstance(device, (list, tuple)):
        device, param = device
    else:
        param = 1 if device == 'cpu' else 0
    if device == 'cuda':
        torch.cuda.set_device(param)
        torch.cuda.init()
        try:
            torch.cuda.empty_cache()
        except RuntimeError:
            pass
        device = '{}:{}'.format(device, param)
    else:
        assert device == 'cpu'
        torch.set_num_threads(param)
    device = torch.device(device)
    return device


def random_matrix(*shape, dtype=torch.double, device=None, generator=None):
    """Random matrix whose diagonal is pushed away from zero, so that
    it is reasonably well conditioned."""
    n = shape[-1]
    mat = torch.randn(shape, dtype=dtype, generator=generator)
    if shape[-2] == n:
        mat += n * torch.eye(n, dtype=dtype)
    return mat.to(device)


def random_spd(*shape, dtype=torch.double, device=None, generator=None):
    """Random symmetric positive definite matrix."""
    n = shape[-1]
    mat = torch.randn(shape, dtype=dtype, generator=generator)
    mat = mat @ mat.transpose(-1, -2).conj() + n * torch.eye(n, dtype=dtype)
    return mat.to(device)
