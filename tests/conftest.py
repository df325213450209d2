import os

# must be set before any triton.jit kernel is defined
os.environ.setdefault("TRITON_INTERPRET", "1")

import numpy as np
import pytest
import torch


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def device():
    from attention_kernels.device import kernel_device

    return kernel_device()


@pytest.fixture
def to_device(device):
    def _to_device(x):
        return torch.as_tensor(np.asarray(x, dtype=np.float32), device=device).contiguous()

    return _to_device
