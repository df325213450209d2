"""Accelerator probing for the parallel strategy.

Triton kernels run either on a CUDA device or, with ``TRITON_INTERPRET=1``,
on CPU tensors through Triton's interpreter. torch and triton come from the
``parallel`` extra; without them only the sequential strategy is available.
Buffer allocation beyond picking a device is left to torch.
"""
import logging
import os

from attention_kernels.errors import UnsupportedStrategyError

try:
    import torch
    import triton  # noqa: F401
    HAS_TRITON = True
except ImportError:
    torch = None
    HAS_TRITON = False

logger = logging.getLogger(__name__)


def interpreter_enabled() -> bool:
    return os.environ.get("TRITON_INTERPRET", "0") == "1"


def parallel_available() -> bool:
    """True when Triton kernels can be launched in this process."""
    if not HAS_TRITON:
        return False
    return interpreter_enabled() or torch.cuda.is_available()


def kernel_device():
    if not HAS_TRITON:
        raise UnsupportedStrategyError("torch and triton are not installed")
    # the interpreter only understands host memory
    if interpreter_enabled():
        return torch.device("cpu")
    if torch.cuda.is_available():
        return torch.device("cuda")
    logger.debug("no CUDA device and TRITON_INTERPRET is off")
    return torch.device("cpu")
