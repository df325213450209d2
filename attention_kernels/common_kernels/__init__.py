from attention_kernels.common_kernels.baseline import (
    gemm_baseline,
    np_softmax,
    softmax_baseline,
    transpose_baseline,
)
from attention_kernels.device import HAS_TRITON

__all__ = [
    "gemm_baseline",
    "np_softmax",
    "softmax_baseline",
    "transpose_baseline",
]

if HAS_TRITON:
    from attention_kernels.common_kernels.kernels import as_matrix, as_vector, gemm, transpose
    from attention_kernels.common_kernels.softmax import softmax

    __all__ += ["as_matrix", "as_vector", "gemm", "transpose", "softmax"]
