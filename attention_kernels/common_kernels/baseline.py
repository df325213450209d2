"""Sequential baselines: plain loops in single precision, numpy only.

These define ground truth for the tiled kernels and are the CPU fallback
when torch/triton are not installed.
"""
import numpy as np

from attention_kernels.config import KernelConfig as KC
from attention_kernels.errors import EmptySequenceError, ShapeMismatchError


def np_softmax(x, axis=-1):
    x_max = np.max(x, axis=axis, keepdims=True)
    e_x = np.exp(x - x_max)
    return e_x / np.sum(e_x, axis=axis, keepdims=True)


def gemm_baseline(A, B):
    """Naive triple-loop GEMM in single precision."""
    A = np.asarray(A, dtype=KC.DTYPE)
    B = np.asarray(B, dtype=KC.DTYPE)
    if A.ndim != 2 or B.ndim != 2 or A.shape[1] != B.shape[0]:
        raise ShapeMismatchError(f"cannot multiply {A.shape} by {B.shape}")
    M, K = A.shape
    N = B.shape[1]
    C = np.zeros((M, N), dtype=KC.DTYPE)
    for i in range(M):
        for j in range(N):
            acc = KC.DTYPE(0.0)
            for k in range(K):
                acc += A[i, k] * B[k, j]
            C[i, j] = acc
    return C


def transpose_baseline(In):
    In = np.asarray(In, dtype=KC.DTYPE)
    if In.ndim != 2:
        raise ShapeMismatchError(f"In must be 2-D, got shape {In.shape}")
    rows, cols = In.shape
    Out = np.empty((cols, rows), dtype=KC.DTYPE)
    for i in range(rows):
        for j in range(cols):
            Out[j, i] = In[i, j]
    return Out


def softmax_baseline(scores, scale=1.0):
    """Sequential three-pass softmax: max, exp + accumulate, normalize.

    The exponentials are stored in single precision; their sum is carried
    in double so long vectors still normalize to 1.
    """
    scores = np.asarray(scores, dtype=KC.DTYPE)
    if scores.ndim != 1:
        raise ShapeMismatchError(f"scores must be 1-D, got shape {scores.shape}")
    n = scores.shape[0]
    if n == 0:
        raise EmptySequenceError("softmax of an empty score vector")
    inv_scale = KC.DTYPE(1.0 / scale)

    weights = np.empty(n, dtype=KC.DTYPE)
    max_val = scores[0] * inv_scale
    for i in range(n):
        val = scores[i] * inv_scale
        if val > max_val:
            max_val = val

    sum_exp = KC.ACC_DTYPE(0.0)
    for i in range(n):
        weights[i] = np.exp(scores[i] * inv_scale - max_val)
        sum_exp += weights[i]

    for i in range(n):
        weights[i] = weights[i] / sum_exp
    return weights


__all__ = ["np_softmax", "gemm_baseline", "transpose_baseline", "softmax_baseline"]
