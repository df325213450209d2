import logging

import numpy as np
import torch

from attention_kernels.common_kernels.kernels import as_matrix, as_vector, gemm, transpose
from attention_kernels.common_kernels.softmax import softmax
from attention_kernels.config import KernelConfig as KC
from attention_kernels.device import kernel_device

logger = logging.getLogger(__name__)


def sdpa_tiled(Q, K, V, scale=1.0, device=None, tile_size=KC.TILE_SIZE):
    """
    Parallel tiled strategy. Each stage is a separate kernel launch; stages
    are ordered by the launches themselves.

    Pipeline:
      Q[d] -> view 1 x d
      K[seq_len, d] -> transpose -> K^T[d, seq_len]
      Q @ K^T -> scores[1, seq_len] -> view seq_len
      softmax(scores) written back into the scores buffer
      weights view 1 x seq_len @ V[seq_len, d] -> out[1, d] -> view d
    """
    if device is None:
        device = kernel_device()
    Q = torch.as_tensor(np.asarray(Q, dtype=KC.DTYPE), device=device).contiguous()
    K = torch.as_tensor(np.asarray(K, dtype=KC.DTYPE), device=device).contiguous()
    V = torch.as_tensor(np.asarray(V, dtype=KC.DTYPE), device=device).contiguous()
    seq_len, d = K.shape
    logger.debug("sdpa_tiled seq_len=%d d=%d device=%s", seq_len, d, device)

    # ===== Stage 1: Q as a 1 x d matrix =====
    q_mat = as_matrix(Q)

    # ===== Stage 2: K^T, d x seq_len =====
    k_t = transpose(K, tile_size=tile_size)

    # ===== Stage 3: scores = Q @ K^T, 1 x seq_len =====
    scores = gemm(q_mat, k_t, tile_size=tile_size)

    # ===== Stage 4: softmax in place over the scores buffer =====
    scores_vec = as_vector(scores)
    softmax(scores_vec, out=scores_vec, scale=scale)

    # ===== Stage 5: out = weights @ V, 1 x d =====
    out = gemm(scores, V, tile_size=tile_size)

    return as_vector(out)


__all__ = ["sdpa_tiled"]
