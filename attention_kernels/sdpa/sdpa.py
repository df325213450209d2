import numpy as np

from attention_kernels.common_kernels.baseline import np_softmax
from attention_kernels.config import KernelConfig as KC


def sdpa_np(Q, K, V, scale=1.0):
    # Q: (d,) query
    # K: (seq_len, d) keys
    # V: (seq_len, d) values
    # compute single-query attention: softmax(K @ Q / scale) @ V
    Q = np.asarray(Q, dtype=np.float64)
    K = np.asarray(K, dtype=np.float64)
    V = np.asarray(V, dtype=np.float64)
    scores = K @ Q / scale
    return (np_softmax(scores) @ V).astype(KC.DTYPE)


def sdpa_baseline(Q, K, V, scale=1.0):
    """
    Sequential reference strategy. Plain loops, single-precision
    storage, no tiling and no staging buffers: this defines ground
    truth for the tiled strategy.

    Pipeline:
      1. scores[i] = sum_dim Q[dim] * K[i, dim]
      2. softmax over scores (max, exp + accumulate, normalize)
      3. out[dim] = sum_i weights[i] * V[i, dim]
    """
    Q = np.asarray(Q, dtype=KC.DTYPE)
    K = np.asarray(K, dtype=KC.DTYPE)
    V = np.asarray(V, dtype=KC.DTYPE)
    seq_len, d = K.shape
    inv_scale = KC.DTYPE(1.0 / scale)

    # ===== Stage 1: raw scores, tracking the max on the way =====
    scores = np.empty(seq_len, dtype=KC.DTYPE)
    max_val = None
    for i in range(seq_len):
        acc = KC.DTYPE(0.0)
        for dim in range(d):
            acc += Q[dim] * K[i, dim]
        acc = acc * inv_scale
        scores[i] = acc
        if max_val is None or acc > max_val:
            max_val = acc

    # ===== Stage 2: exponentiate and accumulate =====
    # weights are written over scores once each score has been consumed;
    # the denominator is carried in double
    sum_exp = KC.ACC_DTYPE(0.0)
    for i in range(seq_len):
        scores[i] = np.exp(scores[i] - max_val)
        sum_exp += scores[i]
    for i in range(seq_len):
        scores[i] = scores[i] / sum_exp
    weights = scores

    # ===== Stage 3: weighted sum of value rows =====
    out = np.empty(d, dtype=KC.DTYPE)
    for dim in range(d):
        acc = KC.DTYPE(0.0)
        for i in range(seq_len):
            acc += weights[i] * V[i, dim]
        out[dim] = acc
    return out


__all__ = ["sdpa_np", "sdpa_baseline"]
