"""
Single-query attention entry point.

Validates Q/K/V against one another, then runs the requested strategy:

  sequential -> sdpa_baseline (plain loops, runs anywhere)
  parallel   -> sdpa_tiled (Triton kernels, needs the parallel extra and
                CUDA or TRITON_INTERPRET=1)

A strategy that cannot run raises UnsupportedStrategyError; picking a
fallback is the caller's decision.
"""
import enum
import logging

import numpy as np

from attention_kernels.config import KernelConfig as KC
from attention_kernels.device import parallel_available
from attention_kernels.errors import (
    EmptySequenceError,
    ShapeMismatchError,
    UnsupportedStrategyError,
)
from attention_kernels.sdpa.sdpa import sdpa_baseline

logger = logging.getLogger(__name__)


class Strategy(str, enum.Enum):
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


def available_strategies():
    strategies = [Strategy.SEQUENTIAL]
    if parallel_available():
        strategies.append(Strategy.PARALLEL)
    return strategies


def _resolve_strategy(strategy):
    try:
        return Strategy(strategy)
    except ValueError:
        raise UnsupportedStrategyError(
            f"unknown strategy {strategy!r}, expected one of {[s.value for s in Strategy]}"
        ) from None


def validate_inputs(Q, K, V):
    """Return (Q, K, V) as float32 arrays, or raise on inconsistent shapes."""
    Q = np.asarray(Q, dtype=KC.DTYPE)
    K = np.asarray(K, dtype=KC.DTYPE)
    V = np.asarray(V, dtype=KC.DTYPE)

    if Q.ndim != 1:
        raise ShapeMismatchError(f"Q must be a vector, got shape {Q.shape}")
    if K.ndim != 2 or V.ndim != 2:
        raise ShapeMismatchError(f"K and V must be matrices, got {K.shape} and {V.shape}")
    if K.shape[0] == 0 or V.shape[0] == 0:
        raise EmptySequenceError("attention over an empty key/value sequence")
    if Q.shape[0] == 0:
        raise EmptySequenceError("attention with a zero-length head dimension")
    if K.shape[0] != V.shape[0]:
        raise ShapeMismatchError(f"K has {K.shape[0]} rows but V has {V.shape[0]}")
    d = Q.shape[0]
    if K.shape[1] != d or V.shape[1] != d:
        raise ShapeMismatchError(
            f"Q length {d} does not match K cols {K.shape[1]} / V cols {V.shape[1]}"
        )
    return Q, K, V


def attention(Q, K, V, strategy=Strategy.SEQUENTIAL, scale=1.0, out=None):
    """Softmax-weighted average of V's rows, with Q @ K^T / scale as logits.

    Returns a float32 vector of length d. When ``out`` is given it must have
    shape (d,); it is written once and returned.
    """
    strategy = _resolve_strategy(strategy)
    Q, K, V = validate_inputs(Q, K, V)
    d = Q.shape[0]
    if out is not None and np.shape(out) != (d,):
        raise ShapeMismatchError(f"out must have shape {(d,)}, got {np.shape(out)}")

    logger.debug("attention strategy=%s seq_len=%d d=%d", strategy.value, K.shape[0], d)
    match strategy:
        case Strategy.SEQUENTIAL:
            result = sdpa_baseline(Q, K, V, scale=scale)
        case Strategy.PARALLEL:
            if not parallel_available():
                logger.warning("parallel strategy requested without torch/triton, a CUDA device or TRITON_INTERPRET=1")
                raise UnsupportedStrategyError(
                    "parallel strategy needs torch and triton plus a CUDA device or TRITON_INTERPRET=1"
                )
            # kernels are only importable with the parallel extra installed
            from attention_kernels.sdpa.sdpa_tiled import sdpa_tiled

            result = sdpa_tiled(Q, K, V, scale=scale).cpu().numpy()

    if out is None:
        return result
    out[...] = result
    return out


__all__ = ["Strategy", "attention", "available_strategies", "validate_inputs"]
