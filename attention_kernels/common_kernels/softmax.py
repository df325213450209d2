import logging

import torch
import triton
import triton.language as tl

from attention_kernels.config import KernelConfig as KC
from attention_kernels.errors import EmptySequenceError, ShapeMismatchError

logger = logging.getLogger(__name__)


@triton.jit
def softmax_block_kernel(
    scores_ptr, out_ptr,
    n,
    stride_s, stride_o,
    inv_scale,
    BLOCK: tl.constexpr,
):
    """Numerically stable softmax of one score vector inside a single block.

    Lanes at or beyond ``n`` load -inf so they never win the max, add
    exp(-inf) = 0 to the sum, and are masked out of the store. Every lane
    reads its score before any lane writes, so ``out_ptr`` may alias
    ``scores_ptr``.
    """
    offs = tl.arange(0, BLOCK)
    mask = offs < n

    # ===== Stage 1: load one element per lane =====
    x = tl.load(scores_ptr + offs * stride_s, mask=mask, other=-float("inf"))
    x = x * inv_scale

    # ===== Stage 2: block-wide max (tree reduction) =====
    row_max = tl.max(x, axis=0)

    # ===== Stage 3: exponentiate, excluded lanes pinned to 0 =====
    num = tl.where(mask, tl.exp(x - row_max), 0.0)

    # ===== Stage 4: block-wide sum (tree reduction) =====
    denom = tl.sum(num, axis=0)

    # ===== Stage 5: normalize and write =====
    tl.store(out_ptr + offs * stride_o, num / denom, mask=mask)


def softmax(scores: torch.Tensor, out: torch.Tensor | None = None, scale: float = 1.0,
            block_size: int | None = None) -> torch.Tensor:
    """Launch the block softmax over a 1-D score tensor.

    ``out`` may be ``scores`` itself for an in-place update. ``block_size``
    defaults to the next power of two covering ``n``; a larger block
    launches idle lanes that are excluded from both reductions. One block
    holds at most ``KernelConfig.MAX_SOFTMAX_BLOCK`` scores; longer vectors
    are rejected (``softmax_baseline`` has no such limit).
    """
    if scores.dim() != 1:
        raise ShapeMismatchError(f"scores must be 1-D, got shape {tuple(scores.shape)}")
    n = scores.shape[0]
    if n == 0:
        raise EmptySequenceError("softmax of an empty score vector")
    if n > KC.MAX_SOFTMAX_BLOCK:
        raise ShapeMismatchError(
            f"block softmax holds at most {KC.MAX_SOFTMAX_BLOCK} scores, got {n}"
        )
    if block_size is None:
        block_size = max(triton.next_power_of_2(n), KC.MIN_SOFTMAX_BLOCK)
    elif block_size < n or block_size > KC.MAX_SOFTMAX_BLOCK or block_size & (block_size - 1):
        raise ValueError(
            f"block_size must be a power of two in [{n}, {KC.MAX_SOFTMAX_BLOCK}], got {block_size}"
        )
    if out is None:
        out = torch.empty_like(scores)
    elif tuple(out.shape) != (n,):
        raise ShapeMismatchError(f"out must have shape {(n,)}, got {tuple(out.shape)}")

    logger.debug("softmax n=%d block=%d in_place=%s", n, block_size,
                 out.data_ptr() == scores.data_ptr())
    softmax_block_kernel[(1,)](
        scores, out,
        n,
        scores.stride(0), out.stride(0),
        1.0 / scale,
        BLOCK=block_size,
        num_warps=KC.NUM_WARPS,
    )
    return out


__all__ = ["softmax"]
