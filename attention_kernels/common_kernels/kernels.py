import logging

import torch
import triton
import triton.language as tl

from attention_kernels.config import KernelConfig as KC
from attention_kernels.errors import ShapeMismatchError

logger = logging.getLogger(__name__)


@triton.jit
def gemm_tiled_kernel(
    a_ptr, b_ptr, c_ptr,
    M, N, K,
    stride_am, stride_ak,
    stride_bk, stride_bn,
    stride_cm, stride_cn,
    TILE: tl.constexpr,
):
    """Tiled GEMM: C = A * B with reduction over K.

    One program (block) owns one TILE x TILE output tile; every lane of the
    block owns one output element of that tile.
    """
    pid_m = tl.program_id(0)
    pid_n = tl.program_id(1)

    offs_m = pid_m * TILE + tl.arange(0, TILE)
    offs_n = pid_n * TILE + tl.arange(0, TILE)
    offs_k = tl.arange(0, TILE)

    mask_m = offs_m < M
    mask_n = offs_n < N

    # one scalar accumulator per output element, carried across K chunks
    acc = tl.zeros((TILE, TILE), dtype=tl.float32)

    for k0 in range(0, tl.cdiv(K, TILE)):
        k_idx = k0 * TILE + offs_k
        mask_k = k_idx < K

        # ===== Stage 1: stage the A-tile and B-tile =====
        # out-of-range lanes load zeros but still take part in the staging
        a_ptrs = a_ptr + offs_m[:, None] * stride_am + k_idx[None, :] * stride_ak
        b_ptrs = b_ptr + k_idx[:, None] * stride_bk + offs_n[None, :] * stride_bn
        a_tile = tl.load(a_ptrs, mask=mask_m[:, None] & mask_k[None, :], other=0.0)
        b_tile = tl.load(b_ptrs, mask=mask_k[:, None] & mask_n[None, :], other=0.0)

        # ===== Stage 2: TILE multiply-adds per output element =====
        acc += tl.dot(a_tile, b_tile, input_precision="ieee")

    # ===== Stage 3: bound-checked write-back =====
    c_ptrs = c_ptr + offs_m[:, None] * stride_cm + offs_n[None, :] * stride_cn
    tl.store(c_ptrs, acc, mask=mask_m[:, None] & mask_n[None, :])


@triton.jit
def transpose_tiled_kernel(
    in_ptr, out_ptr,
    M, N,
    stride_im, stride_in,
    stride_om, stride_on,
    TILE: tl.constexpr,
):
    """Read a TILE x TILE block of In[M, N] and write it to the mirrored block of Out[N, M]."""
    pid_m = tl.program_id(0)
    pid_n = tl.program_id(1)

    offs_m = pid_m * TILE + tl.arange(0, TILE)
    offs_n = pid_n * TILE + tl.arange(0, TILE)

    in_mask = (offs_m[:, None] < M) & (offs_n[None, :] < N)
    tile = tl.load(in_ptr + offs_m[:, None] * stride_im + offs_n[None, :] * stride_in,
                   mask=in_mask, other=0.0)

    out_mask = (offs_n[:, None] < N) & (offs_m[None, :] < M)
    out_ptrs = out_ptr + offs_n[:, None] * stride_om + offs_m[None, :] * stride_on
    tl.store(out_ptrs, tl.trans(tile), mask=out_mask)


def _check_tile_size(tile_size):
    if tile_size < KC.MIN_TILE_SIZE or tile_size & (tile_size - 1):
        raise ValueError(
            f"tile_size must be a power of two >= {KC.MIN_TILE_SIZE}, got {tile_size}"
        )


def _check_matrix(name, t):
    if t.dim() != 2:
        raise ShapeMismatchError(f"{name} must be 2-D, got shape {tuple(t.shape)}")


def gemm(A: torch.Tensor, B: torch.Tensor, out: torch.Tensor | None = None,
         tile_size: int = KC.TILE_SIZE) -> torch.Tensor:
    """Launch the tiled GEMM: out[M, N] = A[M, K] @ B[K, N]."""
    _check_tile_size(tile_size)
    _check_matrix("A", A)
    _check_matrix("B", B)
    M, K = A.shape
    K_b, N = B.shape
    if K != K_b:
        raise ShapeMismatchError(
            f"gemm inner dimensions differ: A is {tuple(A.shape)}, B is {tuple(B.shape)}"
        )
    if out is None:
        out = torch.empty((M, N), dtype=torch.float32, device=A.device)
    elif tuple(out.shape) != (M, N):
        raise ShapeMismatchError(f"out must have shape {(M, N)}, got {tuple(out.shape)}")

    grid = (triton.cdiv(M, tile_size), triton.cdiv(N, tile_size))
    logger.debug("gemm %dx%d @ %dx%d grid=%s tile=%d", M, K, K, N, grid, tile_size)
    gemm_tiled_kernel[grid](
        A, B, out,
        M, N, K,
        A.stride(0), A.stride(1),
        B.stride(0), B.stride(1),
        out.stride(0), out.stride(1),
        TILE=tile_size,
        num_warps=KC.NUM_WARPS,
    )
    return out


def transpose(In: torch.Tensor, out: torch.Tensor | None = None,
              tile_size: int = KC.TILE_SIZE) -> torch.Tensor:
    """Launch the tiled transpose: out[N, M] = In[M, N]^T."""
    _check_tile_size(tile_size)
    _check_matrix("In", In)
    M, N = In.shape
    if out is None:
        out = torch.empty((N, M), dtype=In.dtype, device=In.device)
    elif tuple(out.shape) != (N, M):
        raise ShapeMismatchError(f"out must have shape {(N, M)}, got {tuple(out.shape)}")

    grid = (triton.cdiv(M, tile_size), triton.cdiv(N, tile_size))
    logger.debug("transpose %dx%d grid=%s tile=%d", M, N, grid, tile_size)
    transpose_tiled_kernel[grid](
        In, out,
        M, N,
        In.stride(0), In.stride(1),
        out.stride(0), out.stride(1),
        TILE=tile_size,
        num_warps=KC.NUM_WARPS,
    )
    return out


def as_matrix(vec: torch.Tensor) -> torch.Tensor:
    """View a length-n vector as a 1 x n matrix over the same storage."""
    if vec.dim() != 1:
        raise ShapeMismatchError(f"expected a vector, got shape {tuple(vec.shape)}")
    return vec.view(1, vec.shape[0])


def as_vector(mat: torch.Tensor) -> torch.Tensor:
    """View a 1 x n matrix as a length-n vector over the same storage."""
    if mat.dim() != 2 or mat.shape[0] != 1:
        raise ShapeMismatchError(f"expected a 1 x n matrix, got shape {tuple(mat.shape)}")
    return mat.view(mat.shape[1])


__all__ = [
    "gemm",
    "transpose",
    "as_matrix",
    "as_vector",
]
