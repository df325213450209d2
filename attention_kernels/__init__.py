"""Single-query scaled-dot-product attention kernels.

Two interchangeable strategies compute the same result: a sequential
reference written as plain loops, and a tiled parallel pipeline of Triton
kernels (transpose -> GEMM -> softmax -> GEMM).
"""
from attention_kernels.errors import (
    AttentionKernelError,
    EmptySequenceError,
    ShapeMismatchError,
    UnsupportedStrategyError,
)
from attention_kernels.sdpa import Strategy, attention, available_strategies

__version__ = "0.1.0"

__all__ = [
    "Strategy",
    "attention",
    "available_strategies",
    "AttentionKernelError",
    "EmptySequenceError",
    "ShapeMismatchError",
    "UnsupportedStrategyError",
]
