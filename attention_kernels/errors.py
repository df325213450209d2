"""Errors raised by the attention kernel suite.

Shape problems are caller programming errors and are raised before any
kernel is launched. Strategy problems are reported to the host dispatcher's
caller as-is; nothing here falls back to another strategy.
"""


class AttentionKernelError(Exception):
    """Base class for every error raised by this package."""


class ShapeMismatchError(AttentionKernelError, ValueError):
    """Q/K/V/Output (or GEMM operand) shapes are inconsistent."""


class EmptySequenceError(ShapeMismatchError):
    """A zero-length key/value sequence, head dimension or score vector."""


class UnsupportedStrategyError(AttentionKernelError, RuntimeError):
    """The requested execution strategy is unknown or cannot run here."""


__all__ = [
    "AttentionKernelError",
    "ShapeMismatchError",
    "EmptySequenceError",
    "UnsupportedStrategyError",
]
