from attention_kernels.device import HAS_TRITON
from attention_kernels.sdpa.dispatch import (
    Strategy,
    attention,
    available_strategies,
    validate_inputs,
)
from attention_kernels.sdpa.sdpa import sdpa_baseline, sdpa_np

__all__ = [
    "Strategy",
    "attention",
    "available_strategies",
    "validate_inputs",
    "sdpa_baseline",
    "sdpa_np",
]

if HAS_TRITON:
    from attention_kernels.sdpa.sdpa_tiled import sdpa_tiled

    __all__ += ["sdpa_tiled"]
