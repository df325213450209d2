"""
Kernel call: run both attention strategies on the worked example and check
that they agree.

This demonstrates:
1. Preparing Q, K, V
2. Calling the sequential reference and (when available) the tiled kernels
3. Measuring execution time
4. Comparing the results

Run with ``python -m attention_kernels`` (set TRITON_INTERPRET=1 to run the
tiled kernels on CPU).
"""
import sys
import time

import numpy as np

from attention_kernels.config import ExampleConfig as EC
from attention_kernels.sdpa import Strategy, attention, available_strategies, sdpa_np
from attention_kernels.validators import max_abs_diff, strategies_agree


def run_kernel_with_timing():
    """Returns True when every available strategy matches the reference."""
    print("=" * 70)
    print("Single-Query Attention - Execution with Timing")
    print("=" * 70)

    print("\n[CONFIG]")
    print(f"  Sequence length (seq_len): {EC.SEQ_LEN}")
    print(f"  Head dimension (d): {EC.HEAD_DIM}")

    Q = np.asarray(EC.QUERY, dtype=np.float32)
    K = np.asarray(EC.KEYS, dtype=np.float32)
    V = np.asarray(EC.VALUES, dtype=np.float32)

    print("\n[INPUT PREPARATION]")
    print(f"  Q shape: {Q.shape}, dtype: {Q.dtype}")
    print(f"  K shape: {K.shape}, dtype: {K.dtype}")
    print(f"  V shape: {V.shape}, dtype: {V.dtype}")

    strategies = available_strategies()
    print(f"\n[STRATEGIES] {', '.join(s.value for s in strategies)}")
    if Strategy.PARALLEL not in strategies:
        print("  parallel unavailable: no CUDA device and TRITON_INTERPRET is not set")

    results = {}
    for strategy in strategies:
        start = time.time()
        results[strategy] = attention(Q, K, V, strategy=strategy)
        elapsed = time.time() - start
        print(f"\n[{strategy.value.upper()}]")
        print(f"  Output: {results[strategy].tolist()}")
        print(f"  Execution time: {elapsed*1000:.2f} ms")

    expected = sdpa_np(Q, K, V)
    reference = results[Strategy.SEQUENTIAL]
    ok = strategies_agree(reference, expected)
    print("\n===== Results =====")
    print(f"  sequential vs numpy: max diff {max_abs_diff(reference, expected):.3e}")
    if Strategy.PARALLEL in results:
        parallel = results[Strategy.PARALLEL]
        ok = ok and strategies_agree(reference, parallel)
        print(f"  sequential vs parallel: max diff {max_abs_diff(reference, parallel):.3e}")

    print("\n✓ PASSED" if ok else "\n✗ FAILED")
    return ok


if __name__ == "__main__":
    sys.exit(0 if run_kernel_with_timing() else 1)
