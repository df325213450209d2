from dataclasses import dataclass

import numpy as np

from attention_kernels.config import ToleranceConfig as TC


@dataclass
class Tol:
    atol: float
    rtol: float


DEFAULT_TOLS = {
    "softmax": Tol(TC.ATOL, 0.0),
    "gemm": Tol(TC.ATOL, TC.RTOL),
    "attention": Tol(TC.STRATEGY_ATOL, TC.RTOL),
}


def max_abs_diff(got, ref) -> float:
    got = np.asarray(got, dtype=np.float64)
    ref = np.asarray(ref, dtype=np.float64)
    return float(np.max(np.abs(got - ref))) if ref.size else 0.0


def check_allclose(name, got, ref, kind="attention", tol: Tol | None = None):
    got = np.asarray(got)
    ref = np.asarray(ref)
    if tol is None:
        tol = DEFAULT_TOLS[kind]
    np.testing.assert_equal(got.shape, ref.shape, err_msg=f"{name}: shape mismatch")
    np.testing.assert_allclose(got, ref, atol=tol.atol, rtol=tol.rtol, err_msg=f"{name}: allclose failed")


def strategies_agree(seq_out, par_out, tol: Tol | None = None) -> bool:
    """True when the sequential and parallel outputs match within tolerance."""
    if tol is None:
        tol = DEFAULT_TOLS["attention"]
    seq_out = np.asarray(seq_out)
    par_out = np.asarray(par_out)
    return seq_out.shape == par_out.shape and bool(
        np.allclose(par_out, seq_out, atol=tol.atol, rtol=tol.rtol)
    )
