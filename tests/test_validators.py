"""Tolerance helpers used by the kernel tests."""
import numpy as np
import pytest

from attention_kernels.validators import Tol, check_allclose, max_abs_diff, strategies_agree


def test_check_allclose_passes_within_tolerance():
    ref = np.array([0.25, 0.25, 0.5], dtype=np.float32)

    check_allclose("weights", ref + np.float32(1e-7), ref, kind="softmax")


def test_check_allclose_rejects_shape_mismatch():
    # (3,) against (1, 3) would broadcast in a plain allclose
    ref = np.array([1.0, 2.0, 3.0])

    with pytest.raises(AssertionError, match="shape mismatch"):
        check_allclose("out", ref.reshape(1, 3), ref)


def test_check_allclose_rejects_large_error():
    ref = np.zeros(4)

    with pytest.raises(AssertionError):
        check_allclose("out", ref + 1e-3, ref, tol=Tol(1e-6, 0.0))


def test_strategies_agree():
    seq = np.array([1.0, 2.0], dtype=np.float32)

    assert strategies_agree(seq, seq + np.float32(1e-6))
    assert not strategies_agree(seq, seq + np.float32(1e-2))
    assert not strategies_agree(seq, seq.reshape(1, 2))


def test_max_abs_diff():
    assert max_abs_diff([1.0, -2.0], [1.5, -2.0]) == pytest.approx(0.5)
    assert max_abs_diff([], []) == 0.0
