"""Tiled GEMM / transpose kernels vs the naive loops and torch."""
import numpy as np
import pytest
import torch

from attention_kernels.common_kernels.baseline import gemm_baseline, transpose_baseline
from attention_kernels.common_kernels.kernels import as_matrix, as_vector, gemm, transpose
from attention_kernels.errors import ShapeMismatchError

# rows, inner, cols spanning values below, at and above the 16-wide tile
GEMM_SHAPES = [
    (1, 1, 1),
    (1, 4, 4),
    (5, 7, 3),
    (16, 16, 16),
    (17, 33, 20),
    (40, 3, 35),
    (1, 50, 64),
]


@pytest.mark.parametrize("M,K,N", GEMM_SHAPES)
def test_gemm_matches_naive_loops(M, K, N, rng, to_device):
    A = rng.standard_normal((M, K)).astype(np.float32)
    B = rng.standard_normal((K, N)).astype(np.float32)

    C = gemm(to_device(A), to_device(B)).cpu().numpy()
    expected = gemm_baseline(A, B)

    assert C.shape == (M, N)
    np.testing.assert_allclose(C, expected, rtol=1e-5, atol=1e-5)


def test_gemm_matches_torch(rng, to_device):
    A = rng.standard_normal((23, 19)).astype(np.float32)
    B = rng.standard_normal((19, 31)).astype(np.float32)

    C = gemm(to_device(A), to_device(B)).cpu()
    expected = torch.matmul(torch.from_numpy(A).double(), torch.from_numpy(B).double())

    torch.testing.assert_close(C.double(), expected, rtol=1e-5, atol=1e-5)


def test_gemm_larger_tile(rng, to_device):
    A = rng.standard_normal((9, 70)).astype(np.float32)
    B = rng.standard_normal((70, 12)).astype(np.float32)

    C = gemm(to_device(A), to_device(B), tile_size=32).cpu().numpy()

    np.testing.assert_allclose(C, A.astype(np.float64) @ B, rtol=1e-5, atol=1e-5)


def test_gemm_writes_into_out(rng, to_device):
    A = to_device(rng.standard_normal((3, 5)))
    B = to_device(rng.standard_normal((5, 2)))
    out = torch.full((3, 2), 123.0, device=A.device)

    result = gemm(A, B, out=out)

    assert result is out
    np.testing.assert_allclose(out.cpu().numpy(), gemm_baseline(A.cpu().numpy(), B.cpu().numpy()),
                               rtol=1e-5, atol=1e-5)


def test_gemm_inner_mismatch_raises(to_device):
    with pytest.raises(ShapeMismatchError):
        gemm(to_device(np.ones((3, 4))), to_device(np.ones((5, 2))))


def test_gemm_rejects_vectors(to_device):
    with pytest.raises(ShapeMismatchError):
        gemm(to_device(np.ones(4)), to_device(np.ones((4, 2))))


@pytest.mark.parametrize("tile_size", [8, 24, 0])
def test_invalid_tile_size(tile_size, to_device):
    with pytest.raises(ValueError):
        gemm(to_device(np.ones((2, 2))), to_device(np.ones((2, 2))), tile_size=tile_size)


def test_gemm_baseline_mismatch_raises():
    with pytest.raises(ShapeMismatchError):
        gemm_baseline(np.ones((2, 3)), np.ones((2, 3)))


@pytest.mark.parametrize("shape", [(1, 1), (1, 7), (7, 1), (16, 16), (17, 40), (33, 5)])
def test_transpose_is_exact(shape, rng, to_device):
    M = rng.standard_normal(shape).astype(np.float32)

    Mt = transpose(to_device(M)).cpu().numpy()

    assert Mt.shape == shape[::-1]
    np.testing.assert_array_equal(Mt, M.T)
    np.testing.assert_array_equal(transpose_baseline(M), M.T)


@pytest.mark.parametrize("shape", [(3, 29), (16, 48), (21, 21)])
def test_transpose_involution(shape, rng, to_device):
    M = to_device(rng.standard_normal(shape))

    assert torch.equal(transpose(transpose(M)), M)


def test_transpose_out_shape_checked(to_device):
    with pytest.raises(ShapeMismatchError):
        transpose(to_device(np.ones((2, 3))), out=torch.empty((2, 3)))


def test_vector_views_share_storage(to_device):
    vec = to_device(np.arange(5))

    mat = as_matrix(vec)
    assert mat.shape == (1, 5)
    assert mat.data_ptr() == vec.data_ptr()

    back = as_vector(mat)
    assert back.shape == (5,)
    assert back.data_ptr() == vec.data_ptr()


def test_as_vector_rejects_multi_row(to_device):
    with pytest.raises(ShapeMismatchError):
        as_vector(to_device(np.ones((2, 3))))
