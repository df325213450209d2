#attention kernel configuration
# runtime / scheduling
import numpy as np


class KernelConfig:
    TILE_SIZE             = 16           # side of the square GEMM / transpose tile
    MIN_TILE_SIZE         = 16           # tl.dot needs every block dim >= 16
    NUM_WARPS             = 4            # warps per program (block) on a real device
    DTYPE                 = np.float32   # single precision everywhere
    ACC_DTYPE             = np.float64   # softmax denominator in the sequential path

    # softmax block: one program covers the whole score vector
    MIN_SOFTMAX_BLOCK     = 16
    MAX_SOFTMAX_BLOCK     = 1 << 20      # largest tensor triton will build (TRITON_MAX_TENSOR_NUMEL)


class ToleranceConfig:
    ATOL                  = 1e-6         # softmax parallel vs sequential
    RTOL                  = 1e-5         # tiled GEMM vs naive loops
    STRATEGY_ATOL         = 1e-5         # attention parallel vs sequential


class ExampleConfig:
    SEQ_LEN               = 4
    HEAD_DIM              = 4

    # worked example: only key row 0 overlaps with the query
    QUERY                 = [1.0, 0.0, 0.0, 0.0]
    KEYS                  = [[1.0, 0.0, 0.0, 0.0],
                             [0.0, 0.0, 0.0, 0.0],
                             [0.0, 0.0, 0.0, 0.0],
                             [0.0, 0.0, 0.0, 0.0]]
    VALUES                = [[10.0, 20.0, 30.0, 40.0],
                             [1.0, 1.0, 1.0, 1.0],
                             [1.0, 1.0, 1.0, 1.0],
                             [1.0, 1.0, 1.0, 1.0]]
