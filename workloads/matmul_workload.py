"""
Matrix Multiplication Workload

Simulates compute-intensive scientific computing with NumPy.
"""

import numpy as np

from harness.errors import ConfigError
from .base_workload import BaseWorkload


class MatMulWorkload(BaseWorkload):
    """
    Square matrix multiplication (NumPy).

    Each worker owns its matrices and output buffer. NumPy releases the GIL
    inside matmul, so threads run in parallel. Reports GFLOP/s, counting
    2 * n^3 floating point operations per multiplication.

    The BLAS library behind NumPy may spread a single multiplication over
    several cores, so the 1-thread run is not confined to one core and the
    single vs multi ratio understates thread scaling. Set OPENBLAS_NUM_THREADS
    (or OMP_NUM_THREADS / MKL_NUM_THREADS) to 1 for a one-core baseline.
    """

    def __init__(self, name: str, matrix_size: int = 256, seed: int = 42):
        super().__init__(name)
        self.matrix_size = matrix_size
        self.seed = seed

    def validate_config(self) -> bool:
        if self.matrix_size <= 0:
            raise ConfigError(f"matrix_size must be positive, got {self.matrix_size}")
        if self.matrix_size > 16384:
            raise ConfigError(f"matrix_size too large (max 16384), got {self.matrix_size}")
        return True

    def flops_per_operation(self) -> int:
        return 2 * (self.matrix_size ** 3)

    def setup(self):
        rng = np.random.default_rng(self.seed)
        n = self.matrix_size
        matrix_a = rng.random((n, n))
        matrix_b = rng.random((n, n))
        result = np.zeros((n, n), dtype=np.float64)

        def multiply():
            np.matmul(matrix_a, matrix_b, out=result)

        return multiply

    def report(self, total: int, duration: float) -> str:
        return f"{total * self.flops_per_operation() / duration / 1e9:.2f} GFLOP/s"
