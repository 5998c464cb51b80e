"""Eigen decomposition backends for tournament matrices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import scipy.linalg

from eigenrank.core.constants import (
    DEFAULT_EIGEN_TOLERANCE,
    SOLVER_NUMPY,
    SOLVER_SCIPY,
)
from eigenrank.core.logging import get_logger, log_performance

if TYPE_CHECKING:
    from typing import Callable, Iterator

    from eigenrank.core.protocols import EigenSolver

logger = get_logger(__name__)


def _snap(array: np.ndarray, tolerance: float) -> np.ndarray:
    """Zero out real and imaginary parts within tolerance of zero."""
    if np.iscomplexobj(array):
        real = np.where(np.abs(array.real) <= tolerance, 0.0, array.real)
        imag = np.where(np.abs(array.imag) <= tolerance, 0.0, array.imag)
        if not imag.any():
            return real
        return real + 1j * imag
    return np.where(np.abs(array) <= tolerance, 0.0, array).astype(np.float64)


@dataclass(frozen=True)
class EigenDecomposition:
    """Eigenvalues and column eigenvectors of a tournament matrix."""

    values: np.ndarray
    vectors: np.ndarray
    tolerance: float = DEFAULT_EIGEN_TOLERANCE

    def __post_init__(self) -> None:
        if self.vectors.ndim != 2:
            raise ValueError("vectors must be a 2-D array of columns")
        if self.vectors.shape[1] != self.values.shape[0]:
            raise ValueError(
                f"{self.values.shape[0]} eigenvalues but "
                f"{self.vectors.shape[1]} eigenvectors"
            )

    @classmethod
    def from_raw(
        cls,
        values: np.ndarray,
        vectors: np.ndarray,
        tolerance: float = DEFAULT_EIGEN_TOLERANCE,
    ) -> EigenDecomposition:
        """Build a decomposition from solver output, snapping noise to zero."""
        values = _snap(np.asarray(values), tolerance)
        vectors = _snap(np.atleast_2d(np.asarray(vectors)), tolerance)
        values.flags.writeable = False
        vectors.flags.writeable = False
        return cls(values=values, vectors=vectors, tolerance=tolerance)

    @classmethod
    def empty(
        cls, tolerance: float = DEFAULT_EIGEN_TOLERANCE
    ) -> EigenDecomposition:
        return cls(
            values=np.zeros(0, dtype=np.float64),
            vectors=np.zeros((0, 0), dtype=np.float64),
            tolerance=tolerance,
        )

    def __len__(self) -> int:
        return int(self.values.shape[0])

    @property
    def is_complex(self) -> bool:
        return np.iscomplexobj(self.values) or np.iscomplexobj(self.vectors)

    def value(self, index: int) -> complex | float:
        return self.values[index]

    def vector(self, index: int) -> np.ndarray:
        return self.vectors[:, index]

    def is_real(self, index: int) -> bool:
        """Whether the pair at ``index`` has no imaginary component."""
        if not self.is_complex:
            return True
        return not (
            np.imag(self.values[index]).any()
            or np.imag(self.vectors[:, index]).any()
        )

    def pairs(self) -> Iterator[tuple[int, complex | float, np.ndarray]]:
        """Yield (index, eigenvalue, eigenvector) in solver order."""
        for index in range(len(self)):
            yield index, self.values[index], self.vectors[:, index]

    def dominant_order(self) -> list[int]:
        """Indices sorted by decreasing eigenvalue magnitude, ties in solver order."""
        return np.argsort(-np.abs(self.values), kind="stable").tolist()


def _check_square(matrix: np.ndarray) -> np.ndarray:
    matrix = np.asarray(matrix, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"expected a square matrix; got shape {matrix.shape}")
    return matrix


class NumpyEigenSolver:
    """Eigen decomposition through ``numpy.linalg.eig``."""

    name = SOLVER_NUMPY

    @log_performance(logger)
    def decompose(
        self,
        matrix: np.ndarray,
        tolerance: float = DEFAULT_EIGEN_TOLERANCE,
    ) -> EigenDecomposition:
        matrix = _check_square(matrix)
        if matrix.size == 0:
            return EigenDecomposition.empty(tolerance)
        values, vectors = np.linalg.eig(matrix)
        return EigenDecomposition.from_raw(values, vectors, tolerance)


class ScipyEigenSolver:
    """Eigen decomposition through ``scipy.linalg.eig``."""

    name = SOLVER_SCIPY

    @log_performance(logger)
    def decompose(
        self,
        matrix: np.ndarray,
        tolerance: float = DEFAULT_EIGEN_TOLERANCE,
    ) -> EigenDecomposition:
        matrix = _check_square(matrix)
        if matrix.size == 0:
            return EigenDecomposition.empty(tolerance)
        values, vectors = scipy.linalg.eig(matrix, check_finite=True)
        return EigenDecomposition.from_raw(values, vectors, tolerance)


_SOLVERS: dict[str, Callable[[], EigenSolver]] = {
    SOLVER_NUMPY: NumpyEigenSolver,
    SOLVER_SCIPY: ScipyEigenSolver,
}


def get_eigen_solver(name: str) -> EigenSolver:
    """Get an eigen solver by name.

    Args:
        name: "numpy" or "scipy".

    Returns:
        Solver instance.
    """
    try:
        return _SOLVERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown eigen solver {name!r}; choose from {sorted(_SOLVERS)}"
        ) from None
