"""Protocol definitions for pluggable ranking components."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import numpy as np

    from eigenrank.core.eigen import EigenDecomposition


@runtime_checkable
class EigenSolver(Protocol):
    """Protocol for eigen decomposition backends.

    Any linear algebra library can back the rank selector as long as it
    returns eigenvalues and column eigenvectors aligned to player ids.
    """

    name: str

    def decompose(
        self,
        matrix: np.ndarray,
        tolerance: float,
    ) -> EigenDecomposition:
        """Decompose a real square matrix.

        Args:
            matrix: Square real matrix.
            tolerance: Magnitudes at or below this are snapped to zero.

        Returns:
            EigenDecomposition whose k-th column eigenvector pairs with the
            k-th eigenvalue.
        """
        ...
