import logging
from typing import NamedTuple

import numpy as np

from bvp_solver.errors import InvalidSystemError, SingularSystemError
from bvp_solver.utils.types import ArrayLike

logger = logging.getLogger(__name__)


class TridiagonalSystem(NamedTuple):
    """
    Band storage of a tridiagonal linear system A x = rhs.

    Every band has the full system length N. ``sub[0]`` and ``sup[-1]`` fall
    outside the matrix and are kept at zero.
    ```
     _                                    _
    |  diag[0]  sup[0]                     |
    |  sub[1]   diag[1]  sup[1]            |
    |           *        *        *        |
    |_                   sub[N-1] diag[N-1]_|
    ```
    """

    sub: np.ndarray
    diag: np.ndarray
    sup: np.ndarray
    rhs: np.ndarray

    @property
    def size(self) -> int:
        return self.diag.shape[0]

    def to_dense(self) -> np.ndarray:
        """Dense copy of the matrix, for diagnostics only."""
        n = self.size
        matrix = np.diag(self.diag.astype(float))
        if n > 1:
            matrix += np.diag(self.sub[1:], k=-1) + np.diag(self.sup[:-1], k=1)
        return matrix

    def matvec(self, x: ArrayLike) -> np.ndarray:
        """Compute A x without forming A."""
        x = np.asarray(x, dtype=float)
        result = self.diag * x
        result[1:] += self.sub[1:] * x[:-1]
        result[:-1] += self.sup[:-1] * x[1:]
        return result

    def residual(self, x: ArrayLike) -> np.ndarray:
        return self.matvec(x) - self.rhs

    def solve(self) -> np.ndarray:
        return solve_tridiagonal(self.sub, self.diag, self.sup, self.rhs)


def _as_band(values: ArrayLike, name: str) -> np.ndarray:
    band = np.asarray(values, dtype=float)
    if band.ndim != 1:
        raise InvalidSystemError(f"{name} must be one-dimensional, got shape {band.shape}")
    return band


def solve_tridiagonal(
    sub: ArrayLike, diag: ArrayLike, sup: ArrayLike, rhs: ArrayLike
) -> np.ndarray:
    """
    Solve a tridiagonal system with the Thomas algorithm.

    The elimination is not pivoted. It is stable for diagonally dominant
    systems; an exactly zero pivot raises ``SingularSystemError`` while
    near-zero pivots are not detected and may yield non-finite values.

    Args:
        sub: Sub-diagonal, ``sub[i]`` multiplies ``x[i-1]`` (``sub[0]`` ignored)
        diag: Main diagonal
        sup: Super-diagonal, ``sup[i]`` multiplies ``x[i+1]`` (``sup[-1]`` ignored)
        rhs: Right-hand side

    Returns:
        Solution vector of the same length as the inputs
    """
    a = _as_band(sub, "sub")
    c = _as_band(sup, "sup")
    # Working copies, the caller's arrays are left untouched
    b = _as_band(diag, "diag").copy()
    d = _as_band(rhs, "rhs").copy()

    n = b.shape[0]
    if n == 0:
        raise InvalidSystemError("Cannot solve an empty system")
    if not (a.shape[0] == c.shape[0] == d.shape[0] == n):
        raise InvalidSystemError(
            f"Band lengths differ: sub={a.shape[0]}, diag={n}, sup={c.shape[0]}, rhs={d.shape[0]}"
        )

    # Forward sweep
    for i in range(1, n):
        if b[i - 1] == 0.0:
            raise SingularSystemError(i - 1)
        m = a[i] / b[i - 1]
        b[i] -= m * c[i - 1]
        d[i] -= m * d[i - 1]

    if b[n - 1] == 0.0:
        raise SingularSystemError(n - 1)

    # Back substitution
    x = np.empty(n, dtype=float)
    x[n - 1] = d[n - 1] / b[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = (d[i] - c[i] * x[i + 1]) / b[i]

    logger.debug("Thomas solve finished for system of size %d", n)
    return x
