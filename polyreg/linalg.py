"""Dense matrix primitives used by the solver, backed by numpy.

Only three operations are needed: transpose, matrix product and inverse of a
square matrix. The inverse is LU based (LAPACK `gesv` through
`np.linalg.inv`) and refuses matrices that are singular up to a relative
tolerance on the singular values, instead of returning a pseudo-inverse.
"""

import numpy as np

from polyreg.errors import DimensionMismatch, SingularMatrix

# Relative tolerance on singular values. None uses the `np.linalg.matrix_rank`
# default: max(shape) * eps.
SINGULAR_RTOL: float | None = None


def transpose(A: np.ndarray) -> np.ndarray:
    return np.transpose(A)


def matmul(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """Matrix product, with 1D `B` treated as a column."""
    if A.shape[-1] != B.shape[0]:
        raise DimensionMismatch(f"Cannot multiply {A.shape} by {B.shape}")
    return A @ B


def is_singular(G: np.ndarray, rtol: float | None = None) -> bool:
    """Rank deficiency test on a square matrix.

    G counts as singular when its smallest singular value is at most
    `s_max * rtol`.
    """
    if rtol is None:
        rtol = SINGULAR_RTOL
    if rtol is None:
        rtol = max(G.shape) * np.finfo(G.dtype).eps

    s = np.linalg.svd(G, compute_uv=False)
    return not np.isfinite(s).all() or s[-1] <= s[0] * rtol


def inverse(G: np.ndarray, rtol: float | None = None) -> np.ndarray:
    """Inverse of a square matrix.

    ## raises
    - DimensionMismatch: G is not square.
    - SingularMatrix: G is singular within `rtol`.
    """
    if G.ndim != 2 or G.shape[0] != G.shape[1]:
        raise DimensionMismatch(f"Can only invert square matrices, not {G.shape}")

    if is_singular(G, rtol):
        raise SingularMatrix(f"Singular {G.shape[0]}x{G.shape[1]} Gram matrix")

    try:
        return np.linalg.inv(G)
    except np.linalg.LinAlgError as e:
        raise SingularMatrix(str(e)) from e
