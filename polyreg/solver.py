"""Least squares by the normal equation.

The design matrix has powers along rows and observations along columns, so
for X of shape (p, N) the coefficients are

    theta = (X X^T)^-1 X y
"""

import numpy as np

from polyreg import linalg
from polyreg.errors import DimensionMismatch, InvalidInput


def fit(X: np.ndarray, y) -> np.ndarray:
    """Fit coefficients by least squares.

    ## parameters
    - X (ndarray): design matrix, shape (p, N)
    - y (array-like): responses, shape (N,)
    ## returns
    - theta (ndarray): coefficients, shape (p,)
    ## raises
    - DimensionMismatch: column count of X differs from len(y)
    - SingularMatrix: X X^T is not invertible
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)

    if X.ndim != 2:
        raise InvalidInput(f"Design matrix must be 2D, got shape {X.shape}")
    if y.ndim != 1:
        raise InvalidInput(f"Responses must be 1D, got shape {y.shape}")
    if X.shape[1] != y.shape[0]:
        raise DimensionMismatch(
            f"Inconsistent sample count: {X.shape[1]} columns, {y.shape[0]} responses"
        )

    Xt = linalg.transpose(X)
    gram = linalg.matmul(X, Xt)
    gram_inv = linalg.inverse(gram)
    Xy = linalg.matmul(X, y)

    return linalg.matmul(gram_inv, Xy)


def predict(X_new: np.ndarray, theta) -> np.ndarray:
    """Evaluate theta^T X_new, one prediction per column of X_new."""
    X_new = np.asarray(X_new, dtype=float)
    theta = np.asarray(theta, dtype=float)

    if X_new.ndim != 2 or theta.ndim != 1:
        raise InvalidInput(
            f"Expects 2D design and 1D coefficients, got {X_new.shape} and {theta.shape}"
        )
    if theta.shape[0] != X_new.shape[0]:
        raise DimensionMismatch(
            f"Degree mismatch: {theta.shape[0]} coefficients, "
            f"{X_new.shape[0]} design rows"
        )

    return linalg.matmul(theta, X_new)
