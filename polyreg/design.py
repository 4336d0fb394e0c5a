import numpy as np

from polyreg.errors import InvalidInput


def check_degree(degree) -> int:
    """Validate a polynomial degree, returning it as int."""
    if isinstance(degree, bool) or not isinstance(degree, (int, np.integer)):
        raise InvalidInput(f"Degree must be an integer, not {degree!r}")
    if degree < 0:
        raise InvalidInput(f"Degree must be non-negative, not {degree}")
    return int(degree)


def build_design_matrix(x, degree: int) -> np.ndarray:
    """Create polynomial features of x up to a degree (including constant).
    ## parameters
    - x (array-like): explanatory values, shape (N,)
    - degree (int): maximum power
    ## returns
    - X (ndarray): design matrix, shape (degree + 1, N)
        - row k holds x**k, row 0 is all ones

    Note: powers are along rows and observations along columns.
    """
    degree = check_degree(degree)

    try:
        x = np.asarray(x, dtype=float)
    except (OverflowError, TypeError, ValueError) as e:
        raise InvalidInput(f"Non-numeric explanatory values: {e}") from e

    if x.ndim != 1:
        raise InvalidInput(f"Expects a 1D sequence of x, got shape {x.shape}")
    if x.size == 0:
        raise InvalidInput("Empty x, needs at least one observation")
    if not np.isfinite(x).all():
        raise InvalidInput("Explanatory values must be finite")

    X = np.empty((degree + 1, x.size), dtype=float)
    X[0, :] = 1  # constant term

    for k in range(1, degree + 1):
        X[k, :] = np.power(x, k)

    return X
