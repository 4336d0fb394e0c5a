"""Error kinds raised by the regression engine."""

import numpy as np


class RegressionError(ValueError):
    """Base class for all regression failures."""


class InvalidInput(RegressionError):
    """Malformed observations or degree, detected before any matrix work."""


class DimensionMismatch(RegressionError):
    """Matrix/vector shapes that do not line up."""


class SingularMatrix(RegressionError, np.linalg.LinAlgError):
    """The Gram matrix cannot be inverted."""
