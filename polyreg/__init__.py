from polyreg.design import build_design_matrix
from polyreg.errors import DimensionMismatch, InvalidInput, RegressionError, SingularMatrix
from polyreg.models import (
    DEFAULT_POLYNOMIAL_DEGREE,
    Model,
    PolynomialModel,
    apply_model,
    build_model,
    fit_groups,
)
from polyreg.series import Observation, Prediction, VectorSeries, ordinalize, vectorize
from polyreg.solver import fit, predict
