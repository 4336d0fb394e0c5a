from dataclasses import dataclass

import numpy as np
import polars as pl
from tqdm import tqdm

import polyreg.utility_functions as util
from polyreg import solver, stats
from polyreg.design import build_design_matrix, check_degree
from polyreg.errors import DimensionMismatch, InvalidInput
from polyreg.series import Prediction, VectorSeries, ordinalize, vectorize

# Default degree for the model polynomials
DEFAULT_POLYNOMIAL_DEGREE = 2


@dataclass(frozen=True, eq=False)
class Model:
    """Fitted polynomial coefficients, lowest power first.

    `ordinal` records that x was replaced by its position during training, so
    prediction inputs get the same encoding.
    """

    theta: np.ndarray
    degree: int
    ordinal: bool = False

    def __post_init__(self):
        degree = check_degree(self.degree)
        theta = np.array(self.theta, dtype=float)
        if theta.ndim != 1 or theta.shape[0] != degree + 1:
            raise DimensionMismatch(
                f"Degree {degree} needs {degree + 1} coefficients, got {theta.shape}"
            )
        theta.setflags(write=False)

        object.__setattr__(self, "theta", theta)
        object.__setattr__(self, "degree", degree)

    def __str__(self) -> str:
        lines = [
            f"Polynomial model (degree: {self.degree})",
            util.polynomial_string(self.theta),
        ]
        if self.ordinal:
            lines.append("x: ordinal position")
        return "\n".join(lines)

    @property
    def polynomial(self) -> np.polynomial.Polynomial:
        return np.polynomial.Polynomial(self.theta)


def build_model(
    observations,
    degree: int | None = DEFAULT_POLYNOMIAL_DEGREE,
    ordinal: bool | None = None,
    verbose=False,
) -> Model:
    """Fit a polynomial to observations by least squares.

    ## parameters
    - observations: (x, y) pairs, records or parallel columns (see `vectorize`)
    - degree (int | None): maximum power of x
        - None: DEFAULT_POLYNOMIAL_DEGREE
    - ordinal (bool | None): fit on positions instead of x values.
        - None: only if some x is not a number
    - verbose (bool): print fit information

    ## returns
    - model (Model)
    """
    if degree is None:
        degree = DEFAULT_POLYNOMIAL_DEGREE
    degree = check_degree(degree)
    series = vectorize(observations, ordinal=ordinal)
    return fit_series(series, degree, verbose=verbose)


def fit_series(series: VectorSeries, degree: int, verbose=False) -> Model:
    """Fit a model on already vectorized observations."""
    if series.y is None:
        raise InvalidInput("Fitting requires responses (y)")

    X = build_design_matrix(series.x, degree)
    N, M = X.shape

    if verbose:
        print(f"{M} samples\n{N} poly features")

        if M < N:
            print("Note: under-determined system")

    theta = solver.fit(X, series.y)

    if verbose:
        print(f"coefficients: {theta}")

    return Model(theta, degree, ordinal=series.ordinal)


def apply_model(observations, model: Model) -> list[Prediction]:
    """Predict y for new observations.

    ## returns
    - predictions (list[Prediction]): (x, y) in input order, where x is the label
    if the observation has one.
    """
    if not isinstance(model, Model):
        raise InvalidInput(f"Expects a Model, not {type(model).__name__}")

    if model.ordinal:
        series = ordinalize(observations)
    else:
        series = vectorize(observations, ordinal=False, require_y=False)

    X_new = build_design_matrix(series.x, model.degree)
    y_pred = solver.predict(X_new, model.theta)

    return [Prediction(x, y) for x, y in zip(series.display_x, y_pred.tolist())]


class PolynomialModel:
    """Polynomial regression on a DataFrame"""

    def __init__(
        self,
        samples: pl.DataFrame,
        degree: int = DEFAULT_POLYNOMIAL_DEGREE,
        x: str = "x",
        target: str = "y",
        label: str | None = None,
        ordinal: bool | None = None,
        verbose=False,
    ) -> None:
        self.degree = check_degree(degree)
        self.x = x
        self.target = target
        self.label = label

        self.series = vectorize(self._columns(samples, target=True), ordinal=ordinal)
        self.model = fit_series(self.series, self.degree, verbose=verbose)

    def __str__(self) -> str:
        lines = [
            str(self.model),
            f"{len(self.series)} samples",
        ]
        return "\n".join(lines)

    @property
    def beta(self) -> np.ndarray:
        return self.model.theta

    @property
    def polynomial(self) -> np.polynomial.Polynomial:
        return self.model.polynomial

    @property
    def x_range(self) -> tuple[float, float]:
        return float(self.series.x.min()), float(self.series.x.max())

    @property
    def yhat(self) -> np.ndarray:
        """Prediction of training data"""
        X = build_design_matrix(self.series.x, self.degree)
        return solver.predict(X, self.beta)

    @property
    def residuals(self) -> np.ndarray:
        return self.series.y - self.yhat

    @property
    def r_squared(self) -> float:
        return stats.r_squared(self.series.y, self.yhat)

    def predict(self, samples: pl.DataFrame) -> pl.DataFrame:
        """Predict new samples, adding a `y_pred` column."""
        predictions = apply_model(self._columns(samples, target=False), self.model)

        return samples.with_columns(
            y_pred=pl.Series([p.y for p in predictions], dtype=pl.Float64)
        )

    def prediction_grid(self, steps=100) -> pl.DataFrame:
        """Evaluate the polynomial on an even grid over the training range"""
        if self.model.ordinal:
            raise InvalidInput("No prediction grid for ordinal x")

        grid = util.get_grid(steps, self.x_range, name=self.x)
        return self.predict(grid)

    def _columns(self, samples: pl.DataFrame, target: bool) -> dict[str, list]:
        """Select x (and target, label) as parallel columns."""
        if not isinstance(samples, pl.DataFrame):
            raise InvalidInput(f"Expects a DataFrame, not {type(samples).__name__}")

        names = {"x": self.x}
        if target:
            names["y"] = self.target
        if self.label is not None and self.label in samples.columns:
            names["label"] = self.label

        missing = [c for c in names.values() if c not in samples.columns]
        if missing:
            raise InvalidInput(f"Missing columns: {missing}")

        return {k: samples[c].to_list() for k, c in names.items()}


def fit_groups(
    samples: pl.DataFrame,
    by: str | list[str],
    degree: int = DEFAULT_POLYNOMIAL_DEGREE,
    x: str = "x",
    target: str = "y",
    label: str | None = None,
    ordinal: bool | None = None,
    verbose=False,
) -> dict[tuple, Model]:
    """Fit one model per group of rows.

    ## returns
    - models (dict[tuple, Model]): keyed by tuples of group values, in order of
    first appearance.
    """
    degree = check_degree(degree)
    groups = samples.partition_by(by, as_dict=True, maintain_order=True)

    items = groups.items()
    if verbose:
        print(f"Fitting {len(groups)} groups")
        items = tqdm(items, total=len(groups))

    models = {}
    for key, group in items:
        if not isinstance(key, tuple):
            key = (key,)
        models[key] = PolynomialModel(
            group,
            degree,
            x=x,
            target=target,
            label=label,
            ordinal=ordinal,
        ).model

    return models
