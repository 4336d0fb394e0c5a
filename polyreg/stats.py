from typing import Literal

import numpy as np
import polars as pl

stat_type = Literal["all", "mean", "std", "median", "min", "max", "rmse", "mae"]


def residual_stats(
    samples: pl.DataFrame,
    target: str,
    prediction: str = "y_pred",
    stat: stat_type | list[stat_type] = "all",
) -> pl.DataFrame:
    """Aggregate residuals (target - prediction).

    ## Returns
    - stats (DataFrame): one row, one column per statistic.
    """

    if stat == "all":
        stat = ["mean", "std", "median", "min", "max", "rmse", "mae"]
    elif isinstance(stat, str):
        stat = [stat]

    residual = pl.col(target) - pl.col(prediction)
    aggs = {
        "mean": residual.mean().alias("mean"),
        "std": residual.std().alias("std"),
        "median": residual.median().alias("median"),
        "min": residual.min().alias("min"),
        "max": residual.max().alias("max"),
        "rmse": (residual**2).mean().sqrt().alias("rmse"),
        "mae": residual.abs().mean().alias("mae"),
    }

    unknown = set(stat) - set(aggs.keys())
    if unknown:
        raise ValueError(f"Unsupported statistics: {sorted(unknown)}")

    return samples.select(*[aggs[k] for k in stat])


def r_squared(y_true, y_pred) -> float:
    """Coefficient of determination. NaN when y_true is constant."""
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    if y_true.shape != y_pred.shape:
        raise ValueError("Need arrays of same shape")

    ss_res = float(np.sum((y_true - y_pred) ** 2))
    ss_tot = float(np.sum((y_true - np.mean(y_true)) ** 2))
    return 1.0 - ss_res / ss_tot if ss_tot > 0 else float("nan")
