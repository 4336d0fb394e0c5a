"""
Utilities

- prediction grid
- polynomial formatting
"""

import numpy as np
import polars as pl


def get_grid(
    steps: int,
    x_range: tuple[float, float],
    name: str = "x",
) -> pl.DataFrame:
    """Get an evenly spaced grid of x values.

    ## Parameters
    - steps (int): Number of points
    - x_range (tuple): (min, max), both included
    - name (str): column name

    ## Returns
    - grid (DataFrame): single float column.
    """
    if len(x_range) != 2:
        raise ValueError(f"Expects range as (min,max), not {x_range}")
    if steps < 2:
        print(f"WARNING: {steps} < 2 steps, gives only minimum value")

    return pl.DataFrame(
        {name: np.linspace(x_range[0], x_range[1], max(steps, 1), dtype=float)}
    )


def polynomial_string(theta, variable: str = "x", precision: int = 6) -> str:
    """Format coefficients (lowest power first) as an equation.

    Terms smaller than 10**-precision are dropped.
    """
    terms = []
    for power, coef in enumerate(theta):
        if abs(coef) < 10 ** (-precision):
            continue

        sign = " - " if coef < 0 else (" + " if terms else " ")
        if not terms and coef < 0:
            sign = " -"

        value = f"{abs(coef):.{precision}g}"
        if power == 0:
            terms.append(sign + value)
        elif power == 1:
            terms.append(sign + value + variable)
        else:
            terms.append(sign + value + variable + "^" + str(power))

    if not terms:
        return "y = 0"
    return "y =" + "".join(terms)
