import numpy as np
import polars as pl

import polyreg.models as pmodels
from polyreg.stats import residual_stats


def main():
    rng = np.random.default_rng(1)
    x = np.linspace(-5, 5, 40)
    samples = pl.DataFrame({"x": x, "y": 2 - x + 0.3 * x**2 + rng.normal(size=x.size)})

    model = pmodels.PolynomialModel(samples, degree=2, verbose=True)
    print(model)

    fitted = model.predict(samples)
    print(residual_stats(fitted, "y"))

    weekly = [("mon", 3.0), ("tue", 4.5), ("wed", 5.5), ("thu", 7.0), ("fri", 9.5)]
    trend = pmodels.build_model(weekly, 2)
    print(trend)
    for p in pmodels.apply_model(["mon", "tue", "wed", "thu", "fri", "sat"], trend):
        print(f"{p.x}: {p.y:.2f}")


if __name__ == "__main__":
    main()
