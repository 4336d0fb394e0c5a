import unittest

import numpy as np

from polyreg.design import build_design_matrix
from polyreg.errors import InvalidInput


class TestDesignMatrix(unittest.TestCase):
    def setUp(self) -> None:
        self.x = [-1.5, 0.0, 0.5, 2.0, 3.0]

    def test_poly_1d(self):
        X = build_design_matrix([1, 2, 3], 3)
        X_correct = np.array([[1, 1, 1], [1, 2, 3], [1, 4, 9], [1, 8, 27]])
        self.assertEqual(X.shape, X_correct.shape, "incorrect shape")
        self.assertTrue((X == X_correct).all(), "incorrect array values")

    def test_degrees_0_to_5(self):
        for degree in range(6):
            X = build_design_matrix(self.x, degree)

            self.assertEqual(X.shape, (degree + 1, len(self.x)), "incorrect shape")
            self.assertListEqual(X[0].tolist(), [1.0] * len(self.x), "row 0 not ones")
            for k in range(degree + 1):
                self.assertListEqual(
                    X[k].tolist(),
                    [pow(v, k) for v in self.x],
                    f"incorrect powers in row {k}",
                )

    def test_degree_zero(self):
        X = build_design_matrix([0.0, 4.0], 0)
        self.assertListEqual(X.tolist(), [[1.0, 1.0]])

    def test_zero_to_the_zero(self):
        X = build_design_matrix([0.0], 2)
        self.assertListEqual(X[:, 0].tolist(), [1.0, 0.0, 0.0])

    def test_high_degree(self):
        X = build_design_matrix([2.0], 20)
        self.assertEqual(X[20, 0], 2.0**20)

    def test_not_repeated_squaring(self):
        # x**3, not x doubled up three times
        X = build_design_matrix([3.0], 3)
        self.assertEqual(X[3, 0], 27.0)

    def test_empty(self):
        with self.assertRaises(InvalidInput):
            build_design_matrix([], 2)

    def test_negative_degree(self):
        with self.assertRaises(InvalidInput):
            build_design_matrix(self.x, -1)

    def test_non_integer_degree(self):
        for degree in [1.5, "2", True, None]:
            with self.assertRaises(InvalidInput):
                build_design_matrix(self.x, degree)

    def test_non_numeric_x(self):
        with self.assertRaises(InvalidInput):
            build_design_matrix(["a", "b"], 1)

    def test_non_finite_x(self):
        with self.assertRaises(InvalidInput):
            build_design_matrix([1.0, np.nan], 1)

    def test_input_unchanged(self):
        x = np.array(self.x)
        build_design_matrix(x, 3)
        self.assertListEqual(x.tolist(), self.x)


if __name__ == "__main__":
    unittest.main()
