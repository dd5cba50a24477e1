import math
import unittest

import numpy as np
import pytest

from bvp_solver.errors import CoefficientEvaluationError, InvalidDomainError
from bvp_solver.numerical_solvers.discretization import UniformGrid, discretize


def constant(value):
    return lambda x: value


class TestUniformGrid(unittest.TestCase):
    def test_grid_basic(self):
        g = UniformGrid(xmin=-1.0, xmax=2.0, n_points=7)
        self.assertAlmostEqual(g.dx, 0.5)

        x = g.x
        self.assertEqual(x.shape, (7,))
        self.assertEqual(x[0], -1.0)
        self.assertEqual(x[-1], 2.0)
        self.assertAlmostEqual(g.node(3), 0.5)
        self.assertEqual(list(g.interior_indices()), [1, 2, 3, 4, 5])

    def test_grid_validation(self):
        for xmin, xmax, n in [(0.0, 1.0, 2), (1.0, 1.0, 5), (2.0, 1.0, 5), (0.0, math.inf, 5)]:
            with self.assertRaises(InvalidDomainError):
                UniformGrid(xmin, xmax, n)
        with self.assertRaises(InvalidDomainError):
            UniformGrid(0.0, 1.0, 4.5)
        with self.assertRaises(InvalidDomainError):
            UniformGrid(0.0, 1.0, True)


class TestDiscretize(unittest.TestCase):
    def test_band_lengths_and_boundary_rows(self):
        sub, diag, sup, rhs = discretize(
            constant(1.0), constant(0.5), constant(-2.0), 0.0, 1.0, 9, 1.5, -0.5
        )
        for band in (sub, diag, sup, rhs):
            self.assertEqual(band.shape, (9,))

        self.assertEqual((sub[0], diag[0], sup[0], rhs[0]), (0.0, 1.0, 0.0, 1.5))
        self.assertEqual((sub[-1], diag[-1], sup[-1], rhs[-1]), (0.0, 1.0, 0.0, -0.5))
        np.testing.assert_array_equal(rhs[1:-1], 0.0)

    def test_interior_stencil_coefficients(self):
        # dx = 0.25 -> h/dx^2 = 32, g/(2 dx) = 6
        system = discretize(constant(2.0), constant(3.0), constant(4.0), 0.0, 1.0, 5, 0.0, 0.0)

        np.testing.assert_allclose(system.sub[1:-1], 26.0)
        np.testing.assert_allclose(system.diag[1:-1], -60.0)
        np.testing.assert_allclose(system.sup[1:-1], 38.0)

    def test_coefficients_use_node_coordinates(self):
        system = discretize(lambda x: x, constant(0.0), lambda x: x * x, 1.0, 2.0, 5, 0.0, 0.0)
        x = np.array([1.0, 1.25, 1.5, 1.75, 2.0])
        dx_sq = 0.0625

        np.testing.assert_allclose(system.sub[1:-1], x[1:-1] / dx_sq)
        np.testing.assert_allclose(system.diag[1:-1], x[1:-1] ** 2 - 2.0 * x[1:-1] / dx_sq)

    def test_evaluated_once_per_interior_node_in_order(self):
        calls = {"h": [], "g": [], "c": []}

        def recorder(name):
            def fn(x):
                calls[name].append(x)
                return 1.0

            return fn

        discretize(recorder("h"), recorder("g"), recorder("c"), 0.0, 1.0, 6, 0.0, 1.0)

        expected = [0.2, 0.4, 0.6, 0.8]
        for name in ("h", "g", "c"):
            np.testing.assert_allclose(calls[name], expected)
            # never at the boundary nodes
            self.assertTrue(all(0.0 < x < 1.0 for x in calls[name]))

    def test_single_interior_row(self):
        sub, diag, sup, rhs = discretize(constant(1.0), constant(0.0), constant(0.0), 0.0, 1.0, 3, 0.0, 1.0)
        self.assertEqual(len(diag), 3)
        self.assertEqual((sub[1], diag[1], sup[1]), (4.0, -8.0, 4.0))

    def test_coefficient_raising_is_wrapped(self):
        c = lambda x: 1.0 / (x - 0.5)

        with self.assertRaises(CoefficientEvaluationError) as ctx:
            discretize(constant(1.0), constant(0.0), c, 0.0, 1.0, 5, 0.0, 1.0)

        err = ctx.exception
        self.assertEqual(err.index, 2)
        self.assertEqual(err.x, 0.5)
        self.assertEqual(err.coefficient, "c")
        self.assertIsInstance(err.__cause__, ZeroDivisionError)

    def test_math_domain_error_is_wrapped(self):
        with pytest.raises(CoefficientEvaluationError) as excinfo:
            discretize(lambda x: math.log(x - 0.3), constant(0.0), constant(0.0), 0.0, 1.0, 11, 0.0, 1.0)
        assert excinfo.value.index == 1
        assert excinfo.value.coefficient == "h"

    def test_non_finite_coefficient(self):
        for bad in (math.nan, math.inf, -math.inf):
            with self.assertRaises(CoefficientEvaluationError) as ctx:
                discretize(constant(1.0), constant(bad), constant(0.0), 0.0, 1.0, 4, 0.0, 1.0)
            self.assertEqual(ctx.exception.index, 1)
            self.assertEqual(ctx.exception.coefficient, "g")

    def test_invalid_domain_before_evaluation(self):
        calls = []

        def h(x):
            calls.append(x)
            return 1.0

        for xmin, xmax, n in [(0.0, 1.0, 2), (0.0, 0.0, 11), (1.0, 0.0, 11)]:
            with self.assertRaises(InvalidDomainError):
                discretize(h, constant(0.0), constant(0.0), xmin, xmax, n, 0.0, 1.0)
        self.assertEqual(calls, [])

    def test_non_finite_boundary_value(self):
        with self.assertRaises(InvalidDomainError):
            discretize(constant(1.0), constant(0.0), constant(0.0), 0.0, 1.0, 5, math.nan, 1.0)

    def test_deterministic(self):
        args = (np.cos, np.sin, lambda x: -1.0 - x, 0.0, 3.0, 17, 0.3, -1.2)
        first = discretize(*args)
        second = discretize(*args)
        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)


if __name__ == "__main__":
    unittest.main()
