import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from bvp_solver.config import Config
from bvp_solver.main import main, resolve_problem


def run_cli(*argv):
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        status = main(list(argv))
    return status, buffer.getvalue()


class TestCLI(unittest.TestCase):
    def test_list_problems(self):
        status, output = run_cli("--list-problems")
        self.assertEqual(status, 0)
        for name in ("linear", "exponential", "damped", "harmonic", "cauchy_euler"):
            self.assertIn(name, output)

    def test_single_solve(self):
        status, output = run_cli("--problem", "linear", "--n-points", "11")
        self.assertEqual(status, 0)
        lines = output.strip().splitlines()
        # header, 11 rows, blank line, metrics
        self.assertIn("f(x)", lines[0])
        self.assertIn("Max error", output)
        self.assertEqual(len([l for l in lines[1:12] if l.strip()]), 11)

    def test_save_solution(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            status, _ = run_cli(
                "--problem", "exponential", "--n-points", "21", "--save", "--output-dir", tmp_dir
            )
            self.assertEqual(status, 0)
            with open(os.path.join(tmp_dir, "solution.json")) as f:
                data = json.load(f)
            self.assertEqual(len(data["f"]), 21)
            with open(os.path.join(tmp_dir, "metadata.json")) as f:
                metadata = json.load(f)
            self.assertEqual(metadata["problem"], "exponential")
            self.assertIn("metrics", metadata)

    def test_convergence(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            status, output = run_cli(
                "--problem", "exponential", "--convergence", "--save", "--output-dir", tmp_dir
            )
            self.assertEqual(status, 0)
            self.assertIn("order", output)
            self.assertTrue(os.path.exists(os.path.join(tmp_dir, "convergence_exponential.json")))

    def test_errors_return_nonzero(self):
        status, _ = run_cli("--problem", "poisson")
        self.assertEqual(status, 1)

        status, _ = run_cli("--n-points", "2")
        self.assertEqual(status, 1)

        status, _ = run_cli("--config", "/nonexistent/config.yaml")
        self.assertEqual(status, 1)

    def test_resolve_problem_overrides_drop_exact_solution(self):
        config = Config(
            None,
            overrides={
                "problem": {
                    "name": "harmonic",
                    "domain": [0.0, 1.0],
                    "boundary_conditions": {"left": 0.0, "right": 0.5},
                }
            },
        )
        problem = resolve_problem(config)

        self.assertEqual(problem.domain, (0.0, 1.0))
        self.assertEqual(problem.boundary_conditions, {"left": 0.0, "right": 0.5})
        self.assertIsNone(problem.exact_solution)


if __name__ == "__main__":
    unittest.main()
