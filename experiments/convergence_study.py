"""Grid refinement study over every catalogued problem with an exact solution."""

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path

from bvp_solver.config import Config
from bvp_solver.convergence import convergence_study
from bvp_solver.problems import get_problem, list_problems
from bvp_solver.utils import setup_logging


def run_all(levels, output_dir: Path) -> Path:
    logger = logging.getLogger(__name__)
    results = {}

    for name in list_problems():
        problem = get_problem(name)
        if problem.exact_solution is None:
            logger.info("Skipping %s, no exact solution", name)
            continue
        results[name] = convergence_study(problem, levels)
        orders = ", ".join(f"{p:.3f}" for p in results[name]["observed_orders"])
        logger.info("%s observed orders: %s", name, orders)

    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    report_path = output_dir / f"convergence_{timestamp}.json"
    with open(report_path, "w") as f:
        json.dump({"levels": list(levels), "results": results}, f, indent=2)

    logger.info("Report saved to %s", report_path)
    return report_path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the convergence study for all problems")
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file")
    args = parser.parse_args()

    config = Config(args.config) if args.config else Config()
    setup_logging(config.logging.log_dir, config.logging.level, config.logging.log_to_file)
    run_all(config.solver.convergence_levels, Path(config.output.output_dir))
