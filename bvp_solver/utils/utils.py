"""Utility functions for the boundary-value solver."""

import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional, Union

import numpy as np

from .types import ArrayLike


def setup_logging(
    log_dir: str = "logs", level: Union[int, str] = logging.INFO, log_to_file: bool = True
) -> logging.Logger:
    """
    Setup logging configuration.

    :param log_dir: Directory to store log files
    :param level: Logging level, as a number or a name such as "DEBUG"
    :param log_to_file: Also write a timestamped log file in log_dir
    :return: Logger instance
    """
    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = numeric_level

    handlers = [logging.StreamHandler()]
    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handlers.append(logging.FileHandler(os.path.join(log_dir, f"solve_{timestamp}.log")))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    return logging.getLogger(__name__)


def compute_error_metrics(numerical: ArrayLike, exact: ArrayLike) -> Dict[str, float]:
    """
    Error metrics between a numerical and a reference solution.

    Args:
        numerical: Values computed on the grid
        exact: Reference values on the same grid

    Returns:
        Dictionary with the discrete L2 (root mean square), max and mean absolute errors
    """
    numerical = np.asarray(numerical, dtype=float)
    exact = np.asarray(exact, dtype=float)
    if numerical.shape != exact.shape:
        raise ValueError(f"shape mismatch: {numerical.shape} != {exact.shape}")

    diff = np.abs(numerical - exact)
    return {
        "l2_error": float(np.sqrt(np.mean(diff**2))),
        "max_error": float(np.max(diff)),
        "mean_error": float(np.mean(diff)),
    }


def save_solution(
    x: ArrayLike,
    f: ArrayLike,
    output_dir: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> str:
    """Save a solution to JSON.

    Args:
        x: Grid coordinates
        f: Solution values
        output_dir: Directory to save the files in
        metadata: Optional metadata about the run, merged into an existing metadata.json

    Returns:
        Path of the written solution file
    """
    os.makedirs(output_dir, exist_ok=True)

    solution_file = os.path.join(output_dir, "solution.json")
    with open(solution_file, "w") as fh:
        json.dump(
            {
                "x": np.asarray(x, dtype=float).tolist(),
                "f": np.asarray(f, dtype=float).tolist(),
            },
            fh,
            indent=2,
        )

    if metadata:
        metadata_file = os.path.join(output_dir, "metadata.json")
        merged = {}
        if os.path.exists(metadata_file):
            with open(metadata_file, "r") as fh:
                merged = json.load(fh)
        merged.update(metadata)
        merged["last_updated"] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        with open(metadata_file, "w") as fh:
            json.dump(merged, fh, indent=2)

    return solution_file


def plot_solution(
    x: ArrayLike,
    f: ArrayLike,
    exact: Optional[ArrayLike] = None,
    save_path: Optional[str] = None,
    title: Optional[str] = None,
):
    """
    Plot a numerical solution, optionally against an exact one.

    Args:
        x: Grid coordinates
        f: Numerical solution
        exact: Exact solution on the same grid
        save_path: Where to save the figure as PNG. If None, the figure is shown.
        title: Plot title

    Returns:
        The matplotlib figure
    """
    import matplotlib

    if save_path:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(x, f, "b-", linewidth=2, label="FDM")
    if exact is not None:
        ax.plot(x, exact, "r--", linewidth=2, label="Exact")
        max_error = np.max(np.abs(np.asarray(f) - np.asarray(exact)))
        ax.set_title(f"{title or 'Solution'} (Max Error = {max_error:.3e})")
    else:
        ax.set_title(title or "Solution")
    ax.set_xlabel("x")
    ax.set_ylabel("f(x)")
    ax.grid(True)
    ax.legend()
    fig.tight_layout()

    if save_path:
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(save_path, format="png", dpi=150)
        plt.close(fig)
        logging.getLogger(__name__).info("Solution plot saved to: %s", save_path)
    else:
        plt.show()

    return fig
