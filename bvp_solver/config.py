import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config.yaml"
)


@dataclass
class ProblemConfig:
    name: str
    domain: Optional[List[float]]
    boundary_conditions: Optional[Dict[str, float]]


@dataclass
class SolverConfig:
    n_points: int
    convergence_levels: List[int]


@dataclass
class LoggingConfig:
    level: str
    log_dir: str
    log_to_file: bool


@dataclass
class OutputConfig:
    output_dir: str
    save_plots: bool
    save_solution: bool


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the configuration from a YAML file.

    Args:
        config_path: Path to the configuration file. If None, uses the default path.

    Returns:
        Dictionary with configuration parameters
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    return config or {}


def merge_configs(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configuration dictionaries, with override_config taking precedence.

    Args:
        base_config: Base configuration dictionary
        override_config: Configuration dictionary to override values

    Returns:
        Merged configuration dictionary
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if (
            key in base_config
            and isinstance(base_config[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = merge_configs(base_config[key], value)
        else:
            merged[key] = value

    return merged


class Config:
    """Configuration of a solver run."""

    def __init__(
        self,
        config_path: Optional[str] = DEFAULT_CONFIG_PATH,
        overrides: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize configuration from YAML file.

        :param config_path: Path to the YAML configuration file, None for built-in defaults
        :param overrides: Values merged over the file contents (e.g. from the command line)
        """
        self.config_path = config_path
        self._load_config(overrides or {})
        self._validate_config()

    def _load_config(self, overrides: Dict[str, Any]):
        """Load configuration from YAML file."""
        if self.config_path is None:
            file_config = {}
        elif not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        else:
            file_config = load_config(self.config_path)

        config_dict = merge_configs(file_config, overrides)

        # Problem configuration
        problem_config = config_dict.get("problem", {})
        self.problem = ProblemConfig(
            name=problem_config.get("name", "damped"),
            domain=problem_config.get("domain"),
            boundary_conditions=problem_config.get("boundary_conditions"),
        )

        # Solver configuration
        solver_config = config_dict.get("solver", {})
        self.solver = SolverConfig(
            n_points=solver_config.get("n_points", 101),
            convergence_levels=solver_config.get("convergence_levels", [11, 21, 41, 81, 161]),
        )

        # Logging configuration
        logging_config = config_dict.get("logging", {})
        self.logging = LoggingConfig(
            level=logging_config.get("level", "INFO"),
            log_dir=logging_config.get("log_dir", "logs"),
            log_to_file=logging_config.get("log_to_file", False),
        )

        # Output configuration
        output_config = config_dict.get("output", {})
        self.output = OutputConfig(
            output_dir=output_config.get("output_dir", "results"),
            save_plots=output_config.get("save_plots", False),
            save_solution=output_config.get("save_solution", False),
        )

    def _validate_config(self):
        """Validate configuration parameters."""
        if self.problem.domain is not None:
            if len(self.problem.domain) != 2:
                raise ValueError("domain must be a list of two values")
            if self.problem.domain[0] >= self.problem.domain[1]:
                raise ValueError("domain must satisfy xmin < xmax")
        if self.problem.boundary_conditions is not None:
            missing = {"left", "right"} - set(self.problem.boundary_conditions)
            if missing:
                raise ValueError(f"boundary_conditions missing: {', '.join(sorted(missing))}")

        if not isinstance(self.solver.n_points, int) or self.solver.n_points < 3:
            raise ValueError("n_points must be an integer >= 3")
        levels = self.solver.convergence_levels
        if len(levels) < 2 or any(n < 3 for n in levels):
            raise ValueError("convergence_levels needs at least two entries, each >= 3")
        if any(b <= a for a, b in zip(levels, levels[1:])):
            raise ValueError("convergence_levels must be strictly increasing")

        if self.logging.level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid logging level: {self.logging.level}")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        :return: Dictionary representation of configuration
        """
        return {
            "problem": {
                "name": self.problem.name,
                "domain": self.problem.domain,
                "boundary_conditions": self.problem.boundary_conditions,
            },
            "solver": {
                "n_points": self.solver.n_points,
                "convergence_levels": self.solver.convergence_levels,
            },
            "logging": {
                "level": self.logging.level,
                "log_dir": self.logging.log_dir,
                "log_to_file": self.logging.log_to_file,
            },
            "output": {
                "output_dir": self.output.output_dir,
                "save_plots": self.output.save_plots,
                "save_solution": self.output.save_solution,
            },
        }
