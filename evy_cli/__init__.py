"""
evy command-line front end and configuration.
"""

from .config import Config, EvolutionSettings, LoggingSettings, ProblemSettings, get_config
from .schemas import BenchmarkName, ProblemInput, RunReport

__all__ = [
    "Config",
    "EvolutionSettings",
    "ProblemSettings",
    "LoggingSettings",
    "get_config",
    "BenchmarkName",
    "ProblemInput",
    "RunReport",
]
