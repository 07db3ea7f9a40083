"""
Centralized configuration management for evy.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from evy.engine import EvolutionConfig
from evy.errors import ConfigurationError
from evy.interfaces import (
    DEFAULT_CROSSOVER_PROBABILITY,
    DEFAULT_K_TOURNAMENT,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MUTATION_PROBABILITY,
    DEFAULT_POP_NUMBER,
)

logger = logging.getLogger(__name__)

DEFAULT_STATE_DIR = ".evy"


@dataclass
class EvolutionSettings:
    """Genetic algorithm settings."""

    pop_number: int = DEFAULT_POP_NUMBER
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    k_tournament: int = DEFAULT_K_TOURNAMENT
    crossover_probability: float = DEFAULT_CROSSOVER_PROBABILITY
    mutation_probability: float = DEFAULT_MUTATION_PROBABILITY
    evaluate_final_population: bool = False
    seed: Optional[int] = None

    def to_engine_config(self) -> EvolutionConfig:
        """Build a validated engine configuration."""
        config = EvolutionConfig(**asdict(self))
        config.validate()
        return config


@dataclass
class ProblemSettings:
    """Benchmark problem settings."""

    name: str = "sphere"
    dimensions: int = 2
    lower: Optional[float] = None
    upper: Optional[float] = None


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    json_output: bool = False
    use_colors: bool = True
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration container."""

    evolution: EvolutionSettings = field(default_factory=EvolutionSettings)
    problem: ProblemSettings = field(default_factory=ProblemSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    state_dir: str = DEFAULT_STATE_DIR

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Raises:
            ConfigurationError: on unknown keys or sections that are not objects
        """
        if not isinstance(data, dict):
            raise ConfigurationError(["configuration must be a JSON object"])
        try:
            return cls(
                evolution=EvolutionSettings(**data.get("evolution", {})),
                problem=ProblemSettings(**data.get("problem", {})),
                logging=LoggingSettings(**data.get("logging", {})),
                state_dir=data.get("state_dir", DEFAULT_STATE_DIR),
            )
        except TypeError as e:
            raise ConfigurationError([str(e)]) from e

    def save(self, path: Optional[Path] = None) -> Path:
        """Save config to file."""
        if path is None:
            path = Path(self.state_dir) / "config.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load config from file."""
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError([f"{path} is not valid JSON: {e}"]) from e
        return cls.from_dict(data)


def get_config(
    config_path: Optional[Path] = None,
    state_dir: Optional[Path] = None,
) -> Config:
    """Get configuration, loading from file if available.

    Priority:
    1. Explicit config_path
    2. Config in state_dir
    3. Config in current directory
    4. Defaults

    Environment variables override whichever source was used.
    """
    paths_to_try = []

    if config_path:
        paths_to_try.append(config_path)
    if state_dir:
        paths_to_try.append(state_dir / "config.json")
    paths_to_try.extend(
        [
            Path(DEFAULT_STATE_DIR) / "config.json",
            Path("evy.json"),
        ]
    )

    for path in paths_to_try:
        if path.exists():
            logger.debug(f"Loading configuration from {path}")
            config = Config.load(path)
            _apply_env_overrides(config)
            return config

    config = Config()
    _apply_env_overrides(config)
    return config


def _parse_bool(value: str) -> bool:
    return value.lower() in ("1", "true", "yes")


def _apply_env_overrides(config: Config) -> None:
    """Apply environment variable overrides to config."""
    env_mappings: Dict[str, tuple] = {
        "EVY_POP_NUMBER": ("evolution", "pop_number", int),
        "EVY_MAX_ITERATIONS": ("evolution", "max_iterations", int),
        "EVY_K_TOURNAMENT": ("evolution", "k_tournament", int),
        "EVY_CROSSOVER_PROBABILITY": ("evolution", "crossover_probability", float),
        "EVY_MUTATION_PROBABILITY": ("evolution", "mutation_probability", float),
        "EVY_SEED": ("evolution", "seed", int),
        "EVY_LOG_LEVEL": ("logging", "level", str),
        "EVY_LOG_JSON": ("logging", "json_output", _parse_bool),
        "EVY_STATE_DIR": (None, "state_dir", str),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        try:
            converted = converter(value)
        except (ValueError, TypeError):
            logger.warning(f"Ignoring invalid value {value!r} for {env_var}")
            continue
        if section:
            setattr(getattr(config, section), key, converted)
        else:
            setattr(config, key, converted)
