"""
Structured logging configuration for evy.
Provides consistent logging across all components with JSON output support.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

_EXTRA_FIELDS = (
    "generation",
    "fitness",
    "avg_fitness",
    "duration_ms",
    "event_type",
    "population_size",
    "run_id",
)


class StructuredFormatter(logging.Formatter):
    """JSON-formatted log output for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """Human-readable log format for console output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%H:%M:%S")
        level = record.levelname[:4]

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            level = f"{color}{level}{self.RESET}"

        msg = record.getMessage()

        extras = []
        if hasattr(record, "run_id"):
            extras.append(f"run={str(record.run_id)[:8]}")
        if hasattr(record, "generation"):
            extras.append(f"gen={record.generation}")
        if hasattr(record, "fitness"):
            extras.append(f"best={record.fitness:.6g}")
        if hasattr(record, "avg_fitness"):
            extras.append(f"avg={record.avg_fitness:.6g}")
        if hasattr(record, "duration_ms"):
            extras.append(f"took={record.duration_ms}ms")

        extra_str = f" [{', '.join(extras)}]" if extras else ""

        line = f"{ts} {level} {record.name}: {msg}{extra_str}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class EvolutionLogger:
    """Logger for evolution events with persistent structured context."""

    def __init__(self, name: str = "evy"):
        self.logger = logging.getLogger(name)
        self._context: Dict[str, Any] = {}

    def set_context(self, **kwargs) -> None:
        """Set persistent context for all log messages."""
        self._context.update(kwargs)

    def clear_context(self) -> None:
        self._context.clear()

    def _log(self, level: int, msg: str, **kwargs) -> None:
        extra = {**self._context, **kwargs}
        self.logger.log(level, msg, extra=extra)

    def debug(self, msg: str, **kwargs) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def error(self, msg: str, **kwargs) -> None:
        self._log(logging.ERROR, msg, **kwargs)

    # Evolution-specific logging methods
    def evolution_started(self, num_parameters: int, population_size: int) -> None:
        self.info(
            f"Evolution started for {num_parameters} parameters",
            event_type="evolution_started",
            population_size=population_size,
        )

    def generation_start(self, generation: int, population_size: int) -> None:
        self.debug(
            f"Starting generation {generation}",
            event_type="generation_start",
            generation=generation,
            population_size=population_size,
        )

    def generation_complete(
        self, generation: int, best_fitness: float, avg_fitness: float, duration_ms: int
    ) -> None:
        self.info(
            f"Generation {generation} complete",
            event_type="generation_complete",
            generation=generation,
            fitness=best_fitness,
            avg_fitness=avg_fitness,
            duration_ms=duration_ms,
        )

    def evolution_complete(
        self, generations: int, best_fitness: float, total_duration_ms: int
    ) -> None:
        self.info(
            f"Evolution complete after {generations} generations",
            event_type="evolution_complete",
            fitness=best_fitness,
            duration_ms=total_duration_ms,
        )


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True,
) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Use JSON format for console output
        log_file: Optional file path for log output
        use_colors: Use colors in console output (ignored if json_output=True)
    """
    numeric_level = getattr(logging, level.upper())

    for name in ["evy", "evy_cli", "monitoring"]:
        logger = logging.getLogger(name)
        logger.setLevel(numeric_level)
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        if json_output:
            console_handler.setFormatter(StructuredFormatter())
        else:
            console_handler.setFormatter(HumanFormatter(use_colors=use_colors))
        logger.addHandler(console_handler)

        # File output is always JSON for machine parsing
        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(StructuredFormatter())
            logger.addHandler(file_handler)


def get_logger(name: str) -> EvolutionLogger:
    """Get a structured logger instance."""
    return EvolutionLogger(name)
