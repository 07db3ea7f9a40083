"""
Error types for evy.
Structured errors carrying a stable code and details for callers and the CLI.
"""

from typing import Any, Dict, List, Optional


class EvyError(Exception):
    """Base exception for evy errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serializable error payload."""
        return {
            "error": {
                "code": self.code,
                "message": str(self),
                "details": self.details,
            }
        }


class ConfigurationError(EvyError):
    """Raised when the algorithm configuration is invalid."""

    def __init__(self, errors: List[str]):
        super().__init__(
            f"Invalid configuration: {'; '.join(errors)}",
            "INVALID_CONFIG",
            {"errors": errors},
        )
        self.errors = errors


class MalformedProblem(EvyError):
    """Raised when a problem's parameter count or bounds are inconsistent."""

    def __init__(self, errors: List[str]):
        super().__init__(
            f"Malformed problem: {'; '.join(errors)}",
            "MALFORMED_PROBLEM",
            {"errors": errors},
        )
        self.errors = errors


class ObjectiveFailure(EvyError):
    """Raised when the objective function fails for a chromosome."""

    def __init__(self, index: int, chromosome: List[float], reason: str):
        super().__init__(
            f"Objective failed for chromosome {index}: {reason}",
            "OBJECTIVE_FAILURE",
            {"index": index, "chromosome": list(chromosome), "reason": reason},
        )
        self.index = index
