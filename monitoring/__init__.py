"""
Monitoring module for evy.
Provides per-generation metrics collection and export.
"""

from .metrics import GenerationMetrics, MetricsCollector, RunSummary

__all__ = ["MetricsCollector", "GenerationMetrics", "RunSummary"]
