"""
Metrics collection for evy runs.
Records per-generation score statistics and process resource usage.
"""

import csv
import json
import logging
import statistics
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Set

import psutil

logger = logging.getLogger(__name__)


@dataclass
class GenerationMetrics:
    """Metrics for one evaluated generation."""

    run_id: str
    generation: int
    timestamp: datetime
    best_score: float
    mean_score: float
    stdev_score: float
    duration_seconds: float
    rss_bytes: int
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RunSummary:
    """Aggregate view over every recorded generation of a run."""

    run_id: str
    generations: int
    best_score: Optional[float]
    final_mean_score: Optional[float]
    total_duration_seconds: float
    peak_rss_bytes: int
    improvements: int = 0

    @property
    def avg_generation_seconds(self) -> float:
        return self.total_duration_seconds / max(self.generations, 1)


class MetricsCollector:
    """
    Collects generation metrics from GeneticAlgorithm events.

    Attach with ``collector.attach(engine)``; the collector listens to
    ``evolution_started``, ``generation_completed`` and
    ``evolution_completed``.
    """

    def __init__(self, track_memory: bool = True):
        self.track_memory = track_memory
        self.data_points: List[GenerationMetrics] = []
        self.completed_runs: Dict[str, Dict[str, Any]] = {}
        self._process = psutil.Process() if track_memory else None
        self._subscribers: Set[Callable[[GenerationMetrics], None]] = set()
        self._current_run: Optional[str] = None

    def attach(self, engine) -> None:
        """Subscribe to an engine's events."""
        engine.add_event_listener("evolution_started", self._on_started)
        engine.add_event_listener("generation_completed", self._on_generation)
        engine.add_event_listener("evolution_completed", self._on_completed)

    def collect(
        self,
        run_id: str,
        generation: int,
        scores: List[float],
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> GenerationMetrics:
        """Record the score statistics of one generation."""
        if not scores:
            raise ValueError("cannot collect metrics for an empty score table")

        data_point = GenerationMetrics(
            run_id=run_id,
            generation=generation,
            timestamp=datetime.now(),
            best_score=max(scores),
            mean_score=statistics.fmean(scores),
            stdev_score=statistics.pstdev(scores),
            duration_seconds=duration_seconds,
            rss_bytes=self._rss_bytes(),
            metadata=metadata or {},
        )
        self.data_points.append(data_point)
        self._notify_subscribers(data_point)
        return data_point

    def get_run_metrics(self, run_id: Optional[str] = None) -> List[GenerationMetrics]:
        """Metrics of one run; the most recent run if none is given."""
        run_id = run_id or self._current_run
        return [dp for dp in self.data_points if dp.run_id == run_id]

    def summary(self, run_id: Optional[str] = None) -> RunSummary:
        """Summarize a run's recorded generations."""
        run_id = run_id or self._current_run or ""
        points = self.get_run_metrics(run_id)

        improvements = 0
        best_so_far: Optional[float] = None
        for dp in points:
            if best_so_far is not None and dp.best_score > best_so_far:
                improvements += 1
            if best_so_far is None or dp.best_score > best_so_far:
                best_so_far = dp.best_score

        return RunSummary(
            run_id=run_id,
            generations=len(points),
            best_score=best_so_far,
            final_mean_score=points[-1].mean_score if points else None,
            total_duration_seconds=sum(dp.duration_seconds for dp in points),
            peak_rss_bytes=max((dp.rss_bytes for dp in points), default=0),
            improvements=improvements,
        )

    def export_to_csv(self, path: str, run_id: Optional[str] = None) -> None:
        """Export a run's generation metrics to CSV."""
        points = self.get_run_metrics(run_id)

        with open(path, "w", newline="") as csvfile:
            fieldnames = [
                "run_id",
                "generation",
                "timestamp",
                "best_score",
                "mean_score",
                "stdev_score",
                "duration_seconds",
                "rss_bytes",
            ]
            writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
            writer.writeheader()

            for dp in points:
                writer.writerow(
                    {
                        "run_id": dp.run_id,
                        "generation": dp.generation,
                        "timestamp": dp.timestamp.isoformat(),
                        "best_score": dp.best_score,
                        "mean_score": dp.mean_score,
                        "stdev_score": dp.stdev_score,
                        "duration_seconds": dp.duration_seconds,
                        "rss_bytes": dp.rss_bytes,
                    }
                )

        logger.info(f"Exported {len(points)} generation records to CSV: {path}")

    def export_to_json(self, path: str, run_id: Optional[str] = None) -> Dict[str, Any]:
        """Export a run's summary and generation metrics to JSON."""
        summary = self.summary(run_id)
        export_data = {
            "export_timestamp": datetime.now().isoformat(),
            "summary": {
                **asdict(summary),
                "avg_generation_seconds": summary.avg_generation_seconds,
            },
            "generations": [asdict(dp) for dp in self.get_run_metrics(summary.run_id)],
        }

        with open(path, "w") as f:
            json.dump(export_data, f, indent=2, default=str)

        logger.info(f"Exported metrics to JSON: {path}")
        return export_data

    def subscribe_to_stream(self, callback: Callable[[GenerationMetrics], None]) -> None:
        """Call back with each new generation record."""
        self._subscribers.add(callback)

    def unsubscribe_from_stream(self, callback: Callable[[GenerationMetrics], None]) -> None:
        self._subscribers.discard(callback)

    def clear_data(self) -> None:
        self.data_points.clear()
        self.completed_runs.clear()
        self._current_run = None

    def _on_started(self, data: Dict[str, Any]) -> None:
        self._current_run = str(data["run_id"])

    def _on_generation(self, data: Dict[str, Any]) -> None:
        summary = data["summary"]
        self.collect(
            run_id=str(data["run_id"]),
            generation=summary.generation,
            scores=data["scores"],
            duration_seconds=summary.duration_seconds,
        )

    def _on_completed(self, data: Dict[str, Any]) -> None:
        result = data["result"]
        self.completed_runs[str(data["run_id"])] = {
            "best_score": result.best_score,
            "best_chromosome": result.best_chromosome,
            "duration_seconds": result.duration_seconds,
        }

    def _rss_bytes(self) -> int:
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def _notify_subscribers(self, data_point: GenerationMetrics) -> None:
        for callback in list(self._subscribers):
            try:
                callback(data_point)
            except Exception as e:
                logger.error(f"Metrics subscriber error: {e}")
