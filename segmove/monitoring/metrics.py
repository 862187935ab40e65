"""
Metrics collection for segment moves
"""

from typing import Any


class MoveMetrics:
    """Collect and expose segment move metrics"""

    def __init__(self):
        self.metrics = {
            "total_moves": 0,
            "total_failed": 0,
            "total_delete_failures": 0,
            "average_duration_ms": 0.0,
            "by_outcome": {},
            "failures_by_reason": {},
        }

    def record_move(self, outcome: str, duration_ms: float) -> None:
        """Record a successful move with its outcome"""
        self.metrics["total_moves"] += 1
        self._update_average_duration(duration_ms)
        by_outcome = self.metrics["by_outcome"]
        by_outcome[outcome] = by_outcome.get(outcome, 0) + 1

    def record_failure(self, reason: str) -> None:
        """Record a move that raised"""
        self.metrics["total_failed"] += 1
        failures = self.metrics["failures_by_reason"]
        failures[reason] = failures.get(reason, 0) + 1

    def record_delete_failure(self) -> None:
        """Record a source object left behind after a successful copy"""
        self.metrics["total_delete_failures"] += 1

    def _update_average_duration(self, duration_ms: float) -> None:
        total = self.metrics["average_duration_ms"] * (self.metrics["total_moves"] - 1)
        self.metrics["average_duration_ms"] = (total + duration_ms) / self.metrics["total_moves"]

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics"""
        attempts = self.metrics["total_moves"] + self.metrics["total_failed"]
        success_rate = self.metrics["total_moves"] / attempts * 100 if attempts > 0 else 0

        return {
            **self.metrics,
            "by_outcome": dict(self.metrics["by_outcome"]),
            "failures_by_reason": dict(self.metrics["failures_by_reason"]),
            "success_rate": f"{success_rate:.2f}%",
        }
