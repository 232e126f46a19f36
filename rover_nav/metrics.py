"""
Scenario metrics for batches of navigation runs.

Runs named scenarios, records each outcome with the visited path, and
aggregates status rates and path statistics for reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import os

import numpy as np

from .config import ScenarioConfig
from .navigator import Navigator
from .parser import parse_commands
from .telemetry import TelemetryLogger
from .types import Coordinate, NavigationOutcome, Status


# ---------------------------------------------------------------------------
# Scenario-level results
# ---------------------------------------------------------------------------


@dataclass
class ScenarioResult:
    """Outcome of one scenario run."""

    name: str
    outcome: NavigationOutcome
    commands_executed: int
    path: List[Coordinate] = field(default_factory=list)
    expected: Optional[Dict[str, Any]] = None

    @property
    def expectation_met(self) -> Optional[bool]:
        """None when no expectation was given, else whether every key matched."""
        if self.expected is None:
            return None
        actual = self.outcome.to_dict()
        return all(actual.get(k) == _normalize(v) for k, v in self.expected.items())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            **self.outcome.to_dict(),
            "commands_executed": self.commands_executed,
            "path": [list(p) for p in self.path],
            "expectation_met": self.expectation_met,
        }


def _normalize(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


def run_scenario(
    scenario: ScenarioConfig,
    telemetry: Optional[TelemetryLogger] = None,
) -> ScenarioResult:
    """Run a single scenario, tracking each cell the rover occupies."""
    grid, rover = scenario.nav.build()
    commands = parse_commands(scenario.nav.commands)

    path: List[Coordinate] = [rover.position]
    executed = 0

    def on_step(record: Dict[str, Any]) -> None:
        nonlocal executed
        executed += 1
        cell = (record["x"], record["y"])
        if cell != path[-1]:
            path.append(cell)

    if telemetry is not None:
        telemetry.log_step({"event": "scenario", "name": scenario.name, "grid": grid.to_dict()})
    outcome = Navigator(telemetry=telemetry, on_step=on_step).execute(rover, commands)
    return ScenarioResult(
        name=scenario.name,
        outcome=outcome,
        commands_executed=executed,
        path=path,
        expected=scenario.expected,
    )


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


class ScenarioAggregator:
    """Accumulate scenario results and summarize status rates."""

    def __init__(self) -> None:
        self._results: List[ScenarioResult] = []

    def add(self, result: ScenarioResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> List[ScenarioResult]:
        return list(self._results)

    @property
    def count(self) -> int:
        return len(self._results)

    def _rate(self, status: Status) -> float:
        if not self._results:
            return 0.0
        return float(np.mean([r.outcome.status is status for r in self._results]))

    def summary(self) -> Dict[str, float]:
        executed = [r.commands_executed for r in self._results]
        # Path length counts moves, not cells.
        path_lengths = [len(r.path) - 1 for r in self._results]
        failed = [r for r in self._results if r.expectation_met is False]
        return {
            "count": float(self.count),
            "success_rate": self._rate(Status.SUCCESS),
            "obstacle_rate": self._rate(Status.OBSTACLE_ENCOUNTERED),
            "out_of_bounds_rate": self._rate(Status.OUT_OF_BOUNDS),
            "mean_commands_executed": float(np.mean(executed)) if executed else 0.0,
            "mean_path_length": float(np.mean(path_lengths)) if path_lengths else 0.0,
            "expectations_failed": float(len(failed)),
        }

    def save_json(self, path: str) -> None:
        data = {
            "summary": self.summary(),
            "scenarios": [r.to_dict() for r in self._results],
        }
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
