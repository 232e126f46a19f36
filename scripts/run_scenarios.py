from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_nav.config import load_scenarios
from rover_nav.errors import RoverNavError
from rover_nav.metrics import ScenarioAggregator, run_scenario
from rover_nav.telemetry import TelemetryLogger


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a batch of rover navigation scenarios.")
    parser.add_argument(
        "--scenarios",
        type=str,
        default="configs/scenarios.yaml",
        help="Path to scenarios YAML.",
    )
    parser.add_argument("--out-root", type=str, default="runs", help="Directory for reports.")
    parser.add_argument("--telemetry", action="store_true", help="Also write per-step JSONL telemetry.")
    args = parser.parse_args(argv)

    try:
        scenarios = load_scenarios(args.scenarios)
    except RoverNavError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    ts = time.strftime("%Y-%m-%d_%H-%M-%S")
    out_dir = os.path.join(args.out_root, f"scenarios_{ts}")
    os.makedirs(out_dir, exist_ok=True)
    telemetry = TelemetryLogger(os.path.join(out_dir, "telemetry.jsonl")) if args.telemetry else None

    aggregator = ScenarioAggregator()
    errors = 0
    try:
        for scenario in scenarios:
            try:
                result = run_scenario(scenario, telemetry=telemetry)
            except RoverNavError as exc:
                print(f"  {scenario.name}: error: {exc}", file=sys.stderr)
                errors += 1
                continue
            aggregator.add(result)
    finally:
        if telemetry is not None:
            telemetry.close()

    report_path = os.path.join(out_dir, "report.json")
    aggregator.save_json(report_path)

    print("=" * 72)
    print("SCENARIO SUMMARY")
    print("=" * 72)
    print(f"  {'Scenario':<28} {'Position':>10} {'Dir':>4} {'Status':<22} {'Check':>5}")
    print("-" * 72)
    for r in aggregator.results:
        pos = f"({r.outcome.position[0]},{r.outcome.position[1]})"
        met = r.expectation_met
        check = "-" if met is None else ("ok" if met else "FAIL")
        print(f"  {r.name:<28} {pos:>10} {r.outcome.heading.value:>4} {r.outcome.status.value:<22} {check:>5}")
    print("-" * 72)
    summary = aggregator.summary()
    print(f"  Success rate:        {summary['success_rate']:.1%}")
    print(f"  Obstacle rate:       {summary['obstacle_rate']:.1%}")
    print(f"  Out-of-bounds rate:  {summary['out_of_bounds_rate']:.1%}")
    print(f"  Mean path length:    {summary['mean_path_length']:.2f}")
    print()
    print(f"Saved scenario report to {report_path}")

    if errors or summary["expectations_failed"]:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
