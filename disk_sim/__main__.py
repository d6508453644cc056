from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Sequence

from .evaluation import EvaluationOutcome, ExperimentConfig, ExperimentResult, SchedulerFactory, run_experiments
from .geometry import DiskGeometry
from .histogram import render_histogram
from .schedulers import POLICIES

logger = logging.getLogger(__name__)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    geometry = DiskGeometry()
    experiment = ExperimentConfig()
    parser = argparse.ArgumentParser(description="Compare FIFO and SSTF disk scheduling on a synthetic workload.")
    parser.add_argument("--cylinders", type=int, default=geometry.cylinders, help="Number of cylinders.")
    parser.add_argument("--heads", type=int, default=geometry.heads, help="Number of read/write heads.")
    parser.add_argument("--sectors", type=int, default=geometry.sectors_per_track, help="Sectors per track.")
    parser.add_argument(
        "--seek-time",
        type=float,
        default=geometry.seek_time_per_cylinder,
        help="Seek time per cylinder crossed (ms).",
    )
    parser.add_argument("--rpm", type=float, default=geometry.rpm, help="Spindle speed (revolutions per minute).")
    parser.add_argument("--horizon", type=float, default=experiment.horizon, help="Simulated time span (ms).")
    parser.add_argument(
        "--scale",
        type=float,
        default=experiment.interarrival_scale,
        help="Inter-arrival scale of the first experiment (ms); gaps are uniform on [0, scale).",
    )
    parser.add_argument(
        "--max-transfer",
        type=int,
        default=experiment.max_transfer_size,
        help="Largest request size in sectors.",
    )
    parser.add_argument("--experiments", type=int, default=experiment.experiments, help="Number of experiments.")
    parser.add_argument(
        "--divisor",
        type=float,
        default=experiment.scale_divisor,
        help="Factor by which the inter-arrival scale shrinks between experiments.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for workload generation.")
    parser.add_argument(
        "--policies",
        type=str,
        default="fifo,sstf",
        help=f"Comma-separated scheduling policies to compare ({', '.join(POLICIES)}).",
    )
    parser.add_argument("--no-histograms", action="store_true", help="Skip the histogram reports.")
    parser.add_argument("--json", action="store_true", help="Emit a JSON report instead of text.")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Verbosity of diagnostics written to stderr.",
    )
    return parser.parse_args(argv)


def parse_policies(raw: str) -> list[tuple[str, SchedulerFactory]]:
    names = [item.strip().lower() for item in raw.split(",") if item.strip()]
    if not names:
        msg = "policies must name at least one scheduling policy"
        raise ValueError(msg)
    factories: list[tuple[str, SchedulerFactory]] = []
    for name in names:
        if name not in POLICIES:
            msg = f"unknown policy {name!r}; choose from {', '.join(POLICIES)}"
            raise ValueError(msg)
        scheduler_type = POLICIES[name]
        factories.append((scheduler_type.name, scheduler_type))
    return factories


def format_header(geometry: DiskGeometry, config: ExperimentConfig, factories: Sequence[tuple[str, SchedulerFactory]]) -> str:
    return "\n".join(
        [
            "Disk subsystem simulation",
            "=" * 40,
            "Disk parameters:",
            f"- Cylinders: {geometry.cylinders}",
            f"- Heads: {geometry.heads}",
            f"- Sectors per track: {geometry.sectors_per_track}",
            f"- Seek time per cylinder: {geometry.seek_time_per_cylinder:.1f} ms",
            f"- Rotation speed: {geometry.rpm:.0f} RPM",
            f"- Simulated time: {config.horizon:.0f} ms",
            f"- Policies compared: {', '.join(name for name, _ in factories)}",
            f"- Inter-arrival scale: {config.interarrival_scale:.1f} ms",
            f"- Max transfer size: {config.max_transfer_size} sectors",
            "",
        ],
    )


def format_outcome(outcome: EvaluationOutcome) -> str:
    s = outcome.stats
    return (
        f"\n{outcome.name} results:\n"
        f"Mean: {s.mean_time:.2f} | Max: {s.max_time:.2f} | Min: {s.min_time:.2f}"
        f" | Std: {s.std_dev:.2f} | Peak queue: {s.max_queue_length}\n"
        f"Idle: {s.total_idle_time:.2f} ms | Requests: {s.request_count}"
    )


def format_experiment(result: ExperimentResult, *, histograms: bool = True) -> str:
    parts = [
        f"Experiment {result.number}: interarrival scale = {result.interarrival_scale:.3f} ms",
        "-" * 40,
        f"Generated requests: {result.request_count}",
    ]
    parts.extend(format_outcome(outcome) for outcome in result.outcomes)
    if histograms:
        parts.append(
            f"\n=== Histograms for experiment {result.number} (scale = {result.interarrival_scale:.3f} ms) ===",
        )
        for outcome in result.outcomes:
            if outcome.histogram is not None:
                parts.append("\n" + render_histogram(outcome.histogram, outcome.name))
    return "\n".join(parts) + "\n"


def to_report(
    geometry: DiskGeometry,
    config: ExperimentConfig,
    results: Sequence[ExperimentResult],
    *,
    histograms: bool = True,
) -> dict[str, Any]:
    experiments = []
    for result in results:
        policies = {}
        for outcome in result.outcomes:
            entry: dict[str, Any] = {
                "stats": asdict(outcome.stats),
                "total_time": outcome.simulation.total_time,
                "busy_time": outcome.simulation.busy_time,
            }
            if histograms and outcome.histogram is not None:
                entry["histogram"] = asdict(outcome.histogram)
            policies[outcome.name] = entry
        experiments.append(
            {
                "number": result.number,
                "interarrival_scale": result.interarrival_scale,
                "request_count": result.request_count,
                "policies": policies,
            },
        )
    return {"geometry": asdict(geometry), "config": asdict(config), "experiments": experiments}


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_arguments(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    try:
        geometry = DiskGeometry(
            cylinders=args.cylinders,
            heads=args.heads,
            sectors_per_track=args.sectors,
            seek_time_per_cylinder=args.seek_time,
            rpm=args.rpm,
        )
        config = ExperimentConfig(
            horizon=args.horizon,
            interarrival_scale=args.scale,
            max_transfer_size=args.max_transfer,
            experiments=args.experiments,
            scale_divisor=args.divisor,
            seed=args.seed,
        )
        factories = parse_policies(args.policies)
    except ValueError as exc:
        raise SystemExit(f"disk-sim: error: {exc}") from exc

    try:
        results = run_experiments(config, geometry=geometry, factories=factories)
    except MemoryError as exc:
        logger.critical("could not allocate the request buffer; lower --horizon or raise --scale")
        raise SystemExit(1) from exc

    histograms = not args.no_histograms
    if args.json:
        print(json.dumps(to_report(geometry, config, results, histograms=histograms), indent=2))
        return

    print(format_header(geometry, config, factories))
    for result in results:
        print(format_experiment(result, histograms=histograms))


if __name__ == "__main__":
    main()
