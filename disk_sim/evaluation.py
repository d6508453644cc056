from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from random import Random
from typing import Sequence

from .geometry import DiskGeometry
from .histogram import Histogram, histogram_for
from .metrics import SimulationStats
from .request import DiskRequest
from .scheduler import DiskScheduler
from .schedulers import FifoScheduler, SstfScheduler
from .simulator import Simulation, SimulationResult
from .workload import copy_requests, generate_requests

logger = logging.getLogger(__name__)

SchedulerFactory = Callable[[], DiskScheduler]

DEFAULT_POLICIES: tuple[tuple[str, SchedulerFactory], ...] = (
    ("FIFO", FifoScheduler),
    ("SSTF", SstfScheduler),
)


@dataclass(slots=True)
class ExperimentConfig:
    """Workload and driver parameters; times are in milliseconds.

    Each experiment divides the inter-arrival scale of the previous one by
    ``scale_divisor``, so the defaults run at 2000, 200 and 20 ms.
    """

    horizon: float = 300000.0
    interarrival_scale: float = 2000.0
    max_transfer_size: int = 16
    experiments: int = 3
    scale_divisor: float = 10.0
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.horizon < 0:
            msg = "horizon cannot be negative"
            raise ValueError(msg)
        if self.interarrival_scale <= 0:
            msg = "interarrival_scale must be strictly positive"
            raise ValueError(msg)
        if self.max_transfer_size < 1:
            msg = "max_transfer_size must be at least 1"
            raise ValueError(msg)
        if self.experiments < 1:
            msg = "experiments must be at least 1"
            raise ValueError(msg)
        if self.scale_divisor <= 1:
            msg = "scale_divisor must be greater than 1"
            raise ValueError(msg)

    def scales(self) -> list[float]:
        return [self.interarrival_scale / self.scale_divisor**i for i in range(self.experiments)]


@dataclass(slots=True)
class EvaluationOutcome:
    name: str
    simulation: SimulationResult
    histogram: Histogram | None

    @property
    def stats(self) -> SimulationStats:
        return self.simulation.stats


@dataclass(slots=True)
class ExperimentResult:
    number: int
    interarrival_scale: float
    request_count: int
    outcomes: list[EvaluationOutcome]


def evaluate_scheduler(
    name: str,
    factory: SchedulerFactory,
    requests: Sequence[DiskRequest],
    *,
    geometry: DiskGeometry | None = None,
    horizon: float | None = None,
) -> EvaluationOutcome:
    """Run one policy on a private copy of ``requests``."""

    simulation = Simulation(factory(), copy_requests(requests), geometry, horizon=horizon)
    result = simulation.run()
    return EvaluationOutcome(name=name, simulation=result, histogram=histogram_for(result.served))


def evaluate_suite(
    factories: Sequence[tuple[str, SchedulerFactory]],
    requests: Sequence[DiskRequest],
    *,
    geometry: DiskGeometry | None = None,
    horizon: float | None = None,
) -> list[EvaluationOutcome]:
    return [evaluate_scheduler(name, factory, requests, geometry=geometry, horizon=horizon) for name, factory in factories]


def run_experiments(
    config: ExperimentConfig | None = None,
    *,
    geometry: DiskGeometry | None = None,
    factories: Sequence[tuple[str, SchedulerFactory]] = DEFAULT_POLICIES,
) -> list[ExperimentResult]:
    config = config or ExperimentConfig()
    geometry = geometry or DiskGeometry()
    # one source for the whole series so a seed reproduces every experiment
    rng = Random(config.seed)
    results: list[ExperimentResult] = []
    for number, scale in enumerate(config.scales(), start=1):
        logger.info("experiment %d: interarrival scale %.3f ms", number, scale)
        requests = generate_requests(
            scale,
            config.max_transfer_size,
            config.horizon,
            geometry=geometry,
            rng=rng,
        )
        outcomes = evaluate_suite(factories, requests, geometry=geometry, horizon=config.horizon)
        results.append(
            ExperimentResult(
                number=number,
                interarrival_scale=scale,
                request_count=len(requests),
                outcomes=outcomes,
            ),
        )
        logger.info("experiment %d finished: %d requests", number, len(requests))
    return results
