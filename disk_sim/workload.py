from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from random import Random

from .geometry import DiskGeometry
from .request import DiskRequest, Operation

logger = logging.getLogger(__name__)

_OPERATIONS = (Operation.READ, Operation.WRITE)


@dataclass(slots=True)
class Arrival:
    at: float
    cylinder: int
    sector: int = 0
    operation: Operation = Operation.READ
    sector_count: int = 1
    head: int = 0


def generate_requests(
    interarrival_scale: float,
    max_transfer_size: int,
    horizon: float,
    *,
    geometry: DiskGeometry | None = None,
    seed: int | None = None,
    rng: Random | None = None,
) -> list[DiskRequest]:
    """Draw a synthetic request stream covering ``[0, horizon)``.

    Inter-arrival gaps are uniform on ``[0, interarrival_scale)``; the
    arrival that would land on or past the horizon is discarded. Pass
    ``rng`` or ``seed`` for a reproducible stream; with neither the
    generator draws fresh entropy.
    """

    if interarrival_scale <= 0:
        msg = "interarrival_scale must be strictly positive"
        raise ValueError(msg)
    if max_transfer_size < 1:
        msg = "max_transfer_size must be at least 1"
        raise ValueError(msg)
    if horizon < 0:
        msg = "horizon cannot be negative"
        raise ValueError(msg)

    geometry = geometry or DiskGeometry()
    rng = rng if rng is not None else Random(seed)
    requests: list[DiskRequest] = []
    current_time = 0.0
    while current_time < horizon:
        current_time += rng.random() * interarrival_scale
        if current_time >= horizon:
            break
        requests.append(
            DiskRequest(
                arrival_time=current_time,
                cylinder=rng.randrange(geometry.cylinders),
                head=rng.randrange(geometry.heads),
                sector=rng.randrange(geometry.sectors_per_track),
                operation=rng.choice(_OPERATIONS),
                sector_count=rng.randint(1, max_transfer_size),
            ),
        )
    logger.debug(
        "generated %d requests (scale=%.3f ms, max_transfer=%d, horizon=%.1f ms)",
        len(requests),
        interarrival_scale,
        max_transfer_size,
        horizon,
    )
    return requests


def from_arrivals(arrivals: Sequence[Arrival]) -> list[DiskRequest]:
    return [
        DiskRequest(
            arrival_time=a.at,
            cylinder=a.cylinder,
            head=a.head,
            sector=a.sector,
            operation=a.operation,
            sector_count=a.sector_count,
        )
        for a in arrivals
    ]


def copy_requests(requests: Iterable[DiskRequest]) -> list[DiskRequest]:
    return [request.copy() for request in requests]
