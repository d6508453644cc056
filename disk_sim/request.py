from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Operation(Enum):
    READ = "read"
    WRITE = "write"


@dataclass(slots=True)
class DiskRequest:
    """A single disk I/O request and its scheduling outcome.

    ``start_time`` and ``completion_time`` stay at zero until a scheduler
    dispatches the request, and are written exactly once at dispatch.
    """

    arrival_time: float
    cylinder: int
    head: int
    sector: int
    operation: Operation
    sector_count: int
    start_time: float = 0.0
    completion_time: float = 0.0
    dispatched: bool = False

    def __post_init__(self) -> None:
        if self.arrival_time < 0:
            msg = "arrival_time cannot be negative"
            raise ValueError(msg)
        if self.sector_count < 1:
            msg = "sector_count must be at least 1"
            raise ValueError(msg)

    def mark_dispatched(self, start: float, service_time: float) -> None:
        if self.dispatched:
            msg = "request has already been dispatched"
            raise RuntimeError(msg)
        self.start_time = start
        self.completion_time = start + service_time
        self.dispatched = True

    @property
    def response_time(self) -> float:
        return max(0.0, self.completion_time - self.arrival_time)

    def copy(self) -> DiskRequest:
        return DiskRequest(
            arrival_time=self.arrival_time,
            cylinder=self.cylinder,
            head=self.head,
            sector=self.sector,
            operation=self.operation,
            sector_count=self.sector_count,
            start_time=self.start_time,
            completion_time=self.completion_time,
            dispatched=self.dispatched,
        )


@dataclass(slots=True)
class HeadState:
    """Mutable arm position owned by one simulation run."""

    cylinder: int = 0
    angle: float = 0.0

    def reset(self) -> None:
        self.cylinder = 0
        self.angle = 0.0
