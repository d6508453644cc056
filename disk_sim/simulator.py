from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .geometry import DiskGeometry
from .metrics import SimulationStats, StatisticsCollector
from .request import DiskRequest, HeadState
from .scheduler import DiskScheduler
from .timing import advance_head, service_timing

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationResult:
    requests: list[DiskRequest]
    stats: SimulationStats
    total_time: float
    busy_time: float
    dispatch_order: list[int]

    @property
    def utilization(self) -> float:
        if self.total_time == 0:
            return 0.0
        return self.busy_time / self.total_time

    @property
    def served(self) -> list[DiskRequest]:
        return [self.requests[i] for i in self.dispatch_order]


class Simulation:
    """Discrete-event simulation of one disk servicing a request sequence.

    The simulation mutates ``start_time`` and ``completion_time`` on the
    requests it is given; pass a copy when the same workload feeds more
    than one run. Each dispatch is non-preemptive: the clock jumps straight
    to the request's completion.
    """

    def __init__(
        self,
        scheduler: DiskScheduler,
        requests: Sequence[DiskRequest],
        geometry: DiskGeometry | None = None,
        *,
        horizon: float | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.geometry = geometry or DiskGeometry()
        self.horizon = horizon
        self._requests = list(requests)
        # stable, so equal arrival times keep sequence order
        self._arrival_order = sorted(range(len(self._requests)), key=lambda i: self._requests[i].arrival_time)
        self._admitted = [False] * len(self._requests)
        self._served = [False] * len(self._requests)
        self._head = HeadState()
        self._stats = StatisticsCollector()
        self._now = 0.0
        self._busy = 0.0

    def run(self) -> SimulationResult:
        total = len(self._requests)
        cursor = 0
        queue_length = 0
        dispatch_order: list[int] = []
        self._head.reset()

        while len(dispatch_order) < total:
            while cursor < total and self._requests[self._arrival_order[cursor]].arrival_time <= self._now:
                index = self._arrival_order[cursor]
                self._admitted[index] = True
                self.scheduler.add_request(index, self._requests[index])
                queue_length += 1
                cursor += 1

            self._stats.observe_queue(queue_length)

            if queue_length > 0:
                index = self._check_pick(self.scheduler.pick_next(self._head), queue_length)
                self._dispatch(index)
                self._served[index] = True
                dispatch_order.append(index)
                queue_length -= 1
                continue

            if cursor >= total:
                break
            next_arrival = self._requests[self._arrival_order[cursor]].arrival_time
            if self.horizon is not None and next_arrival > self.horizon:
                break
            self._stats.add_idle(next_arrival - self._now)
            self._now = next_arrival

        stats = self._stats.summarise()
        logger.debug(
            "%s served %d/%d requests, clock=%.3f ms, idle=%.3f ms, peak queue=%d",
            self.scheduler.name,
            stats.request_count,
            total,
            self._now,
            stats.total_idle_time,
            stats.max_queue_length,
        )
        return SimulationResult(
            requests=self._requests,
            stats=stats,
            total_time=self._now,
            busy_time=self._busy,
            dispatch_order=dispatch_order,
        )

    def _dispatch(self, index: int) -> None:
        request = self._requests[index]
        timing = service_timing(self.geometry, self._head, request)
        request.mark_dispatched(self._now, timing.total)
        self._stats.record_response(request.response_time)
        self._now = request.completion_time
        self._busy += timing.total
        advance_head(self.geometry, self._head, request, timing)
        self.scheduler.on_request_completed(index, request, self._now)

    def _check_pick(self, index: int | None, queue_length: int) -> int:
        if index is None:
            msg = f"{self.scheduler.name} returned no request while {queue_length} are queued"
            raise RuntimeError(msg)
        if not self._admitted[index] or self._served[index]:
            msg = f"{self.scheduler.name} picked request {index}, which is not queued"
            raise RuntimeError(msg)
        return index
