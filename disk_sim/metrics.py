from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimulationStats:
    min_time: float
    max_time: float
    mean_time: float
    std_dev: float
    max_queue_length: int
    total_idle_time: float
    request_count: int


class StatisticsCollector:
    """Running accumulation of response times and queue behaviour for one run.

    The standard deviation is the population one, derived from the running
    sum and sum of squares. Rounding can leave ``E[X^2] - E[X]^2`` slightly
    negative, so the variance is clamped at zero.
    """

    def __init__(self) -> None:
        self._count = 0
        self._min = math.inf
        self._max = 0.0
        self._sum = 0.0
        self._sum_squares = 0.0
        self._max_queue = 0
        self._idle = 0.0

    def record_response(self, response_time: float) -> None:
        if response_time < self._min:
            self._min = response_time
        if response_time > self._max:
            self._max = response_time
        self._sum += response_time
        self._sum_squares += response_time * response_time
        self._count += 1

    def observe_queue(self, length: int) -> None:
        if length > self._max_queue:
            self._max_queue = length

    def add_idle(self, delta: float) -> None:
        self._idle += delta

    @property
    def count(self) -> int:
        return self._count

    def summarise(self) -> SimulationStats:
        if self._count == 0:
            return SimulationStats(
                min_time=0.0,
                max_time=0.0,
                mean_time=0.0,
                std_dev=0.0,
                max_queue_length=self._max_queue,
                total_idle_time=self._idle,
                request_count=0,
            )
        mean = self._sum / self._count
        variance = max(0.0, self._sum_squares / self._count - mean * mean)
        return SimulationStats(
            min_time=self._min,
            max_time=self._max,
            mean_time=mean,
            std_dev=math.sqrt(variance),
            max_queue_length=self._max_queue,
            total_idle_time=self._idle,
            request_count=self._count,
        )
