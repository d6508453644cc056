"""Response-time histograms with an adaptive number of uniform bins."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from .request import DiskRequest

MIN_BINS = 10
MAX_BINS = 40
BAR_WIDTH = 50
_RULE = "-" * 71
_DOUBLE_RULE = "=" * 71


@dataclass(slots=True)
class HistogramBin:
    min: float
    max: float
    count: int = 0


@dataclass(slots=True)
class Histogram:
    bins: list[HistogramBin]
    total: int
    min_time: float
    max_time: float
    mean_time: float
    median_time: float

    @property
    def busiest(self) -> int:
        return max((b.count for b in self.bins), default=0)

    def percentage(self, bin_: HistogramBin) -> float:
        return bin_.count * 100.0 / self.total if self.total else 0.0

    def bar_length(self, bin_: HistogramBin, width: int = BAR_WIDTH) -> int:
        return bin_.count * width // (self.busiest or 1)


def bin_count(sample_size: int) -> int:
    return min(MAX_BINS, max(MIN_BINS, round(math.sqrt(sample_size))))


def response_times(requests: Iterable[DiskRequest]) -> list[float]:
    return [request.response_time for request in requests]


def build_histogram(values: Sequence[float]) -> Histogram | None:
    """Bin response times into equal-width intervals over ``[min, max]``.

    The last bin also holds the maximum value. Returns ``None`` for an
    empty sample.
    """

    if not values:
        return None
    n = len(values)
    low = min(values)
    high = max(values)
    mean = sum(values) / n
    ordered = sorted(values)
    if n % 2 == 0:
        median = (ordered[n // 2 - 1] + ordered[n // 2]) / 2.0
    else:
        median = ordered[n // 2]

    count = bin_count(n)
    width = (high - low) / count
    bins = [HistogramBin(min=low + i * width, max=low + (i + 1) * width) for i in range(count)]
    for value in values:
        # identical values leave a zero-width range; they all land in the first bin
        idx = int((value - low) / width) if width > 0 else 0
        bins[min(idx, count - 1)].count += 1

    return Histogram(bins=bins, total=n, min_time=low, max_time=high, mean_time=mean, median_time=median)


def histogram_for(requests: Iterable[DiskRequest]) -> Histogram | None:
    return build_histogram(response_times(requests))


def render_histogram(histogram: Histogram, title: str) -> str:
    lines = [
        _DOUBLE_RULE,
        f"Response time distribution ({title})",
        "(x: response time, ms | y: number of requests)",
        f"Range: [{histogram.min_time:.2f} .. {histogram.max_time:.2f}] ms"
        f" | Mean: {histogram.mean_time:.2f} | Median: {histogram.median_time:.2f}",
        _RULE,
        f"{'Interval (ms)':<22} {'Count':>6} {'%':>7}  | Chart",
        _RULE,
    ]
    for bin_ in histogram.bins:
        lines.append(
            f"{bin_.min:9.2f} - {bin_.max:<10.2f} {bin_.count:6d} {histogram.percentage(bin_):6.2f}% | "
            + "#" * histogram.bar_length(bin_),
        )
    lines.extend(
        [
            _RULE,
            f"Mean: {histogram.mean_time:.2f} ms | Median: {histogram.median_time:.2f} ms"
            f" | Min: {histogram.min_time:.2f} | Max: {histogram.max_time:.2f}",
            _DOUBLE_RULE,
        ],
    )
    return "\n".join(lines)
