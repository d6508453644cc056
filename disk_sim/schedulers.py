from __future__ import annotations

from bisect import bisect_left, insort
from collections import deque

from .request import DiskRequest, HeadState
from .scheduler import DiskScheduler


class FifoScheduler(DiskScheduler):
    """First-In, First-Out: requests are serviced strictly in arrival order."""

    name = "FIFO"

    def __init__(self) -> None:
        self._queue: deque[int] = deque()

    def add_request(self, index: int, request: DiskRequest) -> None:
        self._queue.append(index)

    def pick_next(self, head: HeadState) -> int | None:
        if not self._queue:
            return None
        return self._queue.popleft()


class SstfScheduler(DiskScheduler):
    """Shortest Seek Time First.

    Picks the queued request whose cylinder is nearest the head. Only seek
    distance counts; rotational position is ignored. When two requests are
    equally near, the one with the lower index wins, which is the request a
    front-to-back scan of the sequence would meet first.

    Queued requests are kept sorted by ``(cylinder, index)`` so the nearest
    candidates on either side of the head are found by bisection instead of
    a scan over the whole queue.
    """

    name = "SSTF"

    def __init__(self) -> None:
        self._pending: list[tuple[int, int]] = []

    def add_request(self, index: int, request: DiskRequest) -> None:
        insort(self._pending, (request.cylinder, index))

    def pick_next(self, head: HeadState) -> int | None:
        if not self._pending:
            return None
        current = head.cylinder
        pos = bisect_left(self._pending, (current, -1))
        if pos == len(self._pending):
            # every queued cylinder lies below the head
            best_pos = self._first_on(self._pending[pos - 1][0])
        else:
            # lowest index among the nearest cylinders at or above the head
            best_pos = pos
            if pos > 0:
                below_pos = self._first_on(self._pending[pos - 1][0])
                if self._closer(current, self._pending[below_pos], self._pending[best_pos]):
                    best_pos = below_pos
        _, index = self._pending.pop(best_pos)
        return index

    def _first_on(self, cylinder: int) -> int:
        return bisect_left(self._pending, (cylinder, -1))

    @staticmethod
    def _closer(current: int, candidate: tuple[int, int], incumbent: tuple[int, int]) -> bool:
        candidate_distance = abs(current - candidate[0])
        incumbent_distance = abs(current - incumbent[0])
        if candidate_distance != incumbent_distance:
            return candidate_distance < incumbent_distance
        return candidate[1] < incumbent[1]


POLICIES: dict[str, type[DiskScheduler]] = {
    "fifo": FifoScheduler,
    "sstf": SstfScheduler,
}
