from __future__ import annotations

from abc import ABC, abstractmethod

from .request import DiskRequest, HeadState


class DiskScheduler(ABC):
    """Abstract dispatch policy selecting the next queued request to service.

    Requests are identified by their index in the simulated request
    sequence; the simulation loop owns the sequence and the head.
    """

    name: str = "?"

    @abstractmethod
    def add_request(self, index: int, request: DiskRequest) -> None:
        """Queue a newly arrived request."""

    @abstractmethod
    def pick_next(self, head: HeadState) -> int | None:
        """Remove and return the index of the next request to service."""

    def on_request_completed(self, index: int, request: DiskRequest, now: float) -> None:
        """Hook invoked after a request has been serviced.

        FIFO and SSTF keep no per-dispatch state and leave it empty; sweep
        policies such as SCAN can use it to track the arm direction.
        """
