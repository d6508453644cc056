"""Disk scheduling simulator comparing FIFO and SSTF request dispatch."""

from .geometry import DiskGeometry
from .request import DiskRequest, HeadState, Operation
from .simulator import Simulation, SimulationResult
from .metrics import SimulationStats, StatisticsCollector
from .schedulers import FifoScheduler, SstfScheduler
from . import timing
from . import workload
from . import histogram
from . import evaluation

__all__ = [
	"DiskGeometry",
	"DiskRequest",
	"HeadState",
	"Operation",
	"Simulation",
	"SimulationResult",
	"SimulationStats",
	"StatisticsCollector",
	"FifoScheduler",
	"SstfScheduler",
	"timing",
	"workload",
	"histogram",
	"evaluation",
]
