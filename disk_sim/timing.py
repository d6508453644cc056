"""Physical timing model for a rotating disk.

Seek time is linear in cylinder distance, rotational latency is the
forward angular distance to the target sector, and transfer time is one
sector time per sector, doubled for writes to account for write-verify.
"""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import DiskGeometry
from .request import DiskRequest, HeadState, Operation


@dataclass(frozen=True, slots=True)
class ServiceTiming:
    seek: float
    rotation: float
    transfer: float

    @property
    def total(self) -> float:
        return self.seek + self.rotation + self.transfer


def seek_time(geometry: DiskGeometry, from_cylinder: int, to_cylinder: int) -> float:
    return abs(from_cylinder - to_cylinder) * geometry.seek_time_per_cylinder


def rotational_latency(geometry: DiskGeometry, current_angle: float, target_sector: int) -> float:
    target_angle = target_sector * geometry.degrees_per_sector
    angle_diff = (target_angle - current_angle) % 360.0
    return angle_diff / 360.0 * geometry.rotation_period


def transfer_time(geometry: DiskGeometry, sector_count: int, operation: Operation) -> float:
    base = sector_count * geometry.sector_time
    if operation is Operation.WRITE:
        return base * 2
    return base


def service_timing(geometry: DiskGeometry, head: HeadState, request: DiskRequest) -> ServiceTiming:
    return ServiceTiming(
        seek=seek_time(geometry, head.cylinder, request.cylinder),
        rotation=rotational_latency(geometry, head.angle, request.sector),
        transfer=transfer_time(geometry, request.sector_count, request.operation),
    )


def advance_head(geometry: DiskGeometry, head: HeadState, request: DiskRequest, timing: ServiceTiming) -> None:
    """Move the head onto the request's cylinder and spin the platter forward.

    The platter keeps turning while the head waits for the sector and while
    it transfers; the seek itself is not added to the angle.
    """

    head.cylinder = request.cylinder
    rotated = (timing.rotation + timing.transfer) / geometry.rotation_period * 360.0
    head.angle = (head.angle + rotated) % 360.0
