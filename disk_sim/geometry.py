from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DiskGeometry:
    """Static disk parameters.

    Defaults describe a 500-cylinder, 4-head drive with 16 sectors per
    track, 0.5 ms of seek per cylinder crossed and a 10000 RPM spindle.
    All times are in milliseconds.
    """

    cylinders: int = 500
    heads: int = 4
    sectors_per_track: int = 16
    seek_time_per_cylinder: float = 0.5
    rpm: float = 10000.0

    def __post_init__(self) -> None:
        if self.cylinders <= 0:
            msg = "cylinders must be strictly positive"
            raise ValueError(msg)
        if self.heads <= 0:
            msg = "heads must be strictly positive"
            raise ValueError(msg)
        if self.sectors_per_track <= 0:
            msg = "sectors_per_track must be strictly positive"
            raise ValueError(msg)
        if self.seek_time_per_cylinder < 0:
            msg = "seek_time_per_cylinder cannot be negative"
            raise ValueError(msg)
        if self.rpm <= 0:
            msg = "rpm must be strictly positive"
            raise ValueError(msg)

    @property
    def rotation_period(self) -> float:
        """Time for one full revolution, in ms."""
        return 60000.0 / self.rpm

    @property
    def sector_time(self) -> float:
        """Time for one sector to pass under the head, in ms."""
        return self.rotation_period / self.sectors_per_track

    @property
    def degrees_per_sector(self) -> float:
        return 360.0 / self.sectors_per_track
