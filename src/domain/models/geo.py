from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A lat/lon pair in degrees.

    Out-of-range values are accepted as-is; only non-finite values are rejected.
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.lat):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not math.isfinite(self.lon):
            raise ValueError(f"Invalid longitude: {self.lon}")
