from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LocationType


@dataclass(frozen=True)
class WorkLocation:
    """A registered work site with its geofence radius."""

    location_id: int
    name: str
    type: LocationType
    latitude: float
    longitude: float
    radius_meters: int
    is_active: bool = True
