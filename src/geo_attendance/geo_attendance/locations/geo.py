from __future__ import annotations

import logging
import math
from typing import Optional

from ..common.validators import require_coordinates
from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from .repository import WorkLocationRepository

logger = logging.getLogger(__name__)


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


class GeoValidator:
    """Checks that a punch happens inside the geofence of the user's work location type."""

    def __init__(self, locations: WorkLocationRepository):
        self._locations = locations

    def validate(self, user: User, latitude: Optional[float], longitude: Optional[float]) -> None:
        lat, lon = require_coordinates(latitude, longitude)

        if user.skip_location_check:
            logger.info("location check skipped: user_id=%s", user.user_id)
            return

        candidates = list(self._locations.list_active_by_type(user.location_type))
        if not candidates:
            raise NotFoundError(f"no work location registered for {user.location_type.value}")

        for location in candidates:
            if haversine_meters(lat, lon, location.latitude, location.longitude) <= location.radius_meters:
                return

        radius = min(loc.radius_meters for loc in candidates)
        raise ValidationError(
            f"more than {radius}m from {user.location_type.value}, punch rejected"
        )
