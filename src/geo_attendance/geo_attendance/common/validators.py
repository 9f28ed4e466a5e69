from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_coordinates(latitude: Optional[float], longitude: Optional[float]) -> tuple[float, float]:
    if latitude is None or longitude is None:
        raise ValidationError("location is required")
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("location is invalid")
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise ValidationError("location is invalid")
    return lat, lon
