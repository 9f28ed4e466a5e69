from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import LocationType
from .model import WorkLocation


class WorkLocationRepository(Protocol):
    def list_active_by_type(self, location_type: LocationType) -> Sequence[WorkLocation]:
        raise NotImplementedError
