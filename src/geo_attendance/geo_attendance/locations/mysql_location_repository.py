from __future__ import annotations

from typing import Sequence

from ..core.enums import LocationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import WorkLocation
from .repository import WorkLocationRepository


class MySQLWorkLocationRepository(WorkLocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_by_type(self, location_type: LocationType) -> Sequence[WorkLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, type, latitude, longitude, radius_meters, is_active
                FROM work_locations
                WHERE type=%s AND is_active=1
                ORDER BY name
                """,
                (location_type.value,),
            )
            return [
                WorkLocation(
                    location_id=int(r["location_id"]),
                    name=r["name"],
                    type=LocationType(r["type"]),
                    latitude=float(r["latitude"]),
                    longitude=float(r["longitude"]),
                    radius_meters=int(r["radius_meters"]),
                    is_active=bool(r["is_active"]),
                )
                for r in fetchall(cur)
            ]
