from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LocationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import DepartmentRepository, UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, location_type, skip_location_check, dept_id, hire_date, created_at
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return User(
                user_id=int(r["user_id"]),
                full_name=r["full_name"],
                location_type=LocationType(r["location_type"]),
                skip_location_check=bool(r["skip_location_check"]),
                dept_id=r.get("dept_id"),
                hire_date=r.get("hire_date"),
                created_at=r.get("created_at"),
            )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_member_ids(self, dept_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id FROM users WHERE dept_id=%s ORDER BY user_id",
                (int(dept_id),),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
