from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Giao diện repository cho User.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def list_member_ids(self, dept_id: int) -> Sequence[int]:
        raise NotImplementedError
