from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ..model import WorkTimeBreakdown


class WorkTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for work-hour splits)."""

    @abstractmethod
    def calculate(self, clock_in: datetime, clock_out: datetime, *, is_holiday: bool) -> WorkTimeBreakdown:
        raise NotImplementedError
