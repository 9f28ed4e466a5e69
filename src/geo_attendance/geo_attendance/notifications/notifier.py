from __future__ import annotations

import logging
from typing import Protocol

from ..corrections.model import TimeCorrection

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-forget notifications about correction requests; delivery lives elsewhere."""

    def correction_created(self, correction: TimeCorrection) -> None:
        raise NotImplementedError

    def correction_decided(self, correction: TimeCorrection) -> None:
        raise NotImplementedError


class LoggingNotifier(Notifier):
    """Default notifier: writes the event to the application log."""

    def correction_created(self, correction: TimeCorrection) -> None:
        logger.info(
            "notify approvers: correction_id=%s user_id=%s request_type=%s",
            correction.correction_id,
            correction.user_id,
            correction.request_type.value,
        )

    def correction_decided(self, correction: TimeCorrection) -> None:
        logger.info(
            "notify requester: correction_id=%s user_id=%s status=%s",
            correction.correction_id,
            correction.user_id,
            correction.status.value,
        )
