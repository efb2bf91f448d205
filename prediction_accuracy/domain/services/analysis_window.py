"""Lookback windows shared by every report."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from prediction_accuracy.domain.entities.errors import InvalidAnalysisWindowError


@dataclass(frozen=True)
class AnalysisWindow:
    """``[start, end]`` lookback with its midpoint for the older/recent split."""

    days: int
    start: datetime
    end: datetime

    @property
    def midpoint(self) -> datetime:
        return self.start + (self.end - self.start) / 2


def analysis_window(window_days: int, now: Optional[datetime] = None) -> AnalysisWindow:
    """
    Build the window ending at ``now``.

    Raises:
        InvalidAnalysisWindowError: If ``window_days`` is below 1.
    """
    if window_days < 1:
        raise InvalidAnalysisWindowError(window_days)
    end = now or datetime.now(timezone.utc)
    return AnalysisWindow(days=window_days, start=end - timedelta(days=window_days), end=end)
