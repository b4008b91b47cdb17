"""
Visit statistics arithmetic.

Durations are whole minutes between two same-day clock times. Derived
figures are rounded half-up to two decimals on the exact decimal quotient,
so 0.125 becomes 0.13 on every platform.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ...models import VISIT_STATUS_CANCELLED, VISIT_STATUS_COMPLETED, VISIT_STATUS_SCHEDULED
from ...shared.validators import minutes_since_midnight


def ratio_half_up(numerator: int, denominator: int, places: int = 2) -> float:
    """numerator / denominator rounded half-up; 0 when denominator is 0"""
    if not denominator:
        return 0.0
    quotient = Decimal(numerator) / Decimal(denominator)
    return float(quotient.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def visit_duration(status: str, start_time: Optional[str], end_time: Optional[str]) -> Optional[int]:
    """Minutes spent on a completed visit with both clock times recorded, else None"""
    if status != VISIT_STATUS_COMPLETED or not start_time or not end_time:
        return None
    return minutes_since_midnight(end_time) - minutes_since_midnight(start_time)


@dataclass
class VisitTotals:
    completed_visits: int = 0
    cancelled_visits: int = 0
    scheduled_visits: int = 0
    total_minutes: int = 0

    @property
    def total_visits(self) -> int:
        return self.completed_visits + self.cancelled_visits + self.scheduled_visits

    @property
    def total_hours(self) -> float:
        return ratio_half_up(self.total_minutes, 60)

    @property
    def average_visit_duration(self) -> float:
        """Mean minutes per completed visit; 0 without completed visits"""
        return ratio_half_up(self.total_minutes, self.completed_visits)

    def add(self, status: str, duration: Optional[int]) -> None:
        if status == VISIT_STATUS_COMPLETED:
            self.completed_visits += 1
        elif status == VISIT_STATUS_CANCELLED:
            self.cancelled_visits += 1
        elif status == VISIT_STATUS_SCHEDULED:
            self.scheduled_visits += 1
        if duration is not None:
            self.total_minutes += duration


def tally(visits: Iterable[tuple[str, Optional[int]]]) -> VisitTotals:
    """Fold (status, duration) pairs into counts and minutes"""
    totals = VisitTotals()
    for status, duration in visits:
        totals.add(status, duration)
    return totals
