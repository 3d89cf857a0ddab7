"""Temperature index - how far a period's weather strayed from comfortable"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from roommates.config import settings
from roommates.domain.models import DateInterval


@dataclass(frozen=True)
class WeatherObservation:
    """Daily low/high temperature for one day"""

    day: date
    low: float
    high: float


def temperature_index(low: float, high: float, comfort: Optional[float] = None) -> float:
    """Squared distance of the day's mean temperature from the comfort point"""
    comfort = settings.comfort_temperature if comfort is None else comfort
    return ((low + high) / 2.0 - comfort) ** 2


def period_temperature_index(
    observations: Iterable[WeatherObservation],
    period: DateInterval,
    comfort: Optional[float] = None,
) -> float:
    """Sum of daily temperature indexes over the days of period"""
    return sum(
        (temperature_index(o.low, o.high, comfort) for o in observations if o.day in period),
        0.0,
    )
