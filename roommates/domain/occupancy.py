"""Occupancy engine - person-days of presence inside a billing window"""

from fractions import Fraction
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from roommates.domain.models import DateInterval, ResponsibilityInterval, Roommate


def compute_occupancy(
    window: "DateInterval", intervals: Iterable["ResponsibilityInterval"]
) -> int:
    """
    Total person-days of occupancy overlapping window.

    Each interval contributes (days it shares with window) * (1 + additional
    people). Days are counted inclusively on both ends, and intervals lying
    entirely outside window contribute nothing.

    Example:
        window 01/10 - 01/20, intervals:
          me       01/18 - 01/20, 3 people -> 3 days * 3 = 9
          someone  01/10 - 01/13, 5 people -> 4 days * 5 = 20
        occupancy = 29
    """
    return sum(i.num_people * i.interval.overlap_days(window) for i in intervals)


def compute_roommate_occupancy(
    window: "DateInterval",
    intervals: Iterable["ResponsibilityInterval"],
    roommate: "Roommate",
) -> int:
    """Person-days inside window chargeable to a single roommate"""
    return compute_occupancy(window, (i for i in intervals if i.roommate == roommate))


def average_occupancy(
    window: "DateInterval", intervals: Iterable["ResponsibilityInterval"]
) -> Fraction:
    """Average number of people present per day of window"""
    return Fraction(compute_occupancy(window, intervals), window.num_days())
