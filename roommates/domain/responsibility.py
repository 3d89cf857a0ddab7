"""Responsibility split builder - exact per-roommate share of a billing window"""

import logging
from collections.abc import Mapping
from fractions import Fraction
from typing import Dict, Iterable, Iterator

from roommates.domain.exceptions import InvalidSplit
from roommates.domain.models import DateInterval, ResponsibilityInterval, Roommate, RoommateGroup
from roommates.domain.occupancy import compute_occupancy, compute_roommate_occupancy

logger = logging.getLogger(__name__)


class ResponsibilitySplit(Mapping):
    """
    Read-only mapping of every roommate in a group to an exact ratio.

    Ratios sum to exactly 1. When nobody was recorded in the window the
    split is degenerate and every roommate holds 1/N. Prefer build_split,
    which expands partial maps and handles the degenerate case.
    """

    def __init__(self, ratios: Dict[Roommate, Fraction], is_degenerate: bool = False):
        if any(ratio < 0 for ratio in ratios.values()):
            raise InvalidSplit("Responsibility ratios cannot be negative")
        total = sum(ratios.values(), Fraction(0))
        if total != 1:
            raise InvalidSplit(f"Responsibility ratios must sum to 1, got {total}")
        self._ratios = dict(sorted(ratios.items()))
        self.is_degenerate = is_degenerate

    def __getitem__(self, roommate: Roommate) -> Fraction:
        return self._ratios[roommate]

    def __iter__(self) -> Iterator[Roommate]:
        return iter(self._ratios)

    def __len__(self) -> int:
        return len(self._ratios)

    def __repr__(self) -> str:
        shares = ", ".join(f"{r}: {ratio}" for r, ratio in self._ratios.items())
        return f"ResponsibilitySplit({{{shares}}})"


def build_split(group: RoommateGroup, ratios: Dict[Roommate, Fraction]) -> ResponsibilitySplit:
    """
    Validate caller-supplied ratios and expand them over the whole group.

    - Ratios summing to 1: roommates absent from the map get 0
    - Ratios summing to 0: every roommate gets 1/N (nobody was present)
    - Anything else is a programming error and raises InvalidSplit
    """
    if len(group) == 0:
        raise InvalidSplit("Cannot split responsibility across an empty roommate group")

    strangers = [r for r in ratios if r not in group]
    if strangers:
        names = ", ".join(sorted(str(r) for r in strangers))
        raise InvalidSplit(f"Roommates not in the group: {names}")

    if any(ratio < 0 for ratio in ratios.values()):
        raise InvalidSplit("Responsibility ratios cannot be negative")

    total = sum(ratios.values(), Fraction(0))
    if total == 1:
        return ResponsibilitySplit({r: Fraction(ratios.get(r, 0)) for r in group})
    if total == 0:
        equal_share = Fraction(1, len(group))
        return ResponsibilitySplit({r: equal_share for r in group}, is_degenerate=True)
    raise InvalidSplit(f"Responsibility ratios must sum to 1 or 0, got {total}")


def compute_responsibility_split(
    group: RoommateGroup,
    intervals: Iterable[ResponsibilityInterval],
    window: DateInterval,
) -> ResponsibilitySplit:
    """
    Proportion of a billing window's occupancy each roommate is responsible for.

    ratio(r) = person-days charged to r / person-days charged to anyone,
    kept as exact fractions. A window nobody occupied falls back to an even
    split.
    """
    intervals = list(intervals)
    total = compute_occupancy(window, intervals)

    if total == 0:
        ratios: Dict[Roommate, Fraction] = {}
    else:
        ratios = {
            roommate: Fraction(compute_roommate_occupancy(window, intervals, roommate), total)
            for roommate in group
        }

    split = build_split(group, ratios)
    if split.is_degenerate:
        logger.info(
            "No occupancy recorded in window, splitting evenly",
            extra={"window": str(window), "roommate_count": len(group)},
        )
    return split
