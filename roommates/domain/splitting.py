"""Cost splitting - turn shared bills and responsibility ratios into money"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from fractions import Fraction
from typing import Dict, Iterable, Iterator, Optional, TypeVar

from roommates.domain.exceptions import InvalidSplit, MismatchedCurrencies
from roommates.domain.models import Roommate, SharedBill
from roommates.domain.money import Money
from roommates.domain.responsibility import ResponsibilitySplit
from roommates.infrastructure.observability.metrics import (
    record_bill_split,
    record_rounding_correction,
)


K = TypeVar("K")


class RoundingCorrection(IntEnum):
    """Minor units added to a rounded share so a split reconciles to its total"""

    BELOW = -1
    NONE = 0
    ABOVE = 1


@dataclass(frozen=True)
class CostSplitEntry:
    """One roommate's share of a bill, in minor units"""

    exact: Fraction  # exact share before any rounding
    base: int  # exact share rounded half-up
    correction: RoundingCorrection = RoundingCorrection.NONE

    @property
    def corrected(self) -> int:
        return self.base + int(self.correction)


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def reconcile(exact: Dict[K, Fraction], total: int) -> Dict[K, CostSplitEntry]:
    """
    Round exact shares to whole minor units that sum to total.

    Keys are usually roommates but any sortable key works.

    Every share is rounded half-up first. If that leaves the sum short, the
    roommates whose shares were rounded down the most get one unit ABOVE;
    if it overshoots, those rounded up the most get one unit BELOW. Ties go
    to the roommate whose name sorts first, so the result is reproducible.

    Example:
        3 roommates, 2000 minor units split evenly -> 666 2/3 each
        rounded: 667, 667, 667 (sum 2001, one unit over)
        all errors equal, so "a" (first by name) is corrected BELOW -> 666
    """
    base = {roommate: _round_half_up(share) for roommate, share in exact.items()}
    gap = total - sum(base.values())
    if abs(gap) > len(exact):
        raise InvalidSplit(
            f"Shares summing to {sum(exact.values(), Fraction(0))} cannot be reconciled to {total}"
        )

    corrections = {roommate: RoundingCorrection.NONE for roommate in exact}
    if gap > 0:
        # Largest shortfall first
        order = sorted(exact, key=lambda r: (base[r] - exact[r], r))
        for roommate in order[:gap]:
            corrections[roommate] = RoundingCorrection.ABOVE
    elif gap < 0:
        # Largest overshoot first
        order = sorted(exact, key=lambda r: (exact[r] - base[r], r))
        for roommate in order[:-gap]:
            corrections[roommate] = RoundingCorrection.BELOW

    return {
        roommate: CostSplitEntry(exact=exact[roommate], base=base[roommate], correction=corrections[roommate])
        for roommate in sorted(exact)
    }


class CostSplit(Mapping):
    """
    Read-only mapping of roommate to the money they owe for one bill.

    Values are read with their rounding correction applied, so they always
    sum to total exactly.
    """

    def __init__(self, entries: Dict[Roommate, CostSplitEntry], total: Money):
        self._entries = dict(sorted(entries.items()))
        self.total = total

    @property
    def currency(self) -> str:
        return self.total.currency

    def __getitem__(self, roommate: Roommate) -> Money:
        return Money(self._entries[roommate].corrected, self.currency)

    def __iter__(self) -> Iterator[Roommate]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, roommate: Roommate) -> CostSplitEntry:
        return self._entries[roommate]

    def entries(self) -> Dict[Roommate, CostSplitEntry]:
        return dict(self._entries)

    def __repr__(self) -> str:
        shares = ", ".join(f"{r}: {self[r]}" for r in self._entries)
        return f"CostSplit(total={self.total}, {{{shares}}})"


def split_bill(shared_bill: SharedBill, split: ResponsibilitySplit) -> CostSplit:
    """
    Divide one bill among the roommates in split.

    Each roommate owes shared_amount / N plus their ratio of the variable
    amount (amount_due - shared_amount). Shares are computed exactly, then
    reconciled to whole minor units summing to amount_due.

    Example:
        $99.99 due, $35.46 shared, ratios 1/4 and 3/4
        a: 3546/2 + 6453 * 1/4 = 3386.25 -> $33.86
        b: 3546/2 + 6453 * 3/4 = 6612.75 -> $66.13
    """
    if len(split) == 0:
        raise InvalidSplit("Cannot split a bill across an empty responsibility split")

    count = len(split)
    shared = shared_bill.shared_amount.minor
    variable = shared_bill.variable_amount.minor
    exact = {
        roommate: Fraction(shared, count) + variable * ratio
        for roommate, ratio in split.items()
    }

    entries = reconcile(exact, shared_bill.amount_due.minor)

    record_bill_split()
    for entry in entries.values():
        if entry.correction is RoundingCorrection.ABOVE:
            record_rounding_correction("above")
        elif entry.correction is RoundingCorrection.BELOW:
            record_rounding_correction("below")

    return CostSplit(entries, shared_bill.amount_due)


class CostAccumulator:
    """
    Running per-roommate totals across several bills of one currency.

    Exact shares and bill totals are summed separately; rounding is only
    resolved when totals() is called, so the order bills are added in never
    changes the result.
    """

    def __init__(self) -> None:
        self._exact: Dict[Roommate, Fraction] = {}
        self._total_minor = 0
        self._currency: Optional[str] = None
        self.bill_count = 0

    @property
    def currency(self) -> Optional[str]:
        return self._currency

    @property
    def total(self) -> Optional[Money]:
        if self._currency is None:
            return None
        return Money(self._total_minor, self._currency)

    def add(self, cost_split: CostSplit) -> "CostAccumulator":
        if self._currency is None:
            self._currency = cost_split.currency
        elif cost_split.currency != self._currency:
            raise MismatchedCurrencies(
                f"All bills must share one currency: got {cost_split.currency}, expected {self._currency}"
            )

        for roommate, entry in cost_split.entries().items():
            self._exact[roommate] = self._exact.get(roommate, Fraction(0)) + entry.exact
        self._total_minor += cost_split.total.minor
        self.bill_count += 1
        return self

    def totals(self) -> Dict[Roommate, Money]:
        if self._currency is None:
            return {}
        entries = reconcile(self._exact, self._total_minor)
        return {roommate: Money(entry.corrected, self._currency) for roommate, entry in entries.items()}


def accumulate(cost_splits: Iterable[CostSplit]) -> Dict[Roommate, Money]:
    """Sum per-roommate amounts over many bills; the result reconciles to the grand total"""
    accumulator = CostAccumulator()
    for cost_split in cost_splits:
        accumulator.add(cost_split)
    return accumulator.totals()
