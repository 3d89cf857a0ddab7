"""Domain models - pure Python dataclasses representing household entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterable, Iterator, Optional, Tuple

from roommates.config import settings
from roommates.domain.exceptions import (
    ExceedsAmountDue,
    InvalidOccupantCount,
    MismatchedCurrencies,
    Negative,
    NegativeLengthInterval,
)
from roommates.domain.money import Money
from roommates.domain.occupancy import compute_occupancy
from roommates.utils.date_utils import inclusive_days, parse_date


@dataclass(frozen=True, order=True)
class Roommate:
    """A person sharing household costs, identified by name"""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class RoommateGroup:
    """Everyone who shares the bills of one household"""

    members: FrozenSet[Roommate]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "RoommateGroup":
        return cls(frozenset(Roommate(name) for name in names))

    def __iter__(self) -> Iterator[Roommate]:
        # Sorted so every downstream computation visits roommates in the same order
        return iter(sorted(self.members))

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, roommate: object) -> bool:
        return roommate in self.members

    def by_name(self, name: str) -> Optional[Roommate]:
        roommate = Roommate(name)
        return roommate if roommate in self.members else None


@dataclass(frozen=True)
class DateInterval:
    """The days between a start date and an end date, inclusive"""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise NegativeLengthInterval()

    @classmethod
    def from_strings(cls, start: str, end: str, fmt: Optional[str] = None) -> "DateInterval":
        """Parse "month/day/year" strings (or another strptime format)"""
        fmt = fmt or settings.date_format
        return cls(parse_date(start, fmt), parse_date(end, fmt))

    def num_days(self) -> int:
        return inclusive_days(self.start, self.end)

    def overlap_days(self, bounds: "DateInterval") -> int:
        """Number of days of this interval that also lie in bounds"""
        return inclusive_days(max(self.start, bounds.start), min(self.end, bounds.end))

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} to {self.end.isoformat()}"


@dataclass(frozen=True)
class ResponsibilityInterval:
    """
    A stretch of time one roommate is financially responsible for.

    Always represents the roommate plus any additional people (guests,
    partners) they are answerable for during the interval.
    """

    roommate: Roommate
    interval: DateInterval
    additional_people: int = 0

    def __post_init__(self) -> None:
        if self.additional_people < 0:
            raise InvalidOccupantCount(
                f"additional_people must be >= 0, got {self.additional_people}"
            )

    @property
    def num_people(self) -> int:
        # The responsible roommate is always one of the people present
        return 1 + self.additional_people


@dataclass(frozen=True)
class ResponsibilityRecord:
    """The complete occupancy history of a household"""

    intervals: Tuple[ResponsibilityInterval, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, intervals: Iterable[ResponsibilityInterval]) -> "ResponsibilityRecord":
        return cls(tuple(intervals))

    def __iter__(self) -> Iterator[ResponsibilityInterval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def occupancy_over(self, window: DateInterval) -> int:
        """Person-days recorded inside window"""
        return compute_occupancy(window, self.intervals)

    def for_roommate(self, roommate: Roommate) -> "ResponsibilityRecord":
        return ResponsibilityRecord(tuple(i for i in self.intervals if i.roommate == roommate))

    def roommates(self) -> FrozenSet[Roommate]:
        return frozenset(i.roommate for i in self.intervals)


def _check_portion(amount_due: Money, portion: Money, name: str) -> None:
    if portion.currency != amount_due.currency:
        raise MismatchedCurrencies(
            f"{name} is in {portion.currency} but amount due is in {amount_due.currency}"
        )
    if portion.is_negative():
        raise Negative(f"{name} cannot be negative ({portion})")
    if portion.minor > amount_due.minor:
        raise ExceedsAmountDue(f"{name} ({portion}) exceeds amount due ({amount_due})")


@dataclass(frozen=True)
class Bill:
    """A single utility bill for one usage period"""

    amount_due: Money
    usage_period: DateInterval
    fixed_cost: Optional[Money] = None  # explicitly known usage-independent charge

    def __post_init__(self) -> None:
        if self.amount_due.is_negative():
            raise Negative(f"amount due cannot be negative ({self.amount_due})")
        if self.fixed_cost is None:
            object.__setattr__(self, "fixed_cost", Money.zero(self.amount_due.currency))
        _check_portion(self.amount_due, self.fixed_cost, "fixed cost")

    @property
    def currency(self) -> str:
        return self.amount_due.currency

    @property
    def variable_cost(self) -> Money:
        return self.amount_due - self.fixed_cost


@dataclass(frozen=True)
class SharedBill:
    """
    A bill paired with the portion that is split evenly.

    shared_amount is divided equally among all roommates; the rest of
    amount_due is divided in proportion to occupancy.
    """

    bill: Bill
    shared_amount: Money

    def __post_init__(self) -> None:
        _check_portion(self.bill.amount_due, self.shared_amount, "shared amount")

    @classmethod
    def from_fixed(cls, bill: Bill) -> "SharedBill":
        """Share only the bill's explicit fixed cost"""
        return cls(bill, bill.fixed_cost)

    @classmethod
    def from_fully_fixed(cls, bill: Bill) -> "SharedBill":
        """Share the whole amount due"""
        return cls(bill, bill.amount_due)

    @property
    def amount_due(self) -> Money:
        return self.bill.amount_due

    @property
    def usage_period(self) -> DateInterval:
        return self.bill.usage_period

    @property
    def currency(self) -> str:
        return self.bill.currency

    @property
    def variable_amount(self) -> Money:
        return self.bill.amount_due - self.shared_amount
