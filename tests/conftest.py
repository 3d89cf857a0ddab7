"""Pytest fixtures for testing"""

import pytest
from datetime import date
from roommates.domain.models import (
    Bill,
    DateInterval,
    ResponsibilityInterval,
    ResponsibilityRecord,
    Roommate,
    RoommateGroup,
)
from roommates.domain.money import Money


def usd(minor: int) -> Money:
    return Money(minor, "USD")


def period(start: tuple, end: tuple) -> DateInterval:
    return DateInterval(date(*start), date(*end))


# Five consecutive 10-day usage periods, oldest first; the last is the "current" bill
PERIODS = [
    period((2020, 1, 1), (2020, 1, 10)),
    period((2020, 1, 11), (2020, 1, 20)),
    period((2020, 1, 21), (2020, 1, 30)),
    period((2020, 1, 31), (2020, 2, 9)),
    period((2020, 2, 10), (2020, 2, 19)),
]


@pytest.fixture
def periods() -> list[DateInterval]:
    return list(PERIODS)


@pytest.fixture
def alice() -> Roommate:
    return Roommate("alice")


@pytest.fixture
def bob() -> Roommate:
    return Roommate("bob")


@pytest.fixture
def group(alice: Roommate, bob: Roommate) -> RoommateGroup:
    return RoommateGroup(frozenset([alice, bob]))


@pytest.fixture
def household_record(alice: Roommate, bob: Roommate) -> ResponsibilityRecord:
    """
    alice is home for every period; bob arrives in the second period
    and brings a varying number of guests.

    Person-days per period: 10, 20, 30, 40, 30
    """
    return ResponsibilityRecord.of(
        [
            ResponsibilityInterval(alice, period((2020, 1, 1), (2020, 2, 19)), 0),
            ResponsibilityInterval(bob, PERIODS[1], 0),
            ResponsibilityInterval(bob, PERIODS[2], 1),
            ResponsibilityInterval(bob, PERIODS[3], 2),
            ResponsibilityInterval(bob, PERIODS[4], 1),
        ]
    )


@pytest.fixture
def water_history() -> list[Bill]:
    """Past water bills costing $10.00 plus 10 cents per person-day"""
    return [
        Bill(usd(1100), PERIODS[0]),
        Bill(usd(1200), PERIODS[1]),
        Bill(usd(1300), PERIODS[2]),
        Bill(usd(1400), PERIODS[3]),
    ]


@pytest.fixture
def current_water() -> Bill:
    return Bill(usd(1300), PERIODS[4])
