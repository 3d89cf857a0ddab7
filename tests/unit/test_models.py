"""Unit tests for domain value types"""

import pytest
from datetime import date
from roommates.domain.exceptions import (
    ExceedsAmountDue,
    InvalidDate,
    InvalidOccupantCount,
    MismatchedCurrencies,
    Negative,
    NegativeLengthInterval,
)
from roommates.domain.models import (
    Bill,
    DateInterval,
    ResponsibilityInterval,
    ResponsibilityRecord,
    Roommate,
    RoommateGroup,
    SharedBill,
)
from roommates.domain.money import Money


def test_money_arithmetic():
    """Test addition, subtraction and negation keep the currency"""
    assert Money(9999) - Money(3546) == Money(6453)
    assert Money(1) + Money(2) == Money(3)
    assert -Money(5, "EUR") == Money(-5, "EUR")
    assert Money.of_major_minor("USD", 99, 99) == Money(9999, "USD")
    assert Money.zero("EUR") == Money(0, "EUR")


def test_money_mismatched_currencies():
    """Test combining different currencies is rejected"""
    with pytest.raises(MismatchedCurrencies):
        Money(100, "USD") + Money(100, "EUR")
    with pytest.raises(MismatchedCurrencies):
        Money(100, "USD") < Money(100, "EUR")


def test_money_display():
    """Test money renders in major units"""
    assert str(Money(9999)) == "$99.99"
    assert str(Money(5)) == "$0.05"
    assert str(Money(-1250)) == "-$12.50"
    assert str(Money(1234, "EUR")) == "12.34 EUR"
    assert str(Money(500, "JPY")) == "500 JPY"


def test_date_interval_rejects_negative_length():
    """Test end before start raises"""
    assert DateInterval(date(2020, 1, 1), date(2020, 1, 1)).num_days() == 1
    with pytest.raises(NegativeLengthInterval):
        DateInterval(date(2020, 3, 1), date(2020, 1, 1))


def test_date_interval_from_strings():
    """Test month/day/year parsing"""
    interval = DateInterval.from_strings("01/01/2020", "12/01/2020")
    assert interval.start == date(2020, 1, 1)
    assert interval.end == date(2020, 12, 1)

    with pytest.raises(NegativeLengthInterval):
        DateInterval.from_strings("12/01/2020", "01/01/2020")
    with pytest.raises(InvalidDate):
        DateInterval.from_strings("01/01/2020", "13/01/2020")
    with pytest.raises(InvalidDate):
        DateInterval.from_strings("01-01-2020", "12-01-2020")


def test_date_interval_custom_format():
    """Test two-digit years with an explicit format"""
    interval = DateInterval.from_strings("01/10/20", "01/20/20", fmt="%m/%d/%y")
    assert interval.num_days() == 11


def test_date_interval_overlap_is_symmetric():
    """Test overlap counting in both directions"""
    april = DateInterval(date(2020, 4, 1), date(2020, 4, 30))
    spring = DateInterval(date(2020, 3, 20), date(2020, 6, 19))
    assert april.overlap_days(spring) == 30
    assert spring.overlap_days(april) == 30

    may = DateInterval(date(2020, 5, 1), date(2020, 5, 31))
    assert april.overlap_days(may) == 0
    assert date(2020, 4, 30) in april
    assert date(2020, 5, 1) not in april


def test_responsibility_interval_counts_roommate():
    """Test the responsible roommate is counted alongside guests"""
    joe = Roommate("Joe")
    visit = ResponsibilityInterval(joe, DateInterval(date(2020, 1, 15), date(2020, 1, 22)), 1)
    assert visit.roommate == joe
    assert visit.num_people == 2


def test_responsibility_interval_rejects_negative_guests():
    """Test negative additional people raises"""
    with pytest.raises(InvalidOccupantCount):
        ResponsibilityInterval(Roommate("Joe"), DateInterval(date(2020, 1, 1), date(2020, 1, 2)), -1)


def test_responsibility_record_filters_by_roommate():
    """Test per-roommate views of a record"""
    bob, joe = Roommate("bob"), Roommate("joe")
    record = ResponsibilityRecord.of(
        [
            ResponsibilityInterval(bob, DateInterval(date(2020, 1, 15), date(2020, 1, 20))),
            ResponsibilityInterval(joe, DateInterval(date(2020, 1, 10), date(2020, 1, 15))),
        ]
    )
    assert [i.roommate for i in record] == [bob, joe]
    assert len(record.for_roommate(bob)) == 1
    assert record.roommates() == {bob, joe}


def test_roommate_group_is_sorted_and_deduplicated():
    """Test group iteration order and lookup"""
    group = RoommateGroup.from_names(["Winifred", "Georg", "Rupert", "Georg"])
    assert [r.name for r in group] == ["Georg", "Rupert", "Winifred"]
    assert len(group) == 3
    assert group.by_name("Rupert") == Roommate("Rupert")
    assert group.by_name("Hestia") is None


def test_bill_defaults_fixed_cost_to_zero():
    """Test a bill without a fixed cost is fully variable"""
    bill = Bill(Money(8322), DateInterval(date(2020, 4, 15), date(2020, 5, 15)))
    assert bill.fixed_cost == Money(0)
    assert bill.variable_cost == Money(8322)


def test_bill_invariants():
    """Test fixed cost must lie in [0, amount_due] and share its currency"""
    period = DateInterval(date(2020, 4, 15), date(2020, 5, 15))
    with pytest.raises(ExceedsAmountDue):
        Bill(Money(3000), period, Money(3500))
    with pytest.raises(Negative):
        Bill(Money(3000), period, Money(-100))
    with pytest.raises(Negative):
        Bill(Money(-3000), period)
    with pytest.raises(MismatchedCurrencies):
        Bill(Money(3000), period, Money(100, "EUR"))


def test_shared_bill_constructors():
    """Test sharing the fixed cost versus the whole bill"""
    water = Bill(Money(8322), DateInterval(date(2020, 4, 15), date(2020, 5, 15)), Money(4000))
    assert SharedBill.from_fixed(water).shared_amount == Money(4000)
    assert SharedBill.from_fully_fixed(water).shared_amount == Money(8322)
    assert SharedBill.from_fixed(water).variable_amount == Money(4322)


def test_shared_bill_invariants():
    """Test shared amount must lie in [0, amount_due]"""
    bill = Bill(Money(3000), DateInterval(date(2020, 1, 2), date(2020, 2, 2)))
    with pytest.raises(ExceedsAmountDue):
        SharedBill(bill, Money(3500))
    with pytest.raises(Negative):
        SharedBill(bill, Money(-100))
    with pytest.raises(MismatchedCurrencies):
        SharedBill(bill, Money(100, "EUR"))
