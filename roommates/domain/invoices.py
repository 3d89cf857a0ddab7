"""Invoice generation - one statement per roommate for a batch of bills"""

import time
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Iterable, List, Tuple, Union

from roommates.domain.models import ResponsibilityRecord, Roommate, RoommateGroup, SharedBill
from roommates.domain.money import Money
from roommates.domain.occupancy import average_occupancy
from roommates.domain.responsibility import compute_responsibility_split
from roommates.domain.sharing import SharingData, to_shared_bill
from roommates.domain.splitting import CostAccumulator, reconcile, split_bill
from roommates.infrastructure.observability.logging import log_invoice_run


@dataclass(frozen=True)
class InvoiceComponent:
    """
    One bill's contribution to a roommate's invoice.

    owed is rounded together with the roommate's other components so the
    components of an invoice always add up to its total.
    """

    label: str
    amount_due: Money
    shared_amount: Money
    responsibility: Fraction
    people_per_day: Fraction  # average occupancy over the bill's usage period
    owed: Money

    def __str__(self) -> str:
        return (
            f"\t{self.responsibility} of the responsibility for the "
            f"{self.amount_due - self.shared_amount} non-shared portion of the "
            f"{self.amount_due} {self.label} bill"
        )


@dataclass(frozen=True)
class Invoice:
    """Everything one roommate owes for a batch of bills"""

    to: Roommate
    total: Money
    components: Tuple[InvoiceComponent, ...]

    def __str__(self) -> str:
        lines = [f"{self.to} owes {self.total}"]
        lines.extend(str(c) for c in self.components)
        return "\n".join(lines)


@dataclass(frozen=True)
class _Line:
    label: str
    shared_bill: SharedBill
    responsibility: Fraction
    people_per_day: Fraction
    exact: Fraction


def _build_invoice(roommate: Roommate, total: Money, lines: List[_Line]) -> Invoice:
    """Round each line against the invoice total rather than on its own"""
    allocation = reconcile({i: line.exact for i, line in enumerate(lines)}, total.minor)
    components = tuple(
        InvoiceComponent(
            label=line.label,
            amount_due=line.shared_bill.amount_due,
            shared_amount=line.shared_bill.shared_amount,
            responsibility=line.responsibility,
            people_per_day=line.people_per_day,
            owed=Money(allocation[i].corrected, total.currency),
        )
        for i, line in enumerate(lines)
    )
    return Invoice(to=roommate, total=total, components=components)


def generate_invoices(
    group: RoommateGroup,
    bills: Iterable[Tuple[str, Union[SharingData, SharedBill]]],
    record: ResponsibilityRecord,
) -> List[Invoice]:
    """
    Main entry point: split a batch of labelled bills into per-roommate invoices.

    Flow:
    1. Resolve each bill's shared amount (fixed or estimated)
    2. Build a responsibility split over that bill's own usage period
    3. Split the bill and fold it into the running totals
    4. Emit one invoice per roommate, sorted by name, with component
       amounts reconciled to that roommate's total

    Invoice totals sum to the sum of all amounts due exactly.
    """
    start_time = time.time()
    accumulator = CostAccumulator()
    lines: Dict[Roommate, List[_Line]] = {r: [] for r in group}

    for label, data in bills:
        shared_bill = to_shared_bill(data, record)
        split = compute_responsibility_split(group, record, shared_bill.usage_period)
        cost_split = split_bill(shared_bill, split)
        accumulator.add(cost_split)
        people_per_day = average_occupancy(shared_bill.usage_period, record)

        for roommate, ratio in split.items():
            lines[roommate].append(
                _Line(
                    label=label,
                    shared_bill=shared_bill,
                    responsibility=ratio,
                    people_per_day=people_per_day,
                    exact=cost_split.entry(roommate).exact,
                )
            )

    totals = accumulator.totals()
    invoices = [
        _build_invoice(roommate, totals[roommate], lines[roommate])
        for roommate in group
        if roommate in totals
    ]

    duration_ms = (time.time() - start_time) * 1000
    log_invoice_run(
        bill_count=accumulator.bill_count,
        roommate_count=len(group),
        currency=accumulator.currency,
        total_minor=accumulator.total.minor if accumulator.total else 0,
        duration_ms=round(duration_ms, 2),
    )
    return invoices
