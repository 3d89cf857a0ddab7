"""How each bill's shared portion is decided - declared up front or estimated from history"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from roommates.domain.estimation import convert_to_shared, convert_to_shared_with_temperature
from roommates.domain.exceptions import InvalidModelData
from roommates.domain.models import Bill, ResponsibilityRecord, SharedBill


@dataclass(frozen=True)
class FixedCost:
    """
    A bill whose shared portion is known without estimation.

    fully_shared=True splits the whole bill evenly (internet, rent);
    otherwise only the bill's explicit fixed_cost is shared.
    """

    bill: Bill
    fully_shared: bool = True


@dataclass(frozen=True)
class EstimatedFromHistory:
    """
    A bill whose shared portion is inferred from earlier bills of the same kind.

    When temperature_index is set, every history entry must carry one too and
    the occupancy-plus-temperature model is used.
    """

    bill: Bill
    history: Tuple[Tuple[Bill, Optional[float]], ...] = field(default_factory=tuple)
    temperature_index: Optional[float] = None


SharingData = Union[FixedCost, EstimatedFromHistory]


def to_shared_bill(
    data: Union[SharingData, SharedBill], record: ResponsibilityRecord
) -> SharedBill:
    """Resolve any sharing variant into a SharedBill"""
    if isinstance(data, SharedBill):
        return data

    if isinstance(data, FixedCost):
        if data.fully_shared:
            return SharedBill.from_fully_fixed(data.bill)
        return SharedBill.from_fixed(data.bill)

    if isinstance(data, EstimatedFromHistory):
        if data.temperature_index is None:
            return convert_to_shared(data.bill, [bill for bill, _ in data.history], record)
        if any(ti is None for _, ti in data.history):
            raise InvalidModelData("temperature index missing from part of the bill history")
        return convert_to_shared_with_temperature(
            (data.bill, data.temperature_index), list(data.history), record
        )

    raise TypeError(f"Unknown sharing data: {type(data).__name__}")
