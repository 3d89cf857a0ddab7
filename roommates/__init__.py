"""Split shared household bills among roommates by who was home and when"""

from roommates.domain.estimation import (
    Occupancy,
    OccupancyAndTemperature,
    convert_to_shared,
    convert_to_shared_with_temperature,
    estimate_shared_bill,
)
from roommates.domain.invoices import Invoice, generate_invoices
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
from roommates.domain.occupancy import average_occupancy, compute_occupancy
from roommates.domain.responsibility import ResponsibilitySplit, compute_responsibility_split
from roommates.domain.sharing import EstimatedFromHistory, FixedCost, SharingData
from roommates.domain.splitting import CostSplit, accumulate, split_bill
from roommates.domain.weather import WeatherObservation, period_temperature_index, temperature_index

__version__ = "0.1.0"

__all__ = [
    "Bill",
    "CostSplit",
    "DateInterval",
    "EstimatedFromHistory",
    "FixedCost",
    "Invoice",
    "Money",
    "Occupancy",
    "OccupancyAndTemperature",
    "ResponsibilityInterval",
    "ResponsibilityRecord",
    "ResponsibilitySplit",
    "Roommate",
    "RoommateGroup",
    "SharedBill",
    "SharingData",
    "WeatherObservation",
    "accumulate",
    "average_occupancy",
    "compute_occupancy",
    "compute_responsibility_split",
    "convert_to_shared",
    "convert_to_shared_with_temperature",
    "estimate_shared_bill",
    "generate_invoices",
    "period_temperature_index",
    "split_bill",
    "temperature_index",
]
