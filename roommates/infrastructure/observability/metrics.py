"""Prometheus metrics for monitoring estimation outcomes and bill splitting"""

from prometheus_client import Counter

# Estimation metrics
estimation_counter = Counter(
    "roommates_estimation_total",
    "Shared-cost estimations attempted",
    ["outcome"],  # accepted | invalid_data | poor_fit | poor_prediction
)

# Splitting metrics
bills_split_counter = Counter(
    "roommates_bills_split_total",
    "Bills converted into per-roommate cost splits",
)

rounding_correction_counter = Counter(
    "roommates_rounding_corrections_total",
    "Minor units moved to reconcile rounded shares with bill totals",
    ["direction"],  # above | below
)


def record_estimation(outcome: str) -> None:
    """Record the result of one shared-cost estimation"""
    estimation_counter.labels(outcome=outcome).inc()


def record_bill_split() -> None:
    bills_split_counter.inc()


def record_rounding_correction(direction: str) -> None:
    """Record a single minor-unit reconciliation"""
    rounding_correction_counter.labels(direction=direction).inc()
