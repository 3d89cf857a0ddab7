"""Shared-cost estimator - infer the usage-independent part of a bill from its history"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import ClassVar, Iterable, List, Optional, Sequence, Tuple, Type

import numpy as np

from roommates.config import settings
from roommates.domain.exceptions import (
    InvalidModelData,
    MismatchedCurrencies,
    ModelFitsDataPoorly,
    ModelPredictsPoorly,
)
from roommates.domain.models import Bill, ResponsibilityRecord, SharedBill
from roommates.domain.money import Money
from roommates.infrastructure.observability.logging import log_estimate
from roommates.infrastructure.observability.metrics import record_estimation

logger = logging.getLogger(__name__)


class IndependentVariables(ABC):
    """
    One data point of whatever drives a bill's usage.

    Implementations list their feature names (the formula arity is their
    count), produce a feature vector, and can produce an "empty house"
    copy of themselves with occupancy set to zero and every other
    variable left alone.
    """

    feature_names: ClassVar[Tuple[str, ...]] = ()

    @abstractmethod
    def feature_vector(self) -> Tuple[float, ...]:
        ...

    @abstractmethod
    def empty(self) -> "IndependentVariables":
        ...

    @classmethod
    def formula_arity(cls) -> int:
        return len(cls.feature_names)

    @classmethod
    def formula(cls) -> str:
        return "Y ~ " + " + ".join(cls.feature_names)


@dataclass(frozen=True)
class Occupancy(IndependentVariables):
    """Person-days in the usage period"""

    occupancy: int

    feature_names: ClassVar[Tuple[str, ...]] = ("occupancy",)

    def feature_vector(self) -> Tuple[float, ...]:
        return (float(self.occupancy),)

    def empty(self) -> "Occupancy":
        return Occupancy(0)


@dataclass(frozen=True)
class OccupancyAndTemperature(IndependentVariables):
    """Person-days plus a weather index, for heating/cooling driven bills"""

    occupancy: int
    temperature_index: float

    feature_names: ClassVar[Tuple[str, ...]] = ("occupancy", "temperature_index")

    def feature_vector(self) -> Tuple[float, ...]:
        return (float(self.occupancy), float(self.temperature_index))

    def empty(self) -> "OccupancyAndTemperature":
        return replace(self, occupancy=0)


class SharedCostEstimator:
    """
    Ordinary least squares model of bill cost against independent variables.

    Fitted with an intercept; the intercept plus any non-occupancy terms is
    what the bill would cost with nobody home.
    """

    def __init__(
        self,
        variable_type: Type[IndependentVariables],
        coefficients: np.ndarray,
        r_squared: float,
    ):
        self.variable_type = variable_type
        self.coefficients = coefficients
        self.r_squared = r_squared

    @classmethod
    def fit(
        cls, history: Iterable[Tuple[IndependentVariables, float]]
    ) -> "SharedCostEstimator":
        """
        Fit Y ~ X1 + ... + Xn on historical (variables, amount) rows.

        Raises InvalidModelData when the history cannot support a unique,
        meaningful fit: too few rows, mixed variable types, non-finite
        values, constant columns, or collinear predictors.
        """
        rows = list(history)
        if not rows:
            raise InvalidModelData("no bills in history")

        variable_type = type(rows[0][0])
        if any(type(x) is not variable_type for x, _ in rows):
            raise InvalidModelData("history mixes different kinds of independent variables")

        features = np.array([x.feature_vector() for x, _ in rows], dtype=float)
        amounts = np.array([float(y) for _, y in rows], dtype=float)
        if not (np.all(np.isfinite(features)) and np.all(np.isfinite(amounts))):
            raise InvalidModelData("history contains non-finite values")

        param_count = variable_type.formula_arity() + 1
        if len(rows) <= param_count:
            raise InvalidModelData(
                f"{variable_type.formula()} needs at least {param_count + 1} bills, got {len(rows)}"
            )

        for name, column in zip(variable_type.feature_names, features.T):
            if column.max() == column.min():
                raise InvalidModelData(f"{name} has the same value for every bill")
        if amounts.max() == amounts.min():
            raise InvalidModelData("every bill in history has the same amount")

        design = np.column_stack([np.ones(len(rows)), features])
        coefficients, _, rank, _ = np.linalg.lstsq(design, amounts, rcond=None)
        if rank < param_count:
            raise InvalidModelData("independent variables are collinear")

        residuals = amounts - design @ coefficients
        ss_res = float(residuals @ residuals)
        ss_tot = float(((amounts - amounts.mean()) ** 2).sum())
        r_squared = 1.0 - ss_res / ss_tot

        return cls(variable_type, coefficients, r_squared)

    def predict(self, x: IndependentVariables) -> float:
        """Predicted amount (in minor units) for one data point"""
        if not isinstance(x, self.variable_type):
            raise InvalidModelData(
                f"model was fitted on {self.variable_type.__name__}, got {type(x).__name__}"
            )
        features = np.array(x.feature_vector(), dtype=float)
        return float(self.coefficients[0] + self.coefficients[1:] @ features)

    def predict_empty(self, x: IndependentVariables) -> float:
        """Predicted amount with nobody home, other variables held at x's values"""
        return self.predict(x.empty())

    def mape(self, x: IndependentVariables, actual: float) -> float:
        """
        Mean absolute percentage error on a single (x, actual) pair.

        |actual - predicted| / actual; closer to zero is better.
        """
        predicted = self.predict(x)
        if actual == 0:
            return 0.0 if predicted == 0 else math.inf
        return abs(actual - predicted) / abs(actual)


def estimate_shared_bill(
    current_bill: Bill,
    current_independent_vars: IndependentVariables,
    history: Iterable[Tuple[IndependentVariables, Money]],
    *,
    r_squared_threshold: Optional[float] = None,
    mape_threshold: Optional[float] = None,
) -> SharedBill:
    """
    Estimate the shared portion of a bill from bills that came before it.

    Flow:
    1. Fit a linear model of amount against the independent variables
    2. Reject it if R² is below the fit threshold (default 0.70)
    3. Reject it if it misses the current bill's variable cost by more
       than the MAPE threshold (default 0.20)
    4. Predict the current bill with occupancy forced to zero, add back
       the bill's explicit fixed cost, clamp to [0, amount_due]

    History amounts should be the variable cost of each past bill so they
    line up with the current bill's variable cost.
    """
    r_squared_threshold = (
        settings.r_squared_threshold if r_squared_threshold is None else r_squared_threshold
    )
    mape_threshold = settings.mape_threshold if mape_threshold is None else mape_threshold
    period = str(current_bill.usage_period)

    rows: List[Tuple[IndependentVariables, float]] = []
    for x, amount in history:
        if amount.currency != current_bill.currency:
            raise MismatchedCurrencies(
                f"bill history is in {amount.currency} but current bill is in {current_bill.currency}"
            )
        rows.append((x, amount.minor))

    try:
        model = SharedCostEstimator.fit(rows)
        if model.r_squared < r_squared_threshold:
            raise ModelFitsDataPoorly(model.r_squared)
        current_prediction_error = model.mape(
            current_independent_vars, current_bill.variable_cost.minor
        )
        if current_prediction_error > mape_threshold:
            raise ModelPredictsPoorly(current_prediction_error)
    except InvalidModelData:
        record_estimation("invalid_data")
        log_estimate(period, "invalid_data")
        raise
    except ModelFitsDataPoorly as exc:
        record_estimation("poor_fit")
        log_estimate(period, "poor_fit", r_squared=exc.r_squared)
        raise
    except ModelPredictsPoorly as exc:
        record_estimation("poor_prediction")
        log_estimate(period, "poor_prediction", r_squared=model.r_squared, mape=exc.mape)
        raise

    empty_house_cost = math.floor(model.predict_empty(current_independent_vars) + 0.5)
    unclamped = empty_house_cost + current_bill.fixed_cost.minor
    shared_minor = min(max(unclamped, 0), current_bill.amount_due.minor)

    if shared_minor != unclamped:
        logger.warning(
            "Estimated shared cost clamped to the bill range",
            extra={"usage_period": period, "unclamped_minor": unclamped, "shared_minor": shared_minor},
        )
    amount_due = current_bill.amount_due.minor
    if amount_due and shared_minor / amount_due >= settings.implausible_shared_ratio:
        logger.warning(
            "Estimated shared cost covers almost all of the bill",
            extra={"usage_period": period, "shared_minor": shared_minor, "amount_due_minor": amount_due},
        )

    record_estimation("accepted")
    log_estimate(
        period,
        "accepted",
        r_squared=model.r_squared,
        mape=current_prediction_error,
        shared_minor=shared_minor,
    )
    return SharedBill(current_bill, Money(shared_minor, current_bill.currency))


def convert_to_shared(
    bill: Bill, history: Sequence[Bill], record: ResponsibilityRecord
) -> SharedBill:
    """Estimate a SharedBill using occupancy from record as the only predictor"""
    return estimate_shared_bill(
        bill,
        Occupancy(record.occupancy_over(bill.usage_period)),
        [(Occupancy(record.occupancy_over(b.usage_period)), b.variable_cost) for b in history],
    )


def convert_to_shared_with_temperature(
    current: Tuple[Bill, float],
    history: Sequence[Tuple[Bill, float]],
    record: ResponsibilityRecord,
) -> SharedBill:
    """Estimate a SharedBill from occupancy plus each bill's temperature index"""
    bill, temperature_index = current
    return estimate_shared_bill(
        bill,
        OccupancyAndTemperature(record.occupancy_over(bill.usage_period), temperature_index),
        [
            (OccupancyAndTemperature(record.occupancy_over(b.usage_period), ti), b.variable_cost)
            for b, ti in history
        ],
    )
