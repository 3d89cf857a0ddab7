"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


# Intervals


class IntervalError(DomainException):
    """A date interval or responsibility interval is malformed"""

    pass


class NegativeLengthInterval(IntervalError):
    """The end of an interval is before its start"""

    def __init__(self, message: str = "The end of an interval cannot be before the start"):
        super().__init__(message)


class InvalidDate(IntervalError):
    """A date string could not be parsed"""

    pass


class InvalidOccupantCount(IntervalError):
    """A responsibility interval was given a negative number of additional people"""

    pass


# Bills


class BillError(DomainException):
    """A bill or shared bill has inconsistent amounts"""

    pass


class MismatchedCurrencies(BillError):
    """Two amounts that must share a currency do not"""

    pass


class ExceedsAmountDue(BillError):
    """A fixed or shared amount is larger than the amount due"""

    pass


class Negative(BillError):
    """An amount that must be non-negative is negative"""

    pass


# Estimation


class EstimationError(DomainException):
    """The shared cost of a bill could not be estimated from its history"""

    pass


class InvalidModelData(EstimationError):
    """Bill history cannot be used to fit a regression"""

    def __init__(self, message: str):
        super().__init__(f"Something is wrong with the bill history: {message}")


class ModelFitsDataPoorly(EstimationError):
    """Regression R² is below the acceptance threshold"""

    def __init__(self, r_squared: float):
        self.r_squared = r_squared
        super().__init__(
            "A good estimator could not be created from the given bill history "
            f"(rsquared == {r_squared})"
        )


class ModelPredictsPoorly(EstimationError):
    """Regression misses the current bill by more than the MAPE threshold"""

    def __init__(self, mape: float):
        self.mape = mape
        super().__init__(
            f"The model has a high mean absolute percentage error of {mape} predicting the given bill"
        )


# Splits


class SplitError(DomainException):
    """A responsibility split is inconsistent"""

    pass


class InvalidSplit(SplitError):
    """Responsibility ratios do not sum to 0 or 1 over the roommate group"""

    pass
