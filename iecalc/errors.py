"""
Exception hierarchy for the calculation engine.

Every failure raised by a calculator derives from CalculationError, which is
itself a ValueError, so callers that only care about "bad input" can catch
ValueError. Degenerate-but-valid inputs (zero margin, zero variance, RWL of 0)
never raise; they are reported through flags on the result records.
"""


class CalculationError(ValueError):
    """Raised when a calculator input violates its documented domain."""


class InvalidConfidenceLevelError(CalculationError):
    """Raised for a confidence label missing from the z-value table."""


class InsufficientDataError(CalculationError):
    """Raised when too few usable data points remain for a computation."""


class RangeViolationError(CalculationError):
    """Raised when a numeric argument lies outside its valid range."""


class NoiseLevelOutOfRangeError(RangeViolationError):
    """Raised when a sound level has no defined OSHA allowed time."""


class LengthMismatchError(CalculationError):
    """Raised when paired sequences differ in length."""


class UnknownRatingError(CalculationError):
    """Raised for a Westinghouse grade that is not in its table."""


# Learning-curve preconditions. Each gets its own class so the caller can
# surface a precise message for the failing field.

class NonPositiveCycleError(CalculationError):
    pass


class NonPositiveTimeError(CalculationError):
    pass


class DuplicateCycleError(CalculationError):
    pass


class CycleOrderError(CalculationError):
    pass


class NoImprovementError(CalculationError):
    pass
