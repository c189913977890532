"""Standard error codes for pricing caller-contract violations.

The calculation functions never raise for well-formed input: an
unpriceable stay is ``None`` and an empty cost list is ``[]``. These
codes are used where callers validate input before invoking the engine
(the HTTP adapter, checkout orchestration, the admin calendar editor).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Pricing error codes."""

    DATES_INCOMPLETE = "ERR_PRICING_001"
    INVALID_PERIOD_RANGE = "ERR_PRICING_002"
    OVERLAPPING_PERIODS = "ERR_PRICING_003"
    PERCENT_OUT_OF_RANGE = "ERR_PRICING_004"
    MINIMUM_NIGHTS_NOT_MET = "ERR_PRICING_005"
    MAX_GUESTS_EXCEEDED = "ERR_PRICING_006"
    PERIOD_ID_MISSING = "ERR_PRICING_007"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DATES_INCOMPLETE: "Select valid dates",
    ErrorCode.INVALID_PERIOD_RANGE: "Pricing period ends before it starts",
    ErrorCode.OVERLAPPING_PERIODS: "Existing pricing periods overlap",
    ErrorCode.PERCENT_OUT_OF_RANGE: "Percentage must be between 0 and 100",
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: "Minimum stay requirement not met",
    ErrorCode.MAX_GUESTS_EXCEEDED: "Number of guests exceeds maximum capacity",
    ErrorCode.PERIOD_ID_MISSING: "Existing pricing period has no id",
}

# Recovery suggestions for callers
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.DATES_INCOMPLETE: "Provide a check-out date after the check-in date",
    ErrorCode.INVALID_PERIOD_RANGE: "Swap or correct the selected start and end dates",
    ErrorCode.OVERLAPPING_PERIODS: "Reload the calendar and retry the save",
    ErrorCode.PERCENT_OUT_OF_RANGE: "Check the broker fee and withholding settings",
    ErrorCode.MINIMUM_NIGHTS_NOT_MET: "Extend the stay to the minimum number of nights",
    ErrorCode.MAX_GUESTS_EXCEEDED: "Reduce the number of guests",
    ErrorCode.PERIOD_ID_MISSING: "Save the period before editing the calendar around it",
}


class ErrorResponse(BaseModel):
    """Standard error body returned for rejected pricing requests."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse with the message and recovery hint for a code."""
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class PricingError(Exception):
    """Exception raised when pricing input violates the caller contract.

    Can be caught and converted to an ErrorResponse.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        return ErrorResponse.from_code(self.code, self.details)
