"""Payment split model for the platform fee / withholding / payout decomposition."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PaymentSplit(BaseModel):
    """How a guest payment divides between platform, tax authority and host.

    Derived per checkout, never persisted. Only ``platform_fee`` and
    ``withholding_tax`` are rounded; everything else is exact integer
    arithmetic over them.
    """

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "examples": [
                {
                    "taxable_base": 90000,
                    "platform_fee": 9000,
                    "withholding_tax": 18900,
                    "application_fee": 27900,
                    "guest_total": 98000,
                    "host_payout": 70100,
                }
            ]
        },
    )

    taxable_base: int = Field(..., description="Nightly total + additional costs")
    platform_fee: int
    withholding_tax: int
    application_fee: int = Field(..., description="Platform fee + withholding tax")
    guest_total: int = Field(..., description="Everything the guest pays")
    host_payout: int = Field(..., description="Guest total - application fee")

    @model_validator(mode="after")
    def check_reconciliation(self) -> "PaymentSplit":
        """Reject splits that do not reconcile to the cent."""
        if self.application_fee != self.platform_fee + self.withholding_tax:
            raise ValueError("application_fee must equal platform_fee + withholding_tax")
        if self.host_payout != self.guest_total - self.application_fee:
            raise ValueError("host_payout must equal guest_total - application_fee")
        return self
