"""
Payment gateway — the external collaborator charged by checkout.
"""

from __future__ import annotations

import asyncio
import uuid
from decimal import Decimal
from typing import Protocol, runtime_checkable

from storefront._log import get_logger
from storefront._types import Result, Ok, Error
from storefront.config import StorefrontSettings
from storefront.checkout._types import (
    PaymentDetails,
    PaymentFailure,
    PaymentReceipt,
)

log = get_logger("payment")

# ═══════════════════════════════════════════════════════════════════════════════
# Gateway Protocol — Users Implement This
# ═══════════════════════════════════════════════════════════════════════════════


class PaymentGateway(Protocol):
    """
    Payment gateway protocol.

    charge() is called at most once per submission. A decline is a value
    (Error(PaymentFailure)); raising is reserved for transport problems
    and is reported to the shopper as a failed payment.

    Example:
        class StripeGateway:
            def __init__(self, client: stripe.StripeClient) -> None:
                self.client = client

            async def charge(
                self, amount: Decimal, details: PaymentDetails
            ) -> Result[PaymentReceipt, PaymentFailure]:
                intent = await self.client.payment_intents.create_async(...)
                if intent.status != "succeeded":
                    return Error(PaymentFailure.declined(intent.last_payment_error.message))
                return Ok(PaymentReceipt(intent.id, amount, details.last_four))
    """

    async def charge(
        self,
        amount: Decimal,
        details: PaymentDetails,
    ) -> Result[PaymentReceipt, PaymentFailure]:
        """Charge amount to the card in details."""
        ...


@runtime_checkable
class SupportsVoid(Protocol):
    """Gateway that can reverse a charge nobody is waiting for any more."""

    async def void(self, receipt: PaymentReceipt) -> None:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Simulated Gateway — Default Implementation
# ═══════════════════════════════════════════════════════════════════════════════


class SimulatedGateway:
    """
    In-process gateway that approves after a fixed delay.

    Note: No money moves. Use for demos and tests.

    Example:
        gateway = SimulatedGateway(delay=0)                       # instant approve
        gateway = SimulatedGateway(decline_reason="Card declined")  # always decline
    """

    def __init__(self, delay: float = 2.0, decline_reason: str | None = None) -> None:
        self.delay = delay
        self.decline_reason = decline_reason
        self.call_count = 0
        self.voided: list[PaymentReceipt] = []

    @classmethod
    def from_settings(cls, settings: StorefrontSettings) -> SimulatedGateway:
        return cls(delay=settings.simulated_payment_delay_seconds)

    async def charge(
        self,
        amount: Decimal,
        details: PaymentDetails,
    ) -> Result[PaymentReceipt, PaymentFailure]:
        self.call_count += 1
        log.info("payment.charge", amount=str(amount), card=f"****{details.last_four}")
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        if self.decline_reason is not None:
            return Error(PaymentFailure.declined(self.decline_reason))
        return Ok(PaymentReceipt(
            transaction_id=f"ch_{uuid.uuid4().hex[:16]}",
            amount=amount,
            last_four=details.last_four,
        ))

    async def void(self, receipt: PaymentReceipt) -> None:
        log.info("payment.void", transaction_id=receipt.transaction_id)
        self.voided.append(receipt)


__all__ = ("PaymentGateway", "SupportsVoid", "SimulatedGateway")
