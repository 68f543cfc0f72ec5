"""
CheckoutProcess — state machine over one checkout session at a time.

Every operation returns a Result. An operation that is not valid in the
current status returns INVALID_STATE and changes nothing.
"""

from __future__ import annotations

import asyncio
import itertools
import uuid
from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Never

from combinators import lift as L

from storefront._log import get_logger
from storefront._types import Result, Ok, Error
from storefront.cart import CartStore
from storefront.config import StorefrontSettings
from storefront.pricing import DEFAULT_RULES, PricingRules, breakdown, to_display
from storefront.checkout._types import (
    FORM_FIELDS,
    CheckoutError,
    CheckoutErrors,
    CheckoutSession,
    CheckoutStatus,
    OrderConfirmation,
    PaymentDetails,
    PaymentFailure,
    PaymentReceipt,
)
from storefront.checkout._form import CheckoutForm, validate_form
from storefront.checkout._gateway import PaymentGateway, SupportsVoid

log = get_logger("checkout")

type Outcome = Result[PaymentReceipt, PaymentFailure]

DEFAULT_PAYMENT_TIMEOUT = 30.0


class CheckoutProcess:
    """
    Checkout lifecycle.

        IDLE ─open()→ FORM_ENTRY ─submit()→ SUBMITTING ─→ COMPLETED
                          ↑                      │     ─→ FAILED ─retry()┐
                          └──────────────────────┼───────────────────────┘
        FORM_ENTRY, SUBMITTING ─cancel()→ IDLE

    At most one payment is in flight: submit() while SUBMITTING is refused
    without calling the gateway. cancel() while SUBMITTING returns to IDLE
    at once and cancels the charge task; a result that still arrives for
    the cancelled session is discarded (and voided when the gateway can).

    Example:
        checkout = CheckoutProcess(SimulatedGateway())
        checkout.open(cart)
        for name, value in form.items():
            checkout.update_field(name, value)

        match await checkout.submit():
            case Ok(confirmation):
                print(confirmation.order_id)
            case Error(e):
                print(e.kind, e.message, e.field_errors)
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        *,
        rules: PricingRules = DEFAULT_RULES,
        payment_timeout: float = DEFAULT_PAYMENT_TIMEOUT,
    ) -> None:
        self._gateway = gateway
        self._rules = rules
        self._payment_timeout = payment_timeout
        self._status = CheckoutStatus.IDLE
        self._session: CheckoutSession | None = None
        self._confirmation: OrderConfirmation | None = None
        self._inflight: asyncio.Task[Outcome] | None = None
        self._numbers = itertools.count(1)

    @classmethod
    def from_settings(
        cls,
        gateway: PaymentGateway,
        settings: StorefrontSettings,
    ) -> CheckoutProcess:
        return cls(
            gateway,
            rules=PricingRules.from_settings(settings),
            payment_timeout=settings.payment_timeout_seconds,
        )

    # ───────────────────────────────────────────────────────────────────────────
    # State
    # ───────────────────────────────────────────────────────────────────────────

    @property
    def status(self) -> CheckoutStatus:
        return self._status

    @property
    def session(self) -> CheckoutSession | None:
        return self._session

    @property
    def confirmation(self) -> OrderConfirmation | None:
        """Set once COMPLETED, until close()."""
        return self._confirmation

    @property
    def field_errors(self) -> Mapping[str, str]:
        if self._session is None:
            return MappingProxyType({})
        return MappingProxyType(self._session.field_errors)

    @property
    def failure_reason(self) -> str | None:
        return self._session.failure_reason if self._session is not None else None

    # ───────────────────────────────────────────────────────────────────────────
    # Transitions
    # ───────────────────────────────────────────────────────────────────────────

    def open(self, cart: CartStore) -> Result[CheckoutSession, CheckoutError]:
        """Snapshot the cart and start form entry. An empty cart is refused."""
        if self._status is not CheckoutStatus.IDLE:
            return self._invalid("open checkout")

        line_items = cart.line_items()
        if not line_items:
            log.info("checkout.open_rejected", reason="empty_cart")
            return Error(CheckoutErrors.empty_cart())

        session = CheckoutSession(
            number=next(self._numbers),
            cart=cart,
            line_items=line_items,
            pricing=breakdown(line_items, self._rules),
        )
        self._session = session
        self._confirmation = None
        self._transition(CheckoutStatus.FORM_ENTRY)

        log.info(
            "checkout.opened",
            session=session.number,
            items=sum(item.quantity for item in line_items),
            total=str(to_display(session.pricing.total)),
        )
        return Ok(session)

    def update_field(self, name: str, value: str) -> Result[None, CheckoutError]:
        """Store one form field. Clears that field's previous error."""
        session = self._session
        if self._status is not CheckoutStatus.FORM_ENTRY or session is None:
            return self._invalid("edit the checkout form")
        if name not in FORM_FIELDS:
            return Error(CheckoutErrors.unknown_field(name))

        session.form[name] = value
        session.field_errors.pop(name, None)
        return Ok(None)

    async def submit(self) -> Result[OrderConfirmation, CheckoutError]:
        """
        Validate the form and charge the snapshot total once.

        Invalid form: stays in FORM_ENTRY with field errors, no charge.
        Approved: COMPLETED and the cart is cleared.
        Declined, failed or timed out: FAILED, cart untouched.
        Cancelled while in flight: CANCELLED, nothing else happens.
        """
        session = self._session
        if self._status is not CheckoutStatus.FORM_ENTRY or session is None:
            return self._invalid("submit payment")

        match validate_form(session.form):
            case Error(errors):
                session.field_errors = {e.field: e.message for e in errors}
                log.info(
                    "checkout.validation_failed",
                    session=session.number,
                    fields=[e.field for e in errors],
                )
                return Error(CheckoutErrors.validation(errors))
            case Ok(form):
                pass

        session.field_errors.clear()
        session.failure_reason = None
        session.attempts += 1
        self._transition(CheckoutStatus.SUBMITTING)

        amount = to_display(session.pricing.total)
        log.info(
            "checkout.payment_started",
            session=session.number,
            attempt=session.attempts,
            amount=str(amount),
        )
        task = asyncio.ensure_future(self._charge(amount, form.to_payment_details()))
        self._inflight = task

        try:
            outcome = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if self._is_current(session):
                # Our own caller was cancelled mid-payment
                self._abandon(session)
                raise
            if current is not None and current.cancelling():
                raise
            log.info("checkout.stale_completion_discarded", session=session.number, outcome="aborted")
            return Error(CheckoutErrors.cancelled())

        if not self._is_current(session):
            await self._discard_stale(session, outcome)
            return Error(CheckoutErrors.cancelled())

        self._inflight = None
        return self._finish(session, form, outcome)

    def retry(self) -> Result[None, CheckoutError]:
        """FAILED → FORM_ENTRY, keeping what the shopper already typed."""
        session = self._session
        if self._status is not CheckoutStatus.FAILED or session is None:
            return self._invalid("retry payment")

        session.failure_reason = None
        self._transition(CheckoutStatus.FORM_ENTRY)
        log.info("checkout.retry", session=session.number)
        return Ok(None)

    def cancel(self) -> Result[None, CheckoutError]:
        """FORM_ENTRY or SUBMITTING → IDLE; the session is discarded."""
        session = self._session
        if self._status not in (CheckoutStatus.FORM_ENTRY, CheckoutStatus.SUBMITTING):
            return self._invalid("cancel checkout")

        in_flight = self._inflight
        was_submitting = self._status is CheckoutStatus.SUBMITTING
        self._inflight = None
        self._transition(CheckoutStatus.IDLE)
        self._session = None
        if in_flight is not None and not in_flight.done():
            in_flight.cancel()

        log.info(
            "checkout.cancelled",
            session=session.number if session is not None else None,
            payment_in_flight=was_submitting,
        )
        return Ok(None)

    def close(self) -> Result[None, CheckoutError]:
        """
        Dismiss checkout from any status.

        Same as cancel() during form entry or payment; clears the outcome
        after COMPLETED or FAILED.
        """
        match self._status:
            case CheckoutStatus.FORM_ENTRY | CheckoutStatus.SUBMITTING:
                return self.cancel()
            case CheckoutStatus.COMPLETED | CheckoutStatus.FAILED:
                self._transition(CheckoutStatus.IDLE)
                self._session = None
                self._confirmation = None
                return Ok(None)
            case CheckoutStatus.IDLE:
                return Ok(None)

    # ───────────────────────────────────────────────────────────────────────────
    # Payment
    # ───────────────────────────────────────────────────────────────────────────

    async def _charge(self, amount: Decimal, details: PaymentDetails) -> Outcome:
        """One gateway call bounded by the payment timeout."""
        timeout = self._payment_timeout
        attempt = L.catching_async(
            lambda: asyncio.wait_for(self._gateway.charge(amount, details), timeout=timeout),
            on_error=lambda e: _failure_from(e, timeout),
        )
        match await attempt:
            case Ok(outcome):
                return outcome
            case Error(failure):
                return Error(failure)

    def _finish(
        self,
        session: CheckoutSession,
        form: CheckoutForm,
        outcome: Outcome,
    ) -> Result[OrderConfirmation, CheckoutError]:
        match outcome:
            case Ok(receipt):
                session.cart.clear()
                confirmation = OrderConfirmation(
                    order_id=f"ord_{uuid.uuid4().hex[:12]}",
                    email=form.email,
                    shipping_address=form.to_shipping_address(),
                    line_items=session.line_items,
                    pricing=session.pricing,
                    receipt=receipt,
                )
                self._confirmation = confirmation
                self._transition(CheckoutStatus.COMPLETED)
                self._session = None
                log.info(
                    "checkout.completed",
                    session=session.number,
                    order_id=confirmation.order_id,
                    transaction_id=receipt.transaction_id,
                )
                return Ok(confirmation)

            case Error(failure):
                session.failure_reason = failure.reason
                self._transition(CheckoutStatus.FAILED)
                log.warning(
                    "checkout.failed",
                    session=session.number,
                    code=failure.code,
                    reason=failure.reason,
                )
                return Error(CheckoutErrors.payment(failure))

    async def _discard_stale(self, session: CheckoutSession, outcome: Outcome) -> None:
        """
        Drop a result for a session that is no longer current.

        An approval is voided when the gateway supports it; the void is
        bounded by the payment timeout and its failure is only logged.
        """
        log.info(
            "checkout.stale_completion_discarded",
            session=session.number,
            outcome="approved" if isinstance(outcome, Ok) else "failed",
        )
        match outcome:
            case Ok(receipt) if isinstance(self._gateway, SupportsVoid):
                try:
                    await asyncio.wait_for(
                        self._gateway.void(receipt),
                        timeout=self._payment_timeout,
                    )
                except Exception:
                    log.exception("checkout.void_failed", transaction_id=receipt.transaction_id)
            case _:
                pass

    # ───────────────────────────────────────────────────────────────────────────
    # Internals
    # ───────────────────────────────────────────────────────────────────────────

    def _transition(self, status: CheckoutStatus) -> None:
        self._status = status
        if self._session is not None:
            self._session.status = status

    def _is_current(self, session: CheckoutSession) -> bool:
        return self._session is session and self._status is CheckoutStatus.SUBMITTING

    def _abandon(self, session: CheckoutSession) -> None:
        self._inflight = None
        self._transition(CheckoutStatus.IDLE)
        self._session = None
        log.warning("checkout.abandoned", session=session.number)

    def _invalid(self, operation: str) -> Result[Never, CheckoutError]:
        log.debug("checkout.invalid_state", operation=operation, status=self._status.value)
        return Error(CheckoutErrors.invalid_state(operation, self._status))


def _failure_from(error: Exception, timeout: float) -> PaymentFailure:
    if isinstance(error, TimeoutError):
        return PaymentFailure.timeout(timeout)
    return PaymentFailure.gateway_error(error)


__all__ = ("CheckoutProcess", "DEFAULT_PAYMENT_TIMEOUT")
