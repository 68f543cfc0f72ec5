"""
Checkout types — lifecycle states, session, payment contract values, errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from storefront.cart import CartLineItem, CartStore
from storefront.pricing import PricingBreakdown

# ═══════════════════════════════════════════════════════════════════════════════
# Status — Checkout Lifecycle
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutStatus(Enum):
    """
    State of the checkout process.

    Lifecycle:
        IDLE → FORM_ENTRY → SUBMITTING → COMPLETED
                   ↑            │      → FAILED ──┐
                   └────────────┼─── retry() ─────┘
        FORM_ENTRY / SUBMITTING → IDLE   (cancel)
    """

    IDLE = "idle"
    FORM_ENTRY = "form_entry"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


FORM_FIELDS: tuple[str, ...] = (
    "email",
    "first_name",
    "last_name",
    "address",
    "city",
    "zip_code",
    "card_number",
    "expiry_date",
    "cvv",
)
"""Names accepted by CheckoutProcess.update_field()."""

# ═══════════════════════════════════════════════════════════════════════════════
# Form Values
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class ShippingAddress:
    first_name: str
    last_name: str
    address: str
    city: str
    zip_code: str


@dataclass(frozen=True, slots=True)
class PaymentDetails:
    """
    Card data handed to the gateway.

    Card number and CVV are kept out of repr() so they never reach logs.
    """

    cardholder: str
    email: str
    card_number: str = field(repr=False)
    expiry_month: int
    expiry_year: int
    cvv: str = field(repr=False)

    @property
    def last_four(self) -> str:
        return self.card_number[-4:]


# ═══════════════════════════════════════════════════════════════════════════════
# Payment Outcome
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class PaymentReceipt:
    transaction_id: str
    amount: Decimal
    last_four: str


@dataclass(frozen=True, slots=True)
class PaymentFailure:
    """Gateway said no, or never answered. code: DECLINED | TIMEOUT | GATEWAY_ERROR"""

    code: str
    reason: str

    @staticmethod
    def declined(reason: str) -> PaymentFailure:
        return PaymentFailure("DECLINED", reason)

    @staticmethod
    def timeout(seconds: float) -> PaymentFailure:
        return PaymentFailure(
            "TIMEOUT",
            f"The payment provider did not respond within {seconds:g} seconds.",
        )

    @staticmethod
    def gateway_error(cause: Exception) -> PaymentFailure:
        return PaymentFailure("GATEWAY_ERROR", f"Payment could not be processed: {cause}")

    @property
    def is_timeout(self) -> bool:
        return self.code == "TIMEOUT"


# ═══════════════════════════════════════════════════════════════════════════════
# Session & Confirmation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class CheckoutSession:
    """
    One checkout attempt, from open() to completion or cancellation.

    line_items and pricing are the cart snapshot taken at open() time.
    number identifies the session; a payment result carrying an older
    number is a stale completion.
    """

    number: int
    cart: CartStore = field(repr=False)
    line_items: tuple[CartLineItem, ...]
    pricing: PricingBreakdown
    status: CheckoutStatus = CheckoutStatus.FORM_ENTRY
    form: dict[str, str] = field(default_factory=dict[str, str])
    field_errors: dict[str, str] = field(default_factory=dict[str, str])
    failure_reason: str | None = None
    attempts: int = 0


@dataclass(frozen=True, slots=True)
class OrderConfirmation:
    order_id: str
    email: str
    shipping_address: ShippingAddress
    line_items: tuple[CartLineItem, ...]
    pricing: PricingBreakdown
    receipt: PaymentReceipt


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class CheckoutErrorKind(Enum):
    """Kinds of checkout errors."""

    INVALID_STATE = "invalid_state"  # Operation not allowed in current status
    EMPTY_CART = "empty_cart"  # open() on a cart without line items
    UNKNOWN_FIELD = "unknown_field"  # update_field() with a name outside FORM_FIELDS
    VALIDATION = "validation"  # Form has field errors
    PAYMENT_DECLINED = "payment_declined"  # Gateway refused or errored
    PAYMENT_TIMEOUT = "payment_timeout"  # Gateway did not answer in time
    CANCELLED = "cancelled"  # Session cancelled while payment was in flight


@dataclass(frozen=True, slots=True)
class CheckoutError:
    """
    Checkout operation error.

    field_errors is populated for VALIDATION only.
    """

    kind: CheckoutErrorKind
    message: str
    field_errors: tuple[FieldError, ...] = ()


class CheckoutErrors:
    @staticmethod
    def invalid_state(operation: str, status: CheckoutStatus) -> CheckoutError:
        return CheckoutError(
            CheckoutErrorKind.INVALID_STATE,
            f"Cannot {operation} while checkout is {status.value}.",
        )

    @staticmethod
    def empty_cart() -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.EMPTY_CART, "Your cart is empty.")

    @staticmethod
    def unknown_field(name: str) -> CheckoutError:
        return CheckoutError(CheckoutErrorKind.UNKNOWN_FIELD, f"Unknown checkout field: {name}")

    @staticmethod
    def validation(errors: tuple[FieldError, ...]) -> CheckoutError:
        return CheckoutError(
            CheckoutErrorKind.VALIDATION,
            "Please correct the highlighted fields.",
            errors,
        )

    @staticmethod
    def payment(failure: PaymentFailure) -> CheckoutError:
        kind = (
            CheckoutErrorKind.PAYMENT_TIMEOUT
            if failure.is_timeout
            else CheckoutErrorKind.PAYMENT_DECLINED
        )
        return CheckoutError(kind, failure.reason)

    @staticmethod
    def cancelled() -> CheckoutError:
        return CheckoutError(
            CheckoutErrorKind.CANCELLED,
            "Checkout was cancelled before the payment finished.",
        )


__all__ = (
    "CheckoutStatus",
    "FORM_FIELDS",
    "FieldError",
    "ShippingAddress",
    "PaymentDetails",
    "PaymentReceipt",
    "PaymentFailure",
    "CheckoutSession",
    "OrderConfirmation",
    "CheckoutErrorKind",
    "CheckoutError",
    "CheckoutErrors",
)
