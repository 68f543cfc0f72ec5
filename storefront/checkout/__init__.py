"""
Checkout — form validation, payment and the checkout lifecycle.

    from storefront import checkout as X

    process = X.CheckoutProcess(X.SimulatedGateway())
    process.open(cart)
    process.update_field("email", "ada@example.com")
    result = await process.submit()
"""

from __future__ import annotations

from storefront.checkout._types import (
    CheckoutStatus,
    FORM_FIELDS,
    FieldError,
    ShippingAddress,
    PaymentDetails,
    PaymentReceipt,
    PaymentFailure,
    CheckoutSession,
    OrderConfirmation,
    CheckoutErrorKind,
    CheckoutError,
    CheckoutErrors,
)
from storefront.checkout._form import CheckoutForm, validate_form
from storefront.checkout._gateway import PaymentGateway, SupportsVoid, SimulatedGateway
from storefront.checkout._process import CheckoutProcess, DEFAULT_PAYMENT_TIMEOUT

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
    "CheckoutForm",
    "validate_form",
    "PaymentGateway",
    "SupportsVoid",
    "SimulatedGateway",
    "CheckoutProcess",
    "DEFAULT_PAYMENT_TIMEOUT",
)
