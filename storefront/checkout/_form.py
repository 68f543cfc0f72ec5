"""
Checkout form — field validation.

Each field reports at most one problem; messages are meant for display
next to the field.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from storefront._types import Result, Ok, Error
from storefront.checkout._types import (
    FieldError,
    PaymentDetails,
    ShippingAddress,
)

EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
CARD_SEPARATORS_RE = re.compile(r"[\s-]")
CARD_RE = re.compile(r"\d{13,19}")
EXPIRY_RE = re.compile(r"(\d{2})\s*/\s*(\d{2})")
CVV_RE = re.compile(r"\d{3,4}")

_LABELS = {
    "email": "Email",
    "first_name": "First name",
    "last_name": "Last name",
    "address": "Address",
    "city": "City",
    "zip_code": "ZIP code",
    "card_number": "Card number",
    "expiry_date": "Expiry date",
    "cvv": "CVV",
}


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("checkout_field", message)


class CheckoutForm(BaseModel):
    """
    Validated checkout form.

    Defaults are validated too, so a field never filled in reports
    "<label> is required".
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        extra="ignore",
    )

    email: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    zip_code: str = ""
    card_number: str = ""
    expiry_date: str = ""
    cvv: str = ""

    @field_validator(*_LABELS)
    @classmethod
    def _required(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            name = info.field_name or ""
            raise _invalid(f"{_LABELS.get(name, name)} is required.")
        return value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        if not EMAIL_RE.fullmatch(value):
            raise _invalid("Enter a valid email address.")
        return value

    @field_validator("card_number")
    @classmethod
    def _card_number(cls, value: str) -> str:
        digits = CARD_SEPARATORS_RE.sub("", value)
        if not CARD_RE.fullmatch(digits):
            raise _invalid("Card number must be 13 to 19 digits.")
        return digits

    @field_validator("expiry_date")
    @classmethod
    def _expiry_date(cls, value: str) -> str:
        match = EXPIRY_RE.fullmatch(value)
        if match is None or not 1 <= int(match.group(1)) <= 12:
            raise _invalid("Expiry date must be MM/YY.")
        return f"{match.group(1)}/{match.group(2)}"

    @field_validator("cvv")
    @classmethod
    def _cvv(cls, value: str) -> str:
        if not CVV_RE.fullmatch(value):
            raise _invalid("CVV must be 3 or 4 digits.")
        return value

    # ───────────────────────────────────────────────────────────────────────────
    # Projections
    # ───────────────────────────────────────────────────────────────────────────

    def to_payment_details(self) -> PaymentDetails:
        month, year = self.expiry_date.split("/")
        return PaymentDetails(
            cardholder=f"{self.first_name} {self.last_name}",
            email=self.email,
            card_number=self.card_number,
            expiry_month=int(month),
            expiry_year=2000 + int(year),
            cvv=self.cvv,
        )

    def to_shipping_address(self) -> ShippingAddress:
        return ShippingAddress(
            first_name=self.first_name,
            last_name=self.last_name,
            address=self.address,
            city=self.city,
            zip_code=self.zip_code,
        )


def validate_form(values: Mapping[str, str]) -> Result[CheckoutForm, tuple[FieldError, ...]]:
    """
    Validate raw field values.

    Returns the validated form, or one FieldError per invalid field in
    form order.
    """
    try:
        return Ok(CheckoutForm.model_validate(dict(values)))
    except ValidationError as e:
        errors: dict[str, FieldError] = {}
        for err in e.errors():
            name = str(err["loc"][0]) if err["loc"] else ""
            errors.setdefault(name, FieldError(name, err["msg"]))
        return Error(tuple(errors[n] for n in _LABELS if n in errors))


__all__ = ("CheckoutForm", "validate_form")
