"""
Input validation models for the optical shop ledger.

Pydantic models that normalize and validate caller input before any
store call. Both snake_case and camelCase keys are accepted, so form
payloads such as ``{"clientId": ..., "paymentMethod": "Pix"}`` validate
as they are.
"""

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .domain.entities import (
    CENTS,
    ITEMS_BY_TYPE,
    InstallmentType,
    MiscSaleType,
    PaymentMethod,
)
from .domain.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _blank_to_none(value: Any) -> Any:
    """Trim strings; empty strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _required(value: Any) -> Any:
    if value is None:
        raise ValueError("Field is required")
    return value


def parse_amount(value: Any) -> Decimal:
    """
    Parse a monetary amount.

    Accepts Decimal, int, float or numeric strings. The result is rounded
    to cents.

    Raises:
        ValueError: If the value is missing, not a finite number, or negative
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Amount is required")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("Amount must be a finite number")
    text = str(value).strip()
    if not text:
        raise ValueError("Amount is required")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Amount is not a number: {text}")
    if not amount.is_finite():
        raise ValueError("Amount must be a finite number")
    if amount < 0:
        raise ValueError("Amount cannot be negative")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount is too large: {text}")


def parse_installment_count(value: Any) -> int:
    """
    Parse an installment count.

    Raises:
        ValueError: If the value is not a whole number
    """
    if isinstance(value, bool):
        raise ValueError(f"Installment count is not a number: {value}")
    text = str(value).strip()
    try:
        count = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Installment count is not a number: {text}")
    if not count.is_finite() or count != count.to_integral_value():
        raise ValueError(f"Installment count must be a whole number: {text}")
    return int(count)


def _sale_date(value: Any) -> Any:
    # An untouched form date means "today"; timestamps keep their day
    if isinstance(value, datetime):
        return value.date()
    return date.today() if _blank_to_none(value) is None else value


class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="ignore",
    )


class ClientInput(_InputModel):
    """Client registration/update payload."""

    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    dnp: Optional[str] = None
    prescription: Optional[str] = None

    @field_validator("name", "phone", "address", "dnp", "prescription", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: Optional[str]) -> str:
        if not v:
            raise ValueError("Name cannot be empty")
        return v


class GlassesSaleInput(_InputModel):
    """
    Eyewear sale payload.

    installment_count is forced to 1 for lump-sum sales and must be at
    least 2 for installment sales.
    """

    client_id: Optional[str] = None
    frame_id: Optional[str] = None
    lens_id: Optional[str] = None
    amount: Optional[Decimal] = None
    payment_method: Optional[PaymentMethod] = None
    installment_type: InstallmentType = InstallmentType.LUMP_SUM
    installment_count: Optional[int] = None
    sale_date: date = Field(default_factory=date.today)

    @field_validator("client_id", "frame_id", "lens_id", mode="before")
    @classmethod
    def reference_required(cls, v: Any) -> Any:
        return _required(_blank_to_none(v))

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        return parse_amount(v)

    @field_validator("payment_method", mode="before")
    @classmethod
    def validate_payment_method(cls, v: Any) -> PaymentMethod:
        return PaymentMethod(_required(_blank_to_none(v)))

    @field_validator("installment_type", mode="before")
    @classmethod
    def validate_installment_type(cls, v: Any) -> InstallmentType:
        v = _blank_to_none(v)
        return InstallmentType.LUMP_SUM if v is None else InstallmentType(v)

    @field_validator("installment_count", mode="before")
    @classmethod
    def validate_installment_count(cls, v: Any, info: ValidationInfo) -> Optional[int]:
        installment_type = info.data.get("installment_type")
        if installment_type is None:
            # installment_type already failed; its error is reported instead
            return None
        if installment_type == InstallmentType.LUMP_SUM:
            return 1
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Installment sales need an installment count")
        count = parse_installment_count(v)
        if count < 2:
            raise ValueError("Installment sales need at least 2 installments")
        return count

    @field_validator("sale_date", mode="before")
    @classmethod
    def default_sale_date(cls, v: Any) -> Any:
        return _sale_date(v)


class MiscSaleInput(_InputModel):
    """Maintenance/product sale payload."""

    type: MiscSaleType = MiscSaleType.MAINTENANCE
    item_detail: Optional[str] = None
    amount: Optional[Decimal] = None
    sale_date: date = Field(default_factory=date.today)

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> MiscSaleType:
        v = _blank_to_none(v)
        return MiscSaleType.MAINTENANCE if v is None else MiscSaleType(v)

    @field_validator("item_detail", mode="before")
    @classmethod
    def validate_item(cls, v: Any, info: ValidationInfo) -> Optional[str]:
        v = _blank_to_none(v)
        if v is None:
            raise ValueError("Item detail is required")
        sale_type = info.data.get("type")
        if sale_type is not None and v not in ITEMS_BY_TYPE[sale_type]:
            raise ValueError(f"'{v}' is not a {sale_type.value} item")
        return v

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        return parse_amount(v)

    @field_validator("sale_date", mode="before")
    @classmethod
    def default_sale_date(cls, v: Any) -> Any:
        return _sale_date(v)


def validate_input(
    model: Type[ModelT], data: Union[ModelT, Mapping[str, Any]]
) -> ModelT:
    """
    Validate caller input into ``model``.

    Pydantic errors are translated into a domain ValidationError that names
    the first offending field (by its snake_case name).

    Raises:
        ValidationError: If any field is missing or malformed
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    if data is None:
        data = {}
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        names = {(info.alias or name): name for name, info in model.model_fields.items()}
        loc = error["loc"]
        field = names.get(loc[0], str(loc[0])) if loc else "__root__"
        reason = error["msg"]
        if reason.startswith("Value error, "):
            reason = reason[len("Value error, "):]
        raise ValidationError(field, error.get("input"), reason) from e
