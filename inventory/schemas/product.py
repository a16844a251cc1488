"""
Product payload schemas and the validation layer.

Every inbound payload goes through `validate_for_create` or
`validate_for_update` before it reaches the store. Both collect all the
violated rules, not just the first, and raise `ProductValidationError`.
"""
import math
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

# SQLite INTEGER is a signed 64-bit value
MAX_STOCK = 2**63 - 1

FIELD_MESSAGES = {
    "name": "name requerido",
    "price": "price >= 0",
    "stock": "stock >= 0",
}
# Spanish keys of the original front-end, accepted on input only
NAME_KEYS = AliasChoices("name", "nombre")
PRICE_KEYS = AliasChoices("price", "precio")
KEY_TO_FIELD = {"nombre": "name", "precio": "price"}

EMPTY_UPDATE_MESSAGE = "No tienes datos para actualizar"
NOT_AN_OBJECT_MESSAGE = "el cuerpo debe ser un objeto JSON"


class ProductValidationError(Exception):
    """Exception raised when a product payload is malformed or incomplete."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


def _to_number(value: Any) -> float:
    """Accept numbers and numeric-looking strings; reject anything else."""
    if value is None or isinstance(value, bool):
        raise ValueError("expected a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            raise ValueError("expected a number") from None
    else:
        raise ValueError("expected a number")

    try:
        number = float(number)
    except OverflowError:
        raise ValueError("number out of range") from None
    if not math.isfinite(number):
        raise ValueError("expected a finite number")
    return number


def _to_integer(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    number = _to_number(value)
    if not number.is_integer():
        raise ValueError("expected an integer")
    return int(number)


def _require_text(value: Any) -> Any:
    if value is None:
        raise ValueError("name may not be null")
    return value


class ProductCreate(BaseModel):
    """Normalized payload for creating a product. Unknown keys are dropped."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, validation_alias=NAME_KEYS, description="Product name")
    price: float = Field(..., ge=0, validation_alias=PRICE_KEYS, description="Unit price (must be non-negative)")
    stock: int = Field(..., ge=0, le=MAX_STOCK, description="Available stock (must be non-negative)")

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return _require_text(value)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value):
        return _to_number(value)

    @field_validator("stock", mode="before")
    @classmethod
    def coerce_stock(cls, value):
        return _to_integer(value)


class ProductUpdate(BaseModel):
    """
    Normalized partial payload for updating a product.

    Only the keys present in the request end up in `model_fields_set`;
    an explicit null is rejected rather than treated as absent.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, min_length=1, validation_alias=NAME_KEYS, description="Product name")
    price: Optional[float] = Field(None, ge=0, validation_alias=PRICE_KEYS, description="Unit price")
    stock: Optional[int] = Field(None, ge=0, le=MAX_STOCK, description="Available stock")

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return _require_text(value)

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value):
        return _to_number(value)

    @field_validator("stock", mode="before")
    @classmethod
    def coerce_stock(cls, value):
        return _to_integer(value)


class ProductResponse(BaseModel):
    """Schema for product response including all fields."""
    id: int
    name: str
    price: float
    stock: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite keeps CURRENT_TIMESTAMP as naive UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _collect_messages(exc: ValidationError) -> List[str]:
    failed = {
        KEY_TO_FIELD.get(error["loc"][0], error["loc"][0])
        for error in exc.errors()
        if error["loc"]
    }
    return [message for field, message in FIELD_MESSAGES.items() if field in failed]


def _parse(schema, payload: Any):
    if not isinstance(payload, dict):
        raise ProductValidationError([NOT_AN_OBJECT_MESSAGE])
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise ProductValidationError(_collect_messages(e)) from e


def validate_for_create(payload: Any) -> ProductCreate:
    """
    Validate a creation payload.

    Args:
        payload: Decoded JSON body

    Returns:
        ProductCreate with `name`, `price` and `stock` type-coerced

    Raises:
        ProductValidationError: If any field is missing or invalid
    """
    return _parse(ProductCreate, payload)


def validate_for_update(payload: Any) -> ProductUpdate:
    """
    Validate an update payload. Every field is optional, but at least one
    recognized field must be present.

    Raises:
        ProductValidationError: If a present field is invalid or nothing
            would change
    """
    changes = _parse(ProductUpdate, payload)
    if not changes.model_fields_set:
        raise ProductValidationError([EMPTY_UPDATE_MESSAGE])
    return changes
