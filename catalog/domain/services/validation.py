# catalog/domain/services/validation.py
"""
Request payload validation for catalog writes.

Two phases, shared by create and update:
  1. presence of the required fields (fails on its own, all missing fields reported)
  2. type/format of every field, every violation collected before failing

Each field check answers with a FieldState so "absent" and "present but
wrong" never get confused.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union
import math
import re

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError

from catalog.core.errors import PayloadInvalid

# optional sign, digits only, leading zeroes allowed
_INT_STRING = re.compile(r"^[-+]?[0-9]+$")

_HTTP_URL = TypeAdapter(HttpUrl)

# BSON stores integers as int64
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1

# pageSize and pageIndex above this fall back to the defaults; keeps skip inside int64
MAX_PAGE_VALUE = 2 ** 31 - 1

REQUIRED_PRODUCT_FIELDS = ("name", "category", "price")


class FieldState(str, Enum):
    ABSENT = "absent"
    INVALID = "invalid"
    VALID = "valid"


class ValidationErrors:
    """Collects (field, message) pairs; first message per field wins."""

    def __init__(self):
        self._errors: Dict[str, str] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, message)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._errors)

    def raise_if_any(self) -> None:
        if self._errors:
            raise PayloadInvalid(self._errors)


# ----- primitive checks -------------------------------------------------------

def is_object_id(value: Any) -> bool:
    """Syntactic check only (24 hex chars); says nothing about existence."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def is_int_string(raw: Any) -> bool:
    return raw is not None and bool(_INT_STRING.match(str(raw)))


def positive_int_or(raw: Optional[str], default: int, maximum: int = MAX_PAGE_VALUE) -> int:
    """Permissive query coercion: '3' -> 3, anything not in 1..maximum -> default."""
    if not is_int_string(raw):
        return default
    value = int(raw)
    return value if 0 < value <= maximum else default


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a number on the wire
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return INT64_MIN <= value <= INT64_MAX
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def _is_integral(value: Any) -> bool:
    if not _is_number(value):
        return False
    if isinstance(value, float):
        return value.is_integer() and INT64_MIN <= value <= INT64_MAX
    return True


def _is_http_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


def _is_blank(value: Any) -> bool:
    """Missing in the required-field sense: null, "", 0 and false all count."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if _is_number(value):
        return value == 0
    return False


def check(payload: Mapping[str, Any], field: str, predicate: Callable[[Any], bool]) -> FieldState:
    value = payload.get(field)
    if value is None:
        return FieldState.ABSENT
    return FieldState.VALID if predicate(value) else FieldState.INVALID


# ----- product payload --------------------------------------------------------

# field -> (predicate, message)
_PRODUCT_RULES: Tuple[Tuple[str, Callable[[Any], bool], str], ...] = (
    ("name", lambda v: isinstance(v, str), "name is invalid"),
    ("category", is_object_id, "categoryId is invalid"),
    ("remainingQuantity", lambda v: _is_integral(v) and v >= 0, "remainingQuantity is invalid"),
    ("price", _is_integral, "price is invalid"),
    ("chipset", lambda v: isinstance(v, str), "chipset is invalid"),
    ("screenSize", _is_number, "screenSize is invalid"),
    ("memory", _is_number, "memory is invalid"),
    ("storage", _is_number, "storage is invalid"),
    ("thumbnailUrl", _is_http_url, "thumbnailUrl is invalid"),
    ("imageUrl", _is_http_url, "imageUrl is invalid"),
)


class ProductDraft(BaseModel):
    """A validated write payload. `category_id` still has to be resolved."""
    name: str
    category_id: str
    price: int
    remaining_quantity: Optional[int] = Field(None, alias="remainingQuantity")
    chipset: Optional[str] = None
    screen_size: Optional[Union[int, float]] = Field(None, alias="screenSize")
    memory: Optional[Union[int, float]] = None
    storage: Optional[Union[int, float]] = None
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def document_fields(self) -> Dict[str, Any]:
        """Document fields that are present, by stored name (category excluded)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"category_id"})


OPTIONAL_PRODUCT_FIELDS = tuple(
    f.alias or name
    for name, f in ProductDraft.model_fields.items()
    if name not in ("name", "category_id", "price")
)


def validate_product_payload(payload: Any) -> ProductDraft:
    """Run both phases; raise PayloadInvalid with the collected field errors."""
    payload = payload if isinstance(payload, Mapping) else {}

    errors = ValidationErrors()
    for field in REQUIRED_PRODUCT_FIELDS:
        if _is_blank(payload.get(field)):
            errors.add(field, f"{field} is required")
    errors.raise_if_any()

    for field, predicate, message in _PRODUCT_RULES:
        if check(payload, field, predicate) is FieldState.INVALID:
            errors.add(field, message)
    errors.raise_if_any()

    data = {f: payload[f] for f, _, _ in _PRODUCT_RULES if payload.get(f) is not None}
    data["category_id"] = data.pop("category")
    for f in ("price", "remainingQuantity"):
        if f in data:
            data[f] = int(data[f])
    return ProductDraft.model_validate(data)


def validate_category_payload(payload: Any) -> str:
    payload = payload if isinstance(payload, Mapping) else {}
    errors = ValidationErrors()
    name = payload.get("name")
    if _is_blank(name):
        errors.add("name", "name is required")
    elif not isinstance(name, str) or not name.strip():
        errors.add("name", "name is invalid")
    errors.raise_if_any()
    return name.strip()
