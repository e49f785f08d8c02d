import math
import re
from typing import Any, Dict, Type

from pydantic import BaseModel, ValidationError

from exceptions.exceptions import (
    ErrorInvalidField, ErrorInvalidIdentifier, ErrorNoUpdateData, ErrorImmutableFieldUpdate
)
from models.book import BookCreate, BookUpdate

UPDATABLE_FIELDS = tuple(BookUpdate.model_fields)
IMMUTABLE_FIELDS = ("id", "createdAt")
RECOGNIZED_FIELDS = UPDATABLE_FIELDS + IMMUTABLE_FIELDS

BOOK_ID_PATTERN = re.compile(r"\d+(\.0*)?", re.ASCII)


def _as_mapping(payload: Any) -> Dict[str, Any]:
    # a body that is not a JSON object carries no fields at all
    return payload if isinstance(payload, dict) else {}


def _validate(model: Type[BaseModel], payload: Dict[str, Any]) -> BaseModel:
    try:
        return model.model_validate(payload, strict=True)
    except ValidationError as e:
        # errors come in field definition order, the first one is reported
        raise ErrorInvalidField(str(e.errors()[0]["loc"][0]))


def validate_create_payload(payload: Any) -> BookCreate:
    """
    Check a create payload and build the store candidate.

    The first bad field is reported, in the order id, title, author, genre,
    price. createdAt and unknown keys are dropped.
    """
    return _validate(BookCreate, _as_mapping(payload))


def validate_update_payload(payload: Any) -> Dict[str, Any]:
    """
    Check a partial update and return only the fields the store may apply.

    Empty payloads fail first, then attempts to touch id or createdAt, then
    field types in the order title, author, genre, price.
    """
    payload = _as_mapping(payload)
    if not any(name in payload for name in RECOGNIZED_FIELDS):
        raise ErrorNoUpdateData()
    if any(name in payload for name in IMMUTABLE_FIELDS):
        raise ErrorImmutableFieldUpdate()
    return _validate(BookUpdate, payload).model_dump(exclude_unset=True)


def parse_book_id(raw: Any) -> int:
    """Parse a path identifier into a positive int or raise ErrorInvalidIdentifier."""
    if isinstance(raw, bool):
        raise ErrorInvalidIdentifier()
    if isinstance(raw, int):
        book_id = raw
    elif isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
        book_id = int(raw)
    else:
        text = str(raw).strip()
        if not BOOK_ID_PATTERN.fullmatch(text):
            raise ErrorInvalidIdentifier()
        book_id = int(text.split(".")[0])
    if book_id <= 0:
        raise ErrorInvalidIdentifier()
    return book_id
