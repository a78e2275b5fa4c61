"""
Request Normalizer: validates an AI endpoint's JSON body and reshapes it into
the input a prompt builder expects.
"""

import json
from dataclasses import dataclass, field

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from expiry_tracker.errors import ValidationError, UnsupportedMediaType
from expiry_tracker.schemas.grocery import ExpiryStatus, GroceryRecord, ParsedItem
from expiry_tracker.services.freshness import days_until_expiry, normalize_category, status_from_days_remaining

MAX_ITEM_NAME_LENGTH = 100
MAX_ITEMS_PER_BATCH = 50


@dataclass
class NormalizedItems:
    """Exactly one of ``item_name`` / ``item_names`` / ``items`` is set."""

    item_name: str | None = None
    item_names: list[str] = field(default_factory=list)
    items: list[dict] = field(default_factory=list)

    @property
    def is_batch(self) -> bool:
        return bool(self.item_names)

    @property
    def is_structured(self) -> bool:
        return bool(self.items)


def _clean_name(value) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()[:MAX_ITEM_NAME_LENGTH]
    return cleaned or None


async def read_json_body(request: Request, require_json_content_type: bool = False) -> dict:
    """Parse the request body as a JSON object.

    Only endpoints that opt in reject a non-JSON content type; the rest parse
    the body whatever the client declared.
    """
    if require_json_content_type:
        content_type = request.headers.get("content-type", "")
        if content_type.split(";")[0].strip().lower() != "application/json":
            raise UnsupportedMediaType("Content-Type must be application/json")
    raw = await request.body()
    try:
        body = json.loads(raw or b"null")
    except ValueError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def normalize_item_name(body: dict, message: str = "Item name required") -> str:
    name = _clean_name(body.get("itemName"))
    if name is None:
        raise ValidationError(message)
    return name


def _check_batch(raw_list, key: str) -> None:
    if not isinstance(raw_list, list):
        raise ValidationError(f"{key} must be a list")
    if not raw_list:
        raise ValidationError("At least one item is required")
    if len(raw_list) > MAX_ITEMS_PER_BATCH:
        raise ValidationError(f"At most {MAX_ITEMS_PER_BATCH} items can be processed at once")


def normalize_items(body: dict) -> NormalizedItems:
    """Accept exactly one of ``{itemName}``, ``{itemNames: [...]}`` or ``{items: [...]}``.

    ``items`` carries the structured entries confirmed after /parse-items.
    """
    present = [key for key in ("itemName", "itemNames", "items") if body.get(key) is not None]
    if len(present) != 1:
        raise ValidationError("Exactly one of itemName, itemNames or items is required")

    if present[0] == "itemName":
        return NormalizedItems(item_name=normalize_item_name(body, "Item name is required"))
    if present[0] == "items":
        return NormalizedItems(items=normalize_parsed_items(body["items"]))

    raw_names = body["itemNames"]
    _check_batch(raw_names, "itemNames")

    names = []
    for i, raw in enumerate(raw_names):
        name = _clean_name(raw)
        if name is None:
            raise ValidationError(f"Item name at position {i} must be a non-empty string")
        names.append(name)
    return NormalizedItems(item_names=names)


def normalize_parsed_items(raw_items) -> list[dict]:
    _check_batch(raw_items, "items")

    items = []
    for i, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise ValidationError(f"Item at position {i} must be an object")
        name = _clean_name(raw.get("name"))
        if name is None:
            raise ValidationError(f"Item name at position {i} must be a non-empty string")
        try:
            fields = {key: value for key, value in raw.items() if value is not None}
            item = ParsedItem.model_validate({**fields, "name": name})
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid item at position {i}", details=str(e))
        item.category = normalize_category(item.category) if item.category else None
        items.append(item.model_dump(mode="json", by_alias=True))
    return items


def normalize_groceries(body: dict) -> list[dict]:
    """Validate ``{groceries: [...]}`` into the record list the freshness prompt embeds.

    Missing daysUntilExpiry / status are derived from expiryDate.
    """
    groceries = body.get("groceries")
    if not groceries:
        raise ValidationError("No groceries provided")
    if not isinstance(groceries, list):
        raise ValidationError("groceries must be a list")
    if len(groceries) > MAX_ITEMS_PER_BATCH:
        raise ValidationError(f"At most {MAX_ITEMS_PER_BATCH} items can be processed at once")

    records = []
    for i, raw in enumerate(groceries):
        try:
            record = GroceryRecord.model_validate(raw)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid grocery record at position {i}", details=str(e))

        if record.expiry_date is not None:
            if record.days_until_expiry is None:
                record.days_until_expiry = days_until_expiry(record.expiry_date)
            if record.status is None:
                record.status = ExpiryStatus(status_from_days_remaining(record.days_until_expiry))

        records.append(record.model_dump(mode="json", by_alias=True))
    return records


def normalize_parse_input(body: dict) -> str:
    """``{rawText}`` or ``{items}`` (list or string) → one text blob."""
    raw_text = body.get("rawText")
    items = body.get("items")
    if isinstance(raw_text, str) and raw_text.strip():
        return raw_text.strip()
    if isinstance(items, list):
        lines = [s.strip() for s in items if isinstance(s, str) and s.strip()]
        if lines:
            return "\n".join(lines)
    elif isinstance(items, str) and items.strip():
        return items.strip()
    raise ValidationError("No items provided")
