from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    MEAT = "meat"
    DAIRY = "dairy"
    PANTRY = "pantry"
    BEVERAGES = "beverages"
    LEFTOVERS = "leftovers"
    BAKERY = "bakery"
    FROZEN = "frozen"
    OTHER = "other"


CATEGORY_VALUES = [c.value for c in Category]


class ExpiryStatus(str, Enum):
    FRESH = "fresh"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GroceryRecord(CamelModel):
    """A tracked item as the browser sends it for freshness lookups."""

    name: str = Field(min_length=1)
    category: str | None = None
    purchase_date: date | None = None
    expiry_date: date | None = None
    days_until_expiry: int | None = None
    status: ExpiryStatus | None = None



class FoodType(str, Enum):
    STORE_BOUGHT = "store-bought"
    PREMADE = "premade"
    LEFTOVER = "leftover"


class ParsedItem(CamelModel):
    """A confirmed item from /parse-items, sent back for the shelf-life lookup."""

    name: str = Field(min_length=1)
    modifier: str = ""
    quantity: int = Field(default=1, ge=1)
    category: str | None = None
    food_type: FoodType = FoodType.STORE_BOUGHT
