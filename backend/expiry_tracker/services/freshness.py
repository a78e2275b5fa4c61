"""
Freshness rules shared by every endpoint that hands grocery dates back to the
browser: category normalization, shelf-life clamping and expiry status.
"""

import math
from datetime import date, timedelta

from expiry_tracker.schemas.grocery import Category, ExpiryStatus

DEFAULT_SHELF_LIFE_DAYS = 7
MAX_SHELF_LIFE_DAYS = 3650  # 10 years
EXPIRING_SOON_DAYS = 3
PREMADE_MAX_DAYS = 4

# Labels the model tends to produce instead of the fixed enumeration
_CATEGORY_ALIASES = {
    "vegetable": Category.VEGETABLES,
    "produce": Category.VEGETABLES,
    "fruit": Category.FRUITS,
    "fruits & vegetables": Category.VEGETABLES,
    "poultry": Category.MEAT,
    "seafood": Category.MEAT,
    "fish": Category.MEAT,
    "deli": Category.MEAT,
    "leftover": Category.LEFTOVERS,
    "bread": Category.BAKERY,
    "beverage": Category.BEVERAGES,
    "drinks": Category.BEVERAGES,
    "dry goods": Category.PANTRY,
}


def normalize_category(value) -> str:
    """Map any model-produced category onto the fixed enumeration."""
    if not isinstance(value, str):
        return Category.OTHER.value
    key = value.strip().lower()
    try:
        return Category(key).value
    except ValueError:
        return _CATEGORY_ALIASES.get(key, Category.OTHER).value


def clamp_shelf_life_days(value) -> int:
    """Coerce a shelf-life estimate to an int in [0, MAX_SHELF_LIFE_DAYS].

    Missing or non-numeric values fall back to DEFAULT_SHELF_LIFE_DAYS.
    """
    if isinstance(value, bool) or value is None:
        return DEFAULT_SHELF_LIFE_DAYS
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return DEFAULT_SHELF_LIFE_DAYS
    if isinstance(value, int):
        return max(0, min(MAX_SHELF_LIFE_DAYS, value))
    if not isinstance(value, float) or math.isnan(value):
        return DEFAULT_SHELF_LIFE_DAYS
    if math.isinf(value):
        return MAX_SHELF_LIFE_DAYS if value > 0 else 0
    return max(0, min(MAX_SHELF_LIFE_DAYS, int(round(value))))


def expiry_date_for(purchase_date: date, shelf_life_days: int) -> date:
    return purchase_date + timedelta(days=shelf_life_days)


def days_until_expiry(expiry_date: date, today: date | None = None) -> int:
    return (expiry_date - (today or date.today())).days


def status_from_days_remaining(days_left: int) -> str:
    """Convert days remaining to an expiry status."""
    if days_left < 0:
        return ExpiryStatus.EXPIRED.value
    elif days_left <= EXPIRING_SOON_DAYS:
        return ExpiryStatus.EXPIRING_SOON.value
    else:
        return ExpiryStatus.FRESH.value
