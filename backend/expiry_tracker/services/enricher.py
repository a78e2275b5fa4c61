"""
Response Enricher: adds the locally computed date fields to a parsed model
result before it goes back to the browser.
"""

from datetime import date

from expiry_tracker.services.freshness import (
    PREMADE_MAX_DAYS,
    clamp_shelf_life_days,
    days_until_expiry,
    expiry_date_for,
    normalize_category,
    status_from_days_remaining,
)
from expiry_tracker.services.shelf_life_data import AI_ESTIMATE_SOURCE, CONFIDENCE_LEVELS


def enrich_shelf_life(result: dict, purchase_date: date | None = None) -> dict:
    """Return ``result`` with category, shelfLifeDays, purchaseDate and expiryDate settled.

    purchaseDate defaults to the server's local date; expiryDate is always
    purchaseDate + shelfLifeDays in whole calendar days.
    """
    purchase_date = purchase_date or date.today()
    shelf_life_days = clamp_shelf_life_days(result.get("shelfLifeDays"))
    expiry = expiry_date_for(purchase_date, shelf_life_days)
    return {
        **result,
        "category": normalize_category(result.get("category")),
        "shelfLifeDays": shelf_life_days,
        "purchaseDate": purchase_date.isoformat(),
        "expiryDate": expiry.isoformat(),
    }


def enrich_tracked_item(result: dict, purchase_date: date | None = None, today: date | None = None) -> dict:
    """Like enrich_shelf_life, plus the countdown fields a list entry carries."""
    item = enrich_shelf_life(result, purchase_date)
    days_left = days_until_expiry(date.fromisoformat(item["expiryDate"]), today)
    item["daysUntilExpiry"] = days_left
    item["status"] = status_from_days_remaining(days_left)
    return item


def enrich_receipt_item(result: dict, purchase_date: date, today: date | None = None) -> dict:
    """Receipt lines: premade food is capped at PREMADE_MAX_DAYS."""
    shelf_life_days = clamp_shelf_life_days(result.get("shelfLifeDays"))
    if result.get("foodType") == "premade":
        shelf_life_days = min(shelf_life_days, PREMADE_MAX_DAYS)

    item = enrich_tracked_item({**result, "shelfLifeDays": shelf_life_days}, purchase_date, today)
    return {
        "name": item.get("name"),
        "originalName": item.get("originalName") or item.get("name"),
        "category": item["category"],
        "foodType": item.get("foodType"),
        "purchaseDate": item["purchaseDate"],
        "expiryDate": item["expiryDate"],
        "shelfLifeDays": item["shelfLifeDays"],
        "daysUntilExpiry": item["daysUntilExpiry"],
        "quantity": item.get("quantity") or 1,
        "price": item.get("price"),
        "addedManually": False,
        "status": item["status"],
        "storageRecommendations": item.get("storageRecommendations"),
    }


def enrich_looked_up_item(
    result: dict,
    requested: dict | None = None,
    purchase_date: date | None = None,
    today: date | None = None,
) -> dict:
    """A provide_shelf_life_result from the tool lookup, merged over the item the user confirmed.

    Leftover and premade food is capped at PREMADE_MAX_DAYS whatever the
    source said. An unknown confidence reads as "low".
    """
    merged = {**(requested or {}), **result}
    shelf_life_days = clamp_shelf_life_days(merged.get("shelfLifeDays"))
    if merged.get("foodType") in ("premade", "leftover"):
        shelf_life_days = min(shelf_life_days, PREMADE_MAX_DAYS)

    item = enrich_tracked_item({**merged, "shelfLifeDays": shelf_life_days}, purchase_date, today)
    confidence = item.get("confidence")
    item["confidence"] = confidence if confidence in CONFIDENCE_LEVELS else "low"
    item["source"] = item.get("source") or AI_ESTIMATE_SOURCE
    item["isPerishable"] = item.get("isPerishable") is not False
    item["modifier"] = item.get("modifier") or ""
    item["quantity"] = item.get("quantity") or 1
    item["addedManually"] = True
    return item
