"""Tests for the date fields added to model results."""

from datetime import date, timedelta

import pytest

from expiry_tracker.services.enricher import (
    enrich_looked_up_item,
    enrich_receipt_item,
    enrich_shelf_life,
    enrich_tracked_item,
)


@pytest.mark.parametrize("days", [0, 1, 7, 365])
def test_expiry_is_purchase_plus_shelf_life(days: int) -> None:
    purchase = date(2025, 2, 27)
    result = enrich_shelf_life({"name": "Milk", "category": "dairy", "shelfLifeDays": days}, purchase)

    assert result["shelfLifeDays"] == days
    assert result["purchaseDate"] == "2025-02-27"
    gap = date.fromisoformat(result["expiryDate"]) - date.fromisoformat(result["purchaseDate"])
    assert gap == timedelta(days=days)


def test_defaults_to_today_and_keeps_model_fields() -> None:
    result = enrich_shelf_life({"name": "Bread", "category": "Bakery", "answer": "About five days."})

    assert result["purchaseDate"] == date.today().isoformat()
    assert result["shelfLifeDays"] == 7
    assert result["expiryDate"] == (date.today() + timedelta(days=7)).isoformat()
    assert result["category"] == "bakery"
    assert result["answer"] == "About five days."


def test_tracked_item_gets_countdown() -> None:
    item = enrich_tracked_item(
        {"name": "Yogurt", "category": "dairy", "shelfLifeDays": 10},
        purchase_date=date(2025, 1, 1),
        today=date(2025, 1, 9),
    )
    assert item["expiryDate"] == "2025-01-11"
    assert item["daysUntilExpiry"] == 2
    assert item["status"] == "expiring_soon"


class TestReceiptItem:
    def test_premade_is_capped(self) -> None:
        item = enrich_receipt_item(
            {"name": "Rotisserie Chicken", "foodType": "premade", "category": "meat", "shelfLifeDays": 10},
            purchase_date=date(2025, 5, 1),
            today=date(2025, 5, 1),
        )
        assert item["shelfLifeDays"] == 4
        assert item["expiryDate"] == "2025-05-05"
        assert item["addedManually"] is False

    def test_store_bought_keeps_estimate_and_defaults(self) -> None:
        item = enrich_receipt_item(
            {"name": "Apples", "foodType": "store-bought", "category": "fruit", "shelfLifeDays": 10},
            purchase_date=date(2025, 5, 1),
            today=date(2025, 5, 1),
        )
        assert item["shelfLifeDays"] == 10
        assert item["category"] == "fruits"
        assert item["originalName"] == "Apples"
        assert item["quantity"] == 1
        assert item["price"] is None
        assert item["status"] == "fresh"


class TestLookedUpItem:
    def test_tool_result_merged_over_request(self) -> None:
        item = enrich_looked_up_item(
            {"name": "Milk", "shelfLifeDays": 7, "category": "dairy", "source": "USDA FoodKeeper",
             "confidence": "high", "isPerishable": True, "foodType": "store-bought"},
            {"name": "Milk", "modifier": "2%", "quantity": 2, "category": "dairy", "foodType": "store-bought"},
            purchase_date=date(2025, 5, 1),
            today=date(2025, 5, 1),
        )
        assert item["modifier"] == "2%"
        assert item["quantity"] == 2
        assert item["source"] == "USDA FoodKeeper"
        assert item["confidence"] == "high"
        assert item["expiryDate"] == "2025-05-08"
        assert item["daysUntilExpiry"] == 7
        assert item["addedManually"] is True

    @pytest.mark.parametrize("food_type", ["leftover", "premade"])
    def test_prepared_food_is_capped(self, food_type) -> None:
        item = enrich_looked_up_item(
            {"name": "Lasagna", "shelfLifeDays": 6, "foodType": food_type},
            purchase_date=date(2025, 5, 1),
            today=date(2025, 5, 1),
        )
        assert item["shelfLifeDays"] == 4

    def test_missing_provenance_defaults(self) -> None:
        item = enrich_looked_up_item({"name": "Dragonfruit", "shelfLifeDays": 5, "confidence": "certain"})
        assert item["source"] == "AI Estimate"
        assert item["confidence"] == "low"
        assert item["isPerishable"] is True
        assert item["modifier"] == ""
        assert item["quantity"] == 1
