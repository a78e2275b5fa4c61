"""Tests for request body validation and reshaping."""

from datetime import date, timedelta

import pytest

from expiry_tracker.errors import ValidationError
from expiry_tracker.services.normalizer import (
    MAX_ITEM_NAME_LENGTH,
    MAX_ITEMS_PER_BATCH,
    normalize_groceries,
    normalize_item_name,
    normalize_items,
    normalize_parse_input,
)


class TestItemName:
    def test_trimmed(self) -> None:
        assert normalize_item_name({"itemName": "  Milk  "}) == "Milk"

    def test_truncated(self) -> None:
        assert len(normalize_item_name({"itemName": "x" * 500})) == MAX_ITEM_NAME_LENGTH

    @pytest.mark.parametrize("body", [{}, {"itemName": ""}, {"itemName": "   "}, {"itemName": 5}])
    def test_missing_or_blank(self, body) -> None:
        with pytest.raises(ValidationError, match="Item name required"):
            normalize_item_name(body)


class TestItems:
    def test_single(self) -> None:
        items = normalize_items({"itemName": "Eggs"})
        assert not items.is_batch
        assert items.item_name == "Eggs"

    def test_batch(self) -> None:
        items = normalize_items({"itemNames": [" milk", "bread "]})
        assert items.is_batch
        assert items.item_names == ["milk", "bread"]

    def test_neither(self) -> None:
        with pytest.raises(ValidationError, match="Exactly one of itemName, itemNames or items is required"):
            normalize_items({})

    def test_both(self) -> None:
        with pytest.raises(ValidationError, match="Exactly one of itemName, itemNames or items is required"):
            normalize_items({"itemName": "milk", "itemNames": ["bread"]})

    def test_empty_list(self) -> None:
        with pytest.raises(ValidationError, match="At least one item is required"):
            normalize_items({"itemNames": []})

    def test_too_many(self) -> None:
        with pytest.raises(ValidationError):
            normalize_items({"itemNames": ["milk"] * (MAX_ITEMS_PER_BATCH + 1)})

    def test_blank_entry(self) -> None:
        with pytest.raises(ValidationError, match="position 1"):
            normalize_items({"itemNames": ["milk", "  "]})

    def test_name_and_items(self) -> None:
        with pytest.raises(ValidationError, match="Exactly one of"):
            normalize_items({"itemName": "milk", "items": [{"name": "bread"}]})


class TestParsedItems:
    def test_structured(self) -> None:
        items = normalize_items({"items": [
            {"name": " Chicken Breast ", "modifier": "boneless", "quantity": 2, "category": "poultry"},
            {"name": "Lasagna", "foodType": "leftover", "modifier": None},
        ]})

        assert items.is_structured
        assert not items.is_batch
        assert items.items == [
            {"name": "Chicken Breast", "modifier": "boneless", "quantity": 2,
             "category": "meat", "foodType": "store-bought"},
            {"name": "Lasagna", "modifier": "", "quantity": 1,
             "category": None, "foodType": "leftover"},
        ]

    def test_unknown_food_type(self) -> None:
        with pytest.raises(ValidationError, match="Invalid item at position 0"):
            normalize_items({"items": [{"name": "Milk", "foodType": "homegrown"}]})

    @pytest.mark.parametrize("entry", ["milk", {"name": ""}, {"modifier": "whole"}])
    def test_bad_entry(self, entry) -> None:
        with pytest.raises(ValidationError, match="position 0"):
            normalize_items({"items": [entry]})

    def test_empty(self) -> None:
        with pytest.raises(ValidationError, match="At least one item is required"):
            normalize_items({"items": []})


class TestGroceries:
    def test_missing(self) -> None:
        with pytest.raises(ValidationError, match="No groceries provided"):
            normalize_groceries({})

    def test_empty(self) -> None:
        with pytest.raises(ValidationError, match="No groceries provided"):
            normalize_groceries({"groceries": []})

    def test_derives_countdown_from_expiry(self) -> None:
        expiry = date.today() + timedelta(days=2)
        records = normalize_groceries({"groceries": [{"name": "Milk", "expiryDate": expiry.isoformat()}]})

        assert records[0]["name"] == "Milk"
        assert records[0]["daysUntilExpiry"] == 2
        assert records[0]["status"] == "expiring_soon"

    def test_keeps_client_values(self) -> None:
        records = normalize_groceries({"groceries": [
            {"name": "Cheese", "category": "dairy", "daysUntilExpiry": 20, "status": "fresh"},
        ]})
        assert records[0]["daysUntilExpiry"] == 20
        assert records[0]["category"] == "dairy"

    def test_invalid_record(self) -> None:
        with pytest.raises(ValidationError, match="position 0"):
            normalize_groceries({"groceries": [{"name": ""}]})


class TestParseInput:
    def test_raw_text(self) -> None:
        assert normalize_parse_input({"rawText": " 2 gallons of milk \n"}) == "2 gallons of milk"

    def test_item_list(self) -> None:
        assert normalize_parse_input({"items": ["milk", " ", "leftover pizza"]}) == "milk\nleftover pizza"

    def test_nothing(self) -> None:
        with pytest.raises(ValidationError, match="No items provided"):
            normalize_parse_input({"items": []})
