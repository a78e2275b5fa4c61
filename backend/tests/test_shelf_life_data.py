"""Tests for the USDA/FDA reference table and the tool dispatcher."""

import pytest

from expiry_tracker.services.shelf_life_data import (
    FDA_SOURCE,
    RESULT_TOOL,
    TOOLS,
    USDA_SOURCE,
    execute_tool,
    lookup_fda_guidance,
    lookup_usda_foodkeeper,
)


class TestUsdaLookup:
    def test_exact_key(self) -> None:
        result = lookup_usda_foodkeeper("Milk")
        assert result == {
            "found": True,
            "data": {"refrigerator": 7, "freezer": None, "pantry": None, "source": USDA_SOURCE},
            "matchedTerm": "milk",
        }

    def test_spaces_become_underscores(self) -> None:
        assert lookup_usda_foodkeeper("Ground Beef")["matchedTerm"] == "ground_beef"

    def test_falls_back_to_search_terms(self) -> None:
        result = lookup_usda_foodkeeper("boneless breast", ["poultry", "chicken_raw"])
        assert result["matchedTerm"] == "chicken_raw"
        assert result["data"]["refrigerator"] == 2

    def test_partial_match(self) -> None:
        result = lookup_usda_foodkeeper("organic baby spinach")
        assert result["found"] is True
        assert result["matchedTerm"] == "spinach"

    def test_not_found(self) -> None:
        result = lookup_usda_foodkeeper("dragonfruit")
        assert result["found"] is False
        assert "message" in result


class TestFdaLookup:
    def test_known_category(self) -> None:
        result = lookup_fda_guidance("Raw Poultry")
        assert result["found"] is True
        assert result["data"]["maxDays"] == 2
        assert result["data"]["source"] == FDA_SOURCE

    def test_unknown_category(self) -> None:
        assert lookup_fda_guidance("candy")["found"] is False


class TestExecuteTool:
    def test_every_tool_is_dispatched(self) -> None:
        names = {tool["name"] for tool in TOOLS}
        assert names == {"lookup_usda_foodkeeper", "lookup_fda_guidance", RESULT_TOOL}

    def test_usda(self) -> None:
        assert execute_tool("lookup_usda_foodkeeper", {"food_item": "eggs"})["data"]["refrigerator"] == 35

    def test_fda(self) -> None:
        assert execute_tool("lookup_fda_guidance", {"category": "leftovers"})["data"]["maxDays"] == 4

    def test_result_is_echoed(self) -> None:
        tool_input = {"name": "Milk", "shelfLifeDays": 7}
        assert execute_tool(RESULT_TOOL, tool_input) == {"success": True, "result": tool_input}

    @pytest.mark.parametrize("name, tool_input", [
        ("lookup_usda_foodkeeper", {}),
        ("lookup_fda_guidance", {"category": 3}),
        ("lookup_usda_foodkeeper", "milk"),
        ("delete_everything", {}),
    ])
    def test_bad_calls_return_an_error(self, name, tool_input) -> None:
        assert "error" in execute_tool(name, tool_input)
