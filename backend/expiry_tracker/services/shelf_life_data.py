"""
Reference shelf-life data and the Claude tools that expose it.

Storage times come from the USDA FoodKeeper app and FDA safe food handling
guidance (a static snapshot, conservative values, in days). During a lookup
Claude calls ``lookup_usda_foodkeeper`` / ``lookup_fda_guidance`` to read
this table and reports each item through ``provide_shelf_life_result``.
"""

import logging

logger = logging.getLogger(__name__)

USDA_SOURCE = "USDA FoodKeeper"
FDA_SOURCE = "FDA Food Safety"
AI_ESTIMATE_SOURCE = "AI Estimate"

CONFIDENCE_LEVELS = ("high", "medium", "low")

# days; None means the storage method is not recommended
USDA_FOODKEEPER_DATA = {
    # Dairy
    "milk": {"refrigerator": 7, "freezer": None, "pantry": None},
    "eggs": {"refrigerator": 35, "freezer": 365, "pantry": None},
    "butter": {"refrigerator": 90, "freezer": 365, "pantry": None},
    "yogurt": {"refrigerator": 14, "freezer": 60, "pantry": None},
    "cheese_hard": {"refrigerator": 180, "freezer": 180, "pantry": None},
    "cheese_soft": {"refrigerator": 14, "freezer": None, "pantry": None},
    "cream_cheese": {"refrigerator": 14, "freezer": None, "pantry": None},
    "sour_cream": {"refrigerator": 21, "freezer": None, "pantry": None},
    "cottage_cheese": {"refrigerator": 7, "freezer": None, "pantry": None},
    # Meat, fresh
    "chicken_raw": {"refrigerator": 2, "freezer": 270, "pantry": None},
    "beef_raw": {"refrigerator": 5, "freezer": 365, "pantry": None},
    "ground_beef": {"refrigerator": 2, "freezer": 120, "pantry": None},
    "pork_raw": {"refrigerator": 5, "freezer": 180, "pantry": None},
    "fish_raw": {"refrigerator": 2, "freezer": 180, "pantry": None},
    "bacon": {"refrigerator": 7, "freezer": 30, "pantry": None},
    "deli_meat": {"refrigerator": 5, "freezer": 60, "pantry": None},
    "hot_dogs": {"refrigerator": 14, "freezer": 60, "pantry": None},
    # Cooked and leftovers
    "cooked_meat": {"refrigerator": 4, "freezer": 90, "pantry": None},
    "cooked_poultry": {"refrigerator": 4, "freezer": 120, "pantry": None},
    "leftover_general": {"refrigerator": 4, "freezer": 90, "pantry": None},
    "soup_stew": {"refrigerator": 4, "freezer": 90, "pantry": None},
    "pizza_leftover": {"refrigerator": 4, "freezer": 60, "pantry": None},
    # Produce
    "apples": {"refrigerator": 28, "freezer": None, "pantry": 7},
    "bananas": {"refrigerator": 5, "freezer": None, "pantry": 5},
    "berries": {"refrigerator": 5, "freezer": 365, "pantry": None},
    "strawberries": {"refrigerator": 5, "freezer": 365, "pantry": None},
    "grapes": {"refrigerator": 14, "freezer": None, "pantry": None},
    "oranges": {"refrigerator": 21, "freezer": None, "pantry": 7},
    "lemons": {"refrigerator": 28, "freezer": None, "pantry": 7},
    "avocado": {"refrigerator": 5, "freezer": None, "pantry": 5},
    "tomatoes": {"refrigerator": 7, "freezer": None, "pantry": 5},
    "lettuce": {"refrigerator": 7, "freezer": None, "pantry": None},
    "spinach": {"refrigerator": 5, "freezer": None, "pantry": None},
    "carrots": {"refrigerator": 21, "freezer": 365, "pantry": None},
    "broccoli": {"refrigerator": 5, "freezer": 365, "pantry": None},
    "peppers": {"refrigerator": 7, "freezer": None, "pantry": None},
    "onions": {"refrigerator": 60, "freezer": None, "pantry": 30},
    "potatoes": {"refrigerator": None, "freezer": None, "pantry": 21},
    "mushrooms": {"refrigerator": 7, "freezer": None, "pantry": None},
    "celery": {"refrigerator": 14, "freezer": None, "pantry": None},
    "cucumber": {"refrigerator": 7, "freezer": None, "pantry": None},
    # Bakery
    "bread": {"refrigerator": None, "freezer": 90, "pantry": 7},
    "bagels": {"refrigerator": None, "freezer": 90, "pantry": 5},
    "tortillas": {"refrigerator": 14, "freezer": 180, "pantry": 7},
    # Prepared and deli
    "rotisserie_chicken": {"refrigerator": 4, "freezer": 120, "pantry": None},
    "deli_salad": {"refrigerator": 4, "freezer": None, "pantry": None},
    "hummus": {"refrigerator": 7, "freezer": None, "pantry": None},
}

FDA_FOOD_SAFETY_DATA = {
    "leftovers": {"maxDays": 4, "tip": "Use within 3-4 days or freeze"},
    "raw_poultry": {"maxDays": 2, "tip": "Cook or freeze within 1-2 days"},
    "raw_ground_meat": {"maxDays": 2, "tip": "Cook or freeze within 1-2 days"},
    "raw_beef_steaks": {"maxDays": 5, "tip": "Cook or freeze within 3-5 days"},
    "cooked_meat": {"maxDays": 4, "tip": "Refrigerate within 2 hours of cooking"},
    "deli_meats": {"maxDays": 5, "tip": "Use within 3-5 days after opening"},
    "eggs": {"maxDays": 35, "tip": "Keep refrigerated at 40°F or below"},
    "milk": {"maxDays": 7, "tip": "Keep refrigerated, use within a week of opening"},
}


def _key(term: str) -> str:
    return "_".join(term.lower().split())


def lookup_usda_foodkeeper(food_item: str, search_terms: list[str] | None = None) -> dict:
    """Exact match on any of the terms first, then a substring match on ``food_item``."""
    for term in [food_item, *(search_terms or [])]:
        if not isinstance(term, str):
            continue
        key = _key(term)
        if key in USDA_FOODKEEPER_DATA:
            return {"found": True, "data": {**USDA_FOODKEEPER_DATA[key], "source": USDA_SOURCE}, "matchedTerm": key}

    search = food_item.lower().strip()
    if search:
        for key, data in USDA_FOODKEEPER_DATA.items():
            if search in key or key.replace("_", " ") in search:
                return {"found": True, "data": {**data, "source": USDA_SOURCE}, "matchedTerm": key}
    return {"found": False, "message": "No USDA FoodKeeper data found for this item"}


def lookup_fda_guidance(category: str) -> dict:
    key = _key(category)
    if key in FDA_FOOD_SAFETY_DATA:
        return {"found": True, "data": {**FDA_FOOD_SAFETY_DATA[key], "source": FDA_SOURCE}}
    return {"found": False, "message": "No FDA guidance found for this category"}


# ── Tool definitions ─────────────────────────────────────────────

RESULT_TOOL = "provide_shelf_life_result"

TOOLS = [
    {
        "name": "lookup_usda_foodkeeper",
        "description": (
            "Look up food storage times from the official USDA FoodKeeper database. Use this for "
            "specific food items to get refrigerator, freezer, and pantry storage times."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "food_item": {
                    "type": "string",
                    "description": "The food item to look up (e.g., 'milk', 'chicken_raw', 'berries')",
                },
                "search_terms": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Alternative search terms to try (e.g., ['chicken', 'poultry', 'chicken_raw'])",
                },
            },
            "required": ["food_item"],
        },
    },
    {
        "name": "lookup_fda_guidance",
        "description": (
            "Look up FDA food safety guidelines for general food categories. Use this for safety "
            "rules about leftovers, raw meats, etc."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "category": {
                    "type": "string",
                    "description": "The food safety category (e.g., 'leftovers', 'raw_poultry', 'cooked_meat')",
                },
            },
            "required": ["category"],
        },
    },
    {
        "name": RESULT_TOOL,
        "description": (
            "After looking up data, provide the final shelf life result for an item. Call this once "
            "per item with the researched information."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Item name"},
                "modifier": {"type": "string", "description": "Item modifier/descriptors"},
                "shelfLifeDays": {"type": "number", "description": "Days until expiry (refrigerated)"},
                "storageRecommendations": {"type": "string", "description": "Storage tips"},
                "source": {"type": "string", "description": "Data source (USDA FoodKeeper, FDA, or AI Estimate)"},
                "confidence": {"type": "string", "enum": list(CONFIDENCE_LEVELS)},
                "isPerishable": {"type": "boolean", "description": "Whether item needs refrigeration"},
                "foodType": {"type": "string", "enum": ["store-bought", "premade", "leftover"]},
                "category": {"type": "string", "description": "Food category"},
            },
            "required": [
                "name", "shelfLifeDays", "storageRecommendations", "source",
                "confidence", "isPerishable", "foodType", "category",
            ],
        },
    },
]


def execute_tool(name: str, tool_input: dict) -> dict:
    """Run one tool call from Claude and return the JSON-able result."""
    logger.debug(f"Tool call: {name} {tool_input}")
    if not isinstance(tool_input, dict):
        return {"error": f"Invalid input for tool: {name}"}

    if name == "lookup_usda_foodkeeper":
        food_item = tool_input.get("food_item")
        if not isinstance(food_item, str):
            return {"error": "food_item is required"}
        return lookup_usda_foodkeeper(food_item, tool_input.get("search_terms"))
    if name == "lookup_fda_guidance":
        category = tool_input.get("category")
        if not isinstance(category, str):
            return {"error": "category is required"}
        return lookup_fda_guidance(category)
    if name == RESULT_TOOL:
        return {"success": True, "result": tool_input}
    return {"error": f"Unknown tool: {name}"}
