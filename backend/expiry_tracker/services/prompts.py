"""
Prompt templates for the shelf-life endpoints.

Each builder is a pure function of its input: it states the task, embeds the
input as JSON, spells out the exact JSON shape expected back (including the
category enumeration) and anchors the format with a worked example.
"""

import json
from dataclasses import dataclass
from datetime import date
from enum import Enum

from expiry_tracker.schemas.grocery import CATEGORY_VALUES

CATEGORY_CHOICES = "|".join(CATEGORY_VALUES)


class Intent(str, Enum):
    QUICK = "quick"
    SHELF_LIFE = "shelf_life"
    BATCH = "batch"
    SHELF_LIFE_LOOKUP = "shelf_life_lookup"
    FRESHNESS = "freshness"
    PARSE_ITEMS = "parse_items"
    RECEIPT = "receipt"


@dataclass(frozen=True)
class Prompt:
    intent: Intent
    system: str
    user: str


FOOD_SAFETY_SYSTEM = (
    "You are a friendly food safety expert providing practical advice about food freshness "
    "and shelf life for home storage. Base estimates on USDA FoodKeeper and FDA guidance. "
    "Leftovers and premade deli items last at most 4 days refrigerated; raw poultry and ground "
    "meat at most 2 days. When sources differ, use the more conservative estimate. "
    "Return ONLY the JSON object requested, no markdown fences or extra text."
)

SHELF_LIFE_ITEM_SCHEMA = f"""\
{{
  "name": "formatted item name",
  "category": "{CATEGORY_CHOICES}",
  "shelfLifeDays": integer number of days from purchase, refrigerated where applicable,
  "storageRecommendations": "brief storage tip"
}}"""

_BATCH_ITEM_SCHEMA = SHELF_LIFE_ITEM_SCHEMA.replace("\n", "\n    ")


def _dump(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, sort_keys=False)


def build_quick_prompt(item_name: str) -> Prompt:
    """Single item, conversational answer plus the structured fields."""
    user = f"""\
Item: {_dump(item_name)}

Provide a helpful, conversational answer (2-3 sentences) about how long this item typically lasts \
and any important storage tips. Focus on practical home storage advice that consumers can easily follow.

If this is a leftover item (like "leftover pizza" or "leftover beef stew"), give guidance specific to \
cooked food storage, typically 3-4 days in the refrigerator.

Also determine the most likely category for this item.

Return JSON format:
{{
  "name": "formatted item name",
  "category": "{CATEGORY_CHOICES}",
  "answer": "2-3 friendly sentences about shelf life and safety",
  "storageRecommendations": "brief storage tip",
  "shelfLifeDays": estimated_days_number
}}

Example:
{{
  "name": "Leftover Pizza",
  "category": "leftovers",
  "answer": "Leftover pizza is best enjoyed within 3-4 days when stored in the refrigerator. Wrap it well or use an airtight container so it does not dry out.",
  "storageRecommendations": "Store in refrigerator, wrap well or use airtight container",
  "shelfLifeDays": 4
}}"""
    return Prompt(Intent.QUICK, FOOD_SAFETY_SYSTEM, user)


def build_shelf_life_prompt(item_name: str) -> Prompt:
    user = f"""\
Estimate the shelf life of this grocery item, counted from today's purchase:
{_dump(item_name)}

Return JSON format:
{SHELF_LIFE_ITEM_SCHEMA}

Example:
{{
  "name": "Milk",
  "category": "dairy",
  "shelfLifeDays": 7,
  "storageRecommendations": "Keep refrigerated at 40°F or below, close the cap tightly"
}}"""
    return Prompt(Intent.SHELF_LIFE, FOOD_SAFETY_SYSTEM, user)


def build_batch_prompt(item_names: list[str]) -> Prompt:
    user = f"""\
Estimate the shelf life of each of these grocery items, counted from today's purchase:
{_dump(item_names)}

Return one entry per input item, in the same order, in this JSON format:
{{
  "items": [
    {_BATCH_ITEM_SCHEMA}
  ]
}}

Example for ["milk", "strawberries"]:
{{
  "items": [
    {{"name": "Milk", "category": "dairy", "shelfLifeDays": 7, "storageRecommendations": "Keep refrigerated at 40°F or below"}},
    {{"name": "Strawberries", "category": "fruits", "shelfLifeDays": 5, "storageRecommendations": "Refrigerate unwashed in a breathable container"}}
  ]
}}"""
    return Prompt(Intent.BATCH, FOOD_SAFETY_SYSTEM, user)


# ── Tool-assisted lookup ─────────────────────────────────────────

SHELF_LIFE_LOOKUP_SYSTEM = """\
You are a food safety expert with access to the USDA FoodKeeper database and FDA food safety guidelines.

Process for each item:
1. Look it up with lookup_usda_foodkeeper first, trying several search terms.
2. If there is no USDA data, or for safety rules (leftovers, raw meat), use lookup_fda_guidance.
3. If neither source has data, make an AI estimate and mark it with low confidence.
4. Call provide_shelf_life_result once per item with the final answer.

Safety rules:
- Leftovers and premade items: maximum 4 days refrigerated
- Raw poultry and ground meat: maximum 2 days refrigerated
- When sources differ, use the more conservative (shorter) estimate

Confidence levels:
- high: direct match in USDA or FDA data
- medium: similar item found in the data
- low: AI estimate without database support"""


def _describe_item(item: dict) -> str:
    line = f"- {item['name']}"
    if item.get("modifier"):
        line += f" ({item['modifier']})"
    return line + f" [{item.get('foodType') or 'store-bought'}, {item.get('category') or 'unknown'}]"


def build_shelf_life_lookup_prompt(items: list[dict], purchase_date: date) -> Prompt:
    """Confirmed items from /parse-items; answers come back through tool calls, not JSON text."""
    lines = "\n".join(_describe_item(item) for item in items)
    user = f"""\
Get shelf life for these items (purchase date: {purchase_date.isoformat()}):

{lines}

Use the lookup tools to find official data, then call provide_shelf_life_result for each item."""
    return Prompt(Intent.SHELF_LIFE_LOOKUP, SHELF_LIFE_LOOKUP_SYSTEM, user)


def build_freshness_prompt(groceries: list[dict]) -> Prompt:
    user = f"""\
You are helping a consumer understand the freshness of their groceries.

Current grocery list:
{_dump(groceries)}

For each item, provide 1-2 sentences with specific, practical details about freshness and safety. \
Include variety-specific information when relevant.

Examples of the detail we want:
- "Bananas typically go bad in 4-5 days but are still safe to eat for 6-7 days if slightly overripe and spotted. Green bananas will last longer than yellow ones."
- "Ground beef should be used within 1-2 days for best quality and safety. Look for any grayish color or off smell as signs it's gone bad."

Focus on:
- Realistic timeframes for home storage
- Signs to look for when food is going bad
- Safety vs quality differences when relevant

Return JSON:
{{
  "freshnessInfo": [
    {{
      "itemName": "name",
      "details": "1-2 sentences with specific freshness and safety details"
    }}
  ],
  "overallTips": [
    "general tip 1",
    "general tip 2"
  ]
}}"""
    return Prompt(Intent.FRESHNESS, FOOD_SAFETY_SYSTEM, user)


PARSE_ITEMS_SYSTEM = f"""\
You are a grocery list parser. Interpret informal user input and extract structured grocery items. \
Do NOT estimate shelf life.

For each item extract:
- name: the primary food item, capitalized (e.g. "Milk", "Chicken Breast")
- modifier: descriptors like brand, size or preparation (e.g. "Organic, 1 gallon"), or ""
- quantity: number of items, default 1
- category: one of {CATEGORY_CHOICES}
- foodType: "store-bought" (packaged), "premade" (deli/prepared) or "leftover" (cooked/opened at home)

Examples:
- "2 gallons of milk" -> name "Milk", modifier "1 gallon", quantity 2
- "leftover pizza" -> name "Pizza", modifier "Leftover", foodType "leftover"
- "rotisserie chicken from costco" -> name "Rotisserie Chicken", modifier "Costco", foodType "premade"

Return ONLY valid JSON (no markdown) in this format:
{{
  "items": [
    {{"name": "Item Name", "modifier": "descriptors", "quantity": 1, "category": "dairy", "foodType": "store-bought"}}
  ]
}}"""


def build_parse_items_prompt(raw_text: str) -> Prompt:
    return Prompt(Intent.PARSE_ITEMS, PARSE_ITEMS_SYSTEM, f"Parse this grocery list:\n\n{raw_text}")


RECEIPT_SYSTEM = f"""\
You are a food safety and grocery tracking expert. Analyze receipts and extract ONLY perishable \
food items that need tracking.

Perishable (track): fresh produce, dairy, fresh meat/poultry/seafood, deli and prepared foods, \
bakery items, fresh juices, opened or prepared foods.
Not perishable (skip): alcohol, soda and energy drinks, canned goods, dry pantry items, \
supplements, household and personal care items.

foodType is "store-bought" for packaged groceries, "premade" for deli/prepared ready-to-eat items \
(maximum 3-4 days), or "skip" for anything that should not be tracked.

Shelf life guidelines: fresh milk 5-7 days, berries 3-5 days, apples 7-10 days, ground meat 1-2 days, \
chicken 1-2 days, beef 3 days, bread 3-5 days. Convert brand names to generic food names \
(Kroger Milk -> milk). If unsure whether something is perishable, track it.

Return ONLY valid JSON in this format:
{{
  "items": [
    {{
      "name": "simple generic food name",
      "originalName": "product name as printed",
      "isPerishable": true,
      "foodType": "store-bought|premade|skip",
      "category": "{CATEGORY_CHOICES}",
      "shelfLifeDays": 7,
      "quantity": 1,
      "price": 3.49,
      "storageRecommendations": "brief home storage tip"
    }}
  ],
  "receiptDate": "YYYY-MM-DD or null",
  "totalItems": 12,
  "skippedItems": ["names of skipped items"],
  "summary": "brief summary of what was found"
}}"""


def build_receipt_prompt(receipt_text: str | None) -> Prompt:
    """Receipt extraction; ``receipt_text`` is None when the receipt is an image."""
    instructions = (
        "Extract:\n"
        "- Item names (convert to simple generic names)\n"
        "- Quantities purchased\n"
        "- Prices if visible\n"
        "- Receipt date if visible\n\n"
        "Focus on perishable items only. Skip beer, soda, supplements, and household items."
    )
    if receipt_text is None:
        user = f"Analyze this receipt image and extract all perishable grocery items.\n\n{instructions}"
    else:
        user = (
            "Analyze this receipt and extract all perishable grocery items.\n\n"
            f"Receipt content:\n{receipt_text}\n\n{instructions}"
        )
    return Prompt(Intent.RECEIPT, RECEIPT_SYSTEM, user)
