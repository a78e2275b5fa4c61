"""
ShelfLifeAI - Claude API integration service.

Every AI endpoint runs the same pipeline through this class: build a prompt,
make one completion call, pull the JSON object out of the reply, enrich it.
The confirmed-item lookup is the exception: it runs a bounded tool-use
conversation against the local USDA/FDA table. There is no retry and no
caching; a failed call fails the request.
"""

import json
import logging
from datetime import date
from functools import lru_cache

from expiry_tracker.config import get_settings
from expiry_tracker.errors import MalformedAIResponse, UpstreamError
from expiry_tracker.services import prompts
from expiry_tracker.services.enricher import (
    enrich_looked_up_item,
    enrich_receipt_item,
    enrich_shelf_life,
    enrich_tracked_item,
)
from expiry_tracker.services.freshness import normalize_category
from expiry_tracker.services.json_extract import extract_json_object
from expiry_tracker.services.prompts import Intent, Prompt
from expiry_tracker.services.shelf_life_data import RESULT_TOOL, TOOLS, execute_tool

logger = logging.getLogger(__name__)

MAX_TOKENS = {
    Intent.QUICK: 1000,
    Intent.SHELF_LIFE: 1000,
    Intent.PARSE_ITEMS: 1500,
    Intent.BATCH: 3000,
    Intent.SHELF_LIFE_LOOKUP: 4000,
    Intent.FRESHNESS: 3000,
    Intent.RECEIPT: 4000,
}

FAILURE_MESSAGES = {
    Intent.QUICK: "Failed to get shelf life information",
    Intent.SHELF_LIFE: "Failed to get shelf life information",
    Intent.BATCH: "Failed to get shelf life information",
    Intent.SHELF_LIFE_LOOKUP: "Failed to get shelf life information",
    Intent.FRESHNESS: "Failed to get freshness information",
    Intent.PARSE_ITEMS: "Failed to parse items",
    Intent.RECEIPT: "Failed to process receipt with AI",
}

# assistant turns allowed before a tool lookup is abandoned
MAX_TOOL_ROUNDS = 10


def _text_of(response) -> str | None:
    return next(
        (block.text for block in response.content if getattr(block, "type", None) == "text"),
        None,
    )


def _expect_list(parsed: dict, key: str, raw: str) -> list[dict]:
    value = parsed.get(key)
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise MalformedAIResponse(raw_response=raw, details=f"Expected a list of objects under '{key}'")
    return value


class ShelfLifeAI:
    """All AI features powered by the Anthropic Claude API."""

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        settings = get_settings()
        self.model = model or settings.CLAUDE_MODEL
        self.api_key = api_key if api_key is not None else settings.ANTHROPIC_API_KEY
        self._client = client

    @property
    def client(self):
        if self._client is None and self.api_key:
            import anthropic
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def _create_message(self, prompt: Prompt, messages: list[dict], tools: list[dict] | None = None):
        failure = FAILURE_MESSAGES[prompt.intent]
        if not self.client:
            raise UpstreamError(failure, details="Anthropic API key not configured")

        kwargs = {"tools": tools} if tools else {}
        try:
            return await self.client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS[prompt.intent],
                system=prompt.system,
                messages=messages,
                **kwargs,
            )
        except Exception as e:
            logger.error(f"Claude call failed for {prompt.intent.value}: {e}")
            raise UpstreamError(failure, details=str(e))

    async def _call_claude(self, prompt: Prompt, image: tuple[str, str] | None = None) -> str:
        """Make one call to the Claude API and return the text of the reply.

        ``image`` is an optional ``(base64_data, media_type)`` pair sent ahead
        of the prompt text.
        """
        if image:
            data, media_type = image
            content = [
                {"type": "image", "source": {"type": "base64", "media_type": media_type, "data": data}},
                {"type": "text", "text": prompt.user},
            ]
        else:
            content = prompt.user

        response = await self._create_message(prompt, [{"role": "user", "content": content}])
        text = _text_of(response)
        if not text:
            raise UpstreamError(FAILURE_MESSAGES[prompt.intent], details="No text content in AI response")
        logger.debug(f"Raw Claude response ({prompt.intent.value}): {text}")
        return text

    async def _complete_json(self, prompt: Prompt, image: tuple[str, str] | None = None) -> tuple[dict, str]:
        text = await self._call_claude(prompt, image)
        try:
            return extract_json_object(text), text
        except MalformedAIResponse:
            logger.error(f"No JSON object in {prompt.intent.value} response: {text!r}")
            raise

    # ── Single item ──────────────────────────────────────────────────

    async def quick_shelf_life(self, item_name: str) -> dict:
        """Conversational answer for one item, ready to become a list entry."""
        logger.info(f"Getting quick shelf life answer for: {item_name}")
        result, _ = await self._complete_json(prompts.build_quick_prompt(item_name))
        return {**enrich_shelf_life(result), "addedManually": True}

    async def shelf_life(self, item_name: str) -> dict:
        logger.info(f"Getting shelf life for: {item_name}")
        result, _ = await self._complete_json(prompts.build_shelf_life_prompt(item_name))
        return enrich_shelf_life(result)

    # ── Batch ────────────────────────────────────────────────────────

    async def batch_shelf_life(self, item_names: list[str]) -> dict:
        """Shelf life for several items. One bad entry fails the whole batch."""
        logger.info(f"Getting shelf life for {len(item_names)} items")
        result, raw = await self._complete_json(prompts.build_batch_prompt(item_names))
        items = [
            {**enrich_tracked_item(item), "addedManually": True}
            for item in _expect_list(result, "items", raw)
        ]
        return {"items": items}

    async def lookup_shelf_life(self, items: list[dict]) -> dict:
        """Stage 2 of typed entry: shelf life for confirmed items via the USDA/FDA lookup tools.

        Claude answers through tool calls instead of JSON text. Each round's
        tool_use blocks are executed locally and returned as tool_result
        blocks until the model stops asking for tools.
        """
        logger.info(f"Looking up shelf life for {len(items)} confirmed items")
        purchase_date = date.today()
        prompt = prompts.build_shelf_life_lookup_prompt(items, purchase_date)
        messages = [{"role": "user", "content": prompt.user}]
        results = []

        for _ in range(MAX_TOOL_ROUNDS):
            response = await self._create_message(prompt, list(messages), tools=TOOLS)
            if response.stop_reason != "tool_use":
                break

            messages.append({"role": "assistant", "content": response.content})
            tool_results = []
            for block in response.content:
                if getattr(block, "type", None) != "tool_use":
                    continue
                output = execute_tool(block.name, block.input)
                if block.name == RESULT_TOOL and output.get("success"):
                    results.append(output["result"])
                tool_results.append({
                    "type": "tool_result",
                    "tool_use_id": block.id,
                    "content": json.dumps(output),
                })
            messages.append({"role": "user", "content": tool_results})
        else:
            raise UpstreamError(
                FAILURE_MESSAGES[prompt.intent],
                details=f"Lookup did not finish within {MAX_TOOL_ROUNDS} rounds",
            )

        if not results:
            raise MalformedAIResponse(
                raw_response=_text_of(response),
                details="No shelf life results were provided",
            )

        requested = {item["name"].lower(): item for item in items}
        looked_up = [
            enrich_looked_up_item(result, requested.get(str(result.get("name", "")).lower()), purchase_date)
            for result in results
        ]
        logger.info(f"Shelf life lookup returned {len(looked_up)} of {len(items)} items")
        return {"stage": 2, "items": looked_up}

    async def freshness_info(self, groceries: list[dict]) -> dict:
        logger.info(f"Getting freshness information for {len(groceries)} grocery items")
        result, raw = await self._complete_json(prompts.build_freshness_prompt(groceries))
        info = _expect_list(result, "freshnessInfo", raw)
        tips = result.get("overallTips") or []
        if not isinstance(tips, list):
            tips = [str(tips)]
        return {
            "freshnessInfo": [
                {"itemName": entry.get("itemName"), "details": entry.get("details")}
                for entry in info
            ],
            "overallTips": [str(t) for t in tips],
        }

    # ── Parsing ──────────────────────────────────────────────────────

    async def parse_items(self, raw_text: str) -> dict:
        """Stage 1 of typed entry: structure free text, no shelf life yet."""
        logger.info(f"Parsing {len(raw_text.splitlines())} typed items")
        result, raw = await self._complete_json(prompts.build_parse_items_prompt(raw_text))
        items = [
            {
                "name": item.get("name"),
                "modifier": item.get("modifier") or "",
                "quantity": item.get("quantity") or 1,
                "category": normalize_category(item.get("category")),
                "foodType": item.get("foodType") or "store-bought",
            }
            for item in _expect_list(result, "items", raw)
        ]
        return {
            "stage": 1,
            "items": items,
            "message": "Items parsed. Review and confirm before getting shelf life.",
        }

    async def analyze_receipt(self, receipt_text: str | None = None, image: tuple[str, str] | None = None) -> dict:
        """Extract the perishable lines of a receipt (text or photo)."""
        result, raw = await self._complete_json(prompts.build_receipt_prompt(receipt_text), image)
        lines = _expect_list(result, "items", raw)

        receipt_date = result.get("receiptDate")
        try:
            purchase_date = date.fromisoformat(receipt_date) if receipt_date else date.today()
        except (TypeError, ValueError):
            receipt_date = None
            purchase_date = date.today()

        perishable = [
            line for line in lines
            if line.get("isPerishable", True) and line.get("foodType") != "skip"
        ]
        grocery_items = [enrich_receipt_item(line, purchase_date) for line in perishable]
        skipped = result.get("skippedItems") or []
        logger.info(f"Receipt analyzed: {len(grocery_items)} perishable of {len(lines)} items")

        return {
            "analysis": result.get("summary"),
            "groceryItems": grocery_items,
            "itemsFound": len(grocery_items),
            "receiptDate": receipt_date,
            "summary": result.get("summary"),
            "skippedItems": skipped,
            "totalItemsAnalyzed": result.get("totalItems", len(lines)),
        }


@lru_cache
def get_shelf_life_ai() -> ShelfLifeAI:
    return ShelfLifeAI()
