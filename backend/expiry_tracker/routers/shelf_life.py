"""
Shelf Life Router - the AI endpoints.

Endpoints:
  POST /quick-shelf-life   - conversational answer for one item
  POST /get-shelf-life     - shelf life for one item or a batch
  POST /get-freshness-info - freshness details for the current list
  POST /parse-items        - structure typed free text (no shelf life)
  POST /analyze-receipt    - extract perishable items from a receipt upload

Bodies are read from the raw request so that content-type and shape problems
come back as 415/400 with a readable ``error`` instead of a 422.
"""

from fastapi import APIRouter, Depends, File, Request, UploadFile

from expiry_tracker.services.normalizer import (
    normalize_groceries,
    normalize_item_name,
    normalize_items,
    normalize_parse_input,
    read_json_body,
)
from expiry_tracker.services.receipts import read_receipt_upload
from expiry_tracker.services.shelf_life_ai import ShelfLifeAI, get_shelf_life_ai

router = APIRouter()


# ── Shelf life ───────────────────────────────────────────────────

@router.post("/quick-shelf-life")
async def quick_shelf_life(request: Request, ai: ShelfLifeAI = Depends(get_shelf_life_ai)):
    body = await read_json_body(request)
    item_name = normalize_item_name(body)
    return await ai.quick_shelf_life(item_name)


@router.post("/get-shelf-life")
async def get_shelf_life(request: Request, ai: ShelfLifeAI = Depends(get_shelf_life_ai)):
    body = await read_json_body(request, require_json_content_type=True)
    items = normalize_items(body)
    if items.is_structured:
        return await ai.lookup_shelf_life(items.items)
    if items.is_batch:
        return await ai.batch_shelf_life(items.item_names)
    return await ai.shelf_life(items.item_name)


@router.post("/get-freshness-info")
async def get_freshness_info(request: Request, ai: ShelfLifeAI = Depends(get_shelf_life_ai)):
    body = await read_json_body(request)
    groceries = normalize_groceries(body)
    return await ai.freshness_info(groceries)


# ── Entry helpers ────────────────────────────────────────────────

@router.post("/parse-items")
async def parse_items(request: Request, ai: ShelfLifeAI = Depends(get_shelf_life_ai)):
    body = await read_json_body(request)
    raw_text = normalize_parse_input(body)
    return await ai.parse_items(raw_text)


@router.post("/analyze-receipt")
async def analyze_receipt(
    file: UploadFile | None = File(None),
    ai: ShelfLifeAI = Depends(get_shelf_life_ai),
):
    receipt = await read_receipt_upload(file)
    return await ai.analyze_receipt(receipt.text, receipt.image)
