"""REST endpoints for the item catalogue."""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("")
async def list_items(request: Request, tag: Optional[str] = None, search: Optional[str] = None):
    items = request.app.state.knowledge_store.get_all_items()
    if tag:
        items = [item for item in items if tag in item.tags]
    if search:
        needle = search.lower()
        items = [item for item in items if needle in item.name.lower() or needle in item.id.lower()]
    return {"data": [asdict(item) for item in items], "total": len(items)}


@router.get("/{item_id}")
async def get_item(request: Request, item_id: str):
    item = request.app.state.knowledge_store.get_item_by_id(item_id.lower())
    if item is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "ITEM_NOT_FOUND", "message": f"Item not found: {item_id}"},
        )
    return {"item": asdict(item)}
