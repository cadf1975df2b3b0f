from fastapi import APIRouter, Body, Depends, HTTPException, Query

from webmail.db.storage import MemStorage
from webmail.errors import parse_body
from webmail.routes.deps import get_storage, parse_id, parse_user_id
from webmail.schemas import CategoryCreate, CategoryUpdate, CategoryOut, MessageOut

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
async def list_categories(
    user_id: str | None = Query(None, alias="userId"),
    storage: MemStorage = Depends(get_storage),
):
    return storage.get_categories(parse_user_id(user_id))


@router.post("", status_code=201, response_model=CategoryOut)
async def create_category(payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    req = parse_body(CategoryCreate, payload, "Invalid category data")
    return storage.create_category(req.model_dump())


@router.get("/{category_id}", response_model=CategoryOut)
async def get_category(category_id: str, storage: MemStorage = Depends(get_storage)):
    category = storage.get_category(parse_id(category_id))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: str,
    payload: dict = Body(...),
    storage: MemStorage = Depends(get_storage),
):
    category_id = parse_id(category_id)
    req = parse_body(CategoryUpdate, payload, "Invalid category data")
    category = storage.update_category(category_id, req.model_dump(exclude_unset=True))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}", response_model=MessageOut)
async def delete_category(category_id: str, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_category(parse_id(category_id)):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"message": "Category deleted"}
