from fastapi import APIRouter, Body, Depends, HTTPException

from webmail.db.storage import MemStorage
from webmail.routes.deps import get_storage, parse_id
from webmail.schemas import UserOut

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: str, storage: MemStorage = Depends(get_storage)):
    user = storage.get_user(parse_id(user_id))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}/settings", response_model=UserOut)
async def update_settings(
    user_id: str,
    payload: dict = Body(...),
    storage: MemStorage = Depends(get_storage),
):
    user = storage.update_user_settings(parse_id(user_id), payload)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
