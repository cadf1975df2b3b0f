from fastapi import APIRouter, Body, Depends, HTTPException, Query

from webmail.db.storage import MemStorage
from webmail.errors import parse_body
from webmail.routes.deps import get_storage, parse_id, parse_user_id
from webmail.schemas import EmailCreate, EmailOut, MessageOut

router = APIRouter(prefix="/api/emails", tags=["emails"])


# =========================================================
# LIST / READ
# =========================================================
@router.get("", response_model=list[EmailOut])
async def list_emails(
    user_id: str | None = Query(None, alias="userId"),
    folder: str | None = None,
    category: str | None = None,
    storage: MemStorage = Depends(get_storage),
):
    return storage.get_emails(parse_user_id(user_id), folder, category)


@router.get("/{email_id}", response_model=EmailOut)
async def get_email(email_id: str, storage: MemStorage = Depends(get_storage)):
    email = storage.get_email(parse_id(email_id))
    if not email:
        raise HTTPException(status_code=404, detail="Email not found")
    return email


# =========================================================
# INGEST
# =========================================================
@router.post("", status_code=201, response_model=EmailOut)
async def create_email(payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    req = parse_body(EmailCreate, payload, "Invalid email data")
    return storage.create_email(req.model_dump())


# =========================================================
# FLAGS / FOLDER
# =========================================================
def _found(email):
    if not email:
        raise HTTPException(status_code=404, detail="Email not found")
    return email


@router.patch("/{email_id}/read", response_model=EmailOut)
async def mark_read(email_id: str, payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    email_id = parse_id(email_id)
    read = payload.get("read")
    if not isinstance(read, bool):
        raise HTTPException(status_code=400, detail="Valid id and read status are required")
    return _found(storage.mark_email_read(email_id, read))


@router.patch("/{email_id}/star", response_model=EmailOut)
async def mark_starred(email_id: str, payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    email_id = parse_id(email_id)
    starred = payload.get("starred")
    if not isinstance(starred, bool):
        raise HTTPException(status_code=400, detail="Valid id and starred status are required")
    return _found(storage.mark_email_starred(email_id, starred))


@router.patch("/{email_id}/folder", response_model=EmailOut)
async def move_to_folder(email_id: str, payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    email_id = parse_id(email_id)
    folder = payload.get("folder")
    if not folder or not isinstance(folder, str):
        raise HTTPException(status_code=400, detail="Valid id and folder are required")
    return _found(storage.move_email_to_folder(email_id, folder))


@router.delete("/{email_id}", response_model=MessageOut)
async def delete_email(email_id: str, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_email(parse_id(email_id)):
        raise HTTPException(status_code=404, detail="Email not found")
    return {"message": "Email deleted"}
