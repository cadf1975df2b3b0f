from fastapi import APIRouter, Body, Depends, HTTPException, Query

from webmail.db.storage import MemStorage
from webmail.errors import parse_body
from webmail.routes.deps import get_storage, parse_id, parse_user_id
from webmail.schemas import EmailServerCreate, EmailServerUpdate, EmailServerOut, MessageOut

router = APIRouter(prefix="/api/email-servers", tags=["email-servers"])


@router.get("", response_model=list[EmailServerOut])
async def list_email_servers(
    user_id: str | None = Query(None, alias="userId"),
    storage: MemStorage = Depends(get_storage),
):
    return storage.get_email_servers(parse_user_id(user_id))


# only records the connection parameters, nothing connects to the server
@router.post("", status_code=201, response_model=EmailServerOut)
async def create_email_server(payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    req = parse_body(EmailServerCreate, payload, "Invalid server data")
    return storage.create_email_server(req.model_dump())


@router.get("/{server_id}", response_model=EmailServerOut)
async def get_email_server(server_id: str, storage: MemStorage = Depends(get_storage)):
    server = storage.get_email_server(parse_id(server_id))
    if not server:
        raise HTTPException(status_code=404, detail="Email server not found")
    return server


@router.put("/{server_id}", response_model=EmailServerOut)
async def update_email_server(
    server_id: str,
    payload: dict = Body(...),
    storage: MemStorage = Depends(get_storage),
):
    server_id = parse_id(server_id)
    req = parse_body(EmailServerUpdate, payload, "Invalid server data")
    server = storage.update_email_server(server_id, req.model_dump(exclude_unset=True))
    if not server:
        raise HTTPException(status_code=404, detail="Email server not found")
    return server


@router.delete("/{server_id}", response_model=MessageOut)
async def delete_email_server(server_id: str, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_email_server(parse_id(server_id)):
        raise HTTPException(status_code=404, detail="Email server not found")
    return {"message": "Email server deleted"}
