from fastapi import APIRouter, Body, Depends, HTTPException, Query

from webmail.db.storage import MemStorage
from webmail.errors import parse_body
from webmail.routes.deps import get_storage, parse_id, parse_user_id
from webmail.schemas import TemplateCreate, TemplateUpdate, TemplateOut, MessageOut

# quick reply bodies, placeholders like [DATE] are filled in by the UI
router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=list[TemplateOut])
async def list_templates(
    user_id: str | None = Query(None, alias="userId"),
    storage: MemStorage = Depends(get_storage),
):
    return storage.get_templates(parse_user_id(user_id))


@router.post("", status_code=201, response_model=TemplateOut)
async def create_template(payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    req = parse_body(TemplateCreate, payload, "Invalid template data")
    return storage.create_template(req.model_dump())


@router.get("/{template_id}", response_model=TemplateOut)
async def get_template(template_id: str, storage: MemStorage = Depends(get_storage)):
    template = storage.get_template(parse_id(template_id))
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.put("/{template_id}", response_model=TemplateOut)
async def update_template(
    template_id: str,
    payload: dict = Body(...),
    storage: MemStorage = Depends(get_storage),
):
    template_id = parse_id(template_id)
    req = parse_body(TemplateUpdate, payload, "Invalid template data")
    template = storage.update_template(template_id, req.model_dump(exclude_unset=True))
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template


@router.delete("/{template_id}", response_model=MessageOut)
async def delete_template(template_id: str, storage: MemStorage = Depends(get_storage)):
    if not storage.delete_template(parse_id(template_id)):
        raise HTTPException(status_code=404, detail="Template not found")
    return {"message": "Template deleted"}
