from fastapi import HTTPException, Request

from webmail.db.storage import MemStorage


def get_storage(request: Request) -> MemStorage:
    return request.app.state.storage


def parse_id(raw: str | None, message: str = "Valid id is required") -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=message)


def parse_user_id(raw: str | None) -> int:
    return parse_id(raw, "Valid userId is required")
