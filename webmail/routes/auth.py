import logging
from fastapi import APIRouter, Body, Depends, HTTPException

from webmail.db.storage import MemStorage
from webmail.errors import parse_body
from webmail.routes.deps import get_storage
from webmail.schemas import UserCreate, UserOut, LoginOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=UserOut)
async def register(payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    req = parse_body(UserCreate, payload, "Invalid user data")

    if storage.get_user_by_username(req.username):
        raise HTTPException(status_code=400, detail="Username already exists")

    user = storage.create_user(req.model_dump())
    logger.info(f"registered {user.username} id={user.id}")
    return user


# no session or token: the client keeps the returned user id and sends it along
@router.post("/login", response_model=LoginOut)
async def login(payload: dict = Body(...), storage: MemStorage = Depends(get_storage)):
    username = payload.get("username")
    password = payload.get("password")

    # non-string credentials would reach the query as-is
    if not (isinstance(username, str) and username and isinstance(password, str) and password):
        raise HTTPException(status_code=400, detail="Username and password are required")

    user = storage.get_user_by_username(username)
    if not user or user.password != password:
        logger.warning(f"login failed for {username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return {"user": UserOut.model_validate(user), "message": "Login successful"}
