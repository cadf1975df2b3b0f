import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class InvalidPayload(Exception):
    """
    Request body failed its create schema.
    """

    def __init__(self, message: str, errors: list):
        super().__init__(message)
        self.message = message
        self.errors = errors


def _clean(errors: list) -> list:
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in errors
    ]


def parse_body(schema: type[BaseModel], payload, message: str):
    try:
        return schema.model_validate(payload)
    except ValidationError as ERR:
        raise InvalidPayload(message, _clean(ERR.errors())) from ERR


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(InvalidPayload)
    async def invalid_payload(request: Request, exc: InvalidPayload):
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({"message": exc.message, "errors": exc.errors}),
        )

    # malformed JSON, non-object bodies
    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({"message": "Invalid request", "errors": _clean(exc.errors())}),
        )

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception(f"unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})
