import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from webmail.config import CORS_ORIGINS, LOG_LEVEL
from webmail.db.storage import MemStorage
from webmail.errors import register_error_handlers
from webmail.routes import auth, users, email_servers, emails, categories, templates

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(message)s",
    datefmt="%d-%b-%y %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(storage: MemStorage | None = None) -> FastAPI:
    """
    Build the API around one store. Data lives as long as the store does,
    a restart starts empty.
    """
    app = FastAPI(title="Campus Webmail API")
    app.state.storage = storage if storage is not None else MemStorage()

    # ========================== CORS ==========================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # ==========================================================

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(email_servers.router)
    app.include_router(emails.router)
    app.include_router(categories.router)
    app.include_router(templates.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("webmail api ready")
    return app


app = create_app()
