import os

HOST = os.getenv("WEBMAIL_HOST", "0.0.0.0")
PORT = int(os.getenv("WEBMAIL_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

DEFAULT_FOLDER = "inbox"
