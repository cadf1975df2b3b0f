import uvicorn

from webmail.config import HOST, PORT, LOG_LEVEL

if __name__ == "__main__":
    uvicorn.run("webmail.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
