# server/app/main.py

import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router
from app.config import load_settings
from app.errors import ConfigurationError, TranslateError

# ---------------------------
# Logging
# ---------------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("subtext-translator")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}
ALLOWED_METHODS = ["POST"]

# ---------------------------
# FastAPI
# ---------------------------
app = FastAPI(title="Subtext Translator")


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(TranslateError)
async def translate_error_handler(request: Request, exc: TranslateError):
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error: %s", exc.details or exc.error)
    elif exc.status_code >= 500:
        logger.error("Request failed: %s (%s)", exc.error, exc.details or exc.message or "-")
    else:
        logger.info("Rejected request: %s", exc.error)
    # configuration causes stay in the server log
    include_details = load_settings().is_development and not isinstance(exc, ConfigurationError)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(include_details))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content={
                "error": "Method not allowed",
                "allowedMethods": ALLOWED_METHODS,
                "receivedMethod": request.method,
            },
            headers={"Allow": "POST, OPTIONS"},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


app.include_router(router)


def main():
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    main()
