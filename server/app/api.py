# server/app/api.py
import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictStr, ValidationError, field_validator

from app.config import Settings, load_settings
from app.errors import ClientInputError, ConfigurationError, TranslateError, UnexpectedError
from app.llm_client import GeminiClient, LLMProvider
from app.prompts import get_variant
from app.translator import TranslateHandler

TRANSLATE_PATH = "/api/translate"

logger = logging.getLogger("subtext-translator")

router = APIRouter()

ProviderFactory = Callable[[Settings], LLMProvider]


class TranslateRequest(BaseModel):
    text: StrictStr

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text must not be empty")
        return v


def get_provider_factory() -> ProviderFactory:
    return GeminiClient.from_settings


async def read_translate_request(request: Request) -> TranslateRequest:
    try:
        body = await request.json()
    except (ValueError, RecursionError):
        raise ClientInputError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise ClientInputError()
    try:
        return TranslateRequest.model_validate(body)
    except ValidationError:
        raise ClientInputError() from None


@router.options(TRANSLATE_PATH)
async def preflight():
    return Response(status_code=200)


@router.post(TRANSLATE_PATH)
async def translate(request: Request, provider_factory: ProviderFactory = Depends(get_provider_factory)):
    try:
        req = await read_translate_request(request)

        settings = load_settings()
        if not settings.api_key:
            raise ConfigurationError(details="GEMINI_API_KEY not found in environment variables")

        variant = get_variant(settings.variant)
        handler = TranslateHandler(provider_factory(settings), variant)
        result = await handler.translate(req.text)
    except TranslateError:
        raise
    except Exception as e:
        logger.exception("Server error: %s", e)
        raise UnexpectedError(details=str(e)) from e

    return JSONResponse(content=result)
