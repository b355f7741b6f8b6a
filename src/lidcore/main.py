"""FastAPI application exposing language and encoding identification."""

from __future__ import annotations

import base64
import binascii

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .config import configure_logging
from .service import LanguageIdentifierService


class DetectLanguageRequest(BaseModel):
    text: str = Field(..., min_length=1)


class DetectLanguageResponse(BaseModel):
    language_code: str


class DetectEncodingRequest(BaseModel):
    content_base64: str = Field(..., min_length=1)
    default_encoding: str | None = None


class DetectEncodingResponse(BaseModel):
    encoding: str


class LanguagesResponse(BaseModel):
    languages: list[str]


def create_app(service: LanguageIdentifierService | None = None) -> FastAPI:
    app = FastAPI(
        title="lidcore",
        description="N-gram language identification and encoding detection",
    )

    if service is None:
        configure_logging()
        service = LanguageIdentifierService()
    app.state.identifier_service = service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/languages", response_model=LanguagesResponse)
    async def languages() -> LanguagesResponse:
        return LanguagesResponse(languages=service.supported_languages)

    # Plain def handlers run in the threadpool, each borrowing its own identifier.
    @app.post("/detect-language", response_model=DetectLanguageResponse)
    def detect_language(payload: DetectLanguageRequest) -> DetectLanguageResponse:
        return DetectLanguageResponse(language_code=service.language(payload.text))

    @app.post("/detect-encoding", response_model=DetectEncodingResponse)
    def detect_encoding(payload: DetectEncodingRequest) -> DetectEncodingResponse:
        try:
            content = base64.b64decode(payload.content_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=400,
                detail="Invalid content_base64 data",
            ) from exc
        encoding = service.encoding(content, default_encoding=payload.default_encoding)
        return DetectEncodingResponse(encoding=encoding)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
