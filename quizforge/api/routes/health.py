from __future__ import annotations

from fastapi import APIRouter

from quizforge.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, object]:
    settings = get_settings()
    return {
        "status": "ok",
        "llm_configured": bool(settings.openai_api_key.strip()),
    }
