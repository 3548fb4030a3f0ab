from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["ui"])

WEB_ROOT = Path(__file__).resolve().parents[2] / "web"
INDEX_PAGE = WEB_ROOT / "index.html"


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(INDEX_PAGE, media_type="text/html")
