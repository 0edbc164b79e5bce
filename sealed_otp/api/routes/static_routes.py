"""
Static Routes
Unknown API paths and the static front end fallback
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import FileResponse, JSONResponse

from sealed_otp.core.config import Settings
from sealed_otp.core.dependencies import get_settings

router = APIRouter(tags=["Static"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _static_file(static_dir: Path, full_path: str):
    """File under static_dir for the path, never outside it"""
    root = static_dir.resolve()
    candidate = (root / full_path).resolve()
    if candidate != root and root in candidate.parents and candidate.is_file():
        return candidate
    return None


@router.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
async def fallback(full_path: str, request: Request, settings: Settings = Depends(get_settings)):
    """
    Catch-all registered after every API router

    /api/* answers 404 JSON; anything else serves the matching static
    file, or index.html for client-side routes.
    """
    if request.url.path.startswith("/api/"):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"ok": False, "message": "API route not found"}
        )

    static_dir = Path(settings.STATIC_DIR)

    if request.method in ("GET", "HEAD"):
        asset = _static_file(static_dir, full_path)
        if asset is not None:
            return FileResponse(asset)

    index = static_dir / "index.html"
    if index.is_file():
        return FileResponse(index)

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"ok": False, "message": "Not found"}
    )
