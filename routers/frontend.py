from pathlib import Path
from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse


def build_frontend_router(static_dir: str) -> APIRouter:
    """
    Serve the built single-page app: real files as-is, every other GET path
    falls back to index.html so client-side routing works.
    """
    root = Path(static_dir).resolve()
    index_path = root / "index.html"
    router = APIRouter()

    @router.get("/{full_path:path}", include_in_schema=False)
    def spa(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="index.html not found")
        return FileResponse(index_path)

    return router
