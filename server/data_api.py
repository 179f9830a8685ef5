# SchoolDesk - whole-snapshot operations: import, restore, export, backup, theme, clear, sample
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from errors import ParseError, SchoolDeskError
from records.models import Theme
from records.repository import Repository
from records.seed import seed
from transfer.exporter import CURRENT_EXPORT_FILENAME, backup_filename, export_state
from transfer.importer import import_file, parse_json, validate_and_load
from .deps import get_repository

router = APIRouter(prefix="/api", tags=["Data"])


class ThemeRequest(BaseModel):
    theme: Theme


async def _read_text(file: UploadFile) -> str:
    raw = await file.read()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"{file.filename} is not UTF-8 text") from e


def _json_download(payload: bytes, filename: str) -> Response:
    return Response(
        content=payload,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/state")
async def get_state(repo: Repository = Depends(get_repository)):
    return repo.snapshot.to_data()


@router.get("/status")
async def get_status(repo: Repository = Depends(get_repository)):
    """Theme, counts and the last save acknowledgment."""
    last = repo.store.last_saved
    return {
        "version": repo.snapshot.version,
        "theme": repo.snapshot.theme,
        "counts": repo.snapshot.counts(),
        "last_saved": last.model_dump(mode="json") if last else None,
    }


@router.post("/import")
async def import_upload(file: UploadFile = File(...), repo: Repository = Depends(get_repository)):
    """.json replaces everything, .csv appends students, teachers or classes."""
    try:
        text = await _read_text(file)
        return import_file(file.filename or "", text, repo)
    except SchoolDeskError as e:
        raise HTTPException(status_code=400, detail=f"Import failed: {e}")


@router.post("/restore")
async def restore_upload(file: UploadFile = File(...), repo: Repository = Depends(get_repository)):
    try:
        text = await _read_text(file)
        snapshot = validate_and_load(parse_json(text), repo)
    except SchoolDeskError as e:
        raise HTTPException(status_code=400, detail=f"Restore failed: {e}")
    return {"counts": snapshot.counts()}


@router.get("/export")
async def export_current(repo: Repository = Depends(get_repository)):
    return _json_download(export_state(repo.snapshot), CURRENT_EXPORT_FILENAME)


@router.get("/backup")
async def export_backup(repo: Repository = Depends(get_repository)):
    """Download what is persisted (or a default snapshot when nothing is)."""
    return _json_download(repo.store.export_snapshot(), backup_filename())


@router.put("/theme")
async def set_theme(body: ThemeRequest, repo: Repository = Depends(get_repository)):
    repo.set_theme(body.theme)
    return {"theme": repo.snapshot.theme}


@router.post("/clear")
async def clear_all(repo: Repository = Depends(get_repository)):
    repo.clear_all()
    return {"counts": repo.snapshot.counts()}


@router.post("/sample")
async def load_sample(repo: Repository = Depends(get_repository)):
    seed(repo)
    return {"counts": repo.snapshot.counts()}
