# SchoolDesk - record CRUD and list views
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from fastapi.responses import PlainTextResponse

from ids import generate_id
from query.views import VIEWS, list_view
from records.models import ID_PREFIXES, EntityKind
from records.repository import Repository
from transfer.exporter import export_filename, list_csv
from .deps import get_repository

router = APIRouter(prefix="/api", tags=["Records"])


@router.get("/records/{kind}")
async def list_records(kind: EntityKind, repo: Repository = Depends(get_repository)):
    """Raw collection in insertion order."""
    return [r.model_dump(by_alias=True) for r in repo.records(kind)]


@router.get("/records/{kind}/{record_id}")
async def get_record(kind: EntityKind, record_id: str, repo: Repository = Depends(get_repository)):
    record = repo.get(kind, record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No {kind.value} record {record_id}")
    return record.model_dump(by_alias=True)


@router.post("/records/{kind}", status_code=status.HTTP_201_CREATED)
async def create_record(
    kind: EntityKind,
    body: dict[str, Any] = Body(...),
    repo: Repository = Depends(get_repository),
):
    """Create a record; the id is always generated here."""
    fields = {k: v for k, v in body.items() if k != "id"}
    record = repo.add(kind, {**fields, "id": generate_id(ID_PREFIXES[kind])})
    return record.model_dump(by_alias=True)


@router.patch("/records/{kind}/{record_id}")
async def update_record(
    kind: EntityKind,
    record_id: str,
    body: dict[str, Any] = Body(...),
    repo: Repository = Depends(get_repository),
):
    # Unknown id is not an error: record comes back null and nothing is saved
    record = repo.update(kind, record_id, body)
    return {"record": record.model_dump(by_alias=True) if record else None}


@router.delete("/records/{kind}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(kind: EntityKind, record_id: str, repo: Repository = Depends(get_repository)):
    repo.remove(kind, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/views/{kind}")
async def view_records(
    kind: EntityKind,
    q: str = Query(default="", description="Search term"),
    sort: str | None = Query(default=None, description="Sort key, defaults to the view's first option"),
    repo: Repository = Depends(get_repository),
):
    rows = list_view(repo.snapshot, kind, q, sort)
    return {"kind": kind.value, "count": len(rows), "rows": rows}


@router.get("/views/{kind}/options")
async def view_options(kind: EntityKind):
    config = VIEWS[kind]
    return {
        "default": config.default_sort,
        "sort": [{"key": o.key, "label": o.label} for o in config.sort_options],
    }


@router.get("/csv/{kind}")
async def export_list_csv(
    kind: EntityKind,
    q: str = "",
    sort: str | None = None,
    repo: Repository = Depends(get_repository),
):
    filename = export_filename(kind.value, "csv")
    return PlainTextResponse(
        list_csv(repo.snapshot, kind, q, sort),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
