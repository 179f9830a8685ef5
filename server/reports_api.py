# SchoolDesk - report endpoints
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from query.reports import REPORTS, run_report
from records.repository import Repository
from transfer.exporter import export_filename, report_csv
from .deps import get_repository

router = APIRouter(prefix="/api/reports", tags=["Reports"])


def _check(name: str) -> None:
    if name not in REPORTS:
        raise HTTPException(status_code=404, detail=f"Unknown report {name}. Available: {', '.join(REPORTS)}")


@router.get("")
async def list_reports():
    return {"reports": list(REPORTS)}


@router.get("/{name}")
async def get_report(name: str, repo: Repository = Depends(get_repository)):
    _check(name)
    rows = run_report(name, repo.snapshot)
    return {"report": name, "rows": [r.model_dump() for r in rows]}


@router.get("/{name}/csv")
async def get_report_csv(name: str, repo: Repository = Depends(get_repository)):
    _check(name)
    filename = export_filename(name, "csv")
    return PlainTextResponse(
        report_csv(repo.snapshot, name),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
