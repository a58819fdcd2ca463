"""
Report endpoints - submission, dashboard listing, acknowledgement and export.

Handlers are plain functions: FastAPI runs them in its thread pool, so the
blocking Firestore client never stalls the event loop.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, status

from app.models.report import ReportCreate, ReportCreated, ReportResponse
from app.routes.deps import get_dispatcher, get_exporter, get_report_store
from app.services.alert_dispatcher import AlertDispatcher
from app.services.export_service import ReportExporter
from app.services.report_service import ReportStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reports"])


@router.post("/report", status_code=status.HTTP_201_CREATED, response_model=ReportCreated)
def submit_report(
    report: ReportCreate,
    background_tasks: BackgroundTasks,
    store: ReportStore = Depends(get_report_store),
    dispatcher: AlertDispatcher = Depends(get_dispatcher),
):
    """
    Submit a new emergency report.

    This endpoint:
    1. Stores it in Firestore (reports collection)
    2. Schedules push + email alerts after the response (best-effort)

    Returns the generated report ID.
    """
    logger.info(f"📝 POST /report - role={report.role}, severity={report.severity}")

    created = store.create(report)
    background_tasks.add_task(dispatcher.dispatch, created)

    logger.info(f"✅ Report created successfully: {created.id}")
    return ReportCreated(id=created.id)


@router.get("/reports", response_model=List[ReportResponse])
def get_reports(
    since: Optional[datetime] = Query(None, description="Only reports created after this instant"),
    month: Optional[int] = Query(None, description="Calendar month, 1-12 (requires year)"),
    year: Optional[int] = Query(None, description="Calendar year (requires month)"),
    store: ReportStore = Depends(get_report_store),
):
    """
    List reports, newest first. Filter by `since` or by `month`+`year`.
    """
    return store.list_reports(since=since, month=month, year=year)


@router.put("/reports/{report_id}/seen", response_model=ReportResponse)
def mark_report_seen(report_id: str, store: ReportStore = Depends(get_report_store)):
    return store.mark_seen(report_id)


@router.get("/export-reports")
def export_reports(
    month: Optional[int] = Query(None, description="Calendar month, 1-12"),
    year: Optional[int] = Query(None, description="Calendar year"),
    exporter: ReportExporter = Depends(get_exporter),
):
    """
    Download one month of reports as CSV.
    """
    csv_text = exporter.export_csv(month, year)
    filename = exporter.filename(month, year)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
