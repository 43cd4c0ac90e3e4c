"""
History Router
API endpoints for the per-day training history and its export
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from services import (
    DayGroup, HistoryAggregator, LogStoreError, NoDataForRange,
    export_csv, export_xlsx, filter_by_range,
)
from services.workout_log import WorkoutLogRepository

router = APIRouter(prefix="/history", tags=["History"])

EXPORT_FORMATS = {
    "csv": ("text/csv; charset=utf-8", export_csv),
    "xlsx": (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        export_xlsx,
    ),
}


def get_aggregator() -> HistoryAggregator:
    """Dependency that builds the aggregator from the service settings"""
    return HistoryAggregator.from_settings(settings)


def load_history(
    db: Session,
    aggregator: HistoryAggregator,
    start: Optional[str],
    end: Optional[str],
) -> List[DayGroup]:
    """Fetch every entry, aggregate, then apply the date range"""
    try:
        entries = WorkoutLogRepository(db).fetch_all()
    except LogStoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    groups = aggregator.aggregate(entries)
    try:
        return filter_by_range(groups, start, end)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("")
async def get_history(
    start: Optional[str] = Query(default=None, description="First day (YYYY-MM-DD)"),
    end: Optional[str] = Query(default=None, description="Last day (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    aggregator: HistoryAggregator = Depends(get_aggregator),
):
    """
    Get the training history grouped by day.

    Each day lists the best sets for bench, squat and deadlift (ranked by
    strength index) plus all assistance work.

    - **start** / **end**: Optional inclusive date range
    """
    groups = load_history(db, aggregator, start, end)

    return {
        "policy": aggregator.policy.value,
        "slots": aggregator.slots,
        "days": len(groups),
        "history": [asdict(g) for g in groups],
    }


@router.get("/export")
async def export_history(
    format: str = Query(default="csv", pattern="^(csv|xlsx)$"),
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
    aggregator: HistoryAggregator = Depends(get_aggregator),
):
    """
    Download the history as CSV (UTF-8 with BOM) or an .xlsx spreadsheet.

    - **format**: csv or xlsx
    - **start** / **end**: Optional inclusive date range
    """
    groups = load_history(db, aggregator, start, end)
    media_type, exporter = EXPORT_FORMATS[format]

    try:
        content = exporter(groups, aggregator.slots)
    except NoDataForRange:
        raise HTTPException(status_code=404, detail="No data for range")

    filename = f"lift_history_{date.today().strftime('%Y%m%d')}.{format}"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
