"""
Detection history routes: list recent detections and clear the table.
"""

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from app.schemas.detection import HistoryDeleteResponse, HistoryResponse
from app.services.history_service import clear_history, list_history

router = APIRouter(tags=["History"])


@router.get("/api/history", response_model=HistoryResponse)
async def get_history():
    """Most recent detections first. 501 when Supabase is not configured."""
    rows = await run_in_threadpool(list_history)
    return {"data": rows}


@router.delete("/api/history", response_model=HistoryDeleteResponse)
async def delete_history():
    rows = await run_in_threadpool(clear_history)
    return {"deleted": True, "data": rows}
