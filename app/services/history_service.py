"""
Detection history: best-effort recording plus list/clear for the history API.

The Supabase client is accessed at call-time via the integration module so it
picks up the instance initialized during the FastAPI lifespan.
Rows: id (identity), file, result, confidence, created_at (database default).
"""

import logging
from typing import Optional

from fastapi import HTTPException

from app.config import settings
from app.integrations import supabase_client as supabase_module

logger = logging.getLogger(__name__)


def _get_client():
    sb = supabase_module.client
    if not sb:
        raise HTTPException(status_code=501, detail={"error": "Supabase not configured on server"})
    return sb


def record_detection(filename: str, result: str, confidence: float) -> Optional[dict]:
    """
    Inserts one history row and returns it as stored (with id / created_at).

    Never raises: returns None when recording is disabled, Supabase is not
    configured, or the insert fails.
    """
    if not settings.supabase_enable:
        return None
    sb = supabase_module.client
    if not sb:
        logger.debug("[SUPABASE] Recording enabled but client not initialized; skipping")
        return None

    row = {"file": filename, "result": result, "confidence": confidence}
    try:
        response = sb.table(settings.supabase_table).insert([row]).execute()
    except Exception as e:
        logger.warning(f"[SUPABASE] save failed for {filename}: {e}")
        return None

    data = getattr(response, "data", None) or []
    if not data:
        logger.warning(f"[SUPABASE] insert for {filename} returned no row")
        return None

    stored = data[0]
    logger.info(f"[SUPABASE] insert succeeded, id={stored.get('id')}")
    return stored


def list_history(limit: Optional[int] = None) -> list[dict]:
    """Most recent rows first; at most `limit` rows, settings.history_limit by default."""
    if limit is None:
        limit = settings.history_limit
    sb = _get_client()
    try:
        response = (
            sb.table(settings.supabase_table)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        logger.error(f"[SUPABASE] history query failed: {e}")
        raise HTTPException(status_code=500, detail={"error": "Supabase query failed", "details": str(e)})
    return response.data or []


def clear_history() -> list[dict]:
    """Deletes every row and returns the deleted rows."""
    sb = _get_client()
    try:
        response = sb.table(settings.supabase_table).delete().neq("id", 0).execute()
    except Exception as e:
        logger.error(f"[SUPABASE] history delete failed: {e}")
        raise HTTPException(status_code=500, detail={"error": "Supabase delete failed", "details": str(e)})
    logger.info(f"[SUPABASE] history cleared ({len(response.data or [])} rows)")
    return response.data or []
