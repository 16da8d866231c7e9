from fastapi import APIRouter, Depends, HTTPException

from screener.api.auth import require_admin
from screener.store.session_repo import load_session, is_completed
import screener.observability.metrics as metrics

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats")
def get_stats(_=Depends(require_admin)):
    """Screening counters (started / passed / failed / rate-limited / delivery)."""
    return metrics.get_stats_snapshot()


@router.get("/session/{chat_id}")
def get_session_snapshot(chat_id: int, _=Depends(require_admin)):
    """Compact view of a live screening."""
    s = load_session(chat_id)
    if s is None:
        if is_completed(chat_id):
            return {"chatId": chat_id, "step": "completed", "live": False}
        raise HTTPException(status_code=404, detail="No session")

    catalog = s.catalog
    index = catalog.index_of(s.step)
    return {
        "chatId": s.chatId,
        "step": s.step,
        "stepNumber": (index + 1) if index is not None else None,
        "stepCount": catalog.step_count,
        "variant": s.variant,
        "answers": s.answers,
        "startedAt": s.startedAt,
        "displayName": s.displayName,
        "live": not s.completed,
    }
