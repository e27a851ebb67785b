from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..deps import get_task_service
from ..logs import search_logs
from ..services.task_svc import TaskService

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    action: str | None = None,
    query: str | None = None,
    limit: int = Query(50, ge=1, le=500),
    svc: TaskService = Depends(get_task_service),
):
    total, items = search_logs(svc.db_path, query, action, limit)
    return {"total": total, "items": items}
