from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ValidationError

from ..deps import get_task_service
from ..logs import LogContext
from ..services.task_svc import TaskService, TaskNotFound

logger = logging.getLogger(__name__)

router = APIRouter()

# SQLite INTEGER range
MIN_TASK_ID = -(2**63)
MAX_TASK_ID = 2**63 - 1


class TaskBody(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None  # DD/MM/YYYY
    status: Optional[str] = None  # Pending / In Progress / Completed


def _task_id():
    return Path(..., ge=MIN_TASK_ID, le=MAX_TASK_ID)


def _write_log(log: LogContext, result: str = "OK", err: str | None = None):
    # audit failures never change the response
    try:
        log.write(result, err)
    except Exception:
        logger.exception("audit write failed for %s", log.action)


@router.post("/tasks", status_code=201)
def api_task_create(body: TaskBody, svc: TaskService = Depends(get_task_service)):
    log = svc.log_context("CREATE_TASK")
    log.set_payload(body.model_dump())
    try:
        task = svc.create(body.model_dump(), log)
    except ValueError as e:
        _write_log(log, "ERROR", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("create task failed")
        _write_log(log, "ERROR", str(e))
        raise HTTPException(status_code=500, detail="Failed to insert task into the database")
    _write_log(log, "OK")
    return task


@router.get("/tasks/{task_id}")
def api_task_get(task_id: int = _task_id(), svc: TaskService = Depends(get_task_service)):
    try:
        return svc.get(task_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except Exception:
        logger.exception("retrieve task %s failed", task_id)
        raise HTTPException(status_code=500, detail="Failed to retrieve task")


def _update_task(svc: TaskService, task_id: int, raw: bytes):
    """Existence first (404), then the body (400), then the full overwrite."""
    log = svc.log_context("UPDATE_TASK")
    log.set_entity("TASK", task_id)
    try:
        if not svc.exists(task_id):
            raise TaskNotFound(task_id)
        body = TaskBody.model_validate_json(raw)
        log.set_payload(body.model_dump())
        task = svc.update(task_id, body.model_dump(), log)
    except TaskNotFound:
        _write_log(log, "ERROR", "not_found")
        raise HTTPException(status_code=404, detail="Task not found")
    except ValidationError:
        _write_log(log, "ERROR", "invalid_payload")
        raise HTTPException(status_code=400, detail="Invalid JSON payload")
    except Exception as e:
        logger.exception("update task %s failed", task_id)
        _write_log(log, "ERROR", str(e))
        raise HTTPException(status_code=500, detail="Failed to update task")
    _write_log(log, "OK")
    return task


@router.put(
    "/tasks/{task_id}",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": TaskBody.model_json_schema()}},
        }
    },
)
async def api_task_update(
    request: Request,
    task_id: int = _task_id(),
    svc: TaskService = Depends(get_task_service),
):
    # body is read raw so an unknown id is reported before a bad payload
    raw = await request.body()
    return await run_in_threadpool(_update_task, svc, task_id, raw)


@router.delete("/tasks/{task_id}")
def api_task_delete(task_id: int = _task_id(), svc: TaskService = Depends(get_task_service)):
    log = svc.log_context("DELETE_TASK")
    log.set_entity("TASK", task_id)
    try:
        svc.delete(task_id, log)
    except TaskNotFound:
        _write_log(log, "ERROR", "not_found")
        raise HTTPException(status_code=404, detail="Task not found")
    except Exception as e:
        logger.exception("delete task %s failed", task_id)
        _write_log(log, "ERROR", str(e))
        raise HTTPException(status_code=500, detail="Failed to delete task from the database")
    _write_log(log, "OK")
    return {"message": "Task deleted successfully"}


@router.get("/tasks")
def api_task_list(svc: TaskService = Depends(get_task_service)):
    try:
        return svc.list_all()
    except Exception:
        logger.exception("list tasks failed")
        raise HTTPException(status_code=500, detail="Failed to fetch tasks from the database")
