from __future__ import annotations

import logging
from typing import Any

from ..db import get_conn
from ..logs import LogContext, ensure_log_schema
from ..domain.task_rules import validate_new_task, normalize_fields
from ..repository import task_repo

logger = logging.getLogger(__name__)


class TaskNotFound(LookupError):
    """No task row for the given id."""

    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


def row_to_task(row) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": row["title"],
        "description": row["description"] or "",
        "due_date": row["due_date"] or "",
        "status": row["status"] or "",
    }


class TaskService:
    """CRUD over the task table.

    Built once at startup with the resolved DB path and handed to the route
    handlers; every call opens its own short-lived connection.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def ensure_schema(self) -> None:
        with get_conn(self.db_path) as conn:
            task_repo.ensure_schema(conn)
            conn.commit()
        ensure_log_schema(self.db_path)
        logger.info("task schema ready at %s", self.db_path)

    def log_context(self, action: str) -> LogContext:
        return LogContext(action, db_path=self.db_path)

    def create(self, data: dict, log: LogContext | None = None) -> dict[str, Any]:
        validate_new_task(data)
        fields = normalize_fields(data)
        with get_conn(self.db_path) as conn:
            task_id = task_repo.insert(conn, **fields)
            conn.commit()
        task = {"id": task_id, **fields}
        if log:
            log.set_entity("TASK", task_id)
            log.set_after(task)
        return task

    def get(self, task_id: int) -> dict[str, Any]:
        with get_conn(self.db_path) as conn:
            row = task_repo.get_one(conn, task_id)
        if row is None:
            raise TaskNotFound(task_id)
        return row_to_task(row)

    def exists(self, task_id: int) -> bool:
        with get_conn(self.db_path) as conn:
            return task_repo.exists(conn, task_id)

    def update(self, task_id: int, data: dict, log: LogContext | None = None) -> dict[str, Any]:
        # full overwrite, field contents are not re-validated
        fields = normalize_fields(data)
        with get_conn(self.db_path) as conn:
            row = task_repo.get_one(conn, task_id)
            if row is None:
                raise TaskNotFound(task_id)
            task_repo.update(conn, task_id, **fields)
            conn.commit()
        task = {"id": task_id, **fields}
        if log:
            log.set_entity("TASK", task_id)
            log.set_before(row_to_task(row))
            log.set_after(task)
        return task

    def delete(self, task_id: int, log: LogContext | None = None) -> None:
        with get_conn(self.db_path) as conn:
            row = task_repo.get_one(conn, task_id)
            if row is None:
                raise TaskNotFound(task_id)
            task_repo.delete(conn, task_id)
            conn.commit()
        if log:
            log.set_entity("TASK", task_id)
            log.set_before(row_to_task(row))

    def list_all(self) -> list[dict[str, Any]]:
        with get_conn(self.db_path) as conn:
            rows = task_repo.list_all(conn)
        return [row_to_task(r) for r in rows]
