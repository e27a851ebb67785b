from __future__ import annotations

from fastapi import Request

from .services.task_svc import TaskService


def get_task_service(request: Request) -> TaskService:
    # set once by the startup hook in api.py
    return request.app.state.task_service
