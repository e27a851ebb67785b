from __future__ import annotations

import re
from datetime import datetime

STATUSES = ("Pending", "In Progress", "Completed")
DUE_DATE_FORMAT = "%d/%m/%Y"
TASK_FIELDS = ("title", "description", "due_date", "status")

_DUE_DATE_RE = re.compile(r"^[0-9]{2}/[0-9]{2}/[0-9]{4}$")


def is_valid_due_date(value: str) -> bool:
    """DD/MM/YYYY with zero-padded day and month, and a real calendar date."""
    if not _DUE_DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, DUE_DATE_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_status(value: str) -> bool:
    return value in STATUSES


def validate_new_task(data: dict) -> None:
    """Raise ValueError with a client-facing message for the first bad field."""
    if not data.get("title"):
        raise ValueError("Title is required")
    if not data.get("description"):
        raise ValueError("Description is required")
    if not data.get("due_date"):
        raise ValueError("Due Date is required")
    if not is_valid_status(data.get("status") or ""):
        raise ValueError("Status must be one of: " + ", ".join(STATUSES))
    if not is_valid_due_date(data["due_date"]):
        raise ValueError("Invalid Due Date format. Use DD/MM/YYYY")


def normalize_fields(data: dict) -> dict:
    # absent fields are stored as empty strings
    return {k: (data.get(k) or "") for k in TASK_FIELDS}
