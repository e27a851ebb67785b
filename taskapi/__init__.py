"""Task tracker HTTP service (FastAPI + SQLite)."""

APP_NAME = "task-tracker-api"
__version__ = "0.1.0"
