import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "task_test.db"
    # Point the app to this temp DB
    os.environ["TASK_DB_PATH"] = str(path)
    from taskapi.services.task_svc import TaskService
    TaskService(str(path)).ensure_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    # Import app after DB ready so the lifespan hook picks up TASK_DB_PATH
    from taskapi.api import app
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("TASK_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    conn = sqlite3.connect(tmp_db_path)
    try:
        conn.execute("DELETE FROM task")
        conn.execute("DELETE FROM operation_log")
        # restart AUTOINCREMENT so each test sees ids from 1
        conn.execute("DELETE FROM sqlite_sequence")
        conn.commit()
    finally:
        conn.close()
    yield
