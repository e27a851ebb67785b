from __future__ import annotations

from sqlite3 import Connection

_COLUMNS = "id, title, description, due_date, status"


def ensure_schema(conn: Connection):
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS task (
            id INTEGER PRIMARY KEY AUTOINCREMENT UNIQUE,
            title TEXT NOT NULL,
            description TEXT,
            due_date TEXT,
            status TEXT
        )
        """
    )


def insert(conn: Connection, title: str, description: str, due_date: str, status: str) -> int:
    cur = conn.execute(
        "INSERT INTO task(title, description, due_date, status) VALUES(?,?,?,?)",
        (title, description, due_date, status),
    )
    return int(cur.lastrowid)


def get_one(conn: Connection, task_id: int):
    return conn.execute(f"SELECT {_COLUMNS} FROM task WHERE id=?", (task_id,)).fetchone()


def exists(conn: Connection, task_id: int) -> bool:
    row = conn.execute("SELECT 1 FROM task WHERE id=?", (task_id,)).fetchone()
    return row is not None


def update(conn: Connection, task_id: int, title: str, description: str, due_date: str, status: str) -> None:
    conn.execute(
        "UPDATE task SET title=?, description=?, due_date=?, status=? WHERE id=?",
        (title, description, due_date, status, task_id),
    )


def delete(conn: Connection, task_id: int) -> None:
    conn.execute("DELETE FROM task WHERE id=?", (task_id,))


def list_all(conn: Connection):
    return conn.execute(f"SELECT {_COLUMNS} FROM task").fetchall()
