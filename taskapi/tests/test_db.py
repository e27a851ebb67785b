from __future__ import annotations

import os

from taskapi.db import get_conn, get_db_path, read_config_yaml


def _write_cfg(tmp_path, text):
    p = tmp_path / "config.yaml"
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_env_wins(tmp_path, monkeypatch):
    target = tmp_path / "env" / "x.db"
    monkeypatch.setenv("TASK_DB_PATH", str(target))
    cfg = _write_cfg(tmp_path, f"db_path: {tmp_path / 'cfg.db'}\n")
    assert get_db_path(cfg) == str(target)
    # parent directory is created
    assert os.path.isdir(tmp_path / "env")


def test_test_db_path_under_pytest(tmp_path, monkeypatch):
    monkeypatch.delenv("TASK_DB_PATH", raising=False)
    cfg = _write_cfg(
        tmp_path,
        f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n",
    )
    # PYTEST_CURRENT_TEST is set while a test runs
    assert get_db_path(cfg) == str(tmp_path / "test.db")


def test_db_path_from_config(tmp_path, monkeypatch):
    monkeypatch.delenv("TASK_DB_PATH", raising=False)
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    cfg = _write_cfg(tmp_path, f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n")
    assert get_db_path(cfg) == str(tmp_path / "prod.db")


def test_fallback_and_bad_config(tmp_path, monkeypatch):
    monkeypatch.delenv("TASK_DB_PATH", raising=False)
    cfg = _write_cfg(tmp_path, "db_path: [unclosed\n")
    assert read_config_yaml(cfg) == {}
    assert get_db_path(cfg).endswith("my_task.db")
    assert read_config_yaml(str(tmp_path / "missing.yaml")) == {}


def test_get_conn_rows_and_close(tmp_path):
    path = str(tmp_path / "c.db")
    with get_conn(path) as conn:
        conn.execute("CREATE TABLE t (a INTEGER)")
        conn.execute("INSERT INTO t VALUES (1)")
        conn.commit()
        assert conn.execute("SELECT a FROM t").fetchone()["a"] == 1
    with get_conn(path) as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM t").fetchone()["c"] == 1
