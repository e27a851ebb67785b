#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Task tracker (SQLite + FastAPI)

Commands:
  init                Create the task and operation_log tables if missing
  serve               Run the HTTP API with uvicorn
  export              Export all tasks to CSV and print them to console

Notes:
- The DB file comes from TASK_DB_PATH, then config.yaml (db_path), then ./my_task.db.
- host/port for `serve` default to config.yaml values, then 0.0.0.0:8080.
"""

import argparse
import datetime as dt
import logging
import os

import pandas as pd

from taskapi.db import get_conn, get_db_path, read_config_yaml
from taskapi.services.task_svc import TaskService

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


# ---------------- Commands ----------------

def cmd_init(args):
    path = get_db_path(args.config)
    TaskService(path).ensure_schema()
    print(f"Initialized DB at {path}")


def cmd_serve(args):
    import uvicorn

    cfg = read_config_yaml(args.config)
    host = args.host or cfg.get("host") or DEFAULT_HOST
    port = int(args.port or cfg.get("port") or DEFAULT_PORT)
    uvicorn.run("taskapi.api:app", host=host, port=port, reload=args.reload)


def cmd_export(args):
    path = get_db_path(args.config)
    TaskService(path).ensure_schema()
    with get_conn(path) as conn:
        df = pd.read_sql_query(
            "SELECT id, title, description, due_date, status FROM task ORDER BY id", conn
        )

    pd.set_option("display.max_rows", 200)
    pd.set_option("display.width", 160)
    print("\n=== Tasks ===")
    if not df.empty:
        print(df.to_string(index=False))
    else:
        print("(none)")

    out_dir = args.out or os.path.join(os.path.dirname(os.path.abspath(__file__)), "exports")
    os.makedirs(out_dir, exist_ok=True)
    out_file = os.path.join(out_dir, f"tasks_{dt.date.today().strftime('%Y%m%d')}.csv")
    df.to_csv(out_file, index=False, encoding="utf-8-sig")
    print(f"\nCSV exported to {out_file}")
    return out_file


# ---------------- Entry ----------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Task tracker (SQLite + FastAPI)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create tables")
    p_init.set_defaults(func=cmd_init)

    p_serve = sub.add_parser("serve", help="run the HTTP API")
    p_serve.add_argument("--host", required=False)
    p_serve.add_argument("--port", required=False, type=int)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=cmd_serve)

    p_exp = sub.add_parser("export", help="export tasks to CSV")
    p_exp.add_argument("--out", required=False, help="output directory (default ./exports)")
    p_exp.set_defaults(func=cmd_export)
    return parser


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
