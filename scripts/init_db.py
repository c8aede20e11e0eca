from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def ensure_schema(db_path: str) -> list[str]:
    # Programmatic schema init via repos so it always matches code
    from personalos.repositories.container import Repositories
    from personalos.repositories.sqlite.serializer import StoreSerializer

    with StoreSerializer(db_path) as serializer:
        repos = Repositories.build(serializer)  # constructors run CREATE TABLE IF NOT EXISTS
        return sorted(repos.by_kind())


def main(argv: list[str] | None = None) -> int:
    # Ensure project root (containing 'personalos') is importable
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    parser = argparse.ArgumentParser(description="Initialize SQLite database schema")
    parser.add_argument(
        "--db",
        default=os.path.join("data", "personalos.sqlite3"),
        help="Path to SQLite DB file (will be created if missing)",
    )
    args = parser.parse_args(argv)

    db_path = os.path.abspath(args.db)
    tables = ensure_schema(db_path)

    print(f"Initialized schema at: {db_path}")
    print(f"Tables: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
