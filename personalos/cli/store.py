from __future__ import annotations

import argparse
import sys
from typing import Sequence

from personalos.application.services.backup_service import BackupError, BackupService
from personalos.application.services.bootstrap_service import BootstrapState, Bootstrapper
from personalos.config.settings import Settings, build_settings
from personalos.logging_config import set_level
from personalos.repositories.container import Repositories
from personalos.repositories.sqlite.serializer import StoreSerializer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Inspect and maintain the PersonalOS store")
    p.add_argument(
        "--db",
        default=None,
        help="Path to SQLite DB file (default: PERSONALOS_DB or data/personalos.sqlite3)",
    )
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("bootstrap", help="Seed default rows into empty tables (non-production only)")
    sub.add_parser("count", help="Show the number of rows per kind")
    list_p = sub.add_parser("list", help="Print every row of a kind as JSON lines")
    list_p.add_argument("kind")
    clear_p = sub.add_parser("clear", help="Delete every row of a kind")
    clear_p.add_argument("kind")
    backup_p = sub.add_parser("backup", help="Write a JSON backup of every kind")
    backup_p.add_argument("--dir", default=None, help="Backup directory")
    backup_p.add_argument(
        "--keep", type=int, default=None, metavar="N", help="Keep only the N newest backups"
    )
    restore_p = sub.add_parser("restore", help="Import rows from a JSON backup")
    restore_p.add_argument("path")
    return p


def _run_command(args: argparse.Namespace, cfg: Settings, repos: Repositories) -> int:
    if args.command == "bootstrap":
        result = Bootstrapper(cfg.should_seed_mock_data, state=BootstrapState()).bootstrap(repos)
        print(f"Bootstrap: {result.outcome.value}")
        for kind, n in result.seeded.items():
            print(f"  seeded {kind}: {n}")
        for kind in result.skipped:
            print(f"  skipped {kind}: already populated")
        return 1 if result.failures else 0

    if args.command == "count":
        for kind, repo in repos.by_kind().items():
            print(f"{kind}: {repo.count()}")
        return 0

    if args.command in ("list", "clear"):
        try:
            repo = repos.for_kind(args.kind)
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        if args.command == "list":
            for entity in repo.fetch_all():
                print(entity.model_dump_json())
        else:
            print(f"Deleted {repo.delete_all()} {args.kind} rows")
        return 0

    backups = BackupService(repos, getattr(args, "dir", None) or cfg.backup_dir)
    try:
        if args.command == "backup":
            path = backups.create_backup()
            print(f"Backup written: {path}")
            if args.keep is not None:
                for old in backups.cleanup_old_backups(args.keep):
                    print(f"Removed old backup: {old}")
        else:
            counts = backups.restore_from_backup(args.path)
            for kind, n in counts.items():
                print(f"restored {kind}: {n}")
    except BackupError as exc:
        print(f"Backup error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = build_settings()
    set_level(cfg.log_level)

    with StoreSerializer(args.db or cfg.db_path) as serializer:
        repos = Repositories.build(serializer)
        return _run_command(args, cfg, repos)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
