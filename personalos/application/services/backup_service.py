from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from personalos.domain.entities import Entity, utc_now
from personalos.logging_config import GENERAL, get_logger
from personalos.repositories.container import Repositories

BACKUP_VERSION = 1
BACKUP_PREFIX = "backup_"
DEFAULT_KEEP_RECENT = 5


class BackupError(Exception):
    """Base class for backup and restore failures."""


class BackupNotFoundError(BackupError):
    pass


class InvalidBackupFormatError(BackupError):
    pass


class MissingVersionError(BackupError):
    pass


class BackupService:
    """Export every repository to versioned JSON files and restore from them.

    Backups are named ``backup_<UTC timestamp>.json`` so lexical order is
    chronological order.
    """

    def __init__(
        self,
        repositories: Repositories,
        backup_dir: str | Path,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repositories = repositories
        self._backup_dir = Path(backup_dir)
        self._clock = clock
        self._logger = get_logger(GENERAL)

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir

    def export_all(self) -> dict[str, Any]:
        kinds: dict[str, list[dict[str, Any]]] = {}
        for kind, repo in self._repositories.by_kind().items():
            kinds[kind] = [entity.model_dump(mode="json") for entity in repo.fetch_all()]
        return {
            "version": BACKUP_VERSION,
            "exported_at": self._clock().isoformat(),
            "kinds": kinds,
        }

    def create_backup(self) -> Path:
        self._logger.info("Creating data backup")
        data = self.export_all()
        self._backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = self._clock().strftime("%Y%m%dT%H%M%S%fZ")
        path = self._backup_dir / f"{BACKUP_PREFIX}{stamp}.json"
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        self._logger.info("Backup created", extra={"path": str(path)})
        return path

    def import_data(self, payload: Mapping[str, Any]) -> dict[str, int]:
        """Validate ``payload`` completely, then save it kind by kind.

        Rows are upserted by identity, so importing the same backup twice does
        not duplicate anything.
        """
        if not isinstance(payload, Mapping):
            raise InvalidBackupFormatError("Backup root must be a JSON object")
        version = payload.get("version")
        if version is None:
            raise MissingVersionError("Backup file missing version information")
        if not isinstance(version, int) or not 1 <= version <= BACKUP_VERSION:
            raise InvalidBackupFormatError(f"Unsupported backup version: {version!r}")
        kinds = payload.get("kinds")
        if not isinstance(kinds, Mapping):
            raise InvalidBackupFormatError("Backup is missing the 'kinds' object")

        repos = self._repositories.by_kind()
        parsed: list[tuple[str, list[Entity]]] = []
        for kind, rows in kinds.items():
            repo = repos.get(kind)
            if repo is None:
                raise InvalidBackupFormatError(f"Unknown kind in backup: {kind!r}")
            if not isinstance(rows, list):
                raise InvalidBackupFormatError(f"Rows for {kind!r} must be a list")
            try:
                entities = [repo.entity_type.model_validate(row) for row in rows]
            except ValidationError as exc:
                raise InvalidBackupFormatError(f"Invalid {kind!r} row: {exc}") from exc
            parsed.append((kind, entities))

        counts: dict[str, int] = {}
        for kind, entities in parsed:
            counts[kind] = len(repos[kind].save_all(entities))
        self._logger.info("Data import completed", extra={"counts": counts})
        return counts

    def restore_from_backup(self, path: str | Path) -> dict[str, int]:
        path = Path(path)
        self._logger.info("Restoring from backup", extra={"path": str(path)})
        if not path.is_file():
            raise BackupNotFoundError(f"Backup file not found: {path}")
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise InvalidBackupFormatError(f"Backup is not valid JSON: {exc}") from exc
        return self.import_data(payload)

    def list_backups(self) -> list[Path]:
        """Return backup files, newest first."""
        if not self._backup_dir.is_dir():
            return []
        return sorted(self._backup_dir.glob(f"{BACKUP_PREFIX}*.json"), reverse=True)

    def cleanup_old_backups(self, keep_recent: int = DEFAULT_KEEP_RECENT) -> list[Path]:
        if keep_recent < 0:
            raise ValueError("keep_recent must be non-negative")
        stale = self.list_backups()[keep_recent:]
        for path in stale:
            path.unlink()
            self._logger.info("Deleted old backup", extra={"path": path.name})
        return stale

    def delete_all_user_data(self) -> dict[str, int]:
        self._logger.info("Deleting all user data")
        counts = {kind: repo.delete_all() for kind, repo in self._repositories.by_kind().items()}
        self._logger.info("All user data deleted", extra={"counts": counts})
        return counts
