"""
Full-dataset export and best-effort import.

A snapshot is a JSON object with one list per table. Rows keep their ids
so links can be remapped, and carry natural-key fields so an import into
a populated database matches existing rows instead of duplicating them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from .associations import AssociationManager
from .database import DatabaseManager, row_to_dict
from .errors import CatalogError, NotFoundError, ValidationError
from .upsert import UpsertEngine, UpsertResult, coerce_field
from .utils import setup_logger

SNAPSHOT_VERSION = 1

# Dependency order for import
SECTIONS = ["shows", "seasons", "actors", "characters", "episodes", "episode_characters"]

EXPORT_QUERIES = {
    "shows": "SELECT id, title, description, year FROM shows ORDER BY id",
    "seasons": "SELECT id, show_id, season_number, year FROM seasons ORDER BY id",
    "actors": "SELECT id, name FROM actors ORDER BY id",
    "characters": """
        SELECT c.id, c.show_id, c.name, c.actor_id, a.name AS actor_name
        FROM characters c
        LEFT JOIN actors a ON a.id = c.actor_id
        ORDER BY c.id
    """,
    "episodes": """
        SELECT e.id, e.season_id, s.show_id, s.season_number, e.air_date,
               e.title, e.description
        FROM episodes e
        JOIN seasons s ON s.id = e.season_id
        ORDER BY e.id
    """,
    "episode_characters": """
        SELECT episode_id, character_id
        FROM episode_characters
        ORDER BY episode_id, character_id
    """,
}

# Fields echoed into failure entries to identify the record
KEY_HINTS = {
    "shows": ("id", "title", "year"),
    "seasons": ("id", "show_id", "season_number"),
    "actors": ("id", "name"),
    "characters": ("id", "show_id", "name"),
    "episodes": ("id", "show_id", "season_id", "season_number", "title"),
    "episode_characters": ("episode_id", "character_id", "character_name"),
}


@dataclass
class ImportReport:
    """Per-section counts and the list of records that failed."""

    counts: Dict[str, Dict[str, int]] = field(
        default_factory=lambda: {
            section: {"created": 0, "updated": 0, "unchanged": 0, "failed": 0}
            for section in SECTIONS
        }
    )
    failures: List[dict] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "completed_with_errors" if self.failures else "completed"

    def record(self, section: str, outcome: str) -> None:
        self.counts[section][outcome] += 1

    def fail(self, section: str, index: int, record: Any, error: CatalogError) -> None:
        self.counts[section]["failed"] += 1
        key = {}
        if isinstance(record, Mapping):
            key = {k: record[k] for k in KEY_HINTS[section] if k in record}
        self.failures.append({
            "entity": section,
            "index": index,
            "key": key,
            "error": error.error,
            "message": error.message,
        })

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "counts": self.counts,
            "failures": self.failures,
        }


def _pick(record: Mapping[str, Any], fields: Tuple[str, ...]) -> Dict[str, Any]:
    """Copy only the fields the record actually carries."""
    return {k: record[k] for k in fields if k in record}


def _snapshot_ref(label: str, value: Any) -> Any:
    """Snapshot ids and references are integers or strings."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValidationError(
            f"{label} must be an integer or string",
            details={"type": type(value).__name__},
        )
    return value


def _outcome(result: UpsertResult) -> str:
    if result.created:
        return "created"
    return "updated" if result.changed else "unchanged"


class SnapshotManager:
    """Exports the catalog and replays snapshots through the upsert engine."""

    def __init__(
        self,
        db: DatabaseManager,
        upserts: Optional[UpsertEngine] = None,
        associations: Optional[AssociationManager] = None,
    ):
        self.db = db
        self.upserts = upserts or UpsertEngine(db)
        self.associations = associations or AssociationManager(db, self.upserts)
        self.logger = setup_logger("snapshot", db.config.log_dir)

    # ============ EXPORT ============

    def export_all(self) -> dict:
        """Serialize every table, ordered by primary key, in one transaction."""
        def operation(conn: Connection) -> dict:
            snapshot: Dict[str, Any] = {"version": SNAPSHOT_VERSION}
            for section in SECTIONS:
                result = conn.execute(text(EXPORT_QUERIES[section]))
                snapshot[section] = [row_to_dict(row) for row in result.mappings()]
            return snapshot

        snapshot = self.db.run_in_transaction(operation)
        self.logger.info(
            "Exported snapshot: "
            + ", ".join(f"{section}={len(snapshot[section])}" for section in SECTIONS)
        )
        return snapshot

    # ============ IMPORT ============

    def import_all(self, snapshot: Any) -> ImportReport:
        """
        Upsert every record of a snapshot in dependency order.

        Each record runs in its own transaction. A record that fails is
        recorded in the report and the import moves on to the next one.

        Raises:
            ValidationError: If the snapshot itself is malformed
        """
        if not isinstance(snapshot, Mapping):
            raise ValidationError("Snapshot must be a JSON object")
        for section in SECTIONS:
            if section in snapshot and not isinstance(snapshot[section], list):
                raise ValidationError(
                    f"Snapshot section {section} must be a list",
                    details={"section": section},
                )

        report = ImportReport()
        # Snapshot id -> local id, per section
        id_maps: Dict[str, Dict[Any, int]] = {section: {} for section in SECTIONS}
        handlers: Dict[str, Callable[[Connection, Mapping, Dict[str, Dict[Any, int]]], Tuple[Optional[int], str]]] = {
            "shows": self._import_show,
            "seasons": self._import_season,
            "actors": self._import_actor,
            "characters": self._import_character,
            "episodes": self._import_episode,
            "episode_characters": self._import_link,
        }

        for section in SECTIONS:
            for index, record in enumerate(snapshot.get(section) or []):
                try:
                    if not isinstance(record, Mapping):
                        raise ValidationError("Record must be a JSON object")
                    snapshot_id = record.get("id")
                    if snapshot_id is not None:
                        snapshot_id = _snapshot_ref(f"{section} id", snapshot_id)
                    local_id, outcome = self.db.run_in_transaction(
                        lambda conn: handlers[section](conn, record, id_maps)
                    )
                    if local_id is not None and snapshot_id is not None:
                        id_maps[section][snapshot_id] = local_id
                except SQLAlchemyError as e:
                    # Store errors that are not transient or constraint related
                    self.logger.error(f"Import failed for {section}[{index}]: {e}")
                    report.fail(section, index, record, CatalogError("Record rejected by the database"))
                    continue
                except CatalogError as e:
                    self.logger.warning(f"Import failed for {section}[{index}]: {e.message}")
                    report.fail(section, index, record, e)
                    continue
                report.record(section, outcome)

        self.logger.info(
            f"Import {report.status}: "
            + ", ".join(
                f"{section}={counts['created']}c/{counts['updated']}u/{counts['failed']}f"
                for section, counts in report.counts.items()
            )
        )
        return report

    @staticmethod
    def _resolve(id_maps: Dict[str, Dict[Any, int]], section: str, label: str, ref: Any) -> int:
        """Translate a snapshot reference into a local id."""
        if ref is None:
            raise ValidationError(f"{label} reference is required")
        ref = _snapshot_ref(f"{label} reference", ref)
        try:
            return id_maps[section][ref]
        except KeyError:
            raise NotFoundError(label, ref) from None

    def _import_show(self, conn, record, id_maps):
        result = self.upserts.upsert(
            "show", None, _pick(record, ("title", "year", "description")), conn
        )
        return result.id, _outcome(result)

    def _import_season(self, conn, record, id_maps):
        payload = _pick(record, ("season_number", "year"))
        payload["show_id"] = self._resolve(id_maps, "shows", "Show", record.get("show_id"))
        result = self.upserts.upsert("season", None, payload, conn)
        return result.id, _outcome(result)

    def _import_actor(self, conn, record, id_maps):
        result = self.upserts.upsert("actor", None, _pick(record, ("name",)), conn)
        return result.id, _outcome(result)

    def _import_character(self, conn, record, id_maps):
        payload = _pick(record, ("name",))
        payload["show_id"] = self._resolve(id_maps, "shows", "Show", record.get("show_id"))
        # Actor is only touched when the record mentions one
        if "actor_name" in record:
            payload["actor_name"] = record["actor_name"]
        elif "actor_id" in record:
            actor_ref = record["actor_id"]
            payload["actor_id"] = (
                None if actor_ref is None
                else self._resolve(id_maps, "actors", "Actor", actor_ref)
            )
        result = self.upserts.upsert("character", None, payload, conn)
        return result.id, _outcome(result)

    def _import_episode(self, conn, record, id_maps):
        payload = _pick(record, ("title", "air_date", "description"))
        payload["season_id"] = self._episode_season(conn, record, id_maps)
        result = self.upserts.upsert("episode", None, payload, conn)
        return result.id, _outcome(result)

    def _episode_season(self, conn, record, id_maps) -> int:
        season_ref = record.get("season_id")
        if season_ref is not None:
            season_ref = _snapshot_ref("Season reference", season_ref)
            if season_ref in id_maps["seasons"]:
                return id_maps["seasons"][season_ref]

        if record.get("show_id") is not None and record.get("season_number") is not None:
            show_id = self._resolve(id_maps, "shows", "Show", record["show_id"])
            season_number = coerce_field("season_number", record["season_number"])
            season_id = conn.execute(
                text("SELECT id FROM seasons WHERE show_id = :show_id AND season_number = :season_number"),
                {"show_id": show_id, "season_number": season_number},
            ).scalar()
            if season_id is None:
                raise NotFoundError("Season", f"{record['show_id']}/{season_number}")
            return season_id

        if season_ref is not None:
            raise NotFoundError("Season", season_ref)
        raise ValidationError("Episode needs season_id or show_id and season_number")

    def _import_link(self, conn, record, id_maps):
        episode_id = self._resolve(id_maps, "episodes", "Episode", record.get("episode_id"))
        if record.get("character_id") is not None:
            character_id = self._resolve(id_maps, "characters", "Character", record["character_id"])
            result = self.associations.link_character_to_episode(
                episode_id, character_id=character_id, conn=conn
            )
        else:
            kwargs = _pick(record, ("actor_name",))
            result = self.associations.link_character_to_episode(
                episode_id, character_name=record.get("character_name"), conn=conn, **kwargs
            )
        return None, "created" if result.created else "unchanged"
