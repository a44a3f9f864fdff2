"""
Idempotent create-or-update keyed by natural keys.

Every write in the catalog goes through UpsertEngine so that seeding,
the CRUD API and snapshot import share one set of rules:

- A row is matched by its natural key (title+year for shows,
  show+season_number for seasons, season+title for episodes,
  name for actors, show+name for characters).
- Only fields present in the payload are written. A key that is
  absent means "leave it alone"; a key that is present with None
  clears the value.
- A character's actor is only touched when the payload carries
  actor_id or actor_name.
- More than one match for a natural key is reported as a conflict,
  never resolved by picking a row.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Connection

from .database import DatabaseManager, row_to_dict
from .errors import ConflictError, NotFoundError, ValidationError
from .utils import setup_logger, to_json_value


class _Absent:
    """Marker for an argument that was not supplied at all."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

INT_FIELDS = {"year", "season_number", "show_id", "season_id", "actor_id"}
TEXT_FIELDS = {"title", "name", "description"}
DATE_FIELDS = {"air_date"}


@dataclass(frozen=True)
class EntitySpec:
    """Table layout and natural key of one entity type."""

    name: str
    label: str
    table: str
    key_fields: Tuple[str, ...]
    fields: Tuple[str, ...]
    nullable_keys: Tuple[str, ...] = ()
    # Foreign key field -> (label, table)
    parents: Dict[str, Tuple[str, str]] = field(default_factory=dict)

    @property
    def columns(self) -> Tuple[str, ...]:
        return self.key_fields + self.fields


ENTITY_SPECS: Dict[str, EntitySpec] = {
    "show": EntitySpec(
        name="show",
        label="Show",
        table="shows",
        key_fields=("title", "year"),
        fields=("description",),
        nullable_keys=("year",),
    ),
    "season": EntitySpec(
        name="season",
        label="Season",
        table="seasons",
        key_fields=("show_id", "season_number"),
        fields=("year",),
        parents={"show_id": ("Show", "shows")},
    ),
    "episode": EntitySpec(
        name="episode",
        label="Episode",
        table="episodes",
        key_fields=("season_id", "title"),
        fields=("air_date", "description"),
        parents={"season_id": ("Season", "seasons")},
    ),
    "actor": EntitySpec(
        name="actor",
        label="Actor",
        table="actors",
        key_fields=("name",),
        fields=(),
    ),
    "character": EntitySpec(
        name="character",
        label="Character",
        table="characters",
        key_fields=("show_id", "name"),
        fields=("actor_id",),
        parents={"show_id": ("Show", "shows"), "actor_id": ("Actor", "actors")},
    ),
}


def get_spec(entity_type: str) -> EntitySpec:
    try:
        return ENTITY_SPECS[entity_type]
    except KeyError:
        raise ValidationError(
            f"Unknown entity type: {entity_type}",
            details={"allowed": sorted(ENTITY_SPECS)},
        ) from None


@dataclass
class UpsertResult:
    """Outcome of a single upsert."""

    id: int
    created: bool
    changed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def coerce_field(field_name: str, value: Any) -> Any:
    """Validate one field value, returning its storable form."""
    if value is None:
        return None
    if field_name in INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{field_name} must be an integer", details={"field": field_name})
        return value
    if field_name in TEXT_FIELDS:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string", details={"field": field_name})
        return value
    if field_name in DATE_FIELDS:
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            try:
                return date.fromisoformat(value).isoformat()
            except ValueError:
                pass
        raise ValidationError(
            f"{field_name} must be a YYYY-MM-DD date",
            details={"field": field_name, "value": str(value)},
        )
    return value


class UpsertEngine:
    """
    Creates or updates catalog rows by natural key.

    Methods accept an optional open connection so several writes can
    share one transaction; without one, each call runs in its own
    transaction via DatabaseManager.run_in_transaction.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.logger = setup_logger("upsert", db.config.log_dir)

    # ============ PUBLIC OPERATIONS ============

    def upsert(
        self,
        entity_type: str,
        key_fields: Optional[Sequence[str]] = None,
        payload: Optional[Mapping[str, Any]] = None,
        conn: Optional[Connection] = None,
    ) -> UpsertResult:
        """
        Create the row matching the natural key, or update it in place.

        Args:
            entity_type: show, season, episode, actor or character
            key_fields: Fields to match on (defaults to the natural key)
            payload: Field values; absent keys are left untouched
            conn: Optional open connection

        Returns:
            UpsertResult with the row id and whether it was created

        Raises:
            ValidationError: Missing key fields or malformed values
            ConflictError: More than one row matches the key
            NotFoundError: A referenced parent row does not exist
        """
        if conn is None:
            return self.db.run_in_transaction(
                lambda c: self.upsert(entity_type, key_fields, payload, c)
            )

        spec = get_spec(entity_type)
        keys = self._key_fields(spec, key_fields)
        values = self._prepare(conn, spec, payload or {})
        key = self._natural_key(spec, keys, values)

        matches = self._lookup(conn, spec, key)
        if len(matches) > 1:
            raise ConflictError(
                f"{spec.label} natural key matches {len(matches)} rows",
                details={"key": key, "ids": [m["id"] for m in matches]},
            )

        if not matches:
            new_id = self._insert(conn, spec, values)
            self.logger.debug(f"Created {spec.name} id={new_id} key={key}")
            return UpsertResult(id=new_id, created=True, changed=True)

        existing = matches[0]
        changes = self._diff(existing, values, exclude=keys)
        if changes:
            self._update(conn, spec, existing["id"], changes)
            self.logger.debug(f"Updated {spec.name} id={existing['id']} fields={sorted(changes)}")
        return UpsertResult(id=existing["id"], created=False, changed=bool(changes))

    def create(
        self,
        entity_type: str,
        payload: Mapping[str, Any],
        conn: Optional[Connection] = None,
    ) -> int:
        """Insert a new row; an existing natural key is a ConflictError."""
        if conn is None:
            return self.db.run_in_transaction(lambda c: self.create(entity_type, payload, c))

        spec = get_spec(entity_type)
        values = self._prepare(conn, spec, payload)
        key = self._natural_key(spec, spec.key_fields, values)
        matches = self._lookup(conn, spec, key)
        if matches:
            raise ConflictError(
                f"{spec.label} already exists",
                details={"key": key, "id": matches[0]["id"]},
            )
        new_id = self._insert(conn, spec, values)
        self.logger.info(f"Created {spec.name} id={new_id}")
        return new_id

    def update(
        self,
        entity_type: str,
        entity_id: int,
        payload: Mapping[str, Any],
        conn: Optional[Connection] = None,
    ) -> UpsertResult:
        """Apply a partial update to the row with the given id."""
        if conn is None:
            return self.db.run_in_transaction(
                lambda c: self.update(entity_type, entity_id, payload, c)
            )

        spec = get_spec(entity_type)
        existing = self._get_row(conn, spec, entity_id)
        if existing is None:
            raise NotFoundError(spec.label, entity_id)

        values = self._prepare(conn, spec, payload)
        # Re-validate any key fields the update touches
        self._natural_key(spec, [k for k in spec.key_fields if k in values], values)

        changes = self._diff(existing, values)
        if any(k in changes for k in spec.key_fields):
            key = {k: changes.get(k, existing[k]) for k in spec.key_fields}
            clashes = [m for m in self._lookup(conn, spec, key) if m["id"] != entity_id]
            if clashes:
                raise ConflictError(
                    f"{spec.label} with this natural key already exists",
                    details={"key": key, "id": clashes[0]["id"]},
                )
        if changes:
            self._update(conn, spec, entity_id, changes)
            self.logger.info(f"Updated {spec.name} id={entity_id} fields={sorted(changes)}")
        return UpsertResult(id=entity_id, created=False, changed=bool(changes))

    # ============ HELPERS ============

    def _key_fields(self, spec: EntitySpec, key_fields: Optional[Sequence[str]]) -> Tuple[str, ...]:
        if key_fields is None:
            return spec.key_fields
        keys = tuple(key_fields)
        unknown = [k for k in keys if k not in spec.columns]
        if not keys or unknown:
            raise ValidationError(
                f"Invalid key fields for {spec.name}",
                details={"key_fields": list(keys), "allowed": list(spec.columns)},
            )
        return keys

    def _prepare(self, conn: Connection, spec: EntitySpec, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate payload fields and resolve relationship pseudo-fields."""
        values = dict(payload)

        actor_name = values.pop("actor_name", ABSENT) if spec.name == "character" else ABSENT
        unknown = sorted(k for k in values if k not in spec.columns)
        if unknown:
            raise ValidationError(
                f"Unknown fields for {spec.name}: {', '.join(unknown)}",
                details={"fields": unknown},
            )
        values = {k: coerce_field(k, v) for k, v in values.items()}

        if actor_name is not ABSENT:
            if values.get("actor_id") is not None:
                raise ValidationError("Provide actor_id or actor_name, not both")
            if actor_name is None:
                values["actor_id"] = None
            else:
                if not isinstance(actor_name, str) or not actor_name.strip():
                    raise ValidationError("actor_name must be a non-empty string", details={"field": "actor_name"})
                values["actor_id"] = self.upsert("actor", None, {"name": actor_name}, conn).id

        for fk_field, (label, table) in spec.parents.items():
            fk_value = values.get(fk_field)
            if fk_value is None:
                continue
            found = conn.execute(
                text(f"SELECT 1 FROM {table} WHERE id = :id"), {"id": fk_value}
            ).first()
            if not found:
                raise NotFoundError(label, fk_value)

        return values

    def _natural_key(self, spec: EntitySpec, keys: Sequence[str], values: Mapping[str, Any]) -> Dict[str, Any]:
        key = {}
        missing = []
        for key_field in keys:
            value = values.get(key_field)
            if value is None and key_field in spec.nullable_keys:
                key[key_field] = None
            elif value is None or (isinstance(value, str) and not value.strip()):
                missing.append(key_field)
            else:
                key[key_field] = value
        if missing:
            raise ValidationError(
                f"Missing natural key fields for {spec.name}: {', '.join(missing)}",
                details={"missing": missing},
            )
        return key

    def _lookup(self, conn: Connection, spec: EntitySpec, key: Mapping[str, Any]) -> list:
        where = []
        params = {}
        for key_field, value in key.items():
            if value is None:
                where.append(f"{key_field} IS NULL")
            else:
                where.append(f"{key_field} = :{key_field}")
                params[key_field] = value
        columns = ", ".join(("id",) + spec.columns)
        result = conn.execute(
            text(f"SELECT {columns} FROM {spec.table} WHERE {' AND '.join(where)} ORDER BY id"),
            params,
        )
        return [row_to_dict(row) for row in result.mappings()]

    def _get_row(self, conn: Connection, spec: EntitySpec, entity_id: int) -> Optional[dict]:
        columns = ", ".join(("id",) + spec.columns)
        row = conn.execute(
            text(f"SELECT {columns} FROM {spec.table} WHERE id = :id"), {"id": entity_id}
        ).mappings().first()
        return row_to_dict(row) if row else None

    @staticmethod
    def _diff(existing: Mapping[str, Any], values: Mapping[str, Any], exclude: Sequence[str] = ()) -> Dict[str, Any]:
        return {
            k: v for k, v in values.items()
            if k not in exclude and to_json_value(existing.get(k)) != to_json_value(v)
        }

    def _insert(self, conn: Connection, spec: EntitySpec, values: Mapping[str, Any]) -> int:
        columns = ", ".join(values.keys())
        placeholders = ", ".join(f":{k}" for k in values.keys())
        result = conn.execute(
            text(f"INSERT INTO {spec.table} ({columns}) VALUES ({placeholders})"),
            dict(values),
        )
        return int(result.lastrowid)

    def _update(self, conn: Connection, spec: EntitySpec, entity_id: int, changes: Mapping[str, Any]) -> None:
        set_clause = ", ".join(f"{k} = :{k}" for k in changes.keys())
        conn.execute(
            text(f"UPDATE {spec.table} SET {set_clause} WHERE id = :id"),
            {**changes, "id": entity_id},
        )
