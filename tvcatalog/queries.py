"""
Filtered catalog queries with nested includes.

Used by query jobs. `include` is a comma list of dotted paths, e.g.
"episodes.characters.actor", parsed into a nested dict.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection

from .database import DatabaseManager, row_to_dict
from .errors import ValidationError

ENTITY_FILTERS = {
    "shows": ("id", "title", "year_min", "year_max", "episode_title"),
    "seasons": ("show_id", "season_number", "year_min", "year_max"),
    "episodes": ("id", "show_id", "season_id", "season_number", "title", "character_name"),
    "characters": ("id", "show_id", "actor_id", "name", "actor_name"),
    "actors": ("name",),
}


def parse_include(value: Union[None, str, Iterable[str]]) -> Dict[str, dict]:
    """Turn "a.b,c" into {"a": {"b": {}}, "c": {}}."""
    result: Dict[str, dict] = {}
    if not value:
        return result
    items = value.split(",") if isinstance(value, str) else list(value)
    for item in items:
        current = result
        for segment in (s.strip() for s in str(item).split(".")):
            if segment:
                current = current.setdefault(segment, {})
    return result


def validate_filters(entity: str, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop unset filters; unknown entities or filter names are a ValidationError."""
    if entity not in ENTITY_FILTERS:
        raise ValidationError(
            f"Unknown query entity: {entity}",
            details={"allowed": list(ENTITY_FILTERS)},
        )
    filters = {k: v for k, v in (filters or {}).items() if v is not None}
    unknown = sorted(set(filters) - set(ENTITY_FILTERS[entity]))
    if unknown:
        raise ValidationError(
            f"Unknown filters for {entity}: {', '.join(unknown)}",
            details={"allowed": list(ENTITY_FILTERS[entity])},
        )
    return filters


def _like(value: str) -> str:
    return f"%{value}%"


class QueryRunner:
    """Runs one filtered query per entity type."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def run(
        self,
        entity: str,
        filters: Optional[Mapping[str, Any]] = None,
        include: Union[None, str, Iterable[str], Dict[str, dict]] = None,
    ) -> List[dict]:
        filters = validate_filters(entity, filters)
        include_tree = include if isinstance(include, dict) else parse_include(include)
        method = getattr(self, f"_{entity}")
        return self.db.run_in_transaction(lambda conn: method(conn, filters, include_tree))

    def _shows(self, conn: Connection, filters: Mapping[str, Any], include: dict) -> List[dict]:
        where, params = [], {}
        if "id" in filters:
            where.append("id = :id")
            params["id"] = filters["id"]
        if "title" in filters:
            where.append("title LIKE :title")
            params["title"] = _like(filters["title"])
        if "year_min" in filters:
            where.append("year >= :year_min")
            params["year_min"] = filters["year_min"]
        if "year_max" in filters:
            where.append("year <= :year_max")
            params["year_max"] = filters["year_max"]
        if "episode_title" in filters:
            where.append(
                "id IN (SELECT s.show_id FROM seasons s JOIN episodes e ON e.season_id = s.id "
                "WHERE e.title LIKE :episode_title)"
            )
            params["episode_title"] = _like(filters["episode_title"])
        rows = self._select(
            conn,
            "SELECT id, title, description, year FROM shows",
            where, params,
            "CASE WHEN year IS NULL THEN 1 ELSE 0 END, year, title",
        )
        if "episodes" in include:
            for show in rows:
                show["episodes"] = self._episodes(conn, {"show_id": show["id"]}, include["episodes"])
        if "characters" in include:
            for show in rows:
                show["characters"] = self._characters(conn, {"show_id": show["id"]}, include["characters"])
        return rows

    def _seasons(self, conn: Connection, filters: Mapping[str, Any], include: dict) -> List[dict]:
        where, params = [], {}
        for name in ("show_id", "season_number"):
            if name in filters:
                where.append(f"{name} = :{name}")
                params[name] = filters[name]
        if "year_min" in filters:
            where.append("year >= :year_min")
            params["year_min"] = filters["year_min"]
        if "year_max" in filters:
            where.append("year <= :year_max")
            params["year_max"] = filters["year_max"]
        return self._select(
            conn,
            "SELECT id, show_id, season_number, year FROM seasons",
            where, params, "show_id, season_number",
        )

    def _episodes(self, conn: Connection, filters: Mapping[str, Any], include: dict) -> List[dict]:
        where, params = [], {}
        columns = {"id": "e.id", "show_id": "s.show_id", "season_id": "e.season_id", "season_number": "s.season_number"}
        for name, column in columns.items():
            if name in filters:
                where.append(f"{column} = :{name}")
                params[name] = filters[name]
        if "title" in filters:
            where.append("e.title LIKE :title")
            params["title"] = _like(filters["title"])
        if "character_name" in filters:
            where.append(
                "e.id IN (SELECT ec.episode_id FROM episode_characters ec "
                "JOIN characters c2 ON c2.id = ec.character_id WHERE c2.name LIKE :character_name)"
            )
            params["character_name"] = _like(filters["character_name"])
        rows = self._select(
            conn,
            "SELECT e.id, e.season_id, s.show_id, s.season_number, e.air_date, e.title, e.description "
            "FROM episodes e JOIN seasons s ON s.id = e.season_id",
            where, params,
            "CASE WHEN e.air_date IS NULL THEN 1 ELSE 0 END, e.air_date, e.id",
        )
        if "characters" in include and rows:
            grouped = self._characters_by_episode(conn, [r["id"] for r in rows], include["characters"])
            for episode in rows:
                episode["characters"] = grouped.get(episode["id"], [])
        return rows

    def _characters(self, conn: Connection, filters: Mapping[str, Any], include: dict) -> List[dict]:
        where, params = [], {}
        for name in ("id", "show_id", "actor_id"):
            if name in filters:
                where.append(f"c.{name} = :{name}")
                params[name] = filters[name]
        if "name" in filters:
            where.append("c.name LIKE :name")
            params["name"] = _like(filters["name"])
        if "actor_name" in filters:
            where.append("a.name LIKE :actor_name")
            params["actor_name"] = _like(filters["actor_name"])
        rows = self._select(
            conn,
            "SELECT c.id, c.show_id, c.name, c.actor_id, a.name AS actor_name "
            "FROM characters c LEFT JOIN actors a ON a.id = c.actor_id",
            where, params, "c.name, c.id",
        )
        if "actor" in include:
            rows = [self._nest_actor(row) for row in rows]
        return rows

    def _actors(self, conn: Connection, filters: Mapping[str, Any], include: dict) -> List[dict]:
        where, params = [], {}
        if "name" in filters:
            where.append("name LIKE :name")
            params["name"] = _like(filters["name"])
        return self._select(conn, "SELECT id, name FROM actors", where, params, "name, id")

    def _characters_by_episode(self, conn: Connection, episode_ids: List[int], include: dict) -> Dict[int, List[dict]]:
        query = text(
            "SELECT ec.episode_id, c.id, c.show_id, c.name, c.actor_id, a.name AS actor_name "
            "FROM episode_characters ec "
            "JOIN characters c ON c.id = ec.character_id "
            "LEFT JOIN actors a ON a.id = c.actor_id "
            "WHERE ec.episode_id IN :episode_ids ORDER BY c.name, c.id"
        ).bindparams(bindparam("episode_ids", expanding=True))
        grouped: Dict[int, List[dict]] = {}
        for row in conn.execute(query, {"episode_ids": episode_ids}).mappings():
            character = row_to_dict(row)
            episode_id = character.pop("episode_id")
            if "actor" in include:
                character = self._nest_actor(character)
            grouped.setdefault(episode_id, []).append(character)
        return grouped

    @staticmethod
    def _nest_actor(character: dict) -> dict:
        nested = {k: v for k, v in character.items() if k != "actor_name"}
        nested["actor"] = (
            {"id": character["actor_id"], "name": character["actor_name"]}
            if character["actor_id"] is not None else None
        )
        return nested

    @staticmethod
    def _select(conn: Connection, select_sql: str, where: List[str], params: dict, order_by: str) -> List[dict]:
        where_sql = f" WHERE {' AND '.join(where)}" if where else ""
        result = conn.execute(text(f"{select_sql}{where_sql} ORDER BY {order_by}"), params)
        return [row_to_dict(row) for row in result.mappings()]
